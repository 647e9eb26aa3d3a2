"""
Field extraction for every forecast source.

Each extractor reads one payload and writes its text into the shared
``combined`` mapping of date -> DayInfo, creating days as it finds them.
"""

import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Union
from xml.etree import ElementTree as ET

import pandas as pd

from coast_forecast.minima import DEFAULT_WINDOW_SIZE, Sample, find_local_minima
from coast_forecast.summary import DayInfo, day_entry, format_number

logger = logging.getLogger(__name__)

WIND_COLUMNS = ["Date", "Time", "Wind Speed (km/h)", "Direction", "Direction Text"]


def parse_time(value) -> Optional[datetime]:
    """Parse a timestamp string; None if it cannot be parsed."""
    if value is None:
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _forecast_days(payload: Dict, kind: str) -> List[Dict]:
    return ((payload.get("forecasts") or {}).get(kind) or {}).get("days") or []


def _parse_day(day: Dict, kind: str) -> Optional[date]:
    raw = day.get("dateTime")
    parsed = parse_time(raw)
    if parsed is None:
        logger.warning("Failed to parse %s day: %s", kind, raw)
        return None
    return parsed.date()


def extract_marine_forecast(xml_doc: Union[bytes, str], combined: Dict[date, DayInfo], area_description: str):
    """
    Pull winds, seas, swell and weather text for one coastal area.

    Args:
        xml_doc (bytes | str): BOM coastal waters forecast document; bytes
            are decoded using the encoding its XML declaration names
        combined (dict): date -> DayInfo, updated in place
        area_description (str): Exact ``description`` attribute of the area
    """
    root = ET.fromstring(xml_doc)
    area = next(
        (a for a in root.iter("area") if a.get("description") == area_description),
        None,
    )
    if area is None:
        logger.warning("Area not found in marine forecast: %s", area_description)
        return

    for period in area.iter("forecast-period"):
        start = parse_time(period.get("start-time-local"))
        if start is None:
            logger.warning("Failed to parse forecast period: %s", period.get("start-time-local"))
            continue

        texts = {t.get("type"): (t.text or "") for t in period.iter("text")}
        message = (
            f"Winds: {texts.get('forecast_winds', '')}\n"
            f"Seas: {texts.get('forecast_seas', '')}\n"
            f"Swell: {texts.get('forecast_swell1', '')}\n"
            f"Weather: {texts.get('forecast_weather', '')}\n"
        )
        day_entry(combined, start.date()).weather += message


def extract_tides(tide_json: Dict, combined: Dict[date, DayInfo]):
    for day in _forecast_days(tide_json, "tides"):
        tide_date = _parse_day(day, "tide")
        if tide_date is None:
            continue

        lines = []
        for entry in day.get("entries", []):
            entry_time = parse_time(entry.get("dateTime"))
            if entry_time is None:
                lines.append(f"Failed to parse tide entry time: {entry.get('dateTime')}")
                continue
            lines.append(
                f"{entry['type']} tide at {entry_time.strftime('%H:%M')} "
                f"with a height of {format_number(entry['height'])}m"
            )

        day_entry(combined, tide_date).tides = "".join(line + "\n" for line in lines)


def extract_swell(swell_json: Dict, closest_json: Dict, combined: Dict[date, DayInfo]):
    """
    Swell lines for each day, headed by the name of the closest swell location.

    Nothing is written when the closest-location search found no swell site.
    """
    locations = closest_json.get("swell") or []
    if not locations:
        logger.warning("No swell location in closest-location search")
        return
    location_name = locations[0]["name"]

    for day in _forecast_days(swell_json, "swell"):
        swell_date = _parse_day(day, "swell")
        if swell_date is None:
            continue

        lines = [f"Location: {location_name}"]
        for entry in day.get("entries", []):
            entry_time = parse_time(entry.get("dateTime"))
            if entry_time is None:
                lines.append(f"Failed to parse swell entry time: {entry.get('dateTime')}")
                continue
            lines.append(
                f"{entry['directionText']} swell at {entry_time.strftime('%H:%M')}. "
                f"Height: {format_number(entry['height'])}m, Period: {format_number(entry['period'])}s"
            )

        day_entry(combined, swell_date).swell = "".join(line + "\n" for line in lines)


def extract_wind(
    wind_json: Dict,
    combined: Dict[date, DayInfo],
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> pd.DataFrame:
    """
    Wind lines per day plus the calm spots found in each day's series.

    Args:
        wind_json (dict): WillyWeather wind forecast
        combined (dict): date -> DayInfo, updated in place
        window_size (int): Volatility window passed to find_local_minima

    Returns:
        pd.DataFrame: Every parsed wind entry across all days
    """
    rows = []
    for day in _forecast_days(wind_json, "wind"):
        wind_date = _parse_day(day, "wind")
        if wind_date is None:
            continue
        info = day_entry(combined, wind_date)

        lines, samples = [], []
        for entry in day.get("entries", []):
            entry_time = parse_time(entry.get("dateTime"))
            if entry_time is None:
                logger.warning("Skipping wind entry with bad time: %s", entry.get("dateTime"))
                continue
            speed = float(entry["speed"])
            direction = float(entry["direction"])
            direction_text = entry["directionText"]

            lines.append(
                f"At {entry_time.strftime('%H:%M')}: Speed - {format_number(speed)} km/h, "
                f"Direction - {direction_text} ({format_number(direction)}°)"
            )
            samples.append(Sample(time=entry_time, speed=speed))
            rows.append({
                "Date": wind_date,
                "Time": entry_time,
                "Wind Speed (km/h)": speed,
                "Direction": direction,
                "Direction Text": direction_text,
            })

        info.wind = "".join(line + "\n" for line in lines)
        info.wind_minima = find_local_minima(samples, window_size)

    return pd.DataFrame(rows, columns=WIND_COLUMNS)


def extract_rainfall(rainfall_json: Dict, combined: Dict[date, DayInfo]):
    for day in _forecast_days(rainfall_json, "rainfall"):
        rainfall_date = _parse_day(day, "rainfall")
        if rainfall_date is None:
            continue

        lines = []
        for entry in day.get("entries", []):
            probability = int(entry["probability"])
            start, end = entry.get("startRange"), entry.get("endRange")

            if start is not None and end is not None:
                amount = f"{start}-{end}"
            elif start is not None:
                amount = f">{start}"
            elif end is not None:
                amount = f"<{end}"
            else:
                amount = entry.get("rangeCode", "")
            lines.append(f"Rainfall expected: {amount}mm with a probability of {probability}%")

        day_entry(combined, rainfall_date).rainfall = "".join(line + "\n" for line in lines)


def extract_rainfall_probability(probability_json: Dict, combined: Dict[date, DayInfo]):
    for day in _forecast_days(probability_json, "rainfallprobability"):
        probability_date = _parse_day(day, "rainfall probability")
        if probability_date is None:
            continue

        lines = []
        for entry in day.get("entries", []):
            entry_time = parse_time(entry.get("dateTime"))
            if entry_time is None:
                lines.append(f"Failed to parse rainfall probability entry time: {entry.get('dateTime')}")
                continue
            lines.append(
                f"Chance of rainfall at {entry_time.strftime('%H:%M')} is {int(entry['probability'])}%"
            )

        day_entry(combined, probability_date).rainfall_probability = "".join(line + "\n" for line in lines)


def wind_frame_with_minima(wind_df: pd.DataFrame, window_size: int = DEFAULT_WINDOW_SIZE) -> pd.DataFrame:
    """
    Attach the day mean, a local-minimum flag and volatility to each wind row.

    Args:
        wind_df (pd.DataFrame): Output of extract_wind
        window_size (int): Volatility window passed to find_local_minima

    Returns:
        pd.DataFrame: Copy of wind_df with mean_speed, local_minimum and
                      volatility columns (volatility is NaN off the minima)
    """
    out = wind_df.copy()
    if out.empty:
        return out.assign(mean_speed=pd.Series(dtype=float), local_minimum=pd.Series(dtype=bool),
                          volatility=pd.Series(dtype=float))

    out["mean_speed"] = out.groupby("Date")["Wind Speed (km/h)"].transform("mean")
    out["local_minimum"] = False
    out["volatility"] = float("nan")

    for _, grp in out.groupby("Date", sort=False):
        samples = [
            Sample(time=pd.Timestamp(t).to_pydatetime(), speed=float(s))
            for t, s in zip(grp["Time"], grp["Wind Speed (km/h)"])
        ]
        found = {m.time: m.volatility for m in find_local_minima(samples, window_size)}
        for label, sample in zip(grp.index, samples):
            if sample.time in found:
                out.at[label, "local_minimum"] = True
                out.at[label, "volatility"] = found[sample.time]

    return out
