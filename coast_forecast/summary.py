"""Per-day forecast summary records and their text/tabular views."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List

import pandas as pd

from coast_forecast.minima import AnnotatedMinimum


@dataclass
class DayInfo:
    weather: str = ""
    tides: str = ""
    swell: str = ""
    wind: str = ""
    wind_minima: List[AnnotatedMinimum] = field(default_factory=list)
    rainfall: str = ""
    rainfall_probability: str = ""


def day_entry(combined: Dict[date, DayInfo], day: date) -> DayInfo:
    """Return the DayInfo for ``day``, creating an empty one if needed."""
    if day not in combined:
        combined[day] = DayInfo()
    return combined[day]


def format_number(value: float) -> str:
    """Render 10.0 as '10' and 1.5 as '1.5'."""
    return f"{float(value):g}"


def format_day_message(day: date, info: DayInfo) -> str:
    """
    Build the plain-text message for one day.

    Args:
        day (date): The forecast day
        info (DayInfo): Everything extracted for that day

    Returns:
        str: Multi-line message; the minima block and the rainfall
             probability block only appear when there is something to show
    """
    lines = [
        f"Date: {day.strftime('%A, %d/%m/%Y')}",
        f"Weather:\n{info.weather}",
        f"Tide Details:\n{info.tides}",
        f"Wind Details:\n{info.wind}",
    ]
    if info.wind_minima:
        lines.append("Local Minima for Wind Speed:")
        for m in info.wind_minima:
            lines.append(
                f"At {m.time.strftime('%H:%M')}: {format_number(m.speed)} km/h, "
                f"Average Change of Wind Speed is {m.volatility:.2f}km/h"
            )
    lines.append("")
    lines.append(f"Swell Details:\n{info.swell}")
    lines.append(f"Rainfall Details:\n{info.rainfall}")
    if info.rainfall_probability:
        lines.append(f"Rainfall Probability:\n{info.rainfall_probability}")
    lines.append("")
    return "\n".join(lines) + "\n"


def print_summary(combined: Dict[date, DayInfo]):
    """
    Print every day's message in date order.

    Args:
        combined (dict): date -> DayInfo
    """
    if not combined:
        print("\nNo forecast data available.")
        return
    for day in sorted(combined):
        print("\n=== Weather Details ===")
        print(format_day_message(day, combined[day]))


def summary_frame(combined: Dict[date, DayInfo]) -> pd.DataFrame:
    """One row per day with the text sections and the number of calm spots."""
    rows = []
    for day in sorted(combined):
        info = combined[day]
        rows.append({
            "Date": day,
            "Weather": info.weather.strip(),
            "Tides": info.tides.strip(),
            "Wind": info.wind.strip(),
            "Wind Minima": len(info.wind_minima),
            "Swell": info.swell.strip(),
            "Rainfall": info.rainfall.strip(),
            "Rainfall Probability": info.rainfall_probability.strip(),
        })
    columns = ["Date", "Weather", "Tides", "Wind", "Wind Minima", "Swell", "Rainfall", "Rainfall Probability"]
    return pd.DataFrame(rows, columns=columns)


def minima_frame(combined: Dict[date, DayInfo]) -> pd.DataFrame:
    """One row per retained wind minimum, across all days."""
    rows = [
        {
            "Date": day,
            "Time": m.time,
            "Wind Speed (km/h)": m.speed,
            "Average Change (km/h)": m.volatility,
        }
        for day in sorted(combined)
        for m in combined[day].wind_minima
    ]
    return pd.DataFrame(rows, columns=["Date", "Time", "Wind Speed (km/h)", "Average Change (km/h)"])
