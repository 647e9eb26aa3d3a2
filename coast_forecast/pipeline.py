"""Fetch every forecast source and combine them into one summary per day."""

import logging
from datetime import date
from typing import Dict, Tuple

from coast_forecast.config import load_settings, ConfigError
from coast_forecast.extraction import (
    extract_marine_forecast,
    extract_tides,
    extract_swell,
    extract_wind,
    extract_rainfall,
    extract_rainfall_probability,
    wind_frame_with_minima,
)
from coast_forecast.payload import persist_all
from coast_forecast.report import save_excel_report
from coast_forecast.summary import DayInfo
from coast_forecast.weather import (
    fetch_marine_xml,
    fetch_forecast,
    fetch_closest_locations,
    closest_location_id,
    should_fetch_rainfall_probability,
)

logger = logging.getLogger(__name__)


def combine_forecasts(
    settings: dict,
    marine_xml: bytes,
    tide_json: dict,
    closest_json: dict,
    swell_json: dict,
    wind_json: dict,
    rainfall_json: dict,
    rainfall_probability_json: dict = None,
):
    """
    Run every extractor over already-fetched payloads.

    Returns:
        tuple containing:
            - dict: date -> DayInfo
            - pd.DataFrame: wind rows with the minima columns attached
    """
    combined: Dict[date, DayInfo] = {}
    window = settings["minima_window"]

    extract_marine_forecast(marine_xml, combined, settings["area_description"])
    extract_tides(tide_json, combined)
    extract_rainfall(rainfall_json, combined)
    if rainfall_probability_json:
        extract_rainfall_probability(rainfall_probability_json, combined)
    extract_swell(swell_json, closest_json, combined)
    wind_df = extract_wind(wind_json, combined, window)

    return combined, wind_frame_with_minima(wind_df, window)


def fetch_all(settings: dict) -> dict:
    """Download every payload combine_forecasts needs, keyed by its parameter name."""
    closest = fetch_closest_locations(settings)
    swell_location = closest_location_id(closest, "swell")
    if swell_location is None:
        logger.warning("No closest swell location; using the configured location")

    rainfall = fetch_forecast(settings, "rainfall")
    rainfall_probability = None
    if should_fetch_rainfall_probability(rainfall):
        rainfall_probability = fetch_forecast(settings, "rainfallprobability")
    else:
        logger.info("No chance of rain in the forecast; skipping rainfall probability")

    return {
        "marine_xml": fetch_marine_xml(settings),
        "tide_json": fetch_forecast(settings, "tides"),
        "closest_json": closest,
        "swell_json": fetch_forecast(settings, "swell", location_id=swell_location),
        "wind_json": fetch_forecast(settings, "wind"),
        "rainfall_json": rainfall,
        "rainfall_probability_json": rainfall_probability,
    }


def build_daily_summary(config_path: str, save_excel: bool = True) -> Tuple[Dict[date, DayInfo], int]:
    """
    Load settings, fetch all sources, and build the per-day summary.

    Args:
        config_path (str): Path to the settings file
        save_excel (bool): Whether to save the Excel report

    Returns:
        tuple containing:
            - dict: date -> DayInfo (empty on error)
            - int: Error code (0 for success, non-zero for errors)
    """
    print("\nReading settings...")
    settings, error_code = load_settings(config_path)
    if error_code != ConfigError.SUCCESS:
        return {}, error_code

    payloads = fetch_all(settings)
    combined, wind_detail = combine_forecasts(settings, **payloads)

    minima_count = sum(len(info.wind_minima) for info in combined.values())
    print(f"\nCombined {len(combined)} day(s); found {minima_count} calm wind spot(s).")

    if save_excel and combined:
        xlsx_path = save_excel_report(combined, wind_detail, settings["reports_dir"])
        print(f"\nExcel saved:\n{xlsx_path}")

    if settings.get("database"):
        persist_all(settings["database"], settings["location_id"], combined)
        print("\nSummary written to the database.")

    return combined, ConfigError.SUCCESS
