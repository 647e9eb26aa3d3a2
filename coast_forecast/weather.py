"""Weather forecast module for fetching raw forecast payloads."""

import ftplib
import logging
from datetime import date
from typing import Dict, Optional

import requests

from coast_forecast.url_builder import build_forecast_url, build_closest_url

logger = logging.getLogger(__name__)

FORECAST_TYPES = ("tides", "swell", "wind", "rainfall", "rainfallprobability")


class FetchError(Exception):
    """Raised when a forecast source cannot be downloaded."""

    def __init__(self, source: str, message: str, status: Optional[int] = None):
        super().__init__(f"Failed to fetch {source} data: {message}")
        self.source = source
        self.status = status


def _get_json(url: str, source: str, timeout: int) -> Dict:
    try:
        r = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(source, str(e)) from e
    try:
        r.raise_for_status()
    except requests.HTTPError as e:
        raise FetchError(
            source,
            f"status code {r.status_code}, error content: {r.text}",
            status=r.status_code,
        ) from e
    try:
        return r.json()
    except ValueError as e:
        raise FetchError(source, f"invalid JSON in response: {e}", status=r.status_code) from e


def fetch_marine_xml(settings: dict) -> bytes:
    """
    Download the BOM coastal waters forecast over anonymous FTP.

    Args:
        settings (dict): Normalized settings (bom_host, bom_path, timeout)

    Returns:
        bytes: The raw XML document; its own declaration names the encoding
    """
    host, path = settings["bom_host"], settings["bom_path"]
    logger.info("Fetching marine forecast ftp://%s%s", host, path)

    chunks = []
    try:
        with ftplib.FTP(host, timeout=settings["timeout"]) as ftp:
            ftp.login()
            ftp.retrbinary(f"RETR {path}", chunks.append)
    except ftplib.all_errors as e:
        raise FetchError("marine", str(e)) from e

    return b"".join(chunks)


def fetch_forecast(
    settings: dict,
    forecast: str,
    location_id: Optional[int] = None,
    start_date: Optional[date] = None,
) -> Dict:
    """
    Fetch one WillyWeather forecast type as parsed JSON.

    Args:
        settings (dict): Normalized settings
        forecast (str): One of FORECAST_TYPES
        location_id (int): Override for the configured location (used for swell)
        start_date (date): First forecast day, defaults to today

    Returns:
        dict: The decoded JSON payload
    """
    if forecast not in FORECAST_TYPES:
        raise ValueError(f"Unknown forecast type: {forecast}")

    url = build_forecast_url(
        settings["base_url"],
        settings["api_key"],
        location_id if location_id is not None else settings["location_id"],
        forecast,
        settings["days"],
        start_date or date.today(),
    )
    logger.info("Fetching %s forecast", forecast)
    return _get_json(url, forecast, settings["timeout"])


def fetch_closest_locations(settings: dict) -> Dict:
    """Find the locations closest to the configured one for each weather type."""
    url = build_closest_url(
        settings["base_url"],
        settings["api_key"],
        settings["location_id"],
        settings["closest_weather_types"],
    )
    logger.info("Fetching closest locations for %s", ",".join(settings["closest_weather_types"]))
    return _get_json(url, "closest locations", settings["timeout"])


def closest_location_id(closest: Dict, weather_type: str = "swell") -> Optional[int]:
    locations = closest.get(weather_type) or []
    if not locations:
        return None
    return int(locations[0]["id"])


def should_fetch_rainfall_probability(rainfall_json: Dict) -> bool:
    """
    Decide whether the detailed rainfall probability forecast is worth fetching.

    Returns:
        bool: True if any rainfall entry has a non-zero probability
    """
    days = ((rainfall_json.get("forecasts") or {}).get("rainfall") or {}).get("days")
    if not days:
        return False
    for day in days:
        for entry in day.get("entries", []):
            if int(entry.get("probability") or 0) > 0:
                return True
    return False
