"""URL builder module for the WillyWeather API."""

from datetime import date
from typing import Iterable


def build_forecast_url(
    base_url: str,
    api_key: str,
    location_id: int,
    forecast: str,
    days: int,
    start_date: date,
) -> str:
    """
    Build a WillyWeather forecast URL for one forecast type.

    Args:
        base_url (str): API root, ending with a slash
        api_key (str): WillyWeather API key
        location_id (int): Location to query
        forecast (str): Forecast type, e.g. "wind" or "rainfallprobability"
        days (int): Number of days requested (at least 1 is always asked for)
        start_date (date): First forecast day

    Returns:
        str: The complete forecast URL
    """
    safe_days = max(1, int(days))
    return (
        f"{base_url}{api_key}/locations/{location_id}/weather.json"
        f"?forecasts={forecast}"
        f"&days={safe_days}"
        f"&startDate={start_date.strftime('%Y-%m-%d')}"
    )


def build_closest_url(
    base_url: str, api_key: str, location_id: int, weather_types: Iterable[str]
) -> str:
    """Build the URL that finds the closest locations offering each weather type."""
    types = ",".join(weather_types)
    return (
        f"{base_url}{api_key}/search/closest.json"
        f"?id={location_id}"
        f"&weatherTypes={types}"
        "&units=distance:km"
    )
