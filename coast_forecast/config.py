import json
import logging
import os
from typing import Tuple, Dict, Optional

logger = logging.getLogger(__name__)

API_KEY_ENV = "WILLYWEATHER_API_KEY"

DEFAULTS = {
    "location_id": 14576,
    "days": 3,
    "base_url": "https://api.willyweather.com.au/v2/",
    "bom_host": "ftp.bom.gov.au",
    "bom_path": "/anon/gen/fwo/IDW11160.xml",
    "area_description": "Perth Coast: Two Rocks to Dawesville",
    "closest_weather_types": ["swell", "tides", "general"],
    "minima_window": 2,
    "timeout": 20,
    "reports_dir": "reports",
    "database": None,
}


# Error codes and custom exception
class ConfigError(Exception):
    """Custom exception class for configuration errors"""
    SUCCESS = 0
    FILE_NOT_FOUND = 1
    INVALID_JSON = 2
    INVALID_SETTING = 3
    MISSING_API_KEY = 4
    GENERAL_ERROR = 5

    def __init__(self, message: str, code: int):
        super().__init__(message)
        self.code = code


def _positive_int(cfg: dict, key: str) -> int:
    """
    Read ``key`` as an integer >= 1.

    Raises:
        ConfigError: With INVALID_SETTING if the value is not a positive integer
    """
    value = cfg[key]
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(
            f"The '{key}' setting must be an integer >= 1, but got: {value!r}",
            ConfigError.INVALID_SETTING,
        )
    return value


def _normalize_settings(cfg: dict) -> dict:
    """
    Merge a raw settings dict over the defaults and validate it.

    Args:
        cfg (dict): Values read from the settings file

    Returns:
        dict: Complete settings with every key from DEFAULTS present

    Raises:
        ConfigError: If a value is invalid or no API key is available
    """
    settings = dict(DEFAULTS)
    settings.update(cfg)

    env_key = os.environ.get(API_KEY_ENV)
    if env_key:
        settings["api_key"] = env_key
    if not settings.get("api_key"):
        raise ConfigError(
            f"No API key found; set 'api_key' in the settings file or {API_KEY_ENV}",
            ConfigError.MISSING_API_KEY,
        )

    for key in ("location_id", "days", "minima_window", "timeout"):
        settings[key] = _positive_int(settings, key)

    for key in ("base_url", "bom_host", "bom_path", "area_description", "reports_dir"):
        if not isinstance(settings[key], str) or not settings[key]:
            raise ConfigError(
                f"The '{key}' setting must be a non-empty string, but got: {settings[key]!r}",
                ConfigError.INVALID_SETTING,
            )

    if not settings["base_url"].endswith("/"):
        settings["base_url"] += "/"

    types = settings["closest_weather_types"]
    if isinstance(types, str):
        types = [t.strip() for t in types.split(",") if t.strip()]
    if not isinstance(types, list) or not all(isinstance(t, str) for t in types):
        raise ConfigError(
            "The 'closest_weather_types' setting must be a string or a list of strings, "
            f"but got: {types!r}",
            ConfigError.INVALID_SETTING,
        )
    settings["closest_weather_types"] = types

    db = settings.get("database")
    if db is not None and not isinstance(db, dict):
        raise ConfigError(
            "The 'database' setting must be an object of connection parameters",
            ConfigError.INVALID_SETTING,
        )

    return settings


def load_settings(file_path: str) -> Tuple[Optional[Dict], int]:
    """
    Load Forecast.json and fill in defaults for anything it leaves out.

    Args:
        file_path (str): Path to the settings file

    Returns:
        Tuple containing:
        - settings: dict of normalized settings, or None on failure
        - error_code: int indicating success (0) or specific error conditions
            - 0: Success
            - 1: File not found
            - 2: Invalid JSON
            - 3: Invalid setting value
            - 4: Missing API key
            - 5: General error
    """
    try:
        with open(file_path, "r") as f:
            cfg = json.load(f)
    except FileNotFoundError:
        logger.error("Settings file not found: %s", file_path)
        return None, ConfigError.FILE_NOT_FOUND
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", file_path, e)
        return None, ConfigError.INVALID_JSON

    if not isinstance(cfg, dict):
        logger.error("Settings file %s must contain a JSON object", file_path)
        return None, ConfigError.INVALID_JSON

    try:
        settings = _normalize_settings(cfg)
    except ConfigError as e:
        logger.error("%s", e)
        return None, e.code
    except Exception as e:
        logger.error("Failed to process settings in %s: %s", file_path, e)
        return None, ConfigError.GENERAL_ERROR

    logger.info(
        "Loaded settings: location %s, %s day(s), minima window %s",
        settings["location_id"], settings["days"], settings["minima_window"],
    )
    return settings, ConfigError.SUCCESS
