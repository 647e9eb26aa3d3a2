#!/usr/bin/env python3
"""
Main module for the Coast Forecast application.
Combines marine, tide, swell, wind and rainfall forecasts into one summary per day.
"""

import argparse
import logging
import os
import sys

from coast_forecast.config import ConfigError
from coast_forecast.pipeline import build_daily_summary
from coast_forecast.summary import print_summary
from coast_forecast.weather import FetchError

ERROR_MESSAGES = {
    ConfigError.FILE_NOT_FOUND: "Error: Settings file not found",
    ConfigError.INVALID_JSON: "Error: Invalid settings file format",
    ConfigError.INVALID_SETTING: "Error: Invalid setting value",
    ConfigError.MISSING_API_KEY: "Error: No WillyWeather API key configured",
    ConfigError.GENERAL_ERROR: "Error: Failed to process configuration",
}


def main(argv=None):
    """Main entry point for the Coast Forecast application."""
    parser = argparse.ArgumentParser(description="Daily coastal weather summary")
    parser.add_argument(
        "--config",
        default=os.path.join(os.getcwd(), "Forecast.json"),
        help="Path to the settings file (default: ./Forecast.json)",
    )
    parser.add_argument("--no-excel", action="store_true", help="Skip the Excel report")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        print("\n=== Coast Forecast - Starting ===")
        combined, error_code = build_daily_summary(config_path=args.config, save_excel=not args.no_excel)

        if error_code != ConfigError.SUCCESS:
            error_msg = ERROR_MESSAGES.get(error_code, f"Unknown error occurred (code: {error_code})")
            print(f"\nForecast failed: {error_msg}")
            return error_code

        print_summary(combined)
        return 0

    except FetchError as e:
        print(f"\nForecast failed: {e}")
        return ConfigError.GENERAL_ERROR
    except Exception as e:
        print(f"\nUnexpected error occurred: {str(e)}")
        return -1


if __name__ == "__main__":
    sys.exit(main())
