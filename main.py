#!/usr/bin/env python3
"""
Entry point script for running the Coast Forecast summary directly.
"""

import sys

from coast_forecast.main import main

if __name__ == "__main__":
    sys.exit(main())
