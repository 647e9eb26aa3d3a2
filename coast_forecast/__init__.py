"""
Coast Forecast Package
Combines coastal weather forecasts into a daily summary and flags calm spots in the wind.
"""

from .minima import Sample, AnnotatedMinimum, EmptyInputError, find_local_minima
from .config import load_settings
from .pipeline import build_daily_summary
from .summary import DayInfo, format_day_message, print_summary

__all__ = [
    'Sample',
    'AnnotatedMinimum',
    'EmptyInputError',
    'find_local_minima',
    'load_settings',
    'build_daily_summary',
    'DayInfo',
    'format_day_message',
    'print_summary'
]
