from datetime import date
from typing import Dict, Iterable

import pandas as pd

from coast_forecast.sql_io import ensure_schema, upsert_day_summary, replace_wind_minima
from coast_forecast.summary import DayInfo, summary_frame, minima_frame


def write_days_to_db(db_params: dict, location_id: int, daily: pd.DataFrame):
    """
    daily columns (from summary_frame):
      Date, Weather, Tides, Wind, Wind Minima, Swell, Rainfall, Rainfall Probability
    """
    if daily is None or daily.empty:
        return
    rows = []
    for _, r in daily.iterrows():
        rows.append((
            int(location_id),
            r["Date"],
            r["Weather"] or None,
            r["Tides"] or None,
            r["Wind"] or None,
            r["Swell"] or None,
            r["Rainfall"] or None,
            r["Rainfall Probability"] or None,
        ))
    upsert_day_summary(db_params, rows)


def write_minima_to_db(db_params: dict, location_id: int, days: Iterable[date], minima: pd.DataFrame):
    """
    Replace the stored minima for ``days`` with the rows of ``minima``.

    minima columns (from minima_frame):
      Date, Time, Wind Speed (km/h), Average Change (km/h)
    """
    days = list(days)
    rows = []
    if minima is not None and not minima.empty:
        for _, r in minima.iterrows():
            rows.append((
                int(location_id),
                pd.Timestamp(r["Time"]).to_pydatetime(),
                float(r["Wind Speed (km/h)"]),
                float(r["Average Change (km/h)"]),
            ))
    if not days and not rows:
        return
    replace_wind_minima(db_params, location_id, days, rows)


def persist_all(db_params: dict, location_id: int, combined: Dict[date, DayInfo]):
    ensure_schema(db_params)            # safe no-op if already created
    write_days_to_db(db_params, location_id, summary_frame(combined))
    write_minima_to_db(db_params, location_id, sorted(combined), minima_frame(combined))
