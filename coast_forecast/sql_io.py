# sql_io.py
from __future__ import annotations
from contextlib import contextmanager
from datetime import date
from typing import Iterable, Tuple

import psycopg2
import psycopg2.extras as extras
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT, make_dsn

# ---------------------------------------------------------------------
# Connection settings & helpers
# ---------------------------------------------------------------------

# Fallbacks for anything the "database" settings block leaves out
DEFAULT_DB_PARAMS = {
    "dbname": "coastdb",
    "user": "coast_user",
    "host": "localhost",
    "port": "5432",
}


def connection_dsn(db_params: dict) -> str:
    params = dict(DEFAULT_DB_PARAMS)
    params.update(db_params or {})
    return make_dsn(**{k: str(v) for k, v in params.items() if v is not None})


@contextmanager
def get_conn(db_params: dict, autocommit: bool = True):
    """
    Context manager that yields a psycopg2 connection.
    Raises RuntimeError if the connection cannot be made.
    """
    conn = None
    try:
        try:
            conn = psycopg2.connect(connection_dsn(db_params))
        except psycopg2.Error as e:
            raise RuntimeError(f"Failed to connect to database: {str(e).strip()}") from e

        if autocommit:
            conn.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
        with conn.cursor() as cur:
            cur.execute("SET search_path TO public")
        yield conn

    finally:
        if conn is not None:
            conn.close()

# ---------------------------------------------------------------------
# Schema bootstrap (safe to run multiple times)
# ---------------------------------------------------------------------
SCHEMA_DDL = """
CREATE TABLE IF NOT EXISTS public.day_summary (
  location_id INT NOT NULL,
  day DATE NOT NULL,
  weather TEXT,
  tides TEXT,
  wind TEXT,
  swell TEXT,
  rainfall TEXT,
  rainfall_probability TEXT,
  generated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
  PRIMARY KEY (location_id, day)
);

CREATE TABLE IF NOT EXISTS public.wind_minima (
  id BIGSERIAL PRIMARY KEY,
  location_id INT NOT NULL,
  ts TIMESTAMP NOT NULL,
  speed_kmh NUMERIC NOT NULL,
  avg_change_kmh NUMERIC NOT NULL,
  generated_at TIMESTAMPTZ NOT NULL DEFAULT now()
);

CREATE UNIQUE INDEX IF NOT EXISTS uq_minima_location_ts ON public.wind_minima(location_id, ts);
CREATE INDEX IF NOT EXISTS idx_minima_location_ts ON public.wind_minima(location_id, ts DESC);
"""


def ensure_schema(db_params: dict):
    """Create tables/indexes if they don't exist."""
    with get_conn(db_params) as conn, conn.cursor() as cur:
        cur.execute(SCHEMA_DDL)

# ---------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------
def upsert_day_summary(db_params: dict, rows: Iterable[Tuple]):
    """
    Upsert day rows. Each row must be:
      (location_id, day, weather, tides, wind, swell, rainfall, rainfall_probability)
    """
    values = list(rows)
    if not values:
        return
    sql = """
    INSERT INTO public.day_summary
    (location_id, day, weather, tides, wind, swell, rainfall, rainfall_probability)
    VALUES %s
    ON CONFLICT (location_id, day) DO UPDATE SET
      weather = EXCLUDED.weather,
      tides = EXCLUDED.tides,
      wind = EXCLUDED.wind,
      swell = EXCLUDED.swell,
      rainfall = EXCLUDED.rainfall,
      rainfall_probability = EXCLUDED.rainfall_probability,
      generated_at = now();
    """
    with get_conn(db_params) as conn, conn.cursor() as cur:
        extras.execute_values(cur, sql, values, page_size=500)


def replace_wind_minima(db_params: dict, location_id: int, days: Iterable[date], rows: Iterable[Tuple]):
    """
    Replace the stored minima of ``location_id`` for ``days`` with ``rows``.
    Each row must be:
      (location_id, ts, speed_kmh, avg_change_kmh)
    Minima that no longer appear in the forecast for those days are removed.
    """
    day_list = list(days)
    values = list(rows)
    if not day_list and not values:
        return
    delete_sql = """
    DELETE FROM public.wind_minima
    WHERE location_id = %s AND ts::date = ANY(%s)
    """
    insert_sql = """
    INSERT INTO public.wind_minima
    (location_id, ts, speed_kmh, avg_change_kmh)
    VALUES %s
    ON CONFLICT (location_id, ts) DO UPDATE SET
      speed_kmh = EXCLUDED.speed_kmh,
      avg_change_kmh = EXCLUDED.avg_change_kmh,
      generated_at = now();
    """
    with get_conn(db_params, autocommit=False) as conn:
        with conn.cursor() as cur:
            if day_list:
                cur.execute(delete_sql, (int(location_id), day_list))
            if values:
                extras.execute_values(cur, insert_sql, values, page_size=500)
        conn.commit()
