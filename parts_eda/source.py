import os
import sqlite3
from contextlib import contextmanager

import pandas as pd

from . import settings
from .errors import EmptyResultError, MissingRelationError

PRICE_QUERY = f"SELECT date, quantity, convertedPrice AS price, company_name FROM {settings.PRICES_TABLE}"


@contextmanager
def open_database(path=settings.DB_PATH):
    """Connection scoped to one phase of queries, always closed on exit."""
    # sqlite3.connect would create an empty file here
    if not os.path.exists(path):
        raise MissingRelationError(f"Database file '{path}' does not exist.")
    conn = sqlite3.connect(path)
    try:
        yield conn
    finally:
        conn.close()


def list_tables(conn):
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name").fetchall()
    return [r[0] for r in rows]


def require_tables(conn, names=settings.REQUIRED_TABLES):
    tables = set(list_tables(conn))
    for name in names:
        if name not in tables:
            raise MissingRelationError(f"The '{name}' table does not exist in the database.")


def require_rows(df, name):
    if len(df) == 0:
        raise EmptyResultError(f"The '{name}' table is empty. Cannot create a table view.")
    return df


def _query(conn, sql, name, parse_dates=('date',)):
    df = pd.read_sql(sql, conn)
    for col in parse_dates:
        if col in df.columns:
            df[col] = pd.to_datetime(df[col])
    return require_rows(df, name)


def load_prices(conn):
    return _query(conn, PRICE_QUERY, settings.PRICES_TABLE)


def load_parts(conn):
    return _query(conn, f"SELECT * FROM {settings.PARTS_TABLE}", settings.PARTS_TABLE, parse_dates=())


def load_availability(conn):
    return _query(conn, f"SELECT * FROM {settings.AVAILABILITY_TABLE}", settings.AVAILABILITY_TABLE)


def load_availability_by_date(conn):
    # One row per date; SQLite reports the first row it meets for each group
    sql = f"""
        SELECT date, total_availability
        FROM {settings.AVAILABILITY_TABLE}
        GROUP BY date
        ORDER BY date
    """
    return _query(conn, sql, settings.AVAILABILITY_TABLE)
