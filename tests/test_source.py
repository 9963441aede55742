import os

import pandas as pd
import pytest

from conftest import build_db, make_parts, make_prices
from parts_eda import source
from parts_eda.errors import EmptyResultError, MissingRelationError


def test_open_database_missing_file(tmp_path):
    path = tmp_path/'nope.db'

    with pytest.raises(MissingRelationError):
        with source.open_database(str(path)):
            pass
    assert not os.path.exists(path)


def test_open_database_closes_connection(parts_db):
    with source.open_database(parts_db) as conn:
        assert source.list_tables(conn) == ['Availabilty', 'Parts', 'Prices']

    with pytest.raises(Exception):
        conn.execute('SELECT 1')


def test_require_tables_names_the_missing_one(tmp_path):
    path = build_db(tmp_path/'partial.db', {'Prices': make_prices(), 'Parts': make_parts()})

    with source.open_database(path) as conn:
        source.require_tables(conn, ('Prices', 'Parts'))
        with pytest.raises(MissingRelationError, match="'Availabilty'"):
            source.require_tables(conn)


def test_load_prices_renames_and_parses_dates(parts_db):
    with source.open_database(parts_db) as conn:
        df = source.load_prices(conn)

    assert list(df.columns) == ['date', 'quantity', 'price', 'company_name']
    assert pd.api.types.is_datetime64_any_dtype(df['date'])
    assert len(df) == len(make_prices())


def test_load_parts_passes_rows_through(parts_db):
    with source.open_database(parts_db) as conn:
        df = source.load_parts(conn)

    pd.testing.assert_frame_equal(df, make_parts())


def test_load_availability_by_date_one_row_per_date(parts_db):
    with source.open_database(parts_db) as conn:
        df = source.load_availability_by_date(conn)

    assert list(df.columns) == ['date', 'total_availability']
    assert df['date'].is_unique
    assert df['date'].is_monotonic_increasing


def test_empty_table_is_fatal(tmp_path):
    path = build_db(tmp_path/'empty.db', {'Parts': make_parts().iloc[0:0]})

    with source.open_database(path) as conn:
        with pytest.raises(EmptyResultError, match="'Parts' table is empty"):
            source.load_parts(conn)
