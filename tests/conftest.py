import sqlite3

import matplotlib
matplotlib.use('Agg')
import pandas as pd
import pytest

COMPANIES = [f'Company {chr(ord("A")+i)}' for i in range(21)]
BULK_ONLY = COMPANIES[-1]   # never quotes quantities 1-10
DATES = ['2023-11-20', '2023-12-04', '2023-12-18',
         '2024-01-08', '2024-01-22', '2024-02-05', '2024-02-19', '2024-03-04', '2024-03-18']


def make_prices():
    rows = []
    for d_i, d in enumerate(DATES):
        for c_i, c in enumerate(COMPANIES):
            for q in ([100] if c == BULK_ONLY else [1, 10, 100]):
                rows.append({'date': d, 'quantity': q,
                             'convertedPrice': round(5 + c_i*0.5 + d_i*0.1 - q*0.01, 2),
                             'company_name': c})
    return pd.DataFrame(rows)


def make_parts():
    return pd.DataFrame({'part_id': [1, 2, 3],
                         'part_name': ['STM32F103C8T6', 'LM358DR', 'NE555P'],
                         'manufacturer_name': ['STMicroelectronics', 'Texas Instruments', 'Texas Instruments'],
                         'manufacturer_id': [10, 20, 20]})


def make_availability():
    rows, i = [], 1
    for d_i, d in enumerate(DATES):
        total = 1000 + d_i*150
        # the first date reports the same total twice
        for total_i in ([total, total] if d_i == 0 else [total]):
            rows.append({'id': i, 'date': d, 'total_availability': total_i, 'mpn': 'STM32F103C8T6'})
            i += 1
    return pd.DataFrame(rows)


def build_db(path, tables):
    conn = sqlite3.connect(path)
    try:
        for name, df in tables.items():
            df.to_sql(name, conn, if_exists='replace', index=False)
    finally:
        conn.close()
    return str(path)


@pytest.fixture()
def db_tables():
    return {'Prices': make_prices(), 'Parts': make_parts(), 'Availabilty': make_availability()}


@pytest.fixture()
def parts_db(tmp_path, db_tables):
    return build_db(tmp_path/'electronic_parts.db', db_tables)


@pytest.fixture()
def prices():
    df = make_prices().rename(columns={'convertedPrice': 'price'})
    df['date'] = pd.to_datetime(df['date'])
    return df
