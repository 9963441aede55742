"""
Row-set preparation for the price and availability reports.

Every function takes a DataFrame and returns a new one (or a list of them);
inputs are never modified. Sorting is always stable (mergesort) so that rows
which tie on the sort key keep the order they were loaded in.
"""
import math

import pandas as pd

from . import settings
from .errors import CardinalityMismatchError

PRICE_KEY        = ('date', 'company_name')
AVAILABILITY_KEY = ('date', 'total_availability')


def _stable_sort(df, by, ascending=True):
    return df.sort_values(list(by), ascending=ascending, kind='mergesort')


def deduplicate(df, key, sort_by):
    """
    One row per distinct ``key``: the first one after a stable sort on
    ``sort_by``. Columns outside the key are not compared, so rows that
    differ only there collapse into the survivor.
    """
    ordered = _stable_sort(df, sort_by)
    return ordered.drop_duplicates(subset=list(key), keep='first').reset_index(drop=True)


def unique_prices(df):
    # Sorted on date only: within a date the load order picks the survivor
    return deduplicate(df, PRICE_KEY, sort_by=('date',))


def unique_availability(df):
    return deduplicate(df, AVAILABILITY_KEY, sort_by=AVAILABILITY_KEY)


def top_n_per_date(df, n=settings.TOP_N_PER_DATE):
    """First ``n`` unique company rows per date, ordered by date then company."""
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")
    uniq = unique_prices(df)
    top = uniq.groupby('date', sort=True).head(n)
    return _stable_sort(top, PRICE_KEY).reset_index(drop=True)


def sort_by_price_desc(df):
    return _stable_sort(df, ('date', 'price'), ascending=[True, False]).reset_index(drop=True)


def head_by_date_company(df, limit=settings.SUBSET_ROWS):
    return _stable_sort(df, PRICE_KEY).head(limit).reset_index(drop=True)


def filter_quantity(df, low=settings.QUANTITY_RANGE[0], high=settings.QUANTITY_RANGE[1]):
    """Rows with ``low <= quantity <= high``."""
    return df[df['quantity'].between(low, high)].reset_index(drop=True)


# ─────────── Cohorts ───────────
def partition(items, page_size=settings.PAGE_SIZE):
    """Split ``items`` into ceil(N/page_size) contiguous pages of at most page_size."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    items = list(items)
    pages = math.ceil(len(items) / page_size)
    return [items[i*page_size:(i+1)*page_size] for i in range(pages)]


def distinct_companies(df):
    """Company names in order of first appearance once sorted by date and company."""
    return list(pd.unique(_stable_sort(df, PRICE_KEY)['company_name']))


def company_cohorts(df, expected, page_size=settings.PAGE_SIZE):
    companies = distinct_companies(df)
    if len(companies) != expected:
        raise CardinalityMismatchError(expected, len(companies))
    return partition(companies, page_size)


def cohort_frames(df, cohorts):
    return [df[df['company_name'].isin(c)].reset_index(drop=True) for c in cohorts]


def cohort_palettes(palette, cohorts):
    """Give each cohort the slice of ``palette`` at its position, one color per company."""
    palette = list(palette)
    total = sum(len(c) for c in cohorts)
    if total > len(palette):
        raise ValueError(f"palette has {len(palette)} colors, {total} companies need one each")
    out, offset = [], 0
    for c in cohorts:
        out.append(palette[offset:offset+len(c)])
        offset += len(c)
    return out


# ─────────── Availability ───────────
def availability_points(df):
    """One point per date with a ``year`` column for facet wrapping."""
    points = _stable_sort(df, ('date',)).drop_duplicates(subset=['date'], keep='first')
    points = points[['date', 'total_availability']].reset_index(drop=True)
    points['year'] = points['date'].dt.strftime('%Y')
    return points
