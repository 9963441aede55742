import argparse
import os
import sys

from parts_eda import charts, pipeline, settings, source, tables
from parts_eda.errors import PartsReportError


def banner(text):
    print("\n"+"="*60)
    print(text)
    print("="*60)


def run_tables(db_path, table_dir):
    # ─────────────────────────────────────────────
    # STEP 1 — Load prices, parts, availability
    # ─────────────────────────────────────────────
    banner("STEP 1: SQL — Loading Tables")
    with source.open_database(db_path) as conn:
        source.require_tables(conn)
        print(f"  Tables: {', '.join(source.list_tables(conn))}")
        price = source.load_prices(conn)
        parts = source.load_parts(conn)
        availability = source.load_availability(conn)
    for name, df in [('prices', price), ('parts', parts), ('availability', availability)]:
        print(f"  {name:15s}: {len(df):>8,} records")

    banner("STEP 2: Prices — Unique Entries per Date")
    price_unique = pipeline.top_n_per_date(price)
    price_sorted = pipeline.sort_by_price_desc(price_unique)
    price_subset = pipeline.head_by_date_company(price)
    print(f"  Unique rows (top {settings.TOP_N_PER_DATE} per date): {len(price_unique):,}")
    tables.render_table(price_subset, tables.PRICE_SUBSET,
                        os.path.join(table_dir, '01_prices_subset.png'))
    tables.render_table(price_sorted, tables.PRICE_SORTED,
                        os.path.join(table_dir, '02_prices_sorted.png'))

    banner("STEP 3: Parts")
    tables.render_table(parts, tables.PARTS, os.path.join(table_dir, '03_parts.png'))

    banner("STEP 4: Availability — Unique (date, total) Rows")
    availability_unique = pipeline.unique_availability(availability)
    print(f"  Records after dedup: {len(availability_unique):,} / {len(availability):,}")
    tables.render_table(availability_unique, tables.AVAILABILITY,
                        os.path.join(table_dir, '04_availability.png'))


def price_pages(data, expected, colors, title, plot_dir, prefix):
    cohorts = pipeline.company_cohorts(data, expected)
    print(f"  Companies: {sum(len(c) for c in cohorts)} → pages of {[len(c) for c in cohorts]}")
    frames = pipeline.cohort_frames(data, cohorts)
    paths = []
    for i, (frame, cols) in enumerate(zip(frames, pipeline.cohort_palettes(colors, cohorts)), 1):
        path = os.path.join(plot_dir, f'{prefix}_page_{i}.png')
        charts.price_facet_chart(frame, cols, title, path)
        print(f"  ✓ {os.path.basename(path)}")
        paths.append(path)
    return paths


def run_charts(db_path, plot_dir):
    # ─────────────────────────────────────────────
    # STEP 5 — Reconnect for the charts
    # ─────────────────────────────────────────────
    banner("STEP 5: SQL — Loading Chart Data")
    with source.open_database(db_path) as conn:
        source.require_tables(conn, (settings.PRICES_TABLE, settings.AVAILABILITY_TABLE))
        data_prices = source.load_prices(conn)
        avail_data = source.load_availability_by_date(conn)
    points = pipeline.availability_points(avail_data)
    print(f"  Prices: {len(data_prices):,} rows | Availability: {len(points):,} dates "
          f"over {points['year'].nunique()} year(s)")

    charts.apply_theme()
    colors = charts.palette()

    # Check both cohort layouts before drawing anything
    data_1_10 = pipeline.filter_quantity(data_prices)
    pipeline.company_cohorts(data_prices, settings.EXPECTED_COMPANIES)
    pipeline.company_cohorts(data_1_10, settings.EXPECTED_COMPANIES_1_10)

    print("\n[PLOT 1] Price Variation per Quantity & Company...")
    price_pages(data_prices, settings.EXPECTED_COMPANIES, colors,
                charts.PRICE_TITLE, plot_dir, '01_price')

    print("[PLOT 2] Total Availability vs Time...")
    charts.availability_trend_chart(points, os.path.join(plot_dir, '02_availability_trend.png'))
    print("  ✓ 02_availability_trend.png")

    print(f"[PLOT 3] Price Variation for Quantities {settings.QUANTITY_RANGE[0]}-{settings.QUANTITY_RANGE[1]}...")
    print(f"  Records after filter: {len(data_1_10):,} / {len(data_prices):,}")
    price_pages(data_1_10, settings.EXPECTED_COMPANIES_1_10, colors,
                charts.PRICE_TITLE_1_10, plot_dir, '03_price_qty_1_10')


def main(argv=None):
    ap = argparse.ArgumentParser(description='Electronic parts pricing & availability EDA')
    ap.add_argument('--db', default=settings.DB_PATH, help='Path to SQLite DB')
    ap.add_argument('--out', default=settings.OUTPUT_DIR, help='Output directory for PNGs')
    args = ap.parse_args(argv)

    table_dir, plot_dir = settings.output_dirs(args.out)
    try:
        run_tables(args.db, table_dir)
        run_charts(args.db, plot_dir)
    except PartsReportError as e:
        print(f"\n  ✗ {e}")
        return 1

    banner("✅ EDA COMPLETE — 4 Tables + Price & Availability Charts")
    return 0


if __name__ == '__main__':
    sys.exit(main())
