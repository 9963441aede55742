from dataclasses import dataclass, field

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd

HEADER_BG = '#1F4E79'
STRIPE_BG = '#EAF1FB'


@dataclass
class TableSpec:
    title: str
    subtitle: str = ''
    labels: dict = field(default_factory=dict)
    date_cols: tuple = ()
    number_cols: dict = field(default_factory=dict)   # column -> decimals
    bold_headers: bool = False
    striped: bool = False


def fmt_date(v):
    """Medium date style, e.g. Jan 7, 2025."""
    if pd.isna(v):
        return ''
    ts = pd.Timestamp(v)
    return f"{ts:%b} {ts.day}, {ts.year}"


def fmt_number(v, decimals):
    if pd.isna(v):
        return ''
    return f"{v:,.{decimals}f}"


def format_frame(df, spec):
    """Display strings for every cell, columns renamed to their labels."""
    out = pd.DataFrame(index=df.index)
    for col in df.columns:
        if col in spec.date_cols:
            out[col] = df[col].map(fmt_date)
        elif col in spec.number_cols:
            out[col] = df[col].map(lambda v, d=spec.number_cols[col]: fmt_number(v, d))
        else:
            out[col] = df[col].astype(str)
    return out.rename(columns=spec.labels).reset_index(drop=True)


def print_table(df, spec):
    shown = format_frame(df, spec)
    print(f"\n{'─'*55}")
    print(f"  {spec.title.upper()}")
    if spec.subtitle:
        print(f"  {spec.subtitle}")
    print('─'*55)
    print(shown.to_string(index=False))
    return shown


def save_table(df, spec, out_path):
    shown = format_frame(df, spec)
    n_rows, n_cols = shown.shape
    fig, ax = plt.subplots(figsize=(max(8, 2.2*n_cols), 1.4+0.32*(n_rows+1)))
    ax.axis('off')
    tbl = ax.table(cellText=shown.values.tolist(), colLabels=list(shown.columns),
                   loc='upper center', cellLoc='center')
    tbl.auto_set_font_size(False); tbl.set_fontsize(9); tbl.scale(1, 1.3)
    for (r, c), cell in tbl.get_celld().items():
        cell.set_edgecolor('#BDD7EE')
        if r == 0:
            cell.set_facecolor(HEADER_BG)
            cell.set_text_props(color='white', fontweight='bold' if spec.bold_headers else 'normal')
        elif spec.striped and r % 2 == 0:
            cell.set_facecolor(STRIPE_BG)
    fig.suptitle(spec.title, fontsize=14, fontweight='bold')
    if spec.subtitle:
        ax.set_title(spec.subtitle, fontsize=10)
    plt.savefig(out_path, bbox_inches='tight'); plt.close(fig)
    return out_path


def render_table(df, spec, out_path=None):
    """Print the table and, when ``out_path`` is given, save it as a PNG."""
    shown = print_table(df, spec)
    if out_path is not None:
        save_table(df, spec, out_path)
        print(f"  ✓ {out_path}")
    return shown


# ─────────── Report layouts ───────────
PRICE_LABELS = {'date':'Date','quantity':'Quantity','price':'Price (Euros)','company_name':'Company Name'}

PRICE_SUBSET = TableSpec(
    title='Prices Table',
    subtitle='Displaying 10 unique entries for each company',
    labels=PRICE_LABELS, date_cols=('date',))

PRICE_SORTED = TableSpec(
    title='Prices Table',
    subtitle='Displaying unique entries for each company, sorted by descending prices for each date',
    labels=PRICE_LABELS, date_cols=('date',), number_cols={'price':2}, striped=True)

PARTS = TableSpec(
    title='Parts Table',
    subtitle='Displaying all columns from the Parts table',
    labels={'part_id':'Part ID','part_name':'Part Name',
            'manufacturer_name':'Manufacturer Name','manufacturer_id':'Manufacturer ID'})

AVAILABILITY = TableSpec(
    title='Availability Table',
    subtitle='Displaying rows for Total availability per date',
    labels={'id':'ID','date':'Date','total_availability':'Total Availability','mpn':'MPN'},
    date_cols=('date',), number_cols={'total_availability':0}, bold_headers=True)
