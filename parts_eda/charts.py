import matplotlib
matplotlib.use('Agg')
import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from scipy import interpolate, stats

from . import settings

PRICE_TITLE      = 'Price Variation with Respect to Time for Each Quantity and Company'
PRICE_TITLE_1_10 = 'Price Variation with Respect to Time for Quantities 1 to 10 and Company'
AVAIL_TITLE      = 'Total Availability vs Time'

MIN_SPLINE_POINTS = 5


def apply_theme():
    sns.set_theme(style=settings.SNS_STYLE)
    plt.rcParams.update(settings.RC_PARAMS)


def palette(n=settings.PALETTE_SIZE, name=settings.PALETTE):
    return sns.color_palette(name, n)


def price_facet_chart(df, colors, title, out_path):
    """Price over time, one panel per (quantity, company); colors follow company order."""
    companies = list(dict.fromkeys(df['company_name']))
    if len(colors) < len(companies):
        raise ValueError(f"{len(companies)} companies but only {len(colors)} colors")
    max_price = df['price'].max()
    g = sns.relplot(data=df, x='date', y='price', kind='scatter',
                    hue='company_name', hue_order=companies, palette=list(colors[:len(companies)]),
                    row='quantity', row_order=sorted(df['quantity'].unique()),
                    col='company_name', col_order=companies,
                    height=2.2, aspect=1.1, legend=False,
                    facet_kws=dict(margin_titles=True, sharey=True))
    g.set(ylim=(0, max_price if max_price > 0 else 1))
    g.set_axis_labels('Date', 'Price')
    g.set_titles(row_template='{row_name}', col_template='{col_name}')
    for ax in g.axes.flat:
        ax.tick_params(axis='x', labelrotation=90)
    g.figure.suptitle(title, fontsize=14, fontweight='bold', y=1.01)
    g.savefig(out_path, bbox_inches='tight'); plt.close(g.figure)
    return out_path


def smooth_trend(dates, values, points=100):
    """
    Trend line through (dates, values). A smoothing spline when there are
    enough distinct dates, a least-squares line for 2-4, nothing below that.
    """
    x = mdates.date2num(dates)
    y = np.asarray(values, dtype=float)
    if len(x) < 2:
        return None
    xs = np.linspace(x.min(), x.max(), points)
    if len(x) >= MIN_SPLINE_POINTS:
        ys = interpolate.make_smoothing_spline(x, y)(xs)
    else:
        fit = stats.linregress(x, y)
        ys = fit.intercept + fit.slope*xs
    return mdates.num2date(xs), ys


def _scatter_with_trend(data, **kw):
    ax = plt.gca()
    ax.scatter(data['date'], data['total_availability'], color=settings.POINT_COLOR, s=20)
    trend = smooth_trend(data['date'].to_numpy(), data['total_availability'])
    if trend is not None:
        ax.plot(*trend, color=settings.TREND_COLOR, linestyle='--', lw=1.5)


def availability_trend_chart(points, out_path):
    """Availability per date with a dashed trend, one panel per year, free x scales."""
    years = sorted(points['year'].unique())
    g = sns.FacetGrid(points, col='year', col_order=years, col_wrap=min(3, len(years)),
                      sharex=False, height=3.5, aspect=1.3)
    g.map_dataframe(_scatter_with_trend)
    g.set_axis_labels('Date', 'Total Availability')
    g.set_titles(col_template='{col_name}')
    for ax in g.axes.flat:
        ax.tick_params(axis='x', labelrotation=45)
        ax.xaxis.set_major_formatter(mdates.DateFormatter('%b %d'))
    g.figure.suptitle(AVAIL_TITLE, fontsize=14, fontweight='bold', y=1.02)
    g.savefig(out_path, bbox_inches='tight'); plt.close(g.figure)
    return out_path
