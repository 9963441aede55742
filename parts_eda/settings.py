import os

DB_PATH    = os.environ.get('PARTS_DB', 'electronic_parts.db')
OUTPUT_DIR = 'eda_output'
TABLE_DIR  = 'tables'
PLOT_DIR   = 'plots'

PRICES_TABLE       = 'Prices'
PARTS_TABLE        = 'Parts'
AVAILABILITY_TABLE = 'Availabilty'   # spelled this way in the production db
REQUIRED_TABLES    = (PRICES_TABLE, PARTS_TABLE, AVAILABILITY_TABLE)

# Rows kept per date in the unique-price view
TOP_N_PER_DATE = 4
SUBSET_ROWS    = 10

# Chart pagination
PAGE_SIZE               = 7
EXPECTED_COMPANIES      = 21
EXPECTED_COMPANIES_1_10 = 20   # one company never quotes quantities 1-10
QUANTITY_RANGE          = (1, 10)

PALETTE      = 'viridis'
PALETTE_SIZE = 21

SNS_STYLE = 'whitegrid'
RC_PARAMS = {'font.family':'DejaVu Sans','figure.dpi':120,
             'axes.titlesize':13,'axes.labelsize':11}

POINT_COLOR = 'steelblue'
TREND_COLOR = 'red'


def output_dirs(root=OUTPUT_DIR):
    tables = os.path.join(root, TABLE_DIR)
    plots  = os.path.join(root, PLOT_DIR)
    os.makedirs(tables, exist_ok=True)
    os.makedirs(plots, exist_ok=True)
    return tables, plots
