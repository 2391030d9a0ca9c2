import os

# Project root directory (eth-event-chart/)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Bundled read-only data
DATA_DIR = os.path.join(BASE_DIR, "data")
EVENTS_FILE = os.getenv("ETHCHART_EVENTS_FILE", os.path.join(DATA_DIR, "events.json"))

# Local output locations
LOGS_DIR = os.path.join(BASE_DIR, "logs")
REPORTS_DIR = os.path.join(BASE_DIR, "reports")

# Mock price walk
HISTORY_YEARS = 1
START_PRICE = 1500.0
MIN_PRICE = 1000.0
MAX_PRICE = 4000.0
MAX_DAILY_MOVE = 50.0
MIN_VOLUME = 1000.0
MAX_VOLUME = 10000.0

DEFAULT_TIME_RANGE = "1Y"

# Local UI bind address
UI_HOST = os.getenv("ETHCHART_HOST", "127.0.0.1")
UI_PORT = int(os.getenv("ETHCHART_PORT", "5000"))
