import os

# Read-only connection to the billing database (tblinvoices, tblclients, tblhosting)
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./sales_dashboard.sqlite3")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Rows per page in the sales listing. Fixed, not configurable per request.
PAGE_SIZE: int = 100

# OFFSET is bound as a signed 64-bit integer by the database drivers
MAX_OFFSET: int = 2**63 - 1
MAX_PAGE: int = MAX_OFFSET // PAGE_SIZE + 1

DEFAULT_PERIOD: str = "month"

# Pagination links are rendered relative to the admin page that hosts the dashboard
DASHBOARD_BASE_PATH: str = os.getenv("DASHBOARD_BASE_PATH", "addonmodules.php")

TORTOISE_ORM_CONFIG = {
    "connections": {"default": DATABASE_URL},
    "apps": {
        "models": {
            "models": ["sales_dashboard.features.billing.models"],
            "default_connection": "default",
        }
    },
    "use_tz": False,
    "timezone": "UTC",
}
