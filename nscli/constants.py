"""nscli constants."""

from __future__ import annotations

# Environment configuration
ENV_SITE = "NS_SITE"
ENV_API_SECRET = "NS_API_SECRET"
ENV_TIMEOUT = "NS_TIMEOUT"
ENV_DEBUG = "NS_DEBUG"

# Counts used when `ns <url>` is run with no options
DEFAULT_ENTRY_COUNT = 10
# Counts used when a countable flag is given without an argument
DEFAULT_ENTRY_COUNT_WITH_FLAG = DEFAULT_ENTRY_COUNT
DEFAULT_TREATMENT_COUNT_WITH_FLAG = 10

# Rendering
DATE_FORMAT = "%b %d %H:%M"
COLUMN_SEPARATOR = "  "
DELTA_GAP_MINUTES = 11
DURATION_LABEL = "min"
INSULIN_LABEL = "U"
CARBS_LABEL = "g"

# Nightscout REST API
HTTP_TIMEOUT_S = 30
ENTRIES_PATH = "/api/v1/entries.json"
TREATMENTS_PATH = "/api/v1/treatments.json"
DEVICE_STATUS_PATH = "/api/v1/devicestatus.json"
API_SECRET_HEADER = "api-secret"
ISSUES_URL = "https://github.com/nightscout/cgm-remote-monitor/issues"

# Nightscout direction names to trend arrows
TREND_SYMBOLS = {
    "DoubleUp": "⇈",
    "SingleUp": "↑",
    "FortyFiveUp": "↗",
    "Flat": "→",
    "FortyFiveDown": "↘",
    "SingleDown": "↓",
    "DoubleDown": "⇊",
    "NOT COMPUTABLE": "-",
    "RATE OUT OF RANGE": "⇕",
    "NONE": "",
}

# Numeric `trend` field, used when `direction` is missing
TREND_NUMBERS = {
    0: "NONE",
    1: "DoubleUp",
    2: "SingleUp",
    3: "FortyFiveUp",
    4: "Flat",
    5: "FortyFiveDown",
    6: "SingleDown",
    7: "DoubleDown",
    8: "NOT COMPUTABLE",
    9: "RATE OUT OF RANGE",
}
