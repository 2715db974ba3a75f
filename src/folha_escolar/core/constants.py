"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_HOURS = 12
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10
DEFAULT_STATEMENT_TIMEOUT_SECONDS = 15
JWT_ALGORITHM = "HS256"
CSV_ENCODING = "utf-8-sig"

# Largest values the folhas columns hold: DECIMAL(10,2) and INT UNSIGNED.
MAX_OVERTIME_HOURS = "99999999.99"
MAX_COUNT = 4294967295
