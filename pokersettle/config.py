from __future__ import annotations

import os

DEFAULT_IMBALANCE_THRESHOLD = float(os.getenv("POKERSETTLE_IMBALANCE_THRESHOLD", "1"))
LOG_LEVEL = os.getenv("POKERSETTLE_LOG_LEVEL", "INFO").upper()
CURRENCY_SYMBOL = os.getenv("POKERSETTLE_CURRENCY_SYMBOL", "£")
