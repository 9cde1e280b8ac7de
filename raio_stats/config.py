from __future__ import annotations

import os
from pathlib import Path

DEFAULT_DATA_ROOT = Path(__file__).resolve().parent.parent / "data"

DATA_ROOT = os.getenv("RAIO_DATA_ROOT", str(DEFAULT_DATA_ROOT))
FETCH_TIMEOUT = float(os.getenv("RAIO_FETCH_TIMEOUT", "30"))
LOG_LEVEL = os.getenv("RAIO_LOG_LEVEL", "INFO")

YEARS = (2024, 2025)
DEFAULT_TOP_LIMIT = 3
STABLE_TOLERANCE = 0.01

TOTALS_FILE = "totals.csv"
