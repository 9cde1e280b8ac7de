"""Validate the dashboard CSV files.

Run with `python scripts/validate_data.py [data_dir]` (or `raio-validate-data`)
after `pip install -e .`. Exits 1 and lists missing files or columns,
exits 0 when everything is in place.
"""

from __future__ import annotations

from raio_stats.validation import main

if __name__ == "__main__":
    raise SystemExit(main())
