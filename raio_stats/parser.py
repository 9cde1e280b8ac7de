from __future__ import annotations

import csv
import io

BOM = "\ufeff"


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse comma-delimited text into header-keyed records.

    Values stay strings. Short lines simply lack the trailing keys, cells
    beyond the header are dropped, and blank lines are skipped.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]
    reader = csv.DictReader(io.StringIO(text))
    rows: list[dict[str, str]] = []
    for row in reader:
        record = {k: v for k, v in row.items() if k is not None and v is not None}
        if not any(v.strip() for v in record.values()):
            continue
        rows.append(record)
    return rows


def parse_header(text: str) -> list[str]:
    if text.startswith(BOM):
        text = text[len(BOM):]
    reader = csv.reader(io.StringIO(text))
    for line in reader:
        if line:
            return line
    return []
