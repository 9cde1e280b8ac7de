"""Offline check that the data directory has every source file, column and
readable numeric cell."""

from __future__ import annotations

import argparse
import csv
import logging
from pathlib import Path

from .config import DATA_ROOT, LOG_LEVEL, TOTALS_FILE
from .errors import UnparseableValue
from .normalize import parse_number, resolve_columns
from .parser import parse_csv, parse_header
from .rankings import CATEGORY_METRICS, KEY_COLUMNS, RANKING_SOURCES
from .totals import TOTALS_COLUMNS

logger = logging.getLogger(__name__)


def expected_columns() -> dict[str, dict[str, tuple[str, ...]]]:
    files = {TOTALS_FILE: dict(TOTALS_COLUMNS)}
    for category, name in RANKING_SOURCES.items():
        files[name] = {**KEY_COLUMNS, **{metric: (metric,) for metric in CATEGORY_METRICS[category]}}
    return files


def _unparseable_cells(name: str, text: str, columns: dict[str, str]) -> list[str]:
    """Non-empty numeric cells that cannot be read; empty cells count as missing data."""
    numeric = [column for field, column in columns.items() if field not in ("indicator", "unit")]
    issues: list[str] = []
    for pos, raw in enumerate(parse_csv(text), start=1):
        for column in numeric:
            cell = raw.get(column)
            if cell is None or not cell.strip():
                continue
            try:
                parse_number(cell, strict=True)
            except UnparseableValue:
                issues.append(f"Valor inválido em {name}, registro {pos}, coluna {column}: {cell!r}")
    return issues


def validate_data_dir(data_dir: Path | str) -> list[str]:
    issues: list[str] = []
    for name, aliases in expected_columns().items():
        path = Path(data_dir) / name
        if not path.exists():
            issues.append(f"Arquivo ausente: {name}")
            continue
        try:
            text = path.read_text(encoding="utf-8")
            header = parse_header(text)
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            issues.append(f"Arquivo ilegível: {name} ({exc})")
            continue
        resolved, missing = resolve_columns(header, aliases)
        for columns in missing:
            if "/" in columns:
                issues.append(f"Coluna de valor ausente em {name}: {columns}")
            else:
                issues.append(f"Coluna ausente em {name}: {columns}")
        try:
            issues.extend(_unparseable_cells(name, text, resolved))
        except csv.Error as exc:
            issues.append(f"Arquivo ilegível: {name} ({exc})")
    return issues


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Valida os CSVs do painel.")
    parser.add_argument("data_dir", nargs="?", default=DATA_ROOT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL)

    logger.info("Validating %s", args.data_dir)
    issues = validate_data_dir(args.data_dir)
    if not issues:
        print("Dados validados com sucesso. Nenhuma inconsistência encontrada.")
        return 0
    print("Foram encontradas inconsistências nos CSVs:")
    for issue in issues:
        print(f"- {issue}")
    return 1
