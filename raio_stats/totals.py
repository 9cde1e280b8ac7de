from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from typing import Callable

from .config import TOTALS_FILE, YEARS
from .errors import MalformedSchema, SourceUnavailable
from .fetch import fetch_csv
from .indicators import FALLBACK_TOTALS, INDICATOR_LABELS
from .normalize import normalize_indicator, parse_number, parse_year, resolve_columns
from .parser import parse_csv, parse_header

logger = logging.getLogger(__name__)

TOTALS_COLUMNS = {
    "indicator": ("Indicador",),
    "year": ("Ano",),
    "value": ("Valor", "Quantidade"),
}


@dataclass
class LoadWarnings:
    used_fallback: bool = False
    missing_columns: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def messages(self) -> list[str]:
        """User-facing lines for the transparency section."""
        out: list[str] = []
        if self.used_fallback:
            out.append(f"Dados de {TOTALS_FILE} indisponíveis ou inválidos; valores exibidos com base no baseline interno.")
        if self.missing_columns:
            out.append(f"Colunas ausentes em {TOTALS_FILE}: {', '.join(self.missing_columns)}.")
        out.extend(self.notes)
        return out


@dataclass(frozen=True)
class TotalsResult:
    rows: list[dict]
    warnings: LoadWarnings


def fallback_rows() -> list[dict]:
    return [
        {"indicator": indicator, "year": year, "value": float(FALLBACK_TOTALS[indicator][year])}
        for indicator in INDICATOR_LABELS
        for year in YEARS
    ]


def _clean_rows(text: str, warnings: LoadWarnings) -> list[dict]:
    raw_rows = parse_csv(text)
    if not raw_rows:
        warnings.notes.append(f"{TOTALS_FILE} está vazio.")
        return []

    try:
        columns, _ = resolve_columns(parse_header(text), TOTALS_COLUMNS, required=True)
    except MalformedSchema as exc:
        logger.warning("%s is missing columns %s", TOTALS_FILE, exc.missing)
        warnings.missing_columns.extend(exc.missing)
        return []

    rows: list[dict] = []
    skipped = 0
    for raw in raw_rows:
        indicator = normalize_indicator(raw.get(columns["indicator"]))
        year = parse_year(raw.get(columns["year"]))
        value = parse_number(raw.get(columns["value"]))
        if not indicator or year is None or value is None:
            skipped += 1
            continue
        rows.append({"indicator": indicator, "year": year, "value": value})

    if skipped:
        logger.warning("Skipped %d invalid rows in %s", skipped, TOTALS_FILE)
        warnings.notes.append(f"{skipped} linha(s) inválida(s) ignorada(s) em {TOTALS_FILE}.")
    return rows


def load_totals(fetcher: Callable[[str], str] | None = None) -> TotalsResult:
    """Load global per-indicator totals.

    Never raises for a missing file, bad header or bad cells: those end up in
    the returned warnings, and an empty result is replaced by the embedded
    baseline.
    """
    fetch = fetcher or fetch_csv
    warnings = LoadWarnings()
    rows: list[dict] = []
    try:
        rows = _clean_rows(fetch(TOTALS_FILE), warnings)
    except SourceUnavailable:
        warnings.notes.append(f"Falha ao carregar {TOTALS_FILE}, usando fallback.")
    except csv.Error as exc:
        logger.warning("Could not parse %s: %s", TOTALS_FILE, exc)
        warnings.notes.append(f"Falha ao interpretar {TOTALS_FILE}, usando fallback.")

    if not rows:
        logger.warning("Using embedded baseline totals")
        warnings.used_fallback = True
        rows = fallback_rows()
    else:
        logger.info("Loaded %d totals rows", len(rows))
    return TotalsResult(rows=rows, warnings=warnings)


def build_totals_map(rows: list[dict], years: tuple[int, ...] = YEARS) -> dict[str, dict[int, float]]:
    """Index rows by indicator and year; the last row for a pair wins."""
    totals: dict[str, dict[int, float]] = {
        indicator: {year: 0.0 for year in years} for indicator in INDICATOR_LABELS
    }
    for row in rows:
        slots = totals.setdefault(row["indicator"], {year: 0.0 for year in years})
        if row["year"] in slots:
            slots[row["year"]] = row["value"]
    return totals
