from __future__ import annotations

import csv
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from .config import DEFAULT_TOP_LIMIT
from .errors import SourceUnavailable
from .fetch import fetch_csv
from .indicators import METRIC_LABELS
from .normalize import parse_number, parse_year, resolve_columns
from .parser import parse_csv, parse_header

logger = logging.getLogger(__name__)

RANKING_SOURCES = {
    "general": "ranking_geral.csv",
    "weapons": "ranking_arms.csv",
    "warrants": "ranking_mandados.csv",
    "trafficking": "ranking_trafico.csv",
    "vehicles": "ranking_veiculos.csv",
}

CATEGORY_METRICS = {
    "general": ("Ocorrencias", "Armas", "Trafico", "Mandados"),
    "weapons": ("Armas", "Ocorrencias", "Percentual"),
    "warrants": ("Mandados", "Ocorrencias", "Percentual"),
    "trafficking": ("Trafico", "Ocorrencias", "Percentual"),
    "vehicles": ("Veiculos", "Ocorrencias", "Percentual"),
}

CATEGORY_LABELS = {
    "general": "Geral",
    "weapons": "Armas",
    "warrants": "Mandados",
    "trafficking": "Tráfico",
    "vehicles": "Veículos",
}

GENERAL_METRICS = CATEGORY_METRICS["general"]

KEY_COLUMNS = {
    "year": ("Ano",),
    "unit": ("Unidade",),
}


def get_metric_label(metric: str) -> str:
    return METRIC_LABELS.get(metric, metric)


def metric_for_category(category: str, selected: str | None = None) -> str:
    """Metric a category is ranked by; only the general ranking lets the user pick."""
    if category == "general":
        return selected if selected in GENERAL_METRICS else GENERAL_METRICS[0]
    return CATEGORY_METRICS[category][0]


def _cell(raw: dict[str, str], columns: dict[str, str], field: str) -> str | None:
    column = columns.get(field)
    return raw.get(column) if column is not None else None


def _to_records(text: str, category: str) -> list[dict]:
    raw_rows = parse_csv(text)
    if not raw_rows:
        return []

    metrics = CATEGORY_METRICS[category]
    aliases = {**KEY_COLUMNS, **{metric: (metric,) for metric in metrics}}
    columns, missing = resolve_columns(parse_header(text), aliases)
    if missing:
        # missing metric columns degrade to None per row, not to a failure
        logger.warning("%s is missing columns %s", RANKING_SOURCES[category], missing)

    records = []
    for raw in raw_rows:
        records.append(
            {
                "year": parse_year(_cell(raw, columns, "year")),
                "unit": (_cell(raw, columns, "unit") or "").strip(),
                "metrics": {metric: parse_number(_cell(raw, columns, metric)) for metric in metrics},
            }
        )
    return records


def load_category(category: str, fetcher: Callable[[str], str] | None = None) -> list[dict]:
    """Load one ranking category; a broken or missing file yields ``[]``."""
    if category not in RANKING_SOURCES:
        raise ValueError(f"Unknown ranking category: {category!r}")
    fetch = fetcher or fetch_csv
    path = RANKING_SOURCES[category]
    try:
        records = _to_records(fetch(path), category)
    except SourceUnavailable:
        return []
    except csv.Error as exc:
        logger.warning("Could not parse %s: %s", path, exc)
        return []
    logger.info("Loaded %d rows for ranking %s", len(records), category)
    return records


def load_all_rankings(fetcher: Callable[[str], str] | None = None) -> dict[str, list[dict]]:
    with ThreadPoolExecutor(max_workers=len(RANKING_SOURCES)) as pool:
        futures = {
            category: pool.submit(load_category, category, fetcher) for category in RANKING_SOURCES
        }
        return {category: future.result() for category, future in futures.items()}


def _metric_value(row: dict, metric: str) -> float | None:
    value = row.get("metrics", {}).get(metric)
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    return value


def get_ranking_top(
    rows: list[dict],
    metric: str,
    year: int,
    limit: int = DEFAULT_TOP_LIMIT,
) -> list[dict]:
    """Top ``limit`` rows of ``year`` by ``metric``, highest first.

    Rows without a value for the metric are left out. Ties keep their
    source order. Each returned row carries its 1-based ``rank``.
    """
    if limit <= 0:
        return []
    candidates = [row for row in rows if row.get("year") == year and _metric_value(row, metric) is not None]
    ordered = sorted(candidates, key=lambda row: _metric_value(row, metric), reverse=True)
    return [{**row, "rank": pos} for pos, row in enumerate(ordered[:limit], start=1)]
