from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable

from .rankings import CATEGORY_LABELS, RANKING_SOURCES, load_all_rankings
from .totals import build_totals_map, load_totals

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Falha ao carregar dados. Verifique a pasta de dados."


@dataclass(frozen=True)
class DashboardData:
    totals: dict[str, dict[int, float]]
    totals_rows: list[dict]
    rankings: dict[str, list[dict]]
    warnings: list[str] = field(default_factory=list)
    used_fallback: bool = False
    failed: bool = False


def _empty_data() -> DashboardData:
    return DashboardData(
        totals=build_totals_map([]),
        totals_rows=[],
        rankings={category: [] for category in RANKING_SOURCES},
        warnings=[LOAD_FAILED_MESSAGE],
        failed=True,
    )


def load_dashboard_data(fetcher: Callable[[str], str] | None = None) -> DashboardData:
    """Load totals and every ranking once, collecting all warnings."""
    try:
        with ThreadPoolExecutor(max_workers=2) as pool:
            totals_future = pool.submit(load_totals, fetcher)
            rankings_future = pool.submit(load_all_rankings, fetcher)
            totals = totals_future.result()
            rankings = rankings_future.result()
    except Exception:
        logger.exception("Dashboard data load failed")
        return _empty_data()

    warnings = totals.warnings.messages()
    empty = [CATEGORY_LABELS[category] for category, rows in rankings.items() if not rows]
    if empty:
        warnings.append(f"Rankings sem dados disponíveis: {', '.join(empty)}.")

    return DashboardData(
        totals=build_totals_map(totals.rows),
        totals_rows=totals.rows,
        rankings=rankings,
        warnings=warnings,
        used_fallback=totals.warnings.used_fallback,
    )
