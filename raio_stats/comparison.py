from __future__ import annotations

from .config import STABLE_TOLERANCE, YEARS
from .formatting import format_percent
from .indicators import INDICATOR_LABELS

TREND_ARROWS = {"growth": "↑", "decline": "↓", "stable": "→"}
TREND_BADGES = {"growth": "Melhora", "decline": "Queda", "stable": "Estável"}


def delta(a: float, b: float) -> dict:
    diff = b - a
    percent = 0.0 if a == 0 else diff / a * 100
    return {"diff": diff, "percent": percent}


def classify(percent: float, tolerance: float = STABLE_TOLERANCE) -> str:
    if abs(percent) < tolerance:
        return "stable"
    return "growth" if percent > 0 else "decline"


def compare(
    totals_map: dict[str, dict[int, float]],
    indicator: str,
    base_year: int = YEARS[0],
    compare_year: int = YEARS[1],
) -> dict:
    values = totals_map.get(indicator, {})
    base_value = values.get(base_year, 0.0)
    compare_value = values.get(compare_year, 0.0)
    result = delta(base_value, compare_value)
    return {
        "indicator": indicator,
        "base_year": base_year,
        "compare_year": compare_year,
        "base_value": base_value,
        "compare_value": compare_value,
        **result,
        "trend": classify(result["percent"]),
    }


def kpi_rows(
    totals_map: dict[str, dict[int, float]],
    base_year: int = YEARS[0],
    compare_year: int = YEARS[1],
) -> list[dict]:
    return [compare(totals_map, indicator, base_year, compare_year) for indicator in INDICATOR_LABELS]


def build_insights(kpis: list[dict], top: int = 3) -> dict:
    """Biggest relative growth and the indicator that moved the least."""
    if not kpis:
        return {"top": [], "least": None}
    ranked = sorted(kpis, key=lambda k: k["percent"], reverse=True)
    least = min(ranked, key=lambda k: abs(k["percent"]))
    return {"top": ranked[:top], "least": least}


def insight_summary(insights: dict) -> str:
    least = insights.get("least")
    if least is None:
        return "Sem dados suficientes para gerar insights."
    leaders = ", ".join(f"{k['indicator']} ({format_percent(k['percent'])})" for k in insights["top"])
    growing = sum(1 for k in insights["top"] if k["trend"] == "growth")
    return (
        f"Maiores variações: {leaders}. "
        f"{least['indicator']} ficou praticamente estável com {format_percent(least['percent'])}. "
        f"Indicadores em crescimento entre os destaques: {growing}."
    )
