"""DataFrames behind the dashboard charts, tables and CSV downloads."""

from __future__ import annotations

import pandas as pd

from .config import YEARS
from .formatting import format_delta, format_number, format_percent
from .indicators import INDICATOR_LABELS
from .rankings import get_metric_label


def totals_frame(totals_map: dict[str, dict[int, float]], years: tuple[int, ...] = YEARS) -> pd.DataFrame:
    """Long ``Indicador, Ano, Valor`` frame, one year block after the other."""
    indicators = [i for i in INDICATOR_LABELS if i in totals_map]
    indicators += [i for i in totals_map if i not in INDICATOR_LABELS]
    records = [
        {"Indicador": indicator, "Ano": year, "Valor": totals_map[indicator].get(year, 0.0)}
        for year in years
        for indicator in indicators
    ]
    return pd.DataFrame(records, columns=["Indicador", "Ano", "Valor"])


def kpi_frame(kpis: list[dict]) -> pd.DataFrame:
    records = [
        {
            "Indicador": k["indicator"],
            str(k["base_year"]): format_number(k["base_value"]),
            str(k["compare_year"]): format_number(k["compare_value"]),
            "Δ": format_delta(k["diff"]),
            "Δ%": format_percent(k["percent"]),
        }
        for k in kpis
    ]
    return pd.DataFrame(records)


def growth_frame(kpis: list[dict]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Indicador": k["indicator"], "Crescimento": k["percent"]} for k in kpis],
        columns=["Indicador", "Crescimento"],
    )


def ranking_table(top_rows: list[dict], metric: str) -> pd.DataFrame:
    label = get_metric_label(metric)
    return pd.DataFrame(
        [
            {"Pos": row["rank"], "Unidade": row["unit"], label: format_number(row["metrics"].get(metric))}
            for row in top_rows
        ],
        columns=["Pos", "Unidade", label],
    )


def ranking_frame(top_rows: list[dict], metric: str) -> pd.DataFrame:
    """Long ``Ano, Unidade, Valor`` frame; missing metric values stay NaN."""
    frame = pd.DataFrame(
        [{"Ano": row["year"], "Unidade": row["unit"], "Valor": row["metrics"].get(metric)} for row in top_rows],
        columns=["Ano", "Unidade", "Valor"],
    )
    frame["Valor"] = pd.to_numeric(frame["Valor"], errors="coerce")
    return frame


def to_csv_bytes(frame: pd.DataFrame) -> bytes:
    return frame.to_csv(index=False).encode("utf-8")
