import math

from raio_stats.errors import SourceUnavailable
from raio_stats.indicators import FALLBACK_TOTALS, INDICATOR_LABELS
from raio_stats.rankings import get_metric_label, get_ranking_top, load_all_rankings, load_category, metric_for_category
from raio_stats.totals import build_totals_map, fallback_rows, load_totals


def fake_fetcher(files):
    def _fetch(path):
        if path not in files:
            raise SourceUnavailable(path)
        return files[path]

    return _fetch


def test_load_totals_missing_file_uses_fallback():
    result = load_totals(fake_fetcher({}))
    assert result.warnings.used_fallback
    assert result.warnings.notes
    assert len(result.rows) == len(INDICATOR_LABELS) * 2
    totals = build_totals_map(result.rows)
    for indicator, years in FALLBACK_TOTALS.items():
        assert totals[indicator] == {2024: years[2024], 2025: years[2025]}


def test_load_totals_parses_rows():
    csv_text = "Indicador,Ano,Valor\nArmas Apreendidas,2024,2.454\nArmas Apreendidas,2025,2.914\n"
    result = load_totals(fake_fetcher({"totals.csv": csv_text}))
    assert not result.warnings.used_fallback
    totals = build_totals_map(result.rows)
    assert totals["Armas Apreendidas"] == {2024: 2454, 2025: 2914}


def test_load_totals_accepts_quantidade_column():
    csv_text = "Indicador,Ano,Quantidade\nmandados cumpridos,2025,\"1.042\"\n"
    result = load_totals(fake_fetcher({"totals.csv": csv_text}))
    assert result.rows == [{"indicator": "Mandados Cumpridos", "year": 2025, "value": 1042.0}]


def test_load_totals_missing_columns_falls_back():
    csv_text = "Indicador,Ano\nArmas Apreendidas,2024\n"
    result = load_totals(fake_fetcher({"totals.csv": csv_text}))
    assert result.warnings.missing_columns == ["Valor/Quantidade"]
    assert result.warnings.used_fallback
    assert result.rows == fallback_rows()
    assert result.warnings.messages()[0].startswith("Dados de totals.csv indisponíveis ou inválidos")


def test_load_totals_empty_file_falls_back():
    result = load_totals(fake_fetcher({"totals.csv": "Indicador,Ano,Valor\n"}))
    assert result.warnings.used_fallback


def test_load_totals_skips_invalid_rows_with_note():
    csv_text = "Indicador,Ano,Valor\nArmas Apreendidas,2024,abc\n,2024,5\nArmas Apreendidas,2025,0\n"
    result = load_totals(fake_fetcher({"totals.csv": csv_text}))
    assert result.rows == [{"indicator": "Armas Apreendidas", "year": 2025, "value": 0.0}]
    assert any("2 linha" in note for note in result.warnings.notes)
    assert not result.warnings.used_fallback


def test_build_totals_map_last_row_wins_and_ignores_other_years():
    rows = [
        {"indicator": "Armas Apreendidas", "year": 2024, "value": 1.0},
        {"indicator": "Armas Apreendidas", "year": 2024, "value": 2.0},
        {"indicator": "Armas Apreendidas", "year": 2023, "value": 99.0},
    ]
    totals = build_totals_map(rows)
    assert totals["Armas Apreendidas"] == {2024: 2.0, 2025: 0.0}
    assert set(INDICATOR_LABELS) <= set(totals)


RANKING_ARMS = (
    "Ano,Unidade,Armas,Ocorrencias,Percentual\n"
    "2025,A,10,100,\"10,0%\"\n"
    "2025,B,30,100,\n"
    "2025,C,,100,\n"
    "2025,D,30,100,\n"
    "2025,E,0,100,\n"
    "2024,F,99,100,\n"
)


def test_load_category_parses_metrics_with_none_for_missing():
    rows = load_category("weapons", fake_fetcher({"ranking_arms.csv": RANKING_ARMS}))
    assert len(rows) == 6
    assert rows[0] == {
        "year": 2025,
        "unit": "A",
        "metrics": {"Armas": 10.0, "Ocorrencias": 100.0, "Percentual": 10.0},
    }
    assert rows[2]["metrics"]["Armas"] is None
    assert rows[4]["metrics"]["Armas"] == 0.0


def test_load_category_missing_file_is_empty():
    assert load_category("weapons", fake_fetcher({})) == []
    assert get_ranking_top([], "Armas", 2025) == []


def test_load_category_missing_metric_column_gives_none():
    rows = load_category("vehicles", fake_fetcher({"ranking_veiculos.csv": "Ano,Unidade\n2025,A\n"}))
    assert rows[0]["metrics"]["Veiculos"] is None


def test_load_all_rankings_isolates_failures():
    rankings = load_all_rankings(fake_fetcher({"ranking_arms.csv": RANKING_ARMS}))
    assert set(rankings) == {"general", "weapons", "warrants", "trafficking", "vehicles"}
    assert len(rankings["weapons"]) == 6
    assert rankings["general"] == []


def test_get_ranking_top_orders_and_breaks_ties_by_source_order():
    rows = load_category("weapons", fake_fetcher({"ranking_arms.csv": RANKING_ARMS}))
    top = get_ranking_top(rows, "Armas", 2025)
    assert [(r["unit"], r["rank"]) for r in top] == [("B", 1), ("D", 2), ("A", 3)]


def test_get_ranking_top_skips_missing_and_respects_limit():
    rows = load_category("weapons", fake_fetcher({"ranking_arms.csv": RANKING_ARMS}))
    top = get_ranking_top(rows, "Armas", 2025, limit=10)
    assert [r["unit"] for r in top] == ["B", "D", "A", "E"]
    assert all(not math.isnan(r["metrics"]["Armas"]) for r in top)
    assert get_ranking_top(rows, "Armas", 2025, limit=0) == []


def test_get_ranking_top_ignores_nan_values():
    rows = [{"year": 2025, "unit": "A", "metrics": {"Armas": float("nan")}}]
    assert get_ranking_top(rows, "Armas", 2025) == []


def test_metric_labels_and_category_metric():
    assert get_metric_label("Trafico") == "Tráfico"
    assert get_metric_label("Outro") == "Outro"
    assert metric_for_category("weapons") == "Armas"
    assert metric_for_category("general", "Mandados") == "Mandados"
    assert metric_for_category("general", "Veiculos") == "Ocorrencias"
