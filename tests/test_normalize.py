import pytest

from raio_stats.errors import MalformedSchema, UnparseableValue
from raio_stats.indicators import INDICATOR_ALIASES, INDICATOR_LABELS
from raio_stats.normalize import normalize_indicator, parse_number, parse_year, resolve_columns
from raio_stats.parser import parse_csv, parse_header


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12,5%", 12.5),
        ("12.5", 12.5),
        (" 7 % ", 7.0),
        ("3,14", 3.14),
        ("0", 0.0),
        ("-4,5", -4.5),
        ("0.125", 0.125),
        ("0,125", 0.125),
        ("12.345%", 12.345),
    ],
)
def test_parse_number_pt_br(raw, expected):
    assert parse_number(raw) == pytest.approx(expected)


def test_parse_number_thousands_separator():
    assert parse_number("2.454") == 2454
    assert parse_number("1.234.567") == 1234567
    assert parse_number("1.234,5") == pytest.approx(1234.5)


@pytest.mark.parametrize("raw", ["", "   ", None, "abc", "%", "1,2,3", "nan", "inf", float("nan")])
def test_parse_number_missing_is_none_not_zero(raw):
    assert parse_number(raw) is None


@pytest.mark.parametrize("comma, dot", [("0,125", "0.125"), ("12,345%", "12.345%"), ("12,5%", "12.5"), ("0,5", "0.5")])
def test_parse_number_comma_and_dot_forms_agree(comma, dot):
    assert parse_number(comma) == pytest.approx(parse_number(dot))


def test_parse_number_passes_numbers_through():
    assert parse_number(42) == 42.0
    assert parse_number(0.0) == 0.0


def test_parse_number_strict_raises():
    with pytest.raises(UnparseableValue):
        parse_number("x", strict=True)


def test_parse_year():
    assert parse_year("2024") == 2024
    assert parse_year("2024,5") is None
    assert parse_year("") is None


def test_normalize_indicator_aliases():
    assert normalize_indicator("  prisões realizadas (conduções a delegacia) ") == "Prisões Realizadas"
    assert normalize_indicator("VEICULOS APREENDIDOS") == "Veículos Apreendidos"
    assert normalize_indicator("Total de Ocorrencias") == "Total de Ocorrências"


def test_normalize_indicator_unknown_is_trimmed():
    assert normalize_indicator("  Outro Indicador ") == "Outro Indicador"
    assert normalize_indicator(None) == ""


@pytest.mark.parametrize("name", list(INDICATOR_ALIASES) + INDICATOR_LABELS)
def test_normalize_indicator_idempotent(name):
    once = normalize_indicator(name)
    assert normalize_indicator(once) == once


def test_parse_csv_header_driven():
    text = "Ano,Unidade,Armas\n2024,A,10\n\n2025,B\n"
    rows = parse_csv(text)
    assert rows == [{"Ano": "2024", "Unidade": "A", "Armas": "10"}, {"Ano": "2025", "Unidade": "B"}]


def test_parse_csv_strips_bom_and_keeps_literal_header():
    text = "\ufeffIndicador ,Ano\nx,2024\n"
    assert parse_header(text) == ["Indicador ", "Ano"]
    assert parse_csv(text)[0]["Indicador "] == "x"


def test_resolve_columns_prefers_first_alias():
    aliases = {"value": ("Valor", "Quantidade")}
    assert resolve_columns(["Quantidade", "Valor"], aliases) == ({"value": "Valor"}, [])
    assert resolve_columns(["Quantidade"], aliases) == ({"value": "Quantidade"}, [])


def test_resolve_columns_is_case_and_accent_tolerant():
    resolved, missing = resolve_columns(["Ocorrências", " ano "], {"o": ("Ocorrencias",), "y": ("Ano",)})
    assert resolved == {"o": "Ocorrências", "y": " ano "}
    assert missing == []


def test_resolve_columns_required_raises():
    with pytest.raises(MalformedSchema) as info:
        resolve_columns(["Ano"], {"year": ("Ano",), "value": ("Valor", "Quantidade")}, required=True)
    assert info.value.missing == ["Valor/Quantidade"]
