from __future__ import annotations

import logging

import plotly.express as px
import streamlit as st

from raio_stats.comparison import TREND_ARROWS, TREND_BADGES, build_insights, compare, insight_summary, kpi_rows
from raio_stats.config import LOG_LEVEL, YEARS
from raio_stats.formatting import format_delta, format_number, format_percent
from raio_stats.indicators import INDICATOR_LABELS, INDICATOR_TOOLTIPS
from raio_stats.ingest import load_dashboard_data
from raio_stats.rankings import (
    CATEGORY_LABELS,
    GENERAL_METRICS,
    get_metric_label,
    get_ranking_top,
    metric_for_category,
)
from raio_stats.tables import growth_frame, kpi_frame, ranking_frame, ranking_table, to_csv_bytes, totals_frame

logging.basicConfig(level=LOG_LEVEL)

THEME_PRIMARY = "#F2C200"
THEME_MUTED = "#4A5568"
YEAR_COLORS = {str(YEARS[0]): THEME_MUTED, str(YEARS[1]): THEME_PRIMARY}
PNG_CONFIG = {"toImageButtonOptions": {"format": "png", "filename": "grafico"}}

st.set_page_config(page_title="Painel Estatístico CPRAIO", layout="wide")


@st.cache_data(show_spinner="Carregando indicadores consolidados...")
def load_data():
    return load_dashboard_data()


data = load_data()

st.sidebar.title("Painel CPRAIO")
page = st.sidebar.radio("Página", ["Visão Geral", "Rankings", "Comparador", "Metodologia"])
if st.sidebar.button("Recarregar dados"):
    load_data.clear()
    st.rerun()
if data.warnings:
    st.sidebar.warning(f"{len(data.warnings)} aviso(s) de dados. Veja Metodologia.")

if data.failed:
    st.error(data.warnings[0])
    st.stop()

kpis = kpi_rows(data.totals)

if page == "Visão Geral":
    st.title(f"Painel Estatístico CPRAIO – Comparativo {YEARS[0]}–{YEARS[1]}")
    st.caption("Indicadores consolidados | Comparação anual | CPRAIO / PMCE")

    cols = st.columns(3)
    for i, k in enumerate(kpis):
        cols[i % 3].metric(
            f"{TREND_ARROWS[k['trend']]} {k['indicator']}",
            format_number(k["compare_value"]),
            f"{format_delta(k['diff'])} ({format_percent(k['percent'])}) {TREND_BADGES[k['trend']]}",
            delta_color="off" if k["trend"] == "stable" else "normal",
            help=INDICATOR_TOOLTIPS.get(k["indicator"]),
        )

    c1, c2 = st.columns(2)
    bars = totals_frame(data.totals)
    bars["Ano"] = bars["Ano"].astype(str)
    c1.plotly_chart(
        px.bar(
            bars,
            x="Indicador",
            y="Valor",
            color="Ano",
            barmode="group",
            color_discrete_map=YEAR_COLORS,
            title="Comparativo por indicador",
        ),
        use_container_width=True,
        config=PNG_CONFIG,
    )
    c2.plotly_chart(
        px.line(growth_frame(kpis), x="Indicador", y="Crescimento", markers=True, title="Índice de crescimento (%)"),
        use_container_width=True,
        config=PNG_CONFIG,
    )

    st.subheader("Insights automáticos")
    st.write(insight_summary(build_insights(kpis)))

    st.dataframe(kpi_frame(kpis), use_container_width=True, hide_index=True)
    st.download_button(
        "Exportar CSV processado",
        data=to_csv_bytes(totals_frame(data.totals)),
        file_name="cpraio-totais-processados.csv",
        mime="text/csv",
    )

elif page == "Rankings":
    st.title("Rankings por unidade")
    category = st.sidebar.selectbox("Ranking", list(CATEGORY_LABELS), format_func=CATEGORY_LABELS.get)
    year_choice = st.sidebar.selectbox("Ano", [str(YEARS[0]), str(YEARS[1]), "Comparar"], index=2)
    selected = None
    if category == "general":
        selected = st.sidebar.selectbox("Métrica", list(GENERAL_METRICS), format_func=get_metric_label)
    metric = metric_for_category(category, selected)

    rows = data.rankings.get(category, [])
    tops = {year: get_ranking_top(rows, metric, year) for year in YEARS}
    shown = [year for year in YEARS if year_choice in (str(year), "Comparar")]

    st.subheader("Top 3 unidades")
    if not any(tops.values()):
        st.info("Sem dados disponíveis para este ranking.")
    else:
        for col, year in zip(st.columns(len(YEARS)), YEARS):
            col.markdown(f"**{year}**")
            col.dataframe(ranking_table(tops[year], metric), use_container_width=True, hide_index=True)

    filtered = ranking_frame([row for year in shown for row in tops[year]], metric)
    export = to_csv_bytes(filtered)
    if filtered.empty:
        st.info("Sem dados para o gráfico selecionado.")
    else:
        filtered["Ano"] = filtered["Ano"].astype(str)
        st.plotly_chart(
            px.bar(
                filtered,
                x="Valor",
                y="Unidade",
                color="Ano",
                orientation="h",
                barmode="group",
                color_discrete_map=YEAR_COLORS,
                labels={"Valor": get_metric_label(metric)},
                title="Comparativo por unidade",
            ),
            use_container_width=True,
            config=PNG_CONFIG,
        )
    st.download_button(
        "Exportar CSV filtrado",
        data=export,
        file_name="cpraio-ranking-filtrado.csv",
        mime="text/csv",
    )

elif page == "Comparador":
    st.title("Comparador interativo")
    indicator = st.sidebar.selectbox("Indicador", INDICATOR_LABELS)
    base_year = st.sidebar.selectbox("Ano base", list(YEARS), index=0)
    compare_year = st.sidebar.selectbox("Ano comparado", list(YEARS), index=1)
    view = st.sidebar.radio("Exibição", ["Absoluto", "Percentual"])

    result = compare(data.totals, indicator, base_year, compare_year)
    c1, c2, c3 = st.columns(3)
    c1.metric(f"Ano base ({base_year})", format_number(result["base_value"]))
    c2.metric(f"Ano comparado ({compare_year})", format_number(result["compare_value"]))
    c3.metric("Variação", format_delta(result["diff"]), format_percent(result["percent"]))
    st.caption(TREND_BADGES[result["trend"]])

    if view == "Absoluto":
        frame = {"Ano": [str(base_year), str(compare_year)], "Valor": [result["base_value"], result["compare_value"]]}
        fig = px.bar(frame, x="Ano", y="Valor", title=indicator)
    else:
        frame = {"Métrica": ["Δ%"], "Valor": [result["percent"]]}
        fig = px.bar(frame, x="Métrica", y="Valor", title=f"{indicator} – variação percentual")
    fig.update_traces(marker_color=THEME_PRIMARY)
    st.plotly_chart(fig, use_container_width=True, config=PNG_CONFIG)

else:
    st.title("Metodologia")
    st.write(
        "Os totais vêm de totals.csv e os rankings de um arquivo por categoria. "
        "Variação percentual = (ano comparado − ano base) / ano base × 100; com ano base zero, a variação é 0. "
        "Variações abaixo de 0,01% em módulo são classificadas como estáveis. "
        "Valores ausentes ou inválidos aparecem como 's/d' e não entram nos rankings."
    )
    st.subheader("Transparência dos dados")
    if data.warnings:
        for message in data.warnings:
            st.warning(message)
    else:
        st.success("Todos os arquivos foram carregados sem inconsistências.")
