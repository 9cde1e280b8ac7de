from __future__ import annotations

INDICATOR_LABELS = [
    "Total de Ocorrências",
    "Armas Apreendidas",
    "Mandados Cumpridos",
    "Drogas Apreendidas",
    "Veículos Apreendidos",
    "Prisões Realizadas",
]

INDICATOR_TOOLTIPS = {
    "Total de Ocorrências": "Quantidade total de registros operacionais consolidados.",
    "Armas Apreendidas": "Armas retiradas de circulação no período.",
    "Mandados Cumpridos": "Mandados judiciais executados pelas equipes.",
    "Drogas Apreendidas": "Ocorrências com apreensão de entorpecentes.",
    "Veículos Apreendidos": "Veículos recolhidos em ações operacionais.",
    "Prisões Realizadas": "Conduções ou prisões efetivadas no período.",
}

# keys are lowercase; lookups also fall back to an accent-folded form
INDICATOR_ALIASES = {
    "prisões realizadas (conduções a delegacia)": "Prisões Realizadas",
    "prisões realizadas": "Prisões Realizadas",
    "prisoes realizadas": "Prisões Realizadas",
    "total de ocorrencias": "Total de Ocorrências",
    "total de ocorrências": "Total de Ocorrências",
    "armas apreendidas": "Armas Apreendidas",
    "mandados cumpridos": "Mandados Cumpridos",
    "drogas apreendidas": "Drogas Apreendidas",
    "veículos apreendidos": "Veículos Apreendidos",
    "veiculos apreendidos": "Veículos Apreendidos",
}

FALLBACK_TOTALS = {
    "Total de Ocorrências": {2024: 8025, 2025: 9122},
    "Armas Apreendidas": {2024: 2454, 2025: 2914},
    "Mandados Cumpridos": {2024: 851, 2025: 1042},
    "Drogas Apreendidas": {2024: 1480, 2025: 1859},
    "Veículos Apreendidos": {2024: 2645, 2025: 2699},
    "Prisões Realizadas": {2024: 6824, 2025: 7578},
}

METRIC_LABELS = {
    "Ocorrencias": "Ocorrências",
    "Armas": "Armas",
    "Trafico": "Tráfico",
    "Mandados": "Mandados",
    "Veiculos": "Veículos",
    "Percentual": "Percentual",
}
