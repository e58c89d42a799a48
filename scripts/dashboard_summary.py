#!/usr/bin/env python3
"""
Dashboard Summary

Prints the planning (budget vs budget) and execution (budget vs actuals)
views from the generated dashboard files, with the same filters the
dashboard offers.

Usage:
    python3 scripts/dashboard_summary.py
    python3 scripts/dashboard_summary.py --classe Pessoal
    python3 scripts/dashboard_summary.py --equipamento EH-01 --by equipamento
"""

import argparse
import sys
from pathlib import Path

# Add scripts directory to path for config imports
SCRIPTS_DIR = Path(__file__).parent
sys.path.insert(0, str(SCRIPTS_DIR))

import pandas as pd  # noqa: E402
from config.paths import CURRENT_BUDGET_YEAR, DATA_DIR, PREVIOUS_BUDGET_YEAR  # noqa: E402
from orcamento.dashboard import (  # noqa: E402
    ALL_CLASSES,
    ALL_EQUIPMENT,
    compare_budgets,
    execution_by,
    execution_by_month,
    execution_totals,
    filter_records,
    load_dashboard_data,
    planning_totals,
    variance_color,
)
from orcamento.parsing import format_valor  # noqa: E402
from orcamento.reporting import print_banner  # noqa: E402

MONEY_COLUMNS = ["anterior", "atual", "orcado", "realizado", "variacao"]
PCT_COLUMNS = ["variacao_percentual", "percentual_executado"]


def format_table(df: pd.DataFrame) -> str:
    if df.empty:
        return "  (sem dados)"
    shown = df.copy()
    for col in MONEY_COLUMNS:
        if col in shown.columns:
            shown[col] = shown[col].map(format_valor)
    for col in PCT_COLUMNS:
        if col in shown.columns:
            shown[col] = shown[col].map(lambda v: f"{v:.1f}%")
    return shown.to_string(index=False)


def print_summary(data_dir: Path, classe: str, equipamento: str, by: str) -> None:
    data = load_dashboard_data(data_dir)
    settings = data.settings

    anterior = filter_records(data.orcado_anterior, classe, equipamento)
    atual = filter_records(data.orcado_atual, classe, equipamento)
    realizado = filter_records(data.realizado_atual, classe, equipamento)

    print(f"\nPLANEJAMENTO: Orçado {PREVIOUS_BUDGET_YEAR} vs Orçado {CURRENT_BUDGET_YEAR}")
    totals = planning_totals(anterior, atual)
    print(f"  Total {PREVIOUS_BUDGET_YEAR}: {format_valor(totals['total_anterior'])}")
    print(f"  Total {CURRENT_BUDGET_YEAR}: {format_valor(totals['total_atual'])}")
    print(f"  Variação:   {format_valor(totals['variacao'])} ({totals['variacao_percentual']:.1f}%)"
          f" [{variance_color(totals['variacao_percentual'], settings)}]")
    print(format_table(compare_budgets(anterior, atual, by)))

    print(f"\nEXECUÇÃO: Orçado {CURRENT_BUDGET_YEAR} vs Realizado {CURRENT_BUDGET_YEAR}")
    totals = execution_totals(atual, realizado)
    print(f"  Orçado:     {format_valor(totals['total_orcado'])}")
    print(f"  Realizado:  {format_valor(totals['total_realizado'])}")
    print(f"  Executado:  {totals['percentual_executado']:.1f}%")
    print("\n  Por mês:")
    print(format_table(execution_by_month(atual, realizado)))
    print(f"\n  Por {by}:")
    print(format_table(execution_by(atual, realizado, by)))


def main():
    parser = argparse.ArgumentParser(description="Print dashboard comparisons")
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR)
    parser.add_argument("--classe", default=ALL_CLASSES, help="Filter by classe_orcamentaria")
    parser.add_argument("--equipamento", default=ALL_EQUIPMENT, help="Filter by equipment tag")
    parser.add_argument("--by", choices=["classe_orcamentaria", "equipamento"], default="classe_orcamentaria")
    args = parser.parse_args()

    print_banner("BUDGET DASHBOARD SUMMARY")
    print_summary(args.data_dir, args.classe, args.equipamento, args.by)


if __name__ == "__main__":
    main()
