"""
Source Layouts Configuration

Column positions of every accounting export, expressed as ReshapeRules.
The offsets mirror the spreadsheets the exports come from; if the
accounting team reorders a sheet, extraction breaks here and nowhere else.

Output headers for the dashboard files are also defined here.
"""

from config.mappings import GENERIC_CATEGORY
from config.paths import CURRENT_BUDGET_YEAR, PREVIOUS_BUDGET_YEAR
from orcamento.reshape import (
    EQUIPMENT_FIXED,
    EQUIPMENT_RAW,
    EQUIPMENT_TAG,
    DetailColumns,
    ReshapeRule,
    YearColumns,
)

# =============================================================================
# OUTPUT HEADERS (consumed by the dashboard as-is)
# =============================================================================
BUDGET_HEADER = [
    "ano",
    "mes",
    "classe_codigo",
    "classe_orcamentaria",
    "subclasse",
    "equipamento",
    "centro_custo",
    "valor",
]

DETAIL_HEADER = [
    "data",
    "equipamento",
    "produto",
    "quantidade",
    "valorUnitario",
    "valorTotal",
    "fornecedor",
]


# =============================================================================
# EQUIPMENT BUDGET SHEET ("Orçamento 2026 -Dashboard - csv.csv")
# Semicolon separated, no quoting.
#   0 classe | 1 descrição | 2 grupo de contas | 3-14 Jan..Dez | 15 total | 16 equipamento
# =============================================================================
EQUIPMENT_SHEET_MIN_COLUMNS = 17
EQUIPMENT_SHEET_FIRST_MONTH = 3
EQUIPMENT_SHEET_EQUIPMENT = 16

EQUIPMENT_BUDGET_RULE = ReshapeRule(
    name="orcamento_equipamentos",
    delimiter=";",
    quoted=False,
    min_columns=EQUIPMENT_SHEET_MIN_COLUMNS,
    class_code_col=0,
    description_col=1,
    equipment_col=EQUIPMENT_SHEET_EQUIPMENT,
    equipment_mode=EQUIPMENT_RAW,
    year_columns=(YearColumns.contiguous(CURRENT_BUDGET_YEAR, EQUIPMENT_SHEET_FIRST_MONTH),),
)


# =============================================================================
# DETAILED BUDGET SHEET ("orçamento detalhado 2026 - Dashboard - csv.csv")
# Semicolon separated, no quoting.
#   0 classe | 1 descrição | 2-13 Jan..Dez 2025 | 14-15 totals (ignored) | 16-27 Jan..Dez 2026
# =============================================================================
DETAILED_SHEET_MIN_COLUMNS = 30
DETAILED_SHEET_FIRST_MONTH_PREVIOUS = 2
# Columns 14 and 15 hold the 2025 total and a spacer, not months
DETAILED_SHEET_FIRST_MONTH_CURRENT = 16

# Subtotal line of the sheet
CONTRIBUTION_MARGIN_MARKER = "MARGEM DE CONTRIBUIÇÃO"

DETAILED_BUDGET_RULE = ReshapeRule(
    name="orcamento_detalhado",
    delimiter=";",
    quoted=False,
    min_columns=DETAILED_SHEET_MIN_COLUMNS,
    class_code_col=0,
    description_col=1,
    equipment_mode=EQUIPMENT_FIXED,
    generic_category=GENERIC_CATEGORY,
    skip_descriptions=frozenset({CONTRIBUTION_MARGIN_MARKER}),
    year_columns=(
        YearColumns.contiguous(PREVIOUS_BUDGET_YEAR, DETAILED_SHEET_FIRST_MONTH_PREVIOUS),
        YearColumns.contiguous(CURRENT_BUDGET_YEAR, DETAILED_SHEET_FIRST_MONTH_CURRENT),
    ),
)


# =============================================================================
# GENERAL LEDGER EXPORT ("razao contabil.csv")
# Comma separated, text fields in double quotes.
#   0 exercício | 1 mês (por extenso) | 2 conta | 3 descrição da conta
#   4 centro de custo | 5 histórico | 6 valor
# =============================================================================
LEDGER_MIN_COLUMNS = 7

GENERAL_LEDGER_RULE = ReshapeRule(
    name="razao_contabil",
    delimiter=",",
    quoted=True,
    min_columns=LEDGER_MIN_COLUMNS,
    class_code_col=2,
    description_col=3,
    equipment_col=5,
    equipment_mode=EQUIPMENT_TAG,
    year_col=0,
    month_col=1,
    cost_center_col=4,
    amount_col=6,
)


# =============================================================================
# ITEMIZED LEDGER EXPORT ("razao por item.csv")
# Comma separated, text fields in double quotes.
#   0 data (dd/mm/aaaa) | 1 conta | 2 descrição da conta | 3 aplicação
#   4 produto | 5 quantidade | 6 valor unitário | 7 valor total | 8 fornecedor
# =============================================================================
ITEMIZED_MIN_COLUMNS = 9

ITEMIZED_LEDGER_RULE = ReshapeRule(
    name="razao_itens",
    delimiter=",",
    quoted=True,
    min_columns=ITEMIZED_MIN_COLUMNS,
    class_code_col=1,
    description_col=2,
    equipment_col=3,
    equipment_mode=EQUIPMENT_TAG,
    date_col=0,
    amount_col=7,
    details=DetailColumns(product=4, quantity=5, unit_value=6, total_value=7, supplier=8),
)
