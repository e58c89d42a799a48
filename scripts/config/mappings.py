"""
Lookup Tables Configuration

Central source of truth for code → category mappings used while
reshaping the accounting exports.

- EQUIPMENT_CATEGORIES: equipment tag prefix → equipment category
- ACCOUNTING_CLASSES: 6-digit accounting class → (class group, subgroup)
- MONTH_NAMES: full Portuguese month name → 3-letter abbreviation
"""

# =============================================================================
# EQUIPMENT CATEGORIES (closed set, curated by the maintenance team)
# =============================================================================
EQUIPMENT_CATEGORIES = {
    "CB": "CAMINHÃO BASCULANTE",
    "CC": "CAMINHÃO COMBOIO",
    "CG": "CAMINHÃO GUINDAUTO",
    "CP": "CAMINHÃO PIPA",
    "EH": "ESCAVADEIRA HIDRAULICA",
    "TE": "TRATOR DE ESTEIRA",
    "TP": "TRATOR DE PNEUS",
    "PC": "PA CARREGADEIRA",
    "VL": "VEICULO LEVE",
    "CA": "COMPRESSOR DE AR",
    "KSS": "ORE SORTER",
    "TC": "TRANSPORTADOR DE CORREIA",
    "PM": "PENEIRA MOVEL",
    "PV": "PENEIRA VIBRATORIA",
    "BM": "BRITADOR",
}

# Bucket for costs not allocated to a specific equipment
GENERIC_EQUIPMENT = "GERAL"
GENERIC_CATEGORY = "Geral"
GENERIC_DESCRIPTION = "Custos gerais não alocados a equipamentos específicos"

# Catalog defaults for equipment owners (filled in by hand later)
DEFAULT_OWNER = "A definir"
DEFAULT_CONTACT_EMAIL = "equipamentos@empresa.com.br"


# =============================================================================
# ACCOUNTING CLASSES: class code → (classe_orcamentaria, subclasse)
# =============================================================================
ACCOUNTING_CLASSES = {
    # Pessoal
    "421101": ("Pessoal", "Salários"),
    "421201": ("Pessoal", "INSS"),
    "421202": ("Pessoal", "FGTS"),
    "421204": ("Pessoal", "Vale Transporte"),
    "421301": ("Pessoal", "Convênio Médico"),
    "421302": ("Pessoal", "Outros Benefícios"),
    "421303": ("Pessoal", "Seguro de Vida"),
    "421304": ("Pessoal", "Alimentação"),
    "421405": ("Pessoal", "Saúde Ocupacional"),
    "421406": ("Pessoal", "Treinamentos"),
    "421407": ("Pessoal", "Uniformes e EPI"),

    # Operacional
    "422101": ("Operacional", "Aluguel de Equipamentos"),
    "422102": ("Operacional", "Serviços Gerais"),
    "422103": ("Operacional", "Combustíveis"),
    "422104": ("Operacional", "Manutenção de Equipamentos"),
    "422105": ("Operacional", "Manutenção de Edificações"),
    "422109": ("Operacional", "Pneus"),
    "422110": ("Operacional", "Embalagens"),
    "422111": ("Operacional", "Armazenagem"),
    "422112": ("Operacional", "Limpeza e Conservação"),
    "422113": ("Operacional", "Ferramentas"),
    "422114": ("Operacional", "Água e Esgoto"),
    "422115": ("Operacional", "Energia Elétrica"),
    "422116": ("Operacional", "Comunicações"),
    "422117": ("Operacional", "Exames e Análises"),
    "422118": ("Operacional", "Insumos Laboratoriais"),
    "422120": ("Operacional", "Industrialização"),
    "422121": ("Operacional", "Gás GLP"),
    "422123": ("Operacional", "Fretes e Carretos"),
    "422124": ("Operacional", "Viagens"),
    "422126": ("Operacional", "Material de Limpeza"),
    "422127": ("Operacional", "Segurança"),
    "422128": ("Operacional", "Lanches e Refeições"),
    "422129": ("Operacional", "Custas Cartoriais"),
    "422130": ("Operacional", "Taxas"),
    "422131": ("Operacional", "Assessoria Jurídica"),
    "422137": ("Operacional", "Seguros"),
    "422139": ("Operacional", "Móveis e Utensílios"),
    "422141": ("Operacional", "Equipamentos de Segurança"),
    "422142": ("Operacional", "IPVA"),
    "422144": ("Operacional", "Peças"),

    # Tecnologia
    "422119": ("Tecnologia", "Software"),
    "422122": ("Tecnologia", "Telefonia e Internet"),
    "422125": ("Tecnologia", "Material de Escritório"),
}

# Fallback for codes not in ACCOUNTING_CLASSES
FALLBACK_CLASS_GROUP = "Outros"
FALLBACK_CLASS_SUBGROUP = "Diversos"


# =============================================================================
# MONTHS
# =============================================================================

# Dashboard month order (also the `mes` values in every output file)
MONTHS = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]

# Keys are lower-case; "marco" covers exports that drop the cedilla
MONTH_NAMES = {
    "janeiro": "Jan",
    "fevereiro": "Fev",
    "março": "Mar",
    "marco": "Mar",
    "abril": "Abr",
    "maio": "Mai",
    "junho": "Jun",
    "julho": "Jul",
    "agosto": "Ago",
    "setembro": "Set",
    "outubro": "Out",
    "novembro": "Nov",
    "dezembro": "Dez",
}
