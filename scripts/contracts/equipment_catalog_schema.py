"""
Data Contract: Equipment Catalog Schema

Validates the "equipamentos" array of data/metadata/equipamentos.json
(flattened to a DataFrame, one row per equipment).
"""

import pandera as pa
from pandera.typing import Series


class EquipmentCatalogSchema(pa.DataFrameModel):
    """Contract for equipment catalog entries."""

    codigo: Series[str] = pa.Field(nullable=False, unique=True)
    nome: Series[str] = pa.Field(nullable=False)
    categoria: Series[str] = pa.Field(nullable=True)
    descricao: Series[str] = pa.Field(nullable=False)

    # Sequential, assigned in code order
    centro_custo: Series[str] = pa.Field(nullable=False, unique=True, str_matches=r"^CC-\d{3,}$")

    responsavel: Series[str] = pa.Field(nullable=False)
    email: Series[str] = pa.Field(nullable=False)
    ativo: Series[bool] = pa.Field(nullable=False)

    class Config:
        strict = False  # Allow extra columns added by hand
        coerce = True

    @pa.dataframe_check(name="sorted_by_codigo")
    def validate_order(cls, df):
        """Entries are sorted by code so cost centers follow code order."""
        return df["codigo"].tolist() == sorted(df["codigo"].tolist())
