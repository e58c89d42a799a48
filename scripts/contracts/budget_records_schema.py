"""
Data Contract: Budget Records Output Schema

This schema is the single source of truth for the output format
of data/<ano>/orcado.csv, data/<ano>/realizado.csv and the
intermediate files written by the stage1 scripts.

Validated at runtime, before every write.
"""

import pandera as pa
from pandera.typing import Series

from config.mappings import MONTHS


class BudgetRecordsSchema(pa.DataFrameModel):
    """
    Contract for long-format budget records.

    One row per (accounting class, equipment, month); zero amounts are
    dropped upstream so every valor is strictly positive.
    """

    # =====================================================
    # Required columns (header order is part of the contract)
    # =====================================================

    ano: Series[int] = pa.Field(nullable=False, ge=2000, le=2100)
    mes: Series[str] = pa.Field(nullable=False, isin=MONTHS)

    # Accounting class (6-digit code kept as text)
    classe_codigo: Series[str] = pa.Field(nullable=False)
    classe_orcamentaria: Series[str] = pa.Field(nullable=False)
    subclasse: Series[str] = pa.Field(nullable=False)

    # Allocation
    equipamento: Series[str] = pa.Field(nullable=False)
    centro_custo: Series[str] = pa.Field(nullable=False)

    valor: Series[float] = pa.Field(nullable=False)

    class Config:
        strict = True  # Exactly the dashboard header
        ordered = True
        coerce = True

    @pa.check("valor", name="positive_valor")
    def validate_valor(cls, series):
        """Zero amounts are never emitted and signs are dropped."""
        return series > 0
