"""
Data Contract: Detail Records Output Schema

This schema is the single source of truth for the output format
of data/<ano>/detalhes.csv (itemized ledger lines per equipment).

Validated at runtime, before every write.
"""

import pandera as pa
from pandera.typing import Series

from config.mappings import EQUIPMENT_CATEGORIES

EQUIPMENT_CODE_PATTERN = r"^(" + "|".join(sorted(EQUIPMENT_CATEGORIES)) + r")-\d+$"


class DetailRecordsSchema(pa.DataFrameModel):
    """
    Contract for itemized detail records.

    Only lines whose equipment tag has a known category reach this file.
    """

    data: Series[str] = pa.Field(nullable=False)
    equipamento: Series[str] = pa.Field(nullable=False, str_matches=EQUIPMENT_CODE_PATTERN)

    # Free text from the export (may be blank)
    produto: Series[str] = pa.Field(nullable=True)

    quantidade: Series[float] = pa.Field(nullable=False)
    valorUnitario: Series[float] = pa.Field(nullable=False, ge=0)
    valorTotal: Series[float] = pa.Field(nullable=False, ge=0)

    fornecedor: Series[str] = pa.Field(nullable=True)

    class Config:
        strict = True
        ordered = True
        coerce = True
