"""
Data Contracts Package

Contains Pandera schema definitions for validating pipeline outputs.
These are the single source of truth for output data formats.

Usage:
    from contracts import BudgetRecordsSchema, DetailRecordsSchema

    # Validate a DataFrame
    BudgetRecordsSchema.validate(df)

    # Use as a decorator
    @pa.check_output(BudgetRecordsSchema)
    def process_data(df):
        ...
"""

from .budget_records_schema import BudgetRecordsSchema
from .detail_records_schema import DetailRecordsSchema
from .equipment_catalog_schema import EquipmentCatalogSchema

__all__ = [
    "BudgetRecordsSchema",
    "DetailRecordsSchema",
    "EquipmentCatalogSchema",
]
