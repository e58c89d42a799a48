"""
Writers for the dashboard files.

Records are turned into DataFrames, checked against their pandera
contract and written whole (destination files are always overwritten).
"""

import json
import shutil
from pathlib import Path
from typing import Iterable, List

import pandas as pd

from config.layouts import BUDGET_HEADER, DETAIL_HEADER
from contracts import BudgetRecordsSchema, DetailRecordsSchema
from orcamento.models import BudgetRecord, DetailRecord


def records_to_frame(records: Iterable[BudgetRecord]) -> pd.DataFrame:
    """Budget records -> DataFrame with the dashboard header."""
    rows = [record.to_row() for record in records]
    df = pd.DataFrame(rows, columns=BUDGET_HEADER)
    df["ano"] = df["ano"].astype(int)
    df["valor"] = df["valor"].astype(float)
    return df


def details_to_frame(details: Iterable[DetailRecord]) -> pd.DataFrame:
    rows = [detail.to_row() for detail in details]
    df = pd.DataFrame(rows, columns=DETAIL_HEADER)
    for col in ["quantidade", "valorUnitario", "valorTotal"]:
        df[col] = df[col].astype(float)
    return df


def frame_to_records(df: pd.DataFrame) -> List[BudgetRecord]:
    """Inverse of records_to_frame (equipment category is not stored in the CSV)."""
    return [
        BudgetRecord(
            year=int(row.ano),
            month=row.mes,
            class_code=str(row.classe_codigo),
            class_group=row.classe_orcamentaria,
            class_subgroup=row.subclasse,
            equipment_tag=row.equipamento,
            equipment_category=None,
            cost_center=row.centro_custo,
            amount=float(row.valor),
        )
        for row in df.itertuples(index=False)
    ]


def _save_csv(df: pd.DataFrame, filepath: Path) -> None:
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    # Minimal quoting: fields holding ',' or '"' are quoted, quotes doubled
    df.to_csv(filepath, index=False, encoding="utf-8")


def write_budget_frame(df: pd.DataFrame, filepath: Path) -> int:
    """Validate and write an already-built budget DataFrame. Returns row count."""
    BudgetRecordsSchema.validate(df)
    _save_csv(df[BUDGET_HEADER], filepath)
    return len(df)


def write_budget_csv(records: Iterable[BudgetRecord], filepath: Path) -> int:
    return write_budget_frame(records_to_frame(records), filepath)


def write_detail_frame(df: pd.DataFrame, filepath: Path) -> int:
    DetailRecordsSchema.validate(df)
    _save_csv(df[DETAIL_HEADER], filepath)
    return len(df)


def write_detail_csv(details: Iterable[DetailRecord], filepath: Path) -> int:
    return write_detail_frame(details_to_frame(details), filepath)


BUDGET_TEXT_COLUMNS = ["mes", "classe_codigo", "classe_orcamentaria", "subclasse", "equipamento", "centro_custo"]


def read_budget_csv(filepath: Path) -> pd.DataFrame:
    """Read a budget CSV keeping codes as text; cells like "NA" or "#N/A" stay strings."""
    return pd.read_csv(filepath, dtype={col: str for col in BUDGET_TEXT_COLUMNS}, keep_default_na=False)


def read_detail_csv(filepath: Path) -> pd.DataFrame:
    return pd.read_csv(filepath, dtype={"data": str, "equipamento": str, "produto": str, "fornecedor": str},
                       keep_default_na=False)


def write_json(document: dict, filepath: Path) -> None:
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")


def mirror_file(source: Path, data_dir: Path, public_dir: Path) -> Path:
    """Copy a file under data_dir to the same relative place under public_dir."""
    target = Path(public_dir) / Path(source).relative_to(data_dir)
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    return target
