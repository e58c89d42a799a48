"""
Dashboard aggregations over the generated files.

Two views are computed, both as plain pandas group-bys:

    Planejamento: budget of the previous year vs budget of the current year
    Execução:     current-year budget vs current-year actuals

Loading never fails hard: a missing file yields an empty frame and a
warning, so a view simply shows no data for that slice.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from config.layouts import BUDGET_HEADER
from config.mappings import MONTHS
from config.paths import (
    CLASS_CATALOG_NAME,
    CURRENT_BUDGET_YEAR,
    DASHBOARD_CONFIG_NAME,
    EQUIPMENT_CATALOG_NAME,
    PREVIOUS_BUDGET_YEAR,
    actual_file,
    budget_file,
)
from orcamento.settings import DashboardSettings, load_dashboard_settings
from orcamento.writers import read_budget_csv

ALL_CLASSES = "Todas"
ALL_EQUIPMENT = "Todos"


def empty_budget_frame() -> pd.DataFrame:
    df = pd.DataFrame(columns=BUDGET_HEADER)
    df["valor"] = df["valor"].astype(float)
    return df


def load_budget_frame(path: Path) -> pd.DataFrame:
    """Budget CSV as a DataFrame; empty (with a warning) when unavailable."""
    if not Path(path).exists():
        print(f"  Warning: {path} not found, using empty data")
        return empty_budget_frame()
    try:
        df = read_budget_csv(path)
    except (OSError, ValueError, pd.errors.ParserError) as exc:
        print(f"  Warning: could not load {path}: {exc}")
        return empty_budget_frame()
    df["valor"] = pd.to_numeric(df["valor"], errors="coerce").fillna(0)
    return df


def load_json_document(path: Path) -> Optional[dict]:
    """Parsed JSON object, or None (with a warning) when missing, invalid or not an object."""
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"  Warning: could not load {path}: {exc}")
        return None
    if not isinstance(document, dict):
        print(f"  Warning: could not load {path}: expected a JSON object")
        return None
    return document


@dataclass
class DashboardData:
    orcado_anterior: pd.DataFrame
    orcado_atual: pd.DataFrame
    realizado_atual: pd.DataFrame
    equipamentos: list = field(default_factory=list)
    classes: list = field(default_factory=list)
    settings: DashboardSettings = field(default_factory=DashboardSettings)


def load_dashboard_data(data_dir: Path, previous_year: int = PREVIOUS_BUDGET_YEAR,
                        current_year: int = CURRENT_BUDGET_YEAR) -> DashboardData:
    """Load every file the dashboard fetches, from fixed relative paths."""
    data_dir = Path(data_dir)
    metadata_dir = data_dir / "metadata"

    equipment_doc = load_json_document(metadata_dir / EQUIPMENT_CATALOG_NAME) or {}
    class_doc = load_json_document(metadata_dir / CLASS_CATALOG_NAME) or {}

    return DashboardData(
        orcado_anterior=load_budget_frame(budget_file(previous_year, data_dir)),
        orcado_atual=load_budget_frame(budget_file(current_year, data_dir)),
        realizado_atual=load_budget_frame(actual_file(current_year, data_dir)),
        equipamentos=equipment_doc.get("equipamentos", []),
        classes=class_doc.get("classes_orcamentarias", []),
        settings=load_dashboard_settings(metadata_dir / DASHBOARD_CONFIG_NAME),
    )


def filter_records(df: pd.DataFrame, classe: str = ALL_CLASSES, equipamento: str = ALL_EQUIPMENT) -> pd.DataFrame:
    mask = pd.Series(True, index=df.index)
    if classe != ALL_CLASSES:
        mask &= df["classe_orcamentaria"] == classe
    if equipamento != ALL_EQUIPMENT:
        mask &= df["equipamento"] == equipamento
    return df[mask]


def percentage(numerator, denominator):
    """numerator / denominator * 100, 0 where the denominator is not positive."""
    num = np.asarray(numerator, dtype=float)
    den = np.asarray(denominator, dtype=float)
    out = np.zeros_like(num)
    np.divide(num, den, out=out, where=den > 0)
    result = out * 100
    return float(result) if result.ndim == 0 else result


def _grouped_pair(left: pd.DataFrame, right: pd.DataFrame, by: str, left_name: str, right_name: str) -> pd.DataFrame:
    left_sum = left.groupby(by)["valor"].sum().rename(left_name)
    right_sum = right.groupby(by)["valor"].sum().rename(right_name)
    combined = pd.concat([left_sum, right_sum], axis=1).fillna(0.0)
    combined.index.name = by
    return combined.sort_index().reset_index()


def planning_totals(orcado_anterior: pd.DataFrame, orcado_atual: pd.DataFrame) -> dict:
    total_anterior = float(orcado_anterior["valor"].sum())
    total_atual = float(orcado_atual["valor"].sum())
    variacao = total_atual - total_anterior
    return {
        "total_anterior": total_anterior,
        "total_atual": total_atual,
        "variacao": variacao,
        "variacao_percentual": percentage(variacao, total_anterior),
    }


def compare_budgets(orcado_anterior: pd.DataFrame, orcado_atual: pd.DataFrame,
                    by: str = "classe_orcamentaria") -> pd.DataFrame:
    """Budget of two years side by side, grouped by class or equipment."""
    df = _grouped_pair(orcado_anterior, orcado_atual, by, "anterior", "atual")
    df["variacao"] = df["atual"] - df["anterior"]
    df["variacao_percentual"] = percentage(df["variacao"], df["anterior"])
    return df


def execution_totals(orcado: pd.DataFrame, realizado: pd.DataFrame) -> dict:
    total_orcado = float(orcado["valor"].sum())
    total_realizado = float(realizado["valor"].sum())
    return {
        "total_orcado": total_orcado,
        "total_realizado": total_realizado,
        "variacao": total_realizado - total_orcado,
        "percentual_executado": percentage(total_realizado, total_orcado),
    }


def _add_execution_columns(df: pd.DataFrame) -> pd.DataFrame:
    df["variacao"] = df["realizado"] - df["orcado"]
    df["percentual_executado"] = percentage(df["realizado"], df["orcado"])
    return df


def execution_by_month(orcado: pd.DataFrame, realizado: pd.DataFrame) -> pd.DataFrame:
    """Budget vs actuals per month, in calendar order; empty months dropped."""
    orcado_mes = orcado.groupby("mes")["valor"].sum().reindex(MONTHS, fill_value=0.0)
    realizado_mes = realizado.groupby("mes")["valor"].sum().reindex(MONTHS, fill_value=0.0)
    df = pd.DataFrame({"mes": MONTHS, "orcado": orcado_mes.values, "realizado": realizado_mes.values})
    df = df[(df["orcado"] > 0) | (df["realizado"] > 0)].reset_index(drop=True)
    return _add_execution_columns(df)


def execution_by(orcado: pd.DataFrame, realizado: pd.DataFrame, by: str = "classe_orcamentaria") -> pd.DataFrame:
    """Budget vs actuals grouped by class or equipment."""
    return _add_execution_columns(_grouped_pair(orcado, realizado, by, "orcado", "realizado"))


def variance_color(variacao_percentual: float, settings: Optional[DashboardSettings] = None) -> str:
    """Colour for a variance percentage according to the alert thresholds."""
    settings = settings or DashboardSettings()
    magnitude = abs(variacao_percentual)
    if magnitude >= settings.critical_pct:
        return settings.colors.critico
    if magnitude >= settings.alert_pct:
        return settings.colors.alerta
    if magnitude >= settings.attention_pct:
        return settings.colors.atencao
    return settings.colors.normal
