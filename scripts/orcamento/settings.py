"""
Dashboard settings (data/metadata/config.json).

The file is optional: when it is absent or unreadable the dashboard runs
with BRL and the 5 / 10 / 15 % variance thresholds.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class AlertColors:
    normal: str = "#10b981"
    atencao: str = "#eab308"
    alerta: str = "#f59e0b"
    critico: str = "#ef4444"


@dataclass
class DashboardSettings:
    currency: str = "BRL"
    # Absolute variance percentages
    attention_pct: float = 5.0
    alert_pct: float = 10.0
    critical_pct: float = 15.0
    colors: AlertColors = field(default_factory=AlertColors)

    def to_document(self) -> dict:
        """config.json layout read by the dashboard."""
        return {
            "aplicacao": {"moeda": self.currency},
            "alertas": {
                "variacao_atencao_percentual": self.attention_pct,
                "variacao_alerta_percentual": self.alert_pct,
                "variacao_critica_percentual": self.critical_pct,
                "cores": {
                    "normal": self.colors.normal,
                    "atencao": self.colors.atencao,
                    "alerta": self.colors.alerta,
                    "critico": self.colors.critico,
                },
            },
        }


def _section(document: dict, key: str) -> dict:
    value = document.get(key)
    return value if isinstance(value, dict) else {}


def settings_from_document(document: dict) -> DashboardSettings:
    """
    Build settings from a parsed config.json; missing keys keep defaults.

    Raises ValueError or TypeError for thresholds that are not numbers.
    """
    defaults = DashboardSettings()
    app = _section(document, "aplicacao")
    alerts = _section(document, "alertas")
    colors = _section(alerts, "cores")
    return DashboardSettings(
        currency=app.get("moeda", defaults.currency),
        attention_pct=float(alerts.get("variacao_atencao_percentual", defaults.attention_pct)),
        alert_pct=float(alerts.get("variacao_alerta_percentual", defaults.alert_pct)),
        critical_pct=float(alerts.get("variacao_critica_percentual", defaults.critical_pct)),
        colors=AlertColors(
            normal=colors.get("normal", defaults.colors.normal),
            atencao=colors.get("atencao", defaults.colors.atencao),
            alerta=colors.get("alerta", defaults.colors.alerta),
            critico=colors.get("critico", defaults.colors.critico),
        ),
    )


def load_dashboard_settings(path: Optional[Path]) -> DashboardSettings:
    """Read config.json, falling back to defaults when it can't be used."""
    if path is None or not Path(path).exists():
        return DashboardSettings()
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"  Warning: ignoring {path}: {exc}")
        return DashboardSettings()
    if not isinstance(document, dict):
        print(f"  Warning: ignoring {path}: expected a JSON object")
        return DashboardSettings()
    try:
        return settings_from_document(document)
    except (TypeError, ValueError) as exc:
        print(f"  Warning: ignoring {path}: {exc}")
        return DashboardSettings()


def default_config_document() -> dict:
    return DashboardSettings().to_document()
