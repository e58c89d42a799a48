"""Record types produced by the conversion scripts."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AccountingClass:
    group: str       # classe_orcamentaria
    subgroup: str    # subclasse


@dataclass(frozen=True)
class BudgetRecord:
    """One (accounting class, month) amount in long format."""
    year: int
    month: str
    class_code: str
    class_group: str
    class_subgroup: str
    equipment_tag: str
    equipment_category: Optional[str]
    cost_center: str
    amount: float

    def to_row(self) -> dict:
        """Row keyed by the output CSV header."""
        return {
            "ano": self.year,
            "mes": self.month,
            "classe_codigo": self.class_code,
            "classe_orcamentaria": self.class_group,
            "subclasse": self.class_subgroup,
            "equipamento": self.equipment_tag,
            "centro_custo": self.cost_center,
            "valor": self.amount,
        }


@dataclass(frozen=True)
class DetailRecord:
    """One itemized ledger line assigned to a known equipment."""
    date: str
    equipment_tag: str
    product: str
    quantity: float
    unit_value: float
    total_value: float
    supplier: str

    def to_row(self) -> dict:
        return {
            "data": self.date,
            "equipamento": self.equipment_tag,
            "produto": self.product,
            "quantidade": self.quantity,
            "valorUnitario": self.unit_value,
            "valorTotal": self.total_value,
            "fornecedor": self.supplier,
        }


@dataclass
class EquipmentEntry:
    code: str
    display_name: str
    category: Optional[str]
    description: str
    cost_center: str
    owner: str
    contact_email: str
    active: bool = True

    def to_json(self) -> dict:
        return {
            "codigo": self.code,
            "nome": self.display_name,
            "categoria": self.category,
            "descricao": self.description,
            "centro_custo": self.cost_center,
            "responsavel": self.owner,
            "email": self.contact_email,
            "ativo": self.active,
        }
