"""
BOM Domain - Entities.

Read-only snapshots of catalogue rows. The persistence layer builds these
from ORM instances so that pricing and selection rules stay free of Django.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple

from domain.shared.value_objects import GroupType


@dataclass(frozen=True)
class MaterialLine:
    """One material used by an assembly, with the quantity per assembly."""

    material_id: str
    name: str
    unit: str
    price: Decimal
    quantity: Decimal
    part_number: Optional[str] = None

    @property
    def cost(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class AssemblySnapshot:
    """An assembly and its material lines."""

    assembly_id: str
    name: str
    materials: Tuple[MaterialLine, ...] = ()


@dataclass(frozen=True)
class TemplateLine:
    """One assembly used by a template, with the quantity per template."""

    assembly: AssemblySnapshot
    quantity: Decimal


@dataclass(frozen=True)
class GroupItemSnapshot:
    """An assembly offered by a group."""

    assembly: AssemblySnapshot
    quantity: Decimal = Decimal('1')
    conflicts_with: Tuple[str, ...] = ()
    is_default: bool = False


@dataclass(frozen=True)
class AssemblyGroupSnapshot:
    """An assembly group with its rule and items."""

    group_id: str
    name: str
    group_type: GroupType
    category_id: str
    category_name: str
    items: Tuple[GroupItemSnapshot, ...] = ()

    def find_item(self, assembly_id: str) -> Optional[GroupItemSnapshot]:
        for item in self.items:
            if item.assembly.assembly_id == assembly_id:
                return item
        return None


@dataclass
class BillOfQuantitiesLine:
    """Aggregated requirement for one material across a template."""

    material_id: str
    name: str
    unit: str
    unit_price: Decimal
    part_number: Optional[str] = None
    quantity: Decimal = Decimal('0')

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class BillOfQuantities:
    """Per-assembly costs and aggregated material lines of a template."""

    assemblies: List[dict] = field(default_factory=list)
    materials: List[BillOfQuantitiesLine] = field(default_factory=list)
    total_price: Decimal = Decimal('0')
