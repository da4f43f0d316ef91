"""
BOM Domain - Price roll-up.

Price of a template = sum over its assembly lines of
    material.price * assembly_material.quantity * template_assembly.quantity
"""

from __future__ import annotations
from decimal import Decimal
from typing import Dict, Iterable

from .entities import (
    AssemblySnapshot,
    BillOfQuantities,
    BillOfQuantitiesLine,
    MaterialLine,
    TemplateLine,
)


ZERO = Decimal('0')


def assembly_unit_cost(materials: Iterable[MaterialLine]) -> Decimal:
    """Cost of building one unit of an assembly."""
    return sum((line.cost for line in materials), ZERO)


def assembly_cost(assembly: AssemblySnapshot, quantity: Decimal = Decimal('1')) -> Decimal:
    return assembly_unit_cost(assembly.materials) * quantity


def template_total(lines: Iterable[TemplateLine]) -> Decimal:
    """Total price of a template."""
    return sum(
        (assembly_cost(line.assembly, line.quantity) for line in lines),
        ZERO,
    )


def build_bill_of_quantities(lines: Iterable[TemplateLine]) -> BillOfQuantities:
    """
    Expand template lines into a bill of quantities.

    Materials used by several assemblies are merged into one line whose
    quantity is the sum of am.quantity * ta.quantity. Lines keep the order
    in which a material is first met.
    """
    boq = BillOfQuantities()
    by_material: Dict[str, BillOfQuantitiesLine] = {}

    for line in lines:
        unit_cost = assembly_unit_cost(line.assembly.materials)
        boq.assemblies.append({
            'assembly_id': line.assembly.assembly_id,
            'name': line.assembly.name,
            'quantity': line.quantity,
            'unit_cost': unit_cost,
            'total': unit_cost * line.quantity,
        })

        for material in line.assembly.materials:
            entry = by_material.get(material.material_id)
            if entry is None:
                entry = BillOfQuantitiesLine(
                    material_id=material.material_id,
                    name=material.name,
                    unit=material.unit,
                    unit_price=material.price,
                    part_number=material.part_number,
                )
                by_material[material.material_id] = entry
                boq.materials.append(entry)
            entry.quantity += material.quantity * line.quantity

    boq.total_price = sum((entry.total for entry in boq.materials), ZERO)
    return boq
