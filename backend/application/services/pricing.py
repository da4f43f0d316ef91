"""
Pricing Service.

Loads catalogue rows, turns them into domain snapshots and applies the
price roll-up from domain.bom.pricing.
"""

import logging
from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Prefetch

from domain.bom.entities import AssemblySnapshot, MaterialLine, TemplateLine
from domain.bom.pricing import (
    assembly_unit_cost,
    build_bill_of_quantities,
    template_total,
)
from domain.shared.exceptions import EntityNotFoundException
from domain.shared.value_objects import Money
from infrastructure.persistence.models import (
    Assembly,
    AssemblyMaterial,
    Project,
    Template,
    TemplateAssembly,
)

logger = logging.getLogger(__name__)


# =============================================================================
# QUERYSETS
# =============================================================================

def assembly_material_prefetch(prefix: str = '') -> Prefetch:
    return Prefetch(
        f'{prefix}materials',
        queryset=AssemblyMaterial.objects.select_related('material').order_by('material__name'),
    )


def assemblies_with_materials():
    return Assembly.objects.select_related('category').prefetch_related(assembly_material_prefetch())


def templates_with_assemblies():
    return Template.objects.prefetch_related(
        Prefetch(
            'assemblies',
            queryset=TemplateAssembly.objects.select_related('assembly').prefetch_related(
                assembly_material_prefetch('assembly__')
            ).order_by('assembly__name'),
        )
    )


# =============================================================================
# SNAPSHOTS
# =============================================================================

def material_line(line: AssemblyMaterial) -> MaterialLine:
    material = line.material
    return MaterialLine(
        material_id=str(material.id),
        name=material.name,
        unit=material.unit,
        price=material.price,
        quantity=line.quantity,
        part_number=material.part_number or None,
    )


def assembly_snapshot(assembly: Assembly) -> AssemblySnapshot:
    return AssemblySnapshot(
        assembly_id=str(assembly.id),
        name=assembly.name,
        materials=tuple(material_line(line) for line in assembly.materials.all()),
    )


def template_lines(template: Template):
    return [
        TemplateLine(assembly=assembly_snapshot(line.assembly), quantity=line.quantity)
        for line in template.assemblies.all()
    ]


# =============================================================================
# PRICES
# =============================================================================

def assembly_cost(assembly: Assembly) -> Decimal:
    return Money(assembly_unit_cost(assembly_snapshot(assembly).materials)).quantize()


def template_price(template: Template) -> Decimal:
    """Roll-up of a template: material.price * am.quantity * ta.quantity."""
    return Money(template_total(template_lines(template))).quantize()


def template_price_by_id(template_id) -> Decimal:
    try:
        template = templates_with_assemblies().get(pk=template_id)
    except (Template.DoesNotExist, ValueError, DjangoValidationError):
        raise EntityNotFoundException('Template', template_id, message='Template not found')
    return template_price(template)


def bill_of_quantities(template: Template) -> dict:
    boq = build_bill_of_quantities(template_lines(template))
    return {
        'template_id': str(template.id),
        'template_name': template.name,
        'assemblies': [
            {
                **line,
                'unit_cost': Money(line['unit_cost']).quantize(),
                'total': Money(line['total']).quantize(),
            }
            for line in boq.assemblies
        ],
        'materials': [
            {
                'material_id': line.material_id,
                'name': line.name,
                'part_number': line.part_number,
                'unit': line.unit,
                'unit_price': line.unit_price,
                'quantity': line.quantity,
                'total': Money(line.total).quantize(),
            }
            for line in boq.materials
        ],
        'total_price': Money(boq.total_price).quantize(),
    }


def recalculate_project_total(project: Project, save: bool = True) -> Decimal:
    """Recompute total_price from the project's template."""
    old_total = project.total_price
    if project.from_template_id:
        new_total = template_price_by_id(project.from_template_id)
    else:
        new_total = Decimal('0.00')

    project.total_price = new_total
    if save:
        project.save(update_fields=['total_price', 'updated_at'])

    logger.info(f"Recalculated project {project.name}: {old_total} -> {new_total}")
    return new_total
