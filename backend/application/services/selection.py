"""
Selection Service.

Loads assembly groups for a selection and runs the group rules.
"""

import uuid

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Prefetch

from domain.bom.entities import AssemblyGroupSnapshot, GroupItemSnapshot
from domain.bom.selection import SelectionResult, validate_group_selection
from domain.shared.exceptions import EntityNotFoundException
from domain.shared.value_objects import GroupType
from infrastructure.persistence.models import (
    AssemblyGroup,
    AssemblyGroupItem,
    Template,
    TemplateAssemblyGroup,
    TemplateAssemblyGroupItem,
)

from .pricing import assembly_material_prefetch, assembly_snapshot


def _items_prefetch(item_model):
    return Prefetch(
        'items',
        queryset=item_model.objects.select_related('assembly').prefetch_related(
            assembly_material_prefetch('assembly__')
        ).order_by('sort_order'),
    )


def assembly_groups_with_items():
    return AssemblyGroup.objects.select_related('category').prefetch_related(
        _items_prefetch(AssemblyGroupItem)
    )


def template_groups_with_items():
    return TemplateAssemblyGroup.objects.select_related('category', 'template').prefetch_related(
        _items_prefetch(TemplateAssemblyGroupItem)
    )


def group_snapshot(group) -> AssemblyGroupSnapshot:
    """Works for both catalogue groups and template groups."""
    return AssemblyGroupSnapshot(
        group_id=str(group.id),
        name=group.name,
        group_type=GroupType(group.group_type),
        category_id=str(group.category_id),
        category_name=group.category.name,
        items=tuple(
            GroupItemSnapshot(
                assembly=assembly_snapshot(item.assembly),
                quantity=item.quantity,
                conflicts_with=tuple(str(a) for a in (item.conflicts_with or [])),
                is_default=item.is_default,
            )
            for item in group.items.all()
        ),
    )


def _referenced_group_ids(selections):
    ids = []
    for groups in (selections or {}).values():
        if isinstance(groups, dict):
            ids.extend(str(group_id) for group_id in groups.keys())
    return ids


def is_uuid(value) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def validate_selection(selections) -> SelectionResult:
    """Check only the catalogue groups named in the selection."""
    requested = _referenced_group_ids(selections)
    groups = list(
        assembly_groups_with_items().filter(id__in=[g for g in requested if is_uuid(g)])
    )
    found = {str(group.id) for group in groups}
    missing = [group_id for group_id in requested if group_id not in found]

    return validate_group_selection(
        [group_snapshot(group) for group in groups],
        selections or {},
        missing_group_ids=missing,
    )


def validate_template_selection(template_id, selections) -> SelectionResult:
    """Check every group of the template, named in the selection or not."""
    try:
        template = Template.objects.get(pk=template_id)
    except (Template.DoesNotExist, ValueError, DjangoValidationError):
        raise EntityNotFoundException('Template', template_id, message='Template not found')

    groups = template_groups_with_items().filter(template=template)
    return validate_group_selection(
        [group_snapshot(group) for group in groups],
        selections or {},
    )
