"""
BOM Domain - Assembly group selection rules.

A selection maps category id -> group id -> list of assembly ids.
Each group is checked against its GroupType and every selected item
is priced at unit cost * item quantity.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from domain.shared.value_objects import GroupType

from .entities import AssemblyGroupSnapshot
from .pricing import assembly_cost


Selections = Mapping[str, Mapping[str, Sequence[str]]]


@dataclass(frozen=True)
class SelectionError:
    type: str
    group_id: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'type': self.type,
            'group_id': self.group_id,
            'message': self.message,
            'details': self.details,
        }


@dataclass
class SelectionResult:
    errors: List[SelectionError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    total_cost: Decimal = Decimal('0')
    breakdown: List[dict] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            'is_valid': self.is_valid,
            'errors': [e.to_dict() for e in self.errors],
            'warnings': list(self.warnings),
            'total_cost': self.total_cost,
            'breakdown': self.breakdown,
        }


def selected_for(group: AssemblyGroupSnapshot, selections: Selections) -> List[str]:
    """Assembly ids picked for a group, read under the group's own category."""
    category_selections = selections.get(group.category_id) or {}
    return [str(a) for a in (category_selections.get(group.group_id) or [])]


def check_group_rules(group: AssemblyGroupSnapshot, selected: List[str]) -> List[SelectionError]:
    """Return rule violations of one group for the given assembly ids."""
    errors: List[SelectionError] = []

    if group.group_type == GroupType.REQUIRED:
        if len(selected) != len(group.items):
            errors.append(SelectionError(
                type='required',
                group_id=group.group_id,
                message=f'Group "{group.name}" requires all {len(group.items)} items to be selected',
                details={'required': len(group.items), 'selected': len(selected)},
            ))

    elif group.group_type == GroupType.CHOOSE_ONE:
        if len(selected) != 1:
            errors.append(SelectionError(
                type='choose_one',
                group_id=group.group_id,
                message=f'Group "{group.name}" requires exactly one item to be selected',
                details={'selected': len(selected), 'available': len(group.items)},
            ))

    elif group.group_type == GroupType.CONFLICT:
        chosen = [item for item in group.items if item.assembly.assembly_id in selected]
        for item in chosen:
            conflicts = [
                other for other in chosen
                if other.assembly.assembly_id in item.conflicts_with
            ]
            if conflicts:
                errors.append(SelectionError(
                    type='conflict',
                    group_id=group.group_id,
                    message=f'Conflicting items selected in group "{group.name}"',
                    details={
                        'item': item.assembly.name,
                        'conflicts': [c.assembly.name for c in conflicts],
                    },
                ))

    return errors


def validate_group_selection(
    groups: Iterable[AssemblyGroupSnapshot],
    selections: Selections,
    missing_group_ids: Optional[Iterable[str]] = None,
) -> SelectionResult:
    """
    Validate a selection against the given groups and price it.

    `groups` decides which groups are checked: pass only the referenced
    groups for an ad-hoc check, or every group of a template to enforce
    groups the user left empty. Ids in `missing_group_ids` were asked for
    but not found and are reported as warnings.
    """
    result = SelectionResult()

    for group_id in missing_group_ids or ():
        result.warnings.append(f'Group {group_id} not found')

    categories: Dict[str, dict] = {}
    for group in groups:
        selected = selected_for(group, selections)
        result.errors.extend(check_group_rules(group, selected))

        group_breakdown = {
            'group_id': group.group_id,
            'group_name': group.name,
            'cost': Decimal('0'),
            'assemblies': [],
        }
        for assembly_id in selected:
            item = group.find_item(assembly_id)
            if item is None:
                continue
            cost = assembly_cost(item.assembly, item.quantity)
            group_breakdown['cost'] += cost
            group_breakdown['assemblies'].append({
                'assembly_id': assembly_id,
                'name': item.assembly.name,
                'quantity': item.quantity,
                'cost': cost,
            })

        category = categories.get(group.category_id)
        if category is None:
            category = {
                'category_id': group.category_id,
                'category_name': group.category_name,
                'groups': [],
            }
            categories[group.category_id] = category
            result.breakdown.append(category)
        category['groups'].append(group_breakdown)
        result.total_cost += group_breakdown['cost']

    return result
