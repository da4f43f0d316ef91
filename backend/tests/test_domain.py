"""
Tests for the framework-free domain rules
"""
from datetime import date, datetime
from decimal import Decimal

from django.test import SimpleTestCase

from domain.bom.entities import (
    AssemblyGroupSnapshot,
    AssemblySnapshot,
    GroupItemSnapshot,
    MaterialLine,
    TemplateLine,
)
from domain.bom.pricing import (
    assembly_cost,
    assembly_unit_cost,
    build_bill_of_quantities,
    template_total,
)
from domain.bom.selection import validate_group_selection
from domain.project.scheduling import (
    count_working_days,
    planned_end,
    timeline_duration,
)
from domain.shared.value_objects import GroupType, Money, Progress, ProjectStatus


def material(material_id, price, quantity, name=None):
    return MaterialLine(
        material_id=material_id,
        name=name or material_id,
        unit='pcs',
        price=Decimal(price),
        quantity=Decimal(quantity),
    )


def snapshot(assembly_id, *materials):
    return AssemblySnapshot(assembly_id=assembly_id, name=assembly_id, materials=tuple(materials))


def group(group_type, *items, group_id='g1', category_id='c1'):
    return AssemblyGroupSnapshot(
        group_id=group_id,
        name=group_id,
        group_type=group_type,
        category_id=category_id,
        category_name=category_id,
        items=tuple(items),
    )


class PricingTests(SimpleTestCase):
    """Test the price roll-up"""

    def setUp(self):
        self.panel = snapshot('panel', material('box', '1000', '1'), material('mcb', '50', '4'))
        self.cable = snapshot('cable', material('nym', '10', '20'), material('mcb', '50', '1'))

    def test_assembly_unit_cost(self):
        """Test unit cost is the sum of price times quantity"""
        self.assertEqual(assembly_unit_cost(self.panel.materials), Decimal('1200'))

    def test_assembly_cost_scales_with_quantity(self):
        """Test assembly cost multiplies the unit cost"""
        self.assertEqual(assembly_cost(self.panel, Decimal('3')), Decimal('3600'))

    def test_empty_assembly_costs_nothing(self):
        """Test an assembly without materials is free"""
        self.assertEqual(assembly_cost(snapshot('empty')), Decimal('0'))

    def test_template_total(self):
        """Test template total is material price x am.qty x ta.qty"""
        lines = [
            TemplateLine(assembly=self.panel, quantity=Decimal('2')),
            TemplateLine(assembly=self.cable, quantity=Decimal('3')),
        ]
        # 2 * 1200 + 3 * 250
        self.assertEqual(template_total(lines), Decimal('3150'))

    def test_template_total_empty(self):
        """Test an empty template totals zero"""
        self.assertEqual(template_total([]), Decimal('0'))

    def test_bill_of_quantities_merges_materials(self):
        """Test shared materials are merged into one line"""
        boq = build_bill_of_quantities([
            TemplateLine(assembly=self.panel, quantity=Decimal('2')),
            TemplateLine(assembly=self.cable, quantity=Decimal('3')),
        ])

        self.assertEqual([line.material_id for line in boq.materials], ['box', 'mcb', 'nym'])
        mcb = boq.materials[1]
        self.assertEqual(mcb.quantity, Decimal('11'))
        self.assertEqual(mcb.total, Decimal('550'))
        self.assertEqual(boq.total_price, Decimal('3150'))
        self.assertEqual(len(boq.assemblies), 2)
        self.assertEqual(boq.assemblies[0]['unit_cost'], Decimal('1200'))
        self.assertEqual(boq.assemblies[0]['total'], Decimal('2400'))


class SelectionTests(SimpleTestCase):
    """Test assembly group selection rules"""

    def setUp(self):
        self.a = GroupItemSnapshot(assembly=snapshot('a', material('m1', '10', '1')))
        self.b = GroupItemSnapshot(
            assembly=snapshot('b', material('m2', '20', '1')),
            quantity=Decimal('2'),
        )

    def test_required_group_needs_every_item(self):
        """Test a REQUIRED group fails when an item is missing"""
        result = validate_group_selection(
            [group(GroupType.REQUIRED, self.a, self.b)],
            {'c1': {'g1': ['a']}},
        )

        self.assertFalse(result.is_valid)
        self.assertEqual(result.errors[0].type, 'required')
        self.assertEqual(result.errors[0].details, {'required': 2, 'selected': 1})

    def test_required_group_complete(self):
        """Test a REQUIRED group passes with every item and prices item quantity"""
        result = validate_group_selection(
            [group(GroupType.REQUIRED, self.a, self.b)],
            {'c1': {'g1': ['a', 'b']}},
        )

        self.assertTrue(result.is_valid)
        self.assertEqual(result.total_cost, Decimal('50'))
        assemblies = result.breakdown[0]['groups'][0]['assemblies']
        self.assertEqual(assemblies[1]['cost'], Decimal('40'))

    def test_choose_one_rejects_two(self):
        """Test a CHOOSE_ONE group fails with two picks"""
        result = validate_group_selection(
            [group(GroupType.CHOOSE_ONE, self.a, self.b)],
            {'c1': {'g1': ['a', 'b']}},
        )

        self.assertEqual([e.type for e in result.errors], ['choose_one'])

    def test_choose_one_rejects_none(self):
        """Test a CHOOSE_ONE group fails when nothing is picked"""
        result = validate_group_selection([group(GroupType.CHOOSE_ONE, self.a, self.b)], {})

        self.assertFalse(result.is_valid)

    def test_optional_accepts_empty(self):
        """Test an OPTIONAL group accepts any subset"""
        result = validate_group_selection([group(GroupType.OPTIONAL, self.a, self.b)], {})

        self.assertTrue(result.is_valid)
        self.assertEqual(result.total_cost, Decimal('0'))

    def test_conflict_group(self):
        """Test conflicting items cannot be picked together"""
        a = GroupItemSnapshot(assembly=self.a.assembly, conflicts_with=('b',))
        conflict = group(GroupType.CONFLICT, a, self.b)

        invalid = validate_group_selection([conflict], {'c1': {'g1': ['a', 'b']}})
        valid = validate_group_selection([conflict], {'c1': {'g1': ['b']}})

        self.assertEqual(invalid.errors[0].type, 'conflict')
        self.assertEqual(invalid.errors[0].details['conflicts'], ['b'])
        self.assertTrue(valid.is_valid)

    def test_selection_read_under_own_category(self):
        """Test picks filed under another category are ignored"""
        result = validate_group_selection(
            [group(GroupType.CHOOSE_ONE, self.a, self.b)],
            {'other': {'g1': ['a']}},
        )

        self.assertFalse(result.is_valid)

    def test_unknown_assembly_is_not_priced(self):
        """Test ids not offered by the group add no cost"""
        result = validate_group_selection(
            [group(GroupType.OPTIONAL, self.a)],
            {'c1': {'g1': ['zzz']}},
        )

        self.assertEqual(result.total_cost, Decimal('0'))
        self.assertEqual(result.breakdown[0]['groups'][0]['assemblies'], [])

    def test_missing_groups_become_warnings(self):
        """Test missing group ids are reported as warnings"""
        result = validate_group_selection([], {}, missing_group_ids=['g9'])

        self.assertTrue(result.is_valid)
        self.assertEqual(result.to_dict()['warnings'], ['Group g9 not found'])


class SchedulingTests(SimpleTestCase):
    """Test timeline scheduling helpers"""

    def test_duration_rounds_up(self):
        """Test partial days count as a whole day"""
        start = datetime(2025, 1, 1, 8, 0)
        end = datetime(2025, 1, 3, 9, 0)
        self.assertEqual(timeline_duration(start, end), 3)

    def test_duration_without_end(self):
        """Test open timelines have no duration"""
        self.assertIsNone(timeline_duration(datetime(2025, 1, 1), None))

    def test_planned_end(self):
        """Test planned end adds the duration in days"""
        self.assertEqual(planned_end(date(2025, 1, 30), 3), date(2025, 2, 2))

    def test_count_working_days_default_week(self):
        """Test weekends are skipped by default"""
        # Monday 6 Jan to Sunday 12 Jan 2025
        self.assertEqual(count_working_days(date(2025, 1, 6), date(2025, 1, 12)), 5)

    def test_count_working_days_with_holidays(self):
        """Test holidays are skipped"""
        days = count_working_days(date(2025, 1, 6), date(2025, 1, 12), holidays=['2025-01-07'])
        self.assertEqual(days, 4)

    def test_count_working_days_custom_calendar(self):
        """Test a custom working week"""
        calendar = {'saturday': True}
        self.assertEqual(count_working_days(date(2025, 1, 6), date(2025, 1, 12), calendar), 1)


class ValueObjectTests(SimpleTestCase):
    """Test shared value objects"""

    def test_money_rejects_negative(self):
        """Test negative money raises"""
        with self.assertRaises(ValueError):
            Money(Decimal('-1'))

    def test_money_quantize(self):
        """Test money rounds half up to cents"""
        self.assertEqual(Money(Decimal('10.005')).quantize(), Decimal('10.01'))
        self.assertEqual(str(Money(Decimal('5'))), '5.00 IDR')

    def test_money_rejects_bad_currency(self):
        """Test currencies must be three-letter codes"""
        with self.assertRaises(ValueError):
            Money(Decimal('1'), 'RUPIAH')

    def test_progress_average(self):
        """Test progress average rounds to two places"""
        self.assertEqual(Progress.average([10, 20, 40]).percent, Decimal('23.33'))
        self.assertEqual(Progress.average([]).percent, Decimal('0'))
        self.assertTrue(Progress(Decimal('100')).is_complete)

    def test_progress_bounds(self):
        """Test progress outside 0..100 raises"""
        with self.assertRaises(ValueError):
            Progress(Decimal('101'))

    def test_terminal_status(self):
        """Test completed and cancelled are terminal"""
        self.assertTrue(ProjectStatus.COMPLETED.is_terminal)
        self.assertFalse(ProjectStatus.IN_PROGRESS.is_terminal)
