"""
Tests for templates, template groups and bill of quantities
"""
from decimal import Decimal
from io import BytesIO

from django.test import TestCase
from openpyxl import load_workbook
from rest_framework import status

from application.services.pricing import template_price
from infrastructure.persistence.models import GroupTypeChoices, Template, UserRoleChoices
from tests.factories import AuthenticatedAPIClient, TestDataFactory


class TemplateAPITests(TestCase):
    """Test template CRUD and the price roll-up"""

    def setUp(self):
        self.editor = TestDataFactory.create_user(role=UserRoleChoices.PROJECT_MANAGER)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.editor)

        self.box = TestDataFactory.create_material(name='Box', price=Decimal('1000.00'))
        self.mcb = TestDataFactory.create_material(name='MCB', price=Decimal('50.00'))
        self.cable = TestDataFactory.create_material(name='Cable', price=Decimal('10.00'), unit='m')
        # 1000 + 4 * 50 = 1200 per panel
        self.panel = TestDataFactory.create_assembly(name='Panel', materials=[(self.box, 1), (self.mcb, 4)])
        # 20 * 10 + 50 = 250 per run
        self.run = TestDataFactory.create_assembly(name='Run', materials=[(self.cable, 20), (self.mcb, 1)])

    def test_create_template_total_price(self):
        """Test total price is material.price x am.qty x ta.qty"""
        response = self.client.post('/api/v1/templates/', {
            'name': 'Office Fit-Out',
            'assemblies': [
                {'assembly_id': str(self.panel.id), 'quantity': '2'},
                {'assembly_id': str(self.run.id), 'quantity': '3'},
            ],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['total_price'], Decimal('3150.00'))
        self.assertEqual(response.data['project_count'], 0)
        names = [line['assembly']['name'] for line in response.data['assemblies']]
        self.assertEqual(names, ['Panel', 'Run'])
        self.assertEqual(response.data['assemblies'][0]['assembly']['cost'], Decimal('1200.00'))

    def test_empty_template_costs_nothing(self):
        """Test a template without assemblies totals zero"""
        response = self.client.post('/api/v1/templates/', {'name': 'Empty'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['total_price'], Decimal('0.00'))

    def test_unknown_assembly(self):
        """Test template lines must reference existing assemblies"""
        response = self.client.post('/api/v1/templates/', {
            'name': 'Broken',
            'assemblies': [{'assembly_id': '00000000-0000-0000-0000-000000000000'}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('assemblies', response.data)

    def test_duplicate_template_name(self):
        """Test template names are unique"""
        TestDataFactory.create_template(name='Standard')

        response = self.client.post('/api/v1/templates/', {'name': 'STANDARD'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_price_follows_material_prices(self):
        """Test template price reflects current material prices"""
        template = TestDataFactory.create_template(assemblies=[(self.panel, 1)])
        self.mcb.price = Decimal('100.00')
        self.mcb.save()

        response = self.client.get(f'/api/v1/templates/{template.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_price'], Decimal('1400.00'))

    def test_update_replaces_assembly_lines(self):
        """Test sending assemblies on update replaces all lines"""
        template = TestDataFactory.create_template(assemblies=[(self.panel, 1), (self.run, 1)])

        response = self.client.patch(f'/api/v1/templates/{template.id}/', {
            'assemblies': [{'assembly_id': str(self.run.id), 'quantity': '4'}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_price'], Decimal('1000.00'))
        self.assertEqual(template.assemblies.count(), 1)

    def test_delete_template_used_by_project(self):
        """Test templates used by projects cannot be deleted"""
        template = TestDataFactory.create_template()
        TestDataFactory.create_project(template=template)

        response = self.client.delete(f'/api/v1/templates/{template.id}/')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(Template.objects.filter(pk=template.pk).exists())

    def test_delete_template(self):
        """Test deleting an unused template"""
        template = TestDataFactory.create_template(assemblies=[(self.panel, 1)])

        response = self.client.delete(f'/api/v1/templates/{template.id}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_template_price_service(self):
        """Test the pricing service rounds to cents"""
        template = TestDataFactory.create_template(assemblies=[(self.run, Decimal('0.333'))])

        self.assertEqual(template_price(template), Decimal('83.25'))


class BillOfQuantitiesTests(TestCase):
    """Test bill of quantities and its export"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

        mcb = TestDataFactory.create_material(name='MCB', price=Decimal('50.00'), part_number='MCB-16')
        box = TestDataFactory.create_material(name='Box', price=Decimal('1000.00'))
        panel = TestDataFactory.create_assembly(name='Panel', materials=[(box, 1), (mcb, 4)])
        spare = TestDataFactory.create_assembly(name='Spares', materials=[(mcb, 2)])
        self.template = TestDataFactory.create_template(
            name='Panel Set', assemblies=[(panel, 2), (spare, 1)]
        )

    def test_boq(self):
        """Test materials are aggregated across assemblies"""
        response = self.client.get(f'/api/v1/templates/{self.template.id}/boq/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['template_name'], 'Panel Set')
        mcb = next(m for m in response.data['materials'] if m['name'] == 'MCB')
        self.assertEqual(mcb['quantity'], Decimal('10'))
        self.assertEqual(mcb['total'], Decimal('500.00'))
        self.assertEqual(mcb['part_number'], 'MCB-16')
        self.assertEqual(response.data['total_price'], Decimal('2500.00'))
        self.assertEqual(len(response.data['assemblies']), 2)

    def test_boq_export(self):
        """Test exporting the bill of quantities"""
        response = self.client.get(f'/api/v1/templates/{self.template.id}/boq/export/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('boq-panel-set-', response['Content-Disposition'])
        workbook = load_workbook(BytesIO(response.content))
        self.assertEqual(workbook.sheetnames, ['Assemblies', 'Materials'])
        materials = workbook['Materials']
        self.assertEqual(materials.cell(row=materials.max_row, column=1).value, 'TOTAL')
        self.assertEqual(materials.cell(row=materials.max_row, column=6).value, 2500.0)


class TemplateGroupTests(TestCase):
    """Test per-template groups and template selection checks"""

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

        self.category = TestDataFactory.create_category()
        self.a = TestDataFactory.create_assembly(category=self.category)
        self.b = TestDataFactory.create_assembly(category=self.category)
        self.template = TestDataFactory.create_template()

    def test_create_template_group(self):
        """Test creating a group attached to a template"""
        response = self.client.post('/api/v1/template-groups/', {
            'template': str(self.template.id),
            'name': 'Option',
            'group_type': GroupTypeChoices.CHOOSE_ONE,
            'category': str(self.category.id),
            'items': [{'assembly_id': str(self.a.id)}, {'assembly_id': str(self.b.id)}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data['items']), 2)
        self.assertEqual(self.template.assembly_groups.count(), 1)

    def test_unknown_template(self):
        """Test an unknown template answers 404"""
        response = self.client.post('/api/v1/template-groups/', {
            'template': '00000000-0000-0000-0000-000000000000',
            'name': 'Option',
            'category': str(self.category.id),
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Template not found')

    def test_list_by_template(self):
        """Test listing the groups of one template"""
        TestDataFactory.create_group(self.category, template=self.template)
        TestDataFactory.create_group(self.category, template=TestDataFactory.create_template())

        response = self.client.get('/api/v1/template-groups/', {'template_id': str(self.template.id)})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_template_selection_enforces_empty_groups(self):
        """Test groups left out of the selection are still checked"""
        TestDataFactory.create_group(
            self.category, GroupTypeChoices.CHOOSE_ONE, items=[self.a, self.b], template=self.template
        )

        response = self.client.post('/api/v1/templates/validate-selection/', {
            'template_id': str(self.template.id),
            'selections': {},
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['is_valid'])
        self.assertEqual(response.data['errors'][0]['type'], 'choose_one')

    def test_template_selection_valid(self):
        """Test a complete template selection"""
        group = TestDataFactory.create_group(
            self.category, GroupTypeChoices.CHOOSE_ONE, items=[self.a, self.b], template=self.template
        )

        response = self.client.post('/api/v1/templates/validate-selection/', {
            'template_id': str(self.template.id),
            'selections': {str(self.category.id): {str(group.id): [str(self.b.id)]}},
        }, format='json')

        self.assertTrue(response.data['is_valid'])

    def test_template_selection_unknown_template(self):
        """Test checking a selection against an unknown template"""
        response = self.client.post('/api/v1/templates/validate-selection/', {
            'template_id': 'nope',
            'selections': {},
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
