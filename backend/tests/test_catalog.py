"""
Tests for materials, assembly categories and assemblies
"""
from decimal import Decimal
from io import BytesIO

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.test import TestCase
from openpyxl import load_workbook
from rest_framework import status

from infrastructure.export.excel import XLSX_CONTENT_TYPE
from infrastructure.persistence.models import Assembly, AssemblyMaterial, Material, UserRoleChoices
from tests.factories import AuthenticatedAPIClient, TestDataFactory


class MaterialAPITests(TestCase):
    """Test material endpoints"""

    def setUp(self):
        self.estimator = TestDataFactory.create_user(role=UserRoleChoices.ESTIMATOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.estimator)

    def test_create_material(self):
        """Test creating a material"""
        response = self.client.post('/api/v1/materials/', {
            'name': 'MCB 1P 16A',
            'part_number': 'MCB-16',
            'unit': 'pcs',
            'price': '85000.00',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['price'], Decimal('85000.00'))
        material = Material.objects.get(name='MCB 1P 16A')
        self.assertEqual(material.created_by, self.estimator)
        self.assertEqual(material.docs, [])

    def test_create_material_negative_price(self):
        """Test prices cannot be negative"""
        response = self.client.post('/api/v1/materials/', {
            'name': 'Bad', 'unit': 'pcs', 'price': '-1',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('price', response.data)

    def test_duplicate_material_name(self):
        """Test material names are unique regardless of case"""
        TestDataFactory.create_material(name='Cable Lug')

        response = self.client.post('/api/v1/materials/', {
            'name': 'cable lug', 'unit': 'pcs',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'Material with this name already exists')

    def test_worker_cannot_create_material(self):
        """Test non-editors only read the catalogue"""
        worker = TestDataFactory.create_user(role=UserRoleChoices.WORKER)
        self.client.authenticate_user(worker)

        response = self.client.get('/api/v1/materials/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.post('/api/v1/materials/', {'name': 'X', 'unit': 'pcs'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_search_materials(self):
        """Test searching materials by part number"""
        TestDataFactory.create_material(name='Conduit', part_number='PVC-20')
        TestDataFactory.create_material(name='Breaker', part_number='MCB-32')

        response = self.client.get('/api/v1/materials/', {'search': 'pvc'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([m['name'] for m in response.data], ['Conduit'])

    def test_price_change_is_kept_in_history(self):
        """Test material updates are recorded in history"""
        material = TestDataFactory.create_material(price=Decimal('10.00'))

        response = self.client.patch(f'/api/v1/materials/{material.id}/', {'price': '12.50'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.get(f'/api/v1/materials/{material.id}/history/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(response.data[0]['type'], '~')
        price_change = next(c for c in response.data[0]['changes'] if c['field'] == 'price')
        self.assertEqual(price_change['new'], Decimal('12.50'))
        self.assertEqual(response.data[1]['changes'], [])

    def test_delete_material_in_use(self):
        """Test materials used by assemblies cannot be deleted"""
        material = TestDataFactory.create_material()
        TestDataFactory.create_assembly(materials=[(material, 2)])

        response = self.client.delete(f'/api/v1/materials/{material.id}/')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['code'], 'ENTITY_IN_USE')
        self.assertTrue(Material.objects.filter(pk=material.pk).exists())

    def test_delete_unused_material(self):
        """Test deleting an unused material"""
        material = TestDataFactory.create_material()

        response = self.client.delete(f'/api/v1/materials/{material.id}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_export_materials(self):
        """Test exporting materials to Excel"""
        TestDataFactory.create_material(name='Alpha', price=Decimal('5.00'))

        response = self.client.get('/api/v1/materials/export/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], XLSX_CONTENT_TYPE)
        self.assertIn('attachment; filename="materials-', response['Content-Disposition'])
        sheet = load_workbook(BytesIO(response.content))['Materials']
        self.assertEqual(sheet['A1'].value, 'Name')
        self.assertEqual(sheet['A2'].value, 'Alpha')
        self.assertEqual(sheet['E2'].value, 5.0)


class AssemblyCategoryAPITests(TestCase):
    """Test assembly category endpoints"""

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_create_category(self):
        """Test creating a category"""
        response = self.client.post('/api/v1/assembly-categories/', {
            'name': 'Panels', 'description': 'Distribution panels',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['assembly_count'], 0)
        self.assertEqual(response.data['color'], '#3B82F6')

    def test_category_lists_assemblies(self):
        """Test categories embed their assemblies"""
        category = TestDataFactory.create_category(name='Wiring')
        TestDataFactory.create_assembly(name='B Run', category=category)
        TestDataFactory.create_assembly(name='A Run', category=category)

        response = self.client.get(f'/api/v1/assembly-categories/{category.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['assembly_count'], 2)
        self.assertEqual([a['name'] for a in response.data['assemblies']], ['A Run', 'B Run'])

    def test_delete_category_with_assemblies(self):
        """Test categories holding assemblies cannot be deleted"""
        category = TestDataFactory.create_category()
        TestDataFactory.create_assembly(category=category)

        response = self.client.delete(f'/api/v1/assembly-categories/{category.id}/')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)


class AssemblyAPITests(TestCase):
    """Test assembly endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user(role=UserRoleChoices.PROJECT_MANAGER)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.category = TestDataFactory.create_category()
        self.box = TestDataFactory.create_material(name='Box', price=Decimal('1000.00'))
        self.mcb = TestDataFactory.create_material(name='MCB', price=Decimal('50.00'))

    def test_create_assembly_with_materials(self):
        """Test creating an assembly with material lines and cost"""
        response = self.client.post('/api/v1/assemblies/', {
            'name': 'Sub Panel',
            'category': str(self.category.id),
            'materials': [
                {'material_id': str(self.box.id), 'quantity': '1'},
                {'material_id': str(self.mcb.id), 'quantity': '4'},
            ],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['cost'], Decimal('1200.00'))
        self.assertEqual(len(response.data['materials']), 2)
        self.assertEqual(response.data['category_name'], self.category.name)

    def test_duplicate_material_lines_are_merged(self):
        """Test repeated materials are summed into one line"""
        response = self.client.post('/api/v1/assemblies/', {
            'name': 'Merged',
            'category': str(self.category.id),
            'materials': [
                {'material_id': str(self.mcb.id), 'quantity': '2'},
                {'material_id': str(self.mcb.id), 'quantity': '3'},
            ],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        line = AssemblyMaterial.objects.get(assembly__name='Merged')
        self.assertEqual(line.quantity, Decimal('5'))

    def test_create_assembly_unknown_category(self):
        """Test the category must exist"""
        response = self.client.post('/api/v1/assemblies/', {
            'name': 'Orphan',
            'category': '00000000-0000-0000-0000-000000000000',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('category', response.data)

    def test_update_replaces_material_lines(self):
        """Test sending materials on update replaces all lines"""
        assembly = TestDataFactory.create_assembly(
            category=self.category, materials=[(self.box, 1), (self.mcb, 2)]
        )

        response = self.client.patch(f'/api/v1/assemblies/{assembly.id}/', {
            'materials': [{'material_id': str(self.mcb.id), 'quantity': '10'}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['cost'], Decimal('500.00'))
        self.assertEqual(assembly.materials.count(), 1)

    def test_update_without_materials_keeps_lines(self):
        """Test updates without materials leave lines alone"""
        assembly = TestDataFactory.create_assembly(category=self.category, materials=[(self.box, 1)])

        response = self.client.patch(f'/api/v1/assemblies/{assembly.id}/', {
            'description': 'Updated',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(assembly.materials.count(), 1)

    def test_filter_by_category(self):
        """Test filtering assemblies by category"""
        TestDataFactory.create_assembly(category=self.category)
        TestDataFactory.create_assembly()

        response = self.client.get('/api/v1/assemblies/', {'category': str(self.category.id)})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_delete_assembly_used_by_template(self):
        """Test assemblies used by templates cannot be deleted"""
        assembly = TestDataFactory.create_assembly(category=self.category)
        TestDataFactory.create_template(assemblies=[(assembly, 1)])

        response = self.client.delete(f'/api/v1/assemblies/{assembly.id}/')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(Assembly.objects.filter(pk=assembly.pk).exists())

    def test_delete_assembly_removes_lines(self):
        """Test deleting an assembly removes its material lines"""
        assembly = TestDataFactory.create_assembly(category=self.category, materials=[(self.box, 1)])

        response = self.client.delete(f'/api/v1/assemblies/{assembly.id}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(AssemblyMaterial.objects.filter(assembly_id=assembly.id).exists())
        self.assertTrue(Material.objects.filter(pk=self.box.pk).exists())

    def test_upload_and_delete_document(self):
        """Test attaching and removing a PDF document"""
        assembly = TestDataFactory.create_assembly(category=self.category)

        response = self.client.post(
            f'/api/v1/assemblies/{assembly.id}/upload/',
            {'file': TestDataFactory.pdf_file('wiring.pdf')},
            format='multipart'
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        url = response.data['document']['url']
        self.assertTrue(url.startswith('/media/uploads/assemblies/'))
        self.assertEqual(len(response.data['docs']), 1)

        response = self.client.delete(f'/api/v1/assemblies/{assembly.id}/upload/?file_url={url}')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['docs'], [])

    def test_docs_not_writable(self):
        """Test the docs list only changes through the upload action"""
        assembly = TestDataFactory.create_assembly(category=self.category)
        victim = default_storage.save('uploads/templates/victim.pdf', ContentFile(b'%PDF-1.4'))
        url = default_storage.url(victim)

        response = self.client.patch(f'/api/v1/assemblies/{assembly.id}/', {
            'docs': [{'name': 'victim.pdf', 'url': url}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['docs'], [])

        response = self.client.delete(f'/api/v1/assemblies/{assembly.id}/upload/?file_url={url}')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(default_storage.exists(victim))
        default_storage.delete(victim)

    def test_upload_rejects_non_pdf(self):
        """Test only PDF files are accepted"""
        assembly = TestDataFactory.create_assembly(category=self.category)

        response = self.client.post(
            f'/api/v1/assemblies/{assembly.id}/upload/',
            {'file': TestDataFactory.pdf_file('notes.txt')},
            format='multipart'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Only PDF files are allowed')
