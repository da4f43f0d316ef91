"""
Tests for dashboard analytics and the demo seed command
"""
from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from infrastructure.persistence.models import (
    Assembly,
    AssemblyGroup,
    Material,
    Project,
    ProjectStatusChoices,
    Template,
    User,
    UserRoleChoices,
)
from tests.factories import AuthenticatedAPIClient, TestDataFactory


class DashboardAnalyticsTests(TestCase):
    """Test GET /dashboard/analytics/"""

    def setUp(self):
        self.user = TestDataFactory.create_user(role=UserRoleChoices.PROJECT_MANAGER)
        self.user.last_login = timezone.now()
        self.user.save(update_fields=['last_login'])
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

        box = TestDataFactory.create_material(name='Box', price=Decimal('1000.00'), manufacturer='Hager')
        TestDataFactory.create_material(name='Label', price=Decimal('0'), manufacturer='Hager')
        cable = TestDataFactory.create_material(name='Cable', price=Decimal('10.00'), unit='m')
        self.panel = TestDataFactory.create_assembly(name='Panel', materials=[(box, 1), (cable, 5)])
        TestDataFactory.create_assembly(name='Spare', materials=[(cable, 2)])
        template = TestDataFactory.create_template(name='Fit-Out', assemblies=[(self.panel, 2)])

        TestDataFactory.create_project(
            template=template, total_price=Decimal('1000.00'), status=ProjectStatusChoices.IN_PROGRESS
        )
        TestDataFactory.create_project(template=template, total_price=Decimal('3000.00'))

    def test_analytics(self):
        """Test the analytics payload"""
        response = self.client.get('/api/v1/dashboard/analytics/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('generated_at', response.data)

        materials = response.data['materials']
        self.assertEqual(materials['total'], 3)
        self.assertEqual(materials['total_value'], Decimal('1010.00'))
        self.assertEqual(materials['with_prices'], 2)
        self.assertEqual(materials['without_prices'], 1)
        self.assertEqual(materials['manufacturers_count'], 1)
        self.assertEqual(materials['unit_types_count'], 2)
        self.assertEqual(materials['recent_count'], 3)
        self.assertEqual(materials['top_expensive'][0]['name'], 'Box')

        assemblies = response.data['assemblies']
        self.assertEqual(assemblies['total'], 2)
        # 1000 + 5 * 10 + 2 * 10
        self.assertEqual(assemblies['total_value'], Decimal('1070.00'))
        self.assertEqual(assemblies['avg_complexity'], 1.5)
        self.assertEqual(assemblies['top_used'], [
            {'id': str(self.panel.id), 'name': 'Panel', 'usage_count': 1},
        ])

        templates = response.data['templates']
        self.assertEqual(templates['total'], 1)
        self.assertEqual(templates['avg_assemblies'], 1.0)
        self.assertEqual(templates['most_popular'][0]['project_count'], 2)

    def test_project_analytics(self):
        """Test project totals, status breakdown and monthly growth"""
        response = self.client.get('/api/v1/dashboard/analytics/')

        projects = response.data['projects']
        self.assertEqual(projects['total'], 2)
        self.assertEqual(projects['total_value'], Decimal('4000.00'))
        self.assertEqual(projects['avg_value'], Decimal('2000.00'))
        self.assertEqual(
            set(projects['status_breakdown']),
            {choice.lower() for choice in ProjectStatusChoices.values}
        )
        self.assertEqual(projects['status_breakdown']['in_progress'], 1)
        self.assertEqual(projects['status_breakdown']['planning'], 1)
        self.assertEqual(len(projects['monthly_growth']), 6)
        self.assertEqual(projects['monthly_growth'][-1]['count'], 2)
        self.assertEqual(projects['monthly_growth'][-1]['value'], Decimal('4000.00'))
        self.assertEqual(len(projects['recent_projects']), 2)

    def test_user_analytics(self):
        """Test user counts"""
        TestDataFactory.create_user()

        response = self.client.get('/api/v1/dashboard/analytics/')

        users = response.data['users']
        self.assertEqual(users['total'], 2)
        self.assertEqual(users['active'], 2)
        self.assertEqual(users['recent_logins'], 1)
        self.assertEqual(users['by_role'][UserRoleChoices.WORKER], 1)

    def test_empty_database(self):
        """Test analytics with no catalogue data"""
        Project.objects.all().delete()
        Template.objects.all().delete()

        response = self.client.get('/api/v1/dashboard/analytics/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['projects']['total_value'], Decimal('0.00'))
        self.assertEqual(response.data['templates']['avg_assemblies'], 0)

    def test_requires_authentication(self):
        """Test anonymous access is rejected"""
        self.client.logout()

        response = self.client.get('/api/v1/dashboard/analytics/')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class SeedDemoDataTests(TestCase):
    """Test the seed_demo_data management command"""

    def test_seed_is_idempotent(self):
        """Test running the seed twice creates everything once"""
        call_command('seed_demo_data', stdout=StringIO())
        counts = (
            Material.objects.count(),
            Assembly.objects.count(),
            AssemblyGroup.objects.count(),
            Template.objects.count(),
            Project.objects.count(),
        )
        call_command('seed_demo_data', stdout=StringIO())

        self.assertEqual(counts, (8, 5, 2, 1, 1))
        self.assertEqual((
            Material.objects.count(),
            Assembly.objects.count(),
            AssemblyGroup.objects.count(),
            Template.objects.count(),
            Project.objects.count(),
        ), counts)
        self.assertTrue(User.objects.filter(email='admin@quickbom.local', is_superuser=True).exists())

    def test_seeded_project_is_priced(self):
        """Test the seeded project carries its template price"""
        call_command('seed_demo_data', stdout=StringIO())

        project = Project.objects.get()
        self.assertGreater(project.total_price, Decimal('0'))
