"""
Test utilities and factories for creating test data
"""
import random
import string
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from infrastructure.persistence.models import (
    Assembly,
    AssemblyCategory,
    AssemblyGroup,
    AssemblyGroupItem,
    AssemblyMaterial,
    Client,
    GroupTypeChoices,
    Milestone,
    Material,
    Project,
    ProjectTimeline,
    Template,
    TemplateAssembly,
    TemplateAssemblyGroup,
    TemplateAssemblyGroupItem,
    TimelineTask,
    UserRoleChoices,
)

User = get_user_model()

PDF_BYTES = b'%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\ntrailer << /Root 1 0 R >>\n%%EOF\n'


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))

    @staticmethod
    def create_user(email=None, password='testpass123', role=UserRoleChoices.WORKER, **extra):
        """Create a test user"""
        if not email:
            email = f'user_{TestDataFactory.random_string(6)}@test.com'
        extra.setdefault('name', email.split('@')[0])
        return User.objects.create_user(email=email, password=password, role=role, **extra)

    @staticmethod
    def create_admin(email=None, password='testpass123'):
        return TestDataFactory.create_user(email=email, password=password, role=UserRoleChoices.ADMIN)

    @staticmethod
    def create_client(contact_email=None, **extra):
        """Create a test client"""
        if not contact_email:
            contact_email = f'client_{TestDataFactory.random_string(6)}@test.com'
        data = {
            'company_name': f'PT {TestDataFactory.random_string(6).upper()}',
            'contact_person': 'Test Contact',
            'contact_phone': '081234567890',
            'address': 'Jl. Test No. 1',
            'city': 'Jakarta',
            'province': 'DKI Jakarta',
        }
        data.update(extra)
        return Client.objects.create(contact_email=contact_email, **data)

    @staticmethod
    def create_material(name=None, price=Decimal('100.00'), unit='pcs', **extra):
        """Create a test material"""
        if not name:
            name = f'Material_{TestDataFactory.random_string(6)}'
        return Material.objects.create(name=name, price=price, unit=unit, **extra)

    @staticmethod
    def create_category(name=None):
        """Create a test assembly category"""
        if not name:
            name = f'Category_{TestDataFactory.random_string(6)}'
        return AssemblyCategory.objects.create(name=name, description=f'Test category {name}')

    @staticmethod
    def create_assembly(name=None, category=None, materials=()):
        """
        Create a test assembly.

        `materials` is a list of (material, quantity) pairs.
        """
        if not name:
            name = f'Assembly_{TestDataFactory.random_string(6)}'
        if category is None:
            category = TestDataFactory.create_category()
        assembly = Assembly.objects.create(name=name, category=category)
        for material, quantity in materials:
            AssemblyMaterial.objects.create(
                assembly=assembly,
                material=material,
                quantity=Decimal(str(quantity))
            )
        return assembly

    @staticmethod
    def create_template(name=None, assemblies=()):
        """
        Create a test template.

        `assemblies` is a list of (assembly, quantity) pairs.
        """
        if not name:
            name = f'Template_{TestDataFactory.random_string(6)}'
        template = Template.objects.create(name=name)
        for assembly, quantity in assemblies:
            TemplateAssembly.objects.create(
                template=template,
                assembly=assembly,
                quantity=Decimal(str(quantity))
            )
        return template

    @staticmethod
    def create_group(category, group_type=GroupTypeChoices.OPTIONAL, items=(), name=None, template=None):
        """
        Create a catalogue group, or a template group when `template` is given.

        `items` is a list of assemblies or (assembly, options) pairs.
        """
        if not name:
            name = f'Group_{TestDataFactory.random_string(6)}'
        if template is None:
            group = AssemblyGroup.objects.create(name=name, group_type=group_type, category=category)
            item_model = AssemblyGroupItem
        else:
            group = TemplateAssemblyGroup.objects.create(
                name=name, group_type=group_type, category=category, template=template
            )
            item_model = TemplateAssemblyGroupItem

        for index, item in enumerate(items):
            assembly, options = item if isinstance(item, tuple) else (item, {})
            item_model.objects.create(group=group, assembly=assembly, sort_order=index, **options)
        return group

    @staticmethod
    def create_project(name=None, template=None, client=None, user=None, **extra):
        """Create a test project"""
        if not name:
            name = f'Project_{TestDataFactory.random_string(6)}'
        return Project.objects.create(
            name=name,
            from_template=template,
            client=client,
            created_by=user,
            updated_by=user,
            **extra
        )

    @staticmethod
    def create_timeline(project, start_date=None, end_date=None):
        """Create a test timeline"""
        start_date = start_date or timezone.now()
        return ProjectTimeline.objects.create(
            project=project,
            start_date=start_date,
            end_date=end_date,
        )

    @staticmethod
    def create_milestone(timeline, name=None, due_date=None, **extra):
        if not name:
            name = f'Milestone_{TestDataFactory.random_string(6)}'
        return Milestone.objects.create(
            timeline=timeline,
            name=name,
            due_date=due_date or timezone.now() + timedelta(days=14),
            **extra
        )

    @staticmethod
    def create_task(timeline, name=None, duration=5, progress=Decimal('0'), **extra):
        """Create a test timeline task"""
        if not name:
            name = f'Task_{TestDataFactory.random_string(6)}'
        planned_start = extra.pop('planned_start', timezone.now())
        return TimelineTask.objects.create(
            timeline=timeline,
            name=name,
            planned_start=planned_start,
            planned_end=planned_start + timedelta(days=duration),
            duration=duration,
            progress=progress,
            **extra
        )

    @staticmethod
    def pdf_file(name='document.pdf', content=PDF_BYTES):
        """In-memory PDF upload"""
        return SimpleUploadedFile(name, content, content_type='application/pdf')


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
