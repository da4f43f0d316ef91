"""
Seed Demo Data Command.

Creates an admin account and a small, consistent catalogue:
categories, materials, assemblies, groups, one template, one client and
one project priced from the template. Safe to run repeatedly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from application.services.pricing import recalculate_project_total
from infrastructure.persistence.models import (
    Assembly,
    AssemblyCategory,
    AssemblyGroup,
    AssemblyGroupItem,
    AssemblyMaterial,
    AssemblyModuleChoices,
    Client,
    ClientTypeChoices,
    GroupTypeChoices,
    Material,
    Project,
    ProjectTypeChoices,
    Template,
    TemplateAssembly,
    User,
    UserRoleChoices,
)


@dataclass(frozen=True)
class MaterialSpec:
    name: str
    part_number: str
    manufacturer: str
    unit: str
    price: Decimal


MATERIALS = (
    MaterialSpec('MCB 1P 16A', 'MCB-1P-16', 'Schneider', 'pcs', Decimal('85000')),
    MaterialSpec('MCB 3P 32A', 'MCB-3P-32', 'Schneider', 'pcs', Decimal('410000')),
    MaterialSpec('NYY Cable 4x10mm', 'NYY-4x10', 'Supreme', 'm', Decimal('98000')),
    MaterialSpec('NYM Cable 3x2.5mm', 'NYM-3x2.5', 'Supreme', 'm', Decimal('16500')),
    MaterialSpec('Panel Box 60x40', 'PB-6040', 'Hager', 'pcs', Decimal('1250000')),
    MaterialSpec('PVC Conduit 20mm', 'PVC-20', 'Clipsal', 'm', Decimal('9500')),
    MaterialSpec('Cable Lug 10mm', 'LUG-10', 'Tyco', 'pcs', Decimal('3500')),
    MaterialSpec('LED Panel 36W', 'LED-36', 'Philips', 'pcs', Decimal('325000')),
)

CATEGORIES = (
    ('Distribution Panels', 'Main and sub distribution boards', '#2563eb', 'panel'),
    ('Wiring', 'Cable runs and conduits', '#16a34a', 'cable'),
    ('Lighting', 'Indoor lighting fixtures', '#f59e0b', 'bulb'),
)

# (name, category, module, [(part_number, quantity)])
ASSEMBLIES = (
    ('Sub Panel 3 Phase', 'Distribution Panels', AssemblyModuleChoices.ELECTRICAL,
     [('PB-6040', 1), ('MCB-3P-32', 1), ('MCB-1P-16', 6), ('LUG-10', 12)]),
    ('Sub Panel 1 Phase', 'Distribution Panels', AssemblyModuleChoices.ELECTRICAL,
     [('PB-6040', 1), ('MCB-1P-16', 4), ('LUG-10', 8)]),
    ('Feeder Run 25m', 'Wiring', AssemblyModuleChoices.INSTALLATION,
     [('NYY-4x10', 25), ('LUG-10', 8)]),
    ('Socket Circuit 20m', 'Wiring', AssemblyModuleChoices.INSTALLATION,
     [('NYM-3x2.5', 20), ('PVC-20', 20)]),
    ('Office Lighting Set', 'Lighting', AssemblyModuleChoices.ELECTRICAL,
     [('LED-36', 6), ('NYM-3x2.5', 15), ('PVC-20', 15)]),
)


class Command(BaseCommand):
    help = 'Seed an admin user and a small demo catalogue, template, client and project'

    def add_arguments(self, parser):
        parser.add_argument(
            '--email',
            type=str,
            default='admin@quickbom.local',
            help='Email of the admin account'
        )
        parser.add_argument(
            '--password',
            type=str,
            default='admin123',
            help='Password set when the admin account is created'
        )

    def handle(self, *args, **options):
        with transaction.atomic():
            admin = self._seed_admin(options['email'], options['password'])
            materials = self._seed_materials(admin)
            categories = self._seed_categories(admin)
            assemblies = self._seed_assemblies(admin, categories, materials)
            self._seed_groups(admin, categories, assemblies)
            template = self._seed_template(admin, assemblies)
            client = self._seed_client(admin)
            project = self._seed_project(admin, client, template)

        self.stdout.write(self.style.SUCCESS(
            f'Demo data ready: {len(materials)} materials, {len(assemblies)} assemblies, '
            f'template "{template.name}", project "{project.name}" ({project.total_price})'
        ))

    def _seed_admin(self, email, password):
        admin = User.objects.filter(email__iexact=email).first()
        if admin is None:
            admin = User.objects.create_superuser(
                email=email,
                password=password,
                name='QuickBom Admin',
                role=UserRoleChoices.SUPER_ADMIN,
            )
            self.stdout.write(f'Created admin {email}')
        return admin

    def _seed_materials(self, admin):
        materials = {}
        for spec in MATERIALS:
            material, _ = Material.objects.get_or_create(
                name=spec.name,
                defaults={
                    'part_number': spec.part_number,
                    'manufacturer': spec.manufacturer,
                    'unit': spec.unit,
                    'price': spec.price,
                    'created_by': admin,
                    'updated_by': admin,
                }
            )
            materials[spec.part_number] = material
        return materials

    def _seed_categories(self, admin):
        categories = {}
        for name, description, color, icon in CATEGORIES:
            category, _ = AssemblyCategory.objects.get_or_create(
                name=name,
                defaults={
                    'description': description,
                    'color': color,
                    'icon': icon,
                    'created_by': admin,
                    'updated_by': admin,
                }
            )
            categories[name] = category
        return categories

    def _seed_assemblies(self, admin, categories, materials):
        assemblies = {}
        for name, category_name, module, lines in ASSEMBLIES:
            assembly, created = Assembly.objects.get_or_create(
                name=name,
                defaults={
                    'category': categories[category_name],
                    'module': module,
                    'created_by': admin,
                    'updated_by': admin,
                }
            )
            if created:
                AssemblyMaterial.objects.bulk_create([
                    AssemblyMaterial(
                        assembly=assembly,
                        material=materials[part_number],
                        quantity=Decimal(quantity),
                    )
                    for part_number, quantity in lines
                ])
            assemblies[name] = assembly
        return assemblies

    def _seed_groups(self, admin, categories, assemblies):
        panel_group, created = AssemblyGroup.objects.get_or_create(
            name='Sub Panel Type',
            category=categories['Distribution Panels'],
            defaults={
                'group_type': GroupTypeChoices.CHOOSE_ONE,
                'description': 'Pick exactly one sub panel',
                'created_by': admin,
                'updated_by': admin,
            }
        )
        if created:
            AssemblyGroupItem.objects.bulk_create([
                AssemblyGroupItem(group=panel_group, assembly=assemblies['Sub Panel 3 Phase'],
                                  is_default=True, sort_order=0),
                AssemblyGroupItem(group=panel_group, assembly=assemblies['Sub Panel 1 Phase'],
                                  sort_order=1),
            ])

        wiring_group, created = AssemblyGroup.objects.get_or_create(
            name='Wiring Package',
            category=categories['Wiring'],
            defaults={
                'group_type': GroupTypeChoices.REQUIRED,
                'description': 'At least one wiring assembly',
                'created_by': admin,
                'updated_by': admin,
            }
        )
        if created:
            AssemblyGroupItem.objects.bulk_create([
                AssemblyGroupItem(group=wiring_group, assembly=assemblies['Feeder Run 25m'], sort_order=0),
                AssemblyGroupItem(group=wiring_group, assembly=assemblies['Socket Circuit 20m'],
                                  quantity=Decimal('4'), sort_order=1),
            ])

    def _seed_template(self, admin, assemblies):
        template, created = Template.objects.get_or_create(
            name='Small Office Electrical Fit-Out',
            defaults={
                'description': 'One 3 phase sub panel, feeder, sockets and lighting',
                'created_by': admin,
                'updated_by': admin,
            }
        )
        if created:
            TemplateAssembly.objects.bulk_create([
                TemplateAssembly(template=template, assembly=assemblies['Sub Panel 3 Phase'], quantity=Decimal('1')),
                TemplateAssembly(template=template, assembly=assemblies['Feeder Run 25m'], quantity=Decimal('1')),
                TemplateAssembly(template=template, assembly=assemblies['Socket Circuit 20m'], quantity=Decimal('4')),
                TemplateAssembly(template=template, assembly=assemblies['Office Lighting Set'], quantity=Decimal('3')),
            ])
        return template

    def _seed_client(self, admin):
        client, _ = Client.objects.get_or_create(
            contact_email='procurement@nusantara-build.example',
            defaults={
                'client_type': ClientTypeChoices.COMPANY,
                'company_name': 'PT Nusantara Build',
                'contact_person': 'Budi Santoso',
                'contact_phone': '081234567890',
                'address': 'Jl. Sudirman No. 1',
                'city': 'Jakarta',
                'province': 'DKI Jakarta',
                'created_by': admin,
                'updated_by': admin,
            }
        )
        return client

    def _seed_project(self, admin, client, template):
        today = timezone.localdate()
        project, created = Project.objects.get_or_create(
            name='Nusantara HQ Floor 3',
            defaults={
                'client': client,
                'from_template': template,
                'project_type': ProjectTypeChoices.COMMERCIAL,
                'location': 'Jakarta',
                'start_date': today,
                'end_date': today + timedelta(days=60),
                'created_by': admin,
                'updated_by': admin,
            }
        )
        if created:
            recalculate_project_total(project)
        return project
