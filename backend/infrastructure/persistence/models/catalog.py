"""
Catalog ORM Models.

Materials, assembly categories and assemblies with their material lines.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from .base import BaseModel, BaseModelWithHistory


class AssemblyModuleChoices(models.TextChoices):
    """Engineering discipline of an assembly."""

    ELECTRONIC = 'ELECTRONIC', 'Electronic'
    ELECTRICAL = 'ELECTRICAL', 'Electrical'
    ASSEMBLY = 'ASSEMBLY', 'Assembly'
    INSTALLATION = 'INSTALLATION', 'Installation'
    MECHANICAL = 'MECHANICAL', 'Mechanical'


class Material(BaseModelWithHistory):
    """
    A purchasable material with a unit price.

    Price changes are kept in history so that project totals can be
    explained after a recalculation.
    """

    name = models.CharField(
        max_length=255,
        unique=True,
        verbose_name="Name"
    )
    part_number = models.CharField(
        max_length=100,
        blank=True,
        db_index=True,
        verbose_name="Part number"
    )
    manufacturer = models.CharField(
        max_length=200,
        blank=True,
        verbose_name="Manufacturer"
    )
    unit = models.CharField(
        max_length=30,
        verbose_name="Unit"
    )
    price = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
        verbose_name="Unit price"
    )
    docs = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Documents"
    )

    class Meta:
        db_table = 'materials'
        verbose_name = 'Material'
        verbose_name_plural = 'Materials'
        ordering = ['name']

    def __str__(self):
        return self.name


class AssemblyCategory(BaseModel):
    """Category that groups assemblies (and the assembly groups built on them)."""

    name = models.CharField(
        max_length=200,
        unique=True,
        verbose_name="Name"
    )
    description = models.TextField(
        blank=True,
        verbose_name="Description"
    )
    color = models.CharField(
        max_length=20,
        default='#3B82F6',
        verbose_name="Color"
    )
    icon = models.CharField(
        max_length=50,
        blank=True,
        verbose_name="Icon"
    )

    class Meta:
        db_table = 'assembly_categories'
        verbose_name = 'Assembly category'
        verbose_name_plural = 'Assembly categories'
        ordering = ['name']

    def __str__(self):
        return self.name


class Assembly(BaseModel):
    """
    A named collection of materials with quantities.

    Unit cost = sum(material.price * line.quantity).
    """

    name = models.CharField(
        max_length=255,
        unique=True,
        verbose_name="Name"
    )
    description = models.TextField(
        blank=True,
        verbose_name="Description"
    )
    module = models.CharField(
        max_length=20,
        choices=AssemblyModuleChoices.choices,
        default=AssemblyModuleChoices.ELECTRICAL,
        db_index=True,
        verbose_name="Module"
    )
    category = models.ForeignKey(
        AssemblyCategory,
        on_delete=models.PROTECT,
        related_name='assemblies',
        verbose_name="Category"
    )
    docs = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Documents"
    )

    class Meta:
        db_table = 'assemblies'
        verbose_name = 'Assembly'
        verbose_name_plural = 'Assemblies'
        ordering = ['name']

    def __str__(self):
        return self.name


class AssemblyMaterial(models.Model):
    """Material line of an assembly."""

    assembly = models.ForeignKey(
        Assembly,
        on_delete=models.CASCADE,
        related_name='materials',
        verbose_name="Assembly"
    )
    material = models.ForeignKey(
        Material,
        on_delete=models.PROTECT,
        related_name='assembly_lines',
        verbose_name="Material"
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('1'),
        validators=[MinValueValidator(Decimal('0'))],
        verbose_name="Quantity"
    )

    class Meta:
        db_table = 'assembly_materials'
        verbose_name = 'Assembly material'
        verbose_name_plural = 'Assembly materials'
        constraints = [
            models.UniqueConstraint(
                fields=['assembly', 'material'],
                name='unique_assembly_material'
            ),
        ]

    def __str__(self):
        return f"{self.assembly} - {self.material} x {self.quantity}"
