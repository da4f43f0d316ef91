"""
BOM (Bill of Materials) ORM Models.

Templates compose assemblies into a priced blueprint; assembly groups
constrain which assemblies of a category may be chosen together.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from .base import BaseModel
from .catalog import Assembly, AssemblyCategory


class GroupTypeChoices(models.TextChoices):
    """Selection rule of an assembly group."""

    REQUIRED = 'REQUIRED', 'Required'
    CHOOSE_ONE = 'CHOOSE_ONE', 'Choose one'
    OPTIONAL = 'OPTIONAL', 'Optional'
    CONFLICT = 'CONFLICT', 'Conflict'


class AbstractAssemblyGroup(BaseModel):
    """Fields shared by global and per-template assembly groups."""

    name = models.CharField(
        max_length=200,
        verbose_name="Name"
    )
    description = models.TextField(
        blank=True,
        verbose_name="Description"
    )
    group_type = models.CharField(
        max_length=20,
        choices=GroupTypeChoices.choices,
        default=GroupTypeChoices.OPTIONAL,
        verbose_name="Group type"
    )
    category = models.ForeignKey(
        AssemblyCategory,
        on_delete=models.CASCADE,
        related_name='%(class)ss',
        verbose_name="Category"
    )
    sort_order = models.PositiveIntegerField(
        default=0,
        verbose_name="Sort order"
    )

    class Meta:
        abstract = True

    def __str__(self):
        return f"{self.name} ({self.group_type})"


class AbstractAssemblyGroupItem(models.Model):
    """An assembly offered by a group."""

    assembly = models.ForeignKey(
        Assembly,
        on_delete=models.CASCADE,
        related_name='%(class)ss',
        verbose_name="Assembly"
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('1'),
        validators=[MinValueValidator(Decimal('1'))],
        verbose_name="Quantity"
    )
    conflicts_with = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Conflicting assembly ids"
    )
    is_default = models.BooleanField(
        default=False,
        verbose_name="Selected by default"
    )
    sort_order = models.PositiveIntegerField(
        default=0,
        verbose_name="Sort order"
    )

    class Meta:
        abstract = True

    def __str__(self):
        return f"{self.assembly} x {self.quantity}"


class AssemblyGroup(AbstractAssemblyGroup):
    """Catalogue-wide assembly group."""

    class Meta:
        db_table = 'assembly_groups'
        verbose_name = 'Assembly group'
        verbose_name_plural = 'Assembly groups'
        ordering = ['category__name', 'sort_order']


class AssemblyGroupItem(AbstractAssemblyGroupItem):
    group = models.ForeignKey(
        AssemblyGroup,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name="Group"
    )

    class Meta:
        db_table = 'assembly_group_items'
        verbose_name = 'Assembly group item'
        verbose_name_plural = 'Assembly group items'
        ordering = ['sort_order']
        constraints = [
            models.UniqueConstraint(
                fields=['group', 'assembly'],
                name='unique_assembly_group_item'
            ),
        ]


class Template(BaseModel):
    """
    Reusable blueprint composed of assemblies.

    Projects created from a template get its rolled-up total price.
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
    docs = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Documents"
    )
    assembly_selections = models.JSONField(
        default=dict,
        blank=True,
        verbose_name="Saved group selections"
    )

    class Meta:
        db_table = 'templates'
        verbose_name = 'Template'
        verbose_name_plural = 'Templates'
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class TemplateAssembly(models.Model):
    """Assembly line of a template."""

    template = models.ForeignKey(
        Template,
        on_delete=models.CASCADE,
        related_name='assemblies',
        verbose_name="Template"
    )
    assembly = models.ForeignKey(
        Assembly,
        on_delete=models.PROTECT,
        related_name='template_lines',
        verbose_name="Assembly"
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('1'),
        validators=[MinValueValidator(Decimal('0'))],
        verbose_name="Quantity"
    )

    class Meta:
        db_table = 'template_assemblies'
        verbose_name = 'Template assembly'
        verbose_name_plural = 'Template assemblies'
        constraints = [
            models.UniqueConstraint(
                fields=['template', 'assembly'],
                name='unique_template_assembly'
            ),
        ]

    def __str__(self):
        return f"{self.template} - {self.assembly} x {self.quantity}"


class TemplateAssemblyGroup(AbstractAssemblyGroup):
    """Assembly group scoped to one template."""

    template = models.ForeignKey(
        Template,
        on_delete=models.CASCADE,
        related_name='assembly_groups',
        verbose_name="Template"
    )

    class Meta:
        db_table = 'template_assembly_groups'
        verbose_name = 'Template assembly group'
        verbose_name_plural = 'Template assembly groups'
        ordering = ['category__name', 'sort_order']


class TemplateAssemblyGroupItem(AbstractAssemblyGroupItem):
    group = models.ForeignKey(
        TemplateAssemblyGroup,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name="Group"
    )

    class Meta:
        db_table = 'template_assembly_group_items'
        verbose_name = 'Template assembly group item'
        verbose_name_plural = 'Template assembly group items'
        ordering = ['sort_order']
        constraints = [
            models.UniqueConstraint(
                fields=['group', 'assembly'],
                name='unique_template_group_item'
            ),
        ]
