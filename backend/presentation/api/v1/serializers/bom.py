"""
BOM Serializers.

Assembly groups, templates and template groups.
"""

from decimal import Decimal

from rest_framework import serializers
from django.core.exceptions import ObjectDoesNotExist, ValidationError as DjangoValidationError
from django.db import transaction

from application.services.pricing import assembly_cost, template_price
from domain.shared.exceptions import EntityAlreadyExistsException, EntityNotFoundException
from infrastructure.persistence.models import (
    Assembly,
    AssemblyCategory,
    AssemblyGroup,
    AssemblyGroupItem,
    Template,
    TemplateAssembly,
    TemplateAssemblyGroup,
    TemplateAssemblyGroupItem,
)
from .base import BaseModelSerializer, AuditFieldsMixin
from .catalog import AssemblyMaterialSerializer


class ExistingObjectField(serializers.PrimaryKeyRelatedField):
    """Primary key field that answers 404 instead of 400 for unknown ids."""

    def __init__(self, entity_type, **kwargs):
        self.entity_type = entity_type
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        try:
            return self.get_queryset().get(pk=data)
        except (ObjectDoesNotExist, TypeError, ValueError, DjangoValidationError):
            raise EntityNotFoundException(self.entity_type, data, message=f'{self.entity_type} not found')


# =============================================================================
# GROUP ITEMS
# =============================================================================

class GroupItemInputSerializer(serializers.Serializer):
    assembly_id = serializers.UUIDField()
    quantity = serializers.DecimalField(
        max_digits=12,
        decimal_places=3,
        min_value=Decimal('1'),
        default=Decimal('1')
    )
    conflicts_with = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        default=list
    )
    is_default = serializers.BooleanField(required=False, default=False)
    sort_order = serializers.IntegerField(required=False, min_value=0)


class GroupItemSerializer(serializers.Serializer):
    """Read-only item representation shared by both group kinds."""

    id = serializers.IntegerField(read_only=True)
    assembly_id = serializers.UUIDField(read_only=True)
    assembly = serializers.SerializerMethodField()
    quantity = serializers.DecimalField(max_digits=12, decimal_places=3, read_only=True)
    conflicts_with = serializers.JSONField(read_only=True)
    is_default = serializers.BooleanField(read_only=True)
    sort_order = serializers.IntegerField(read_only=True)
    cost = serializers.SerializerMethodField()

    def get_assembly(self, obj):
        return {
            'id': str(obj.assembly.id),
            'name': obj.assembly.name,
            'description': obj.assembly.description,
        }

    def get_cost(self, obj):
        return assembly_cost(obj.assembly) * obj.quantity


def validate_group_items(items, category):
    """Every item's assembly must exist and belong to the group's category."""
    assembly_ids = [item['assembly_id'] for item in items]
    assemblies = {a.id: a for a in Assembly.objects.filter(id__in=assembly_ids)}

    for assembly_id in assembly_ids:
        assembly = assemblies.get(assembly_id)
        if assembly is None:
            raise serializers.ValidationError({
                'items': f'Assembly {assembly_id} does not exist',
            })
        if assembly.category_id != category.id:
            raise serializers.ValidationError({
                'items': f'Assembly {assembly_id} does not belong to category "{category.name}"',
            })
    return assemblies


class BaseGroupSerializer(AuditFieldsMixin, BaseModelSerializer):
    """Shared create/update logic for catalogue and template groups."""

    item_model = None

    category = ExistingObjectField('Category', queryset=AssemblyCategory.objects.all())
    category_name = serializers.CharField(source='category.name', read_only=True)
    items = GroupItemInputSerializer(many=True, required=False, write_only=True)

    def validate(self, attrs):
        if self.instance is not None and not self.partial:
            if 'group_type' not in self.initial_data:
                raise serializers.ValidationError({'group_type': 'This field is required.'})

        category = attrs.get('category') or getattr(self.instance, 'category', None)
        if 'items' in attrs and category is not None:
            validate_group_items(attrs['items'], category)
        return attrs

    def _write_items(self, group, items):
        group.items.all().delete()
        self.item_model.objects.bulk_create([
            self.item_model(
                group=group,
                assembly_id=item['assembly_id'],
                quantity=item['quantity'],
                conflicts_with=[str(a) for a in item.get('conflicts_with', [])],
                is_default=item.get('is_default', False),
                sort_order=item.get('sort_order', index),
            )
            for index, item in enumerate(items)
        ])

    @transaction.atomic
    def create(self, validated_data):
        items = validated_data.pop('items', [])
        group = super().create(validated_data)
        self._write_items(group, items)
        return group

    @transaction.atomic
    def update(self, instance, validated_data):
        items = validated_data.pop('items', None)
        instance = super().update(instance, validated_data)
        if items is not None:
            self._write_items(instance, items)
        return instance

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['items'] = GroupItemSerializer(
            instance.items.select_related('assembly').order_by('sort_order'),
            many=True
        ).data
        return data


class AssemblyGroupSerializer(BaseGroupSerializer):
    item_model = AssemblyGroupItem

    class Meta:
        model = AssemblyGroup
        fields = [
            'id', 'name', 'description', 'group_type',
            'category', 'category_name', 'sort_order', 'items',
            'created_at', 'updated_at', 'created_by', 'updated_by',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class TemplateAssemblyGroupSerializer(BaseGroupSerializer):
    item_model = TemplateAssemblyGroupItem

    template = ExistingObjectField('Template', queryset=Template.objects.all())

    class Meta:
        model = TemplateAssemblyGroup
        fields = [
            'id', 'template', 'name', 'description', 'group_type',
            'category', 'category_name', 'sort_order', 'items',
            'created_at', 'updated_at', 'created_by', 'updated_by',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class GroupItemQuantitySerializer(serializers.Serializer):
    quantity = serializers.DecimalField(
        max_digits=12,
        decimal_places=3,
        min_value=Decimal('1'),
        error_messages={'min_value': 'Quantity must be at least 1.'}
    )


class SelectionSerializer(serializers.Serializer):
    """`{category_id: {group_id: [assembly_id, ...]}}`"""

    selections = serializers.DictField(
        child=serializers.DictField(child=serializers.ListField(child=serializers.CharField()))
    )


class TemplateSelectionSerializer(SelectionSerializer):
    template_id = serializers.CharField()


# =============================================================================
# TEMPLATES
# =============================================================================

class TemplateAssemblyInputSerializer(serializers.Serializer):
    assembly_id = serializers.PrimaryKeyRelatedField(
        queryset=Assembly.objects.all(),
        error_messages={'does_not_exist': 'Assembly "{pk_value}" does not exist.'}
    )
    quantity = serializers.DecimalField(
        max_digits=12,
        decimal_places=3,
        min_value=Decimal('0'),
        default=Decimal('1')
    )


class TemplateAssemblySerializer(serializers.ModelSerializer):
    assembly_id = serializers.UUIDField(source='assembly.id', read_only=True)
    assembly = serializers.SerializerMethodField()

    class Meta:
        model = TemplateAssembly
        fields = ['id', 'assembly_id', 'quantity', 'assembly']
        read_only_fields = fields

    def get_assembly(self, obj):
        assembly = obj.assembly
        return {
            'id': str(assembly.id),
            'name': assembly.name,
            'description': assembly.description,
            'module': assembly.module,
            'materials': AssemblyMaterialSerializer(assembly.materials.all(), many=True).data,
            'cost': assembly_cost(assembly),
        }


def write_template_assemblies(template, lines):
    """Replace all assembly lines of a template."""
    template.assemblies.all().delete()
    merged = {}
    for line in lines:
        assembly = line['assembly_id']
        if assembly.pk in merged:
            merged[assembly.pk].quantity += line['quantity']
        else:
            merged[assembly.pk] = TemplateAssembly(
                template=template,
                assembly=assembly,
                quantity=line['quantity'],
            )
    TemplateAssembly.objects.bulk_create(merged.values())


class TemplateSerializer(AuditFieldsMixin, BaseModelSerializer):
    """
    Template with nested assemblies and the rolled-up total price.
    """

    name = serializers.CharField(max_length=255)
    assemblies = TemplateAssemblyInputSerializer(many=True, required=False, write_only=True)
    docs = serializers.JSONField(read_only=True)
    assembly_selections = serializers.JSONField(required=False)

    class Meta:
        model = Template
        fields = [
            'id', 'name', 'description', 'docs', 'assembly_selections', 'assemblies',
            'created_at', 'updated_at', 'created_by', 'updated_by',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_name(self, value):
        qs = Template.objects.filter(name__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise EntityAlreadyExistsException('Template', value, message='Template with this name already exists')
        return value

    @transaction.atomic
    def create(self, validated_data):
        lines = validated_data.pop('assemblies', [])
        template = super().create(validated_data)
        write_template_assemblies(template, lines)
        return template

    @transaction.atomic
    def update(self, instance, validated_data):
        lines = validated_data.pop('assemblies', None)
        instance = super().update(instance, validated_data)
        if lines is not None:
            write_template_assemblies(instance, lines)
        return instance

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['assemblies'] = TemplateAssemblySerializer(
            instance.assemblies.select_related('assembly').prefetch_related(
                'assembly__materials__material'
            ).order_by('assembly__name'),
            many=True
        ).data
        data['total_price'] = template_price(instance)
        data['project_count'] = instance.projects.count()
        return data

