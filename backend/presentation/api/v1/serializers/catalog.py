"""
Catalog Serializers.

Materials, assembly categories and assemblies.
"""

from decimal import Decimal

from rest_framework import serializers
from django.db import transaction

from application.services.pricing import assembly_cost
from domain.shared.exceptions import EntityAlreadyExistsException
from infrastructure.persistence.models import (
    Assembly,
    AssemblyCategory,
    AssemblyMaterial,
    Material,
)
from .base import BaseModelSerializer, AuditFieldsMixin


# =============================================================================
# MATERIALS
# =============================================================================

class MaterialSerializer(AuditFieldsMixin, BaseModelSerializer):
    """Serializer for materials."""

    name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False,
        default=Decimal('0')
    )
    docs = serializers.JSONField(read_only=True)

    class Meta:
        model = Material
        fields = [
            'id', 'name', 'part_number', 'manufacturer', 'unit', 'price', 'docs',
            'created_at', 'updated_at', 'created_by', 'updated_by',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_name(self, value):
        qs = Material.objects.filter(name__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise EntityAlreadyExistsException('Material', value, message='Material with this name already exists')
        return value


class MaterialMinimalSerializer(serializers.ModelSerializer):
    class Meta:
        model = Material
        fields = ['id', 'name', 'part_number', 'manufacturer', 'unit', 'price']
        read_only_fields = fields


class AssemblyMinimalSerializer(serializers.ModelSerializer):
    class Meta:
        model = Assembly
        fields = ['id', 'name', 'description', 'module', 'category']
        read_only_fields = fields


# =============================================================================
# CATEGORIES
# =============================================================================

class AssemblyCategorySerializer(AuditFieldsMixin, BaseModelSerializer):
    """Category with its assemblies."""

    name = serializers.CharField(max_length=200)
    assemblies = serializers.SerializerMethodField()
    assembly_count = serializers.SerializerMethodField()

    class Meta:
        model = AssemblyCategory
        fields = [
            'id', 'name', 'description', 'color', 'icon',
            'assemblies', 'assembly_count',
            'created_at', 'updated_at', 'created_by', 'updated_by',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_name(self, value):
        qs = AssemblyCategory.objects.filter(name__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise EntityAlreadyExistsException('Category', value, message='Category with this name already exists')
        return value

    def get_assemblies(self, obj):
        return AssemblyMinimalSerializer(obj.assemblies.all(), many=True).data

    def get_assembly_count(self, obj):
        return len(obj.assemblies.all())


# =============================================================================
# ASSEMBLIES
# =============================================================================

class AssemblyMaterialInputSerializer(serializers.Serializer):
    material_id = serializers.PrimaryKeyRelatedField(
        queryset=Material.objects.all(),
        error_messages={'does_not_exist': 'Material "{pk_value}" does not exist.'}
    )
    quantity = serializers.DecimalField(
        max_digits=12,
        decimal_places=3,
        min_value=Decimal('0'),
        default=Decimal('1')
    )


class AssemblyMaterialSerializer(serializers.ModelSerializer):
    material_id = serializers.UUIDField(source='material.id', read_only=True)
    material = MaterialMinimalSerializer(read_only=True)

    class Meta:
        model = AssemblyMaterial
        fields = ['id', 'material_id', 'quantity', 'material']
        read_only_fields = fields


def write_assembly_materials(assembly, lines):
    """Replace all material lines of an assembly."""
    assembly.materials.all().delete()
    merged = {}
    for line in lines:
        material = line['material_id']
        if material.pk in merged:
            merged[material.pk].quantity += line['quantity']
        else:
            merged[material.pk] = AssemblyMaterial(
                assembly=assembly,
                material=material,
                quantity=line['quantity'],
            )
    AssemblyMaterial.objects.bulk_create(merged.values())


class AssemblySerializer(AuditFieldsMixin, BaseModelSerializer):
    """
    Assembly with its material lines and unit cost.

    Writes accept `materials: [{material_id, quantity}]`; on update the
    given list replaces all lines.
    """

    name = serializers.CharField(max_length=255)
    category = serializers.PrimaryKeyRelatedField(
        queryset=AssemblyCategory.objects.all(),
        error_messages={
            'does_not_exist': 'Selected category does not exist',
            'incorrect_type': 'Selected category does not exist',
        }
    )
    category_name = serializers.CharField(source='category.name', read_only=True)
    materials = AssemblyMaterialInputSerializer(many=True, required=False, write_only=True)
    docs = serializers.JSONField(read_only=True)

    class Meta:
        model = Assembly
        fields = [
            'id', 'name', 'description', 'module',
            'category', 'category_name', 'docs', 'materials',
            'created_at', 'updated_at', 'created_by', 'updated_by',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_name(self, value):
        qs = Assembly.objects.filter(name__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise EntityAlreadyExistsException('Assembly', value, message='Assembly with this name already exists')
        return value

    @transaction.atomic
    def create(self, validated_data):
        lines = validated_data.pop('materials', [])
        assembly = super().create(validated_data)
        write_assembly_materials(assembly, lines)
        return assembly

    @transaction.atomic
    def update(self, instance, validated_data):
        lines = validated_data.pop('materials', None)
        instance = super().update(instance, validated_data)
        if lines is not None:
            write_assembly_materials(instance, lines)
        return instance

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['materials'] = AssemblyMaterialSerializer(
            instance.materials.select_related('material').order_by('material__name'),
            many=True
        ).data
        data['cost'] = assembly_cost(instance)
        return data
