"""
Dashboard Views.

Aggregated catalogue, project and user statistics for the home screen.
"""

from datetime import date, timedelta
from decimal import Decimal

from django.db.models import Avg, Count, DecimalField, ExpressionWrapper, F, Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from domain.shared.value_objects import Money
from infrastructure.persistence.models import (
    Assembly,
    AssemblyMaterial,
    Material,
    Project,
    ProjectStatusChoices,
    Template,
    TemplateAssembly,
    User,
    UserStatusChoices,
)

ZERO = Decimal('0')


def _month_start(day: date, months_back: int) -> date:
    month_index = day.year * 12 + day.month - 1 - months_back
    return date(month_index // 12, month_index % 12 + 1, 1)


def _money(value) -> Decimal:
    return Money(Decimal(str(value or 0))).quantize()


def _ratio(numerator, denominator) -> float:
    return round(numerator / denominator, 2) if denominator else 0


class DashboardViewSet(viewsets.ViewSet):
    """
    ViewSet for the dashboard.

    Endpoints:
    - GET /dashboard/analytics/ - materials, assemblies, templates,
      projects and users in one payload
    """

    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['get'])
    def analytics(self, request):
        now = timezone.now()
        return Response({
            'materials': self._materials(now),
            'assemblies': self._assemblies(),
            'templates': self._templates(),
            'projects': self._projects(now),
            'users': self._users(now),
            'generated_at': now,
        })

    def _materials(self, now):
        materials = Material.objects.all()
        stats = materials.aggregate(
            total=Count('id'),
            total_value=Coalesce(Sum('price'), ZERO, output_field=DecimalField()),
            with_prices=Count('id', filter=Q(price__gt=0)),
            manufacturers_count=Count('manufacturer', filter=~Q(manufacturer=''), distinct=True),
            unit_types_count=Count('unit', distinct=True),
        )
        return {
            'total': stats['total'],
            'total_value': _money(stats['total_value']),
            'top_expensive': [
                {'id': str(m['id']), 'name': m['name'], 'price': m['price']}
                for m in materials.filter(price__gt=0).order_by('-price').values('id', 'name', 'price')[:5]
            ],
            'recent_count': materials.filter(created_at__gte=now - timedelta(days=30)).count(),
            'with_prices': stats['with_prices'],
            'without_prices': stats['total'] - stats['with_prices'],
            'manufacturers_count': stats['manufacturers_count'],
            'unit_types_count': stats['unit_types_count'],
        }

    def _assemblies(self):
        total = Assembly.objects.count()
        lines = AssemblyMaterial.objects.aggregate(
            count=Count('id'),
            value=Coalesce(
                Sum(ExpressionWrapper(
                    F('material__price') * F('quantity'),
                    output_field=DecimalField(max_digits=30, decimal_places=5)
                )),
                ZERO,
                output_field=DecimalField()
            ),
        )
        top_used = (
            Assembly.objects
            .annotate(usage_count=Count('template_lines'))
            .filter(usage_count__gt=0)
            .order_by('-usage_count', 'name')
            .values('id', 'name', 'usage_count')[:5]
        )
        return {
            'total': total,
            'total_value': _money(lines['value']),
            'avg_complexity': _ratio(lines['count'], total),
            'top_used': [
                {'id': str(a['id']), 'name': a['name'], 'usage_count': a['usage_count']}
                for a in top_used
            ],
        }

    def _templates(self):
        total = Template.objects.count()
        most_popular = (
            Template.objects
            .annotate(project_count=Count('projects'))
            .filter(project_count__gt=0)
            .order_by('-project_count', 'name')
            .values('id', 'name', 'project_count')[:5]
        )
        return {
            'total': total,
            'avg_assemblies': _ratio(TemplateAssembly.objects.count(), total),
            'most_popular': [
                {'id': str(t['id']), 'name': t['name'], 'project_count': t['project_count']}
                for t in most_popular
            ],
        }

    def _projects(self, now):
        projects = Project.objects.all()
        stats = projects.aggregate(
            total=Count('id'),
            total_value=Coalesce(Sum('total_price'), ZERO, output_field=DecimalField()),
            avg_value=Coalesce(Avg('total_price'), ZERO, output_field=DecimalField()),
        )

        counts = dict(projects.order_by().values_list('status').annotate(count=Count('id')))
        status_breakdown = {
            choice.lower(): counts.get(choice, 0)
            for choice in ProjectStatusChoices.values
        }

        today = timezone.localdate(now)
        monthly_growth = []
        for months_back in range(5, -1, -1):
            start = _month_start(today, months_back)
            end = _month_start(today, months_back - 1)
            month = projects.filter(created_at__date__gte=start, created_at__date__lt=end).aggregate(
                count=Count('id'),
                value=Coalesce(Sum('total_price'), ZERO, output_field=DecimalField()),
            )
            monthly_growth.append({
                'month': start.strftime('%b %Y'),
                'count': month['count'],
                'value': _money(month['value']),
            })

        recent = projects.order_by('-created_at').values(
            'id', 'name', 'status', 'total_price', 'created_at'
        )[:5]

        return {
            'total': stats['total'],
            'total_value': _money(stats['total_value']),
            'avg_value': _money(stats['avg_value']),
            'status_breakdown': status_breakdown,
            'monthly_growth': monthly_growth,
            'recent_projects': [{**p, 'id': str(p['id'])} for p in recent],
        }

    def _users(self, now):
        users = User.objects.all()
        return {
            'total': users.count(),
            'active': users.filter(status=UserStatusChoices.ACTIVE).count(),
            'by_role': dict(users.order_by().values_list('role').annotate(count=Count('id'))),
            'recent_logins': users.filter(last_login__gte=now - timedelta(days=7)).count(),
        }
