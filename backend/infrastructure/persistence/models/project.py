"""
Project ORM Models.

Projects, their timeline, milestones and tasks.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models

from domain.project.scheduling import default_working_days

from .base import BaseModel, BaseModelWithHistory
from .bom import Template
from .clients import Client


def default_quality_check_doc():
    return settings.QUICKBOM['DEFAULT_QUALITY_CHECK_DOC']


class ProjectStatusChoices(models.TextChoices):
    """Project status choices."""

    PLANNING = 'PLANNING', 'Planning'
    APPROVED = 'APPROVED', 'Approved'
    IN_PROGRESS = 'IN_PROGRESS', 'In progress'
    ON_HOLD = 'ON_HOLD', 'On hold'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'
    DELAYED = 'DELAYED', 'Delayed'


class ProjectTypeChoices(models.TextChoices):
    RESIDENTIAL = 'Residential', 'Residential'
    COMMERCIAL = 'Commercial', 'Commercial'
    INDUSTRIAL = 'Industrial', 'Industrial'
    INFRASTRUCTURE = 'Infrastructure', 'Infrastructure'
    RENOVATION = 'Renovation', 'Renovation'


class PriorityChoices(models.TextChoices):
    LOW = 'LOW', 'Low'
    MEDIUM = 'MEDIUM', 'Medium'
    HIGH = 'HIGH', 'High'
    CRITICAL = 'CRITICAL', 'Critical'


class TimelineStatusChoices(models.TextChoices):
    PLANNING = 'PLANNING', 'Planning'
    ACTIVE = 'ACTIVE', 'Active'
    ON_HOLD = 'ON_HOLD', 'On hold'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class MilestoneStatusChoices(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    IN_PROGRESS = 'IN_PROGRESS', 'In progress'
    COMPLETED = 'COMPLETED', 'Completed'
    DELAYED = 'DELAYED', 'Delayed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class TaskStatusChoices(models.TextChoices):
    NOT_STARTED = 'NOT_STARTED', 'Not started'
    IN_PROGRESS = 'IN_PROGRESS', 'In progress'
    COMPLETED = 'COMPLETED', 'Completed'
    ON_HOLD = 'ON_HOLD', 'On hold'
    CANCELLED = 'CANCELLED', 'Cancelled'
    DELAYED = 'DELAYED', 'Delayed'


class TaskTypeChoices(models.TextChoices):
    CONSTRUCTION = 'CONSTRUCTION', 'Construction'
    ELECTRICAL = 'ELECTRICAL', 'Electrical'
    PLUMBING = 'PLUMBING', 'Plumbing'
    MECHANICAL = 'MECHANICAL', 'Mechanical'
    DESIGN = 'DESIGN', 'Design'
    PERMIT = 'PERMIT', 'Permit'
    SUPERVISION = 'SUPERVISION', 'Supervision'
    OTHER = 'OTHER', 'Other'


PERCENT_VALIDATORS = [
    MinValueValidator(Decimal('0')),
    MaxValueValidator(Decimal('100')),
]


class Project(BaseModelWithHistory):
    """
    A client-facing unit of work.

    total_price is the roll-up of from_template and is recomputed on
    every save through the API.
    """

    name = models.CharField(
        max_length=255,
        verbose_name="Name"
    )
    description = models.TextField(
        blank=True,
        verbose_name="Description"
    )
    client = models.ForeignKey(
        Client,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='projects',
        verbose_name="Client"
    )
    project_type = models.CharField(
        max_length=20,
        choices=ProjectTypeChoices.choices,
        blank=True,
        verbose_name="Project type"
    )
    location = models.CharField(
        max_length=255,
        blank=True,
        verbose_name="Location"
    )
    area = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name="Area (m2)"
    )
    budget = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name="Budget"
    )

    # Dates
    start_date = models.DateField(null=True, blank=True, verbose_name="Planned start")
    end_date = models.DateField(null=True, blank=True, verbose_name="Planned end")
    actual_start = models.DateField(null=True, blank=True, verbose_name="Actual start")
    actual_end = models.DateField(null=True, blank=True, verbose_name="Actual end")

    status = models.CharField(
        max_length=20,
        choices=ProjectStatusChoices.choices,
        default=ProjectStatusChoices.PLANNING,
        db_index=True,
        verbose_name="Status"
    )
    progress = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0'),
        validators=PERCENT_VALIDATORS,
        verbose_name="Progress, %"
    )
    priority = models.CharField(
        max_length=10,
        choices=PriorityChoices.choices,
        default=PriorityChoices.MEDIUM,
        verbose_name="Priority"
    )

    # Documents
    schematic_docs = models.CharField(
        max_length=500,
        blank=True,
        verbose_name="Schematic document"
    )
    quality_check_docs = models.CharField(
        max_length=500,
        blank=True,
        default=default_quality_check_doc,
        verbose_name="Quality check document"
    )

    from_template = models.ForeignKey(
        Template,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='projects',
        verbose_name="Template"
    )
    total_price = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name="Total price"
    )
    assigned_users = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Assigned user ids"
    )

    class Meta:
        db_table = 'projects'
        verbose_name = 'Project'
        verbose_name_plural = 'Projects'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'end_date'], name='projects_status_end_idx'),
        ]

    def __str__(self):
        return self.name


class ProjectTimeline(BaseModel):
    """Schedule of a project. One per project."""

    project = models.OneToOneField(
        Project,
        on_delete=models.CASCADE,
        related_name='timeline',
        verbose_name="Project"
    )
    start_date = models.DateTimeField(verbose_name="Start")
    end_date = models.DateTimeField(null=True, blank=True, verbose_name="End")
    duration = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name="Duration, days"
    )
    working_days = models.JSONField(
        default=default_working_days,
        verbose_name="Working days"
    )
    holidays = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Holidays"
    )
    progress = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0'),
        validators=PERCENT_VALIDATORS,
        verbose_name="Progress, %"
    )
    status = models.CharField(
        max_length=20,
        choices=TimelineStatusChoices.choices,
        default=TimelineStatusChoices.PLANNING,
        verbose_name="Status"
    )

    class Meta:
        db_table = 'project_timelines'
        verbose_name = 'Project timeline'
        verbose_name_plural = 'Project timelines'

    def __str__(self):
        return f"Timeline of {self.project}"


class Milestone(BaseModel):
    """Checkpoint on a timeline."""

    timeline = models.ForeignKey(
        ProjectTimeline,
        on_delete=models.CASCADE,
        related_name='milestones',
        verbose_name="Timeline"
    )
    name = models.CharField(max_length=255, verbose_name="Name")
    description = models.TextField(blank=True, verbose_name="Description")
    due_date = models.DateTimeField(verbose_name="Due date")
    depends_on = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Depends on milestone ids"
    )
    status = models.CharField(
        max_length=20,
        choices=MilestoneStatusChoices.choices,
        default=MilestoneStatusChoices.PENDING,
        verbose_name="Status"
    )
    progress = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0'),
        validators=PERCENT_VALIDATORS,
        verbose_name="Progress, %"
    )

    class Meta:
        db_table = 'project_milestones'
        verbose_name = 'Milestone'
        verbose_name_plural = 'Milestones'
        ordering = ['due_date']

    def __str__(self):
        return self.name


class TimelineTask(BaseModel):
    """Unit of scheduled work on a timeline."""

    timeline = models.ForeignKey(
        ProjectTimeline,
        on_delete=models.CASCADE,
        related_name='tasks',
        verbose_name="Timeline"
    )
    milestone = models.ForeignKey(
        Milestone,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tasks',
        verbose_name="Milestone"
    )
    depends_on = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='dependent_tasks',
        verbose_name="Depends on task"
    )
    name = models.CharField(max_length=255, verbose_name="Name")
    description = models.TextField(blank=True, verbose_name="Description")
    task_type = models.CharField(
        max_length=20,
        choices=TaskTypeChoices.choices,
        default=TaskTypeChoices.CONSTRUCTION,
        verbose_name="Task type"
    )

    planned_start = models.DateTimeField(verbose_name="Planned start")
    planned_end = models.DateTimeField(verbose_name="Planned end")
    actual_start = models.DateTimeField(null=True, blank=True, verbose_name="Actual start")
    actual_end = models.DateTimeField(null=True, blank=True, verbose_name="Actual end")
    duration = models.PositiveIntegerField(verbose_name="Duration, days")

    progress = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0'),
        validators=PERCENT_VALIDATORS,
        verbose_name="Progress, %"
    )
    status = models.CharField(
        max_length=20,
        choices=TaskStatusChoices.choices,
        default=TaskStatusChoices.NOT_STARTED,
        db_index=True,
        verbose_name="Status"
    )
    priority = models.CharField(
        max_length=10,
        choices=PriorityChoices.choices,
        default=PriorityChoices.MEDIUM,
        verbose_name="Priority"
    )

    assigned_users = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name='assigned_tasks',
        verbose_name="Assigned users"
    )
    resources = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Resources"
    )
    estimated_cost = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name="Estimated cost"
    )
    actual_cost = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name="Actual cost"
    )

    class Meta:
        db_table = 'project_tasks'
        verbose_name = 'Task'
        verbose_name_plural = 'Tasks'
        ordering = ['planned_start']

    def __str__(self):
        return self.name
