"""
Client ORM Models.

Customers that commission projects.
"""

from django.db import models

from .base import BaseModel


class ClientTypeChoices(models.TextChoices):
    INDIVIDUAL = 'INDIVIDUAL', 'Individual'
    COMPANY = 'COMPANY', 'Company'
    CONTRACTOR = 'CONTRACTOR', 'Contractor'
    GOVERNMENT = 'GOVERNMENT', 'Government'


class ClientCategoryChoices(models.TextChoices):
    RESIDENTIAL = 'RESIDENTIAL', 'Residential'
    COMMERCIAL = 'COMMERCIAL', 'Commercial'
    INDUSTRIAL = 'INDUSTRIAL', 'Industrial'
    INFRASTRUCTURE = 'INFRASTRUCTURE', 'Infrastructure'
    INSTITUTIONAL = 'INSTITUTIONAL', 'Institutional'


class ClientStatusChoices(models.TextChoices):
    ACTIVE = 'ACTIVE', 'Active'
    INACTIVE = 'INACTIVE', 'Inactive'
    BLACKLISTED = 'BLACKLISTED', 'Blacklisted'
    PROSPECT = 'PROSPECT', 'Prospect'


class Client(BaseModel):
    """
    A client (person, company or agency) that orders projects.

    Contact data is mandatory; company data is optional for individuals.
    """

    client_type = models.CharField(
        max_length=20,
        choices=ClientTypeChoices.choices,
        default=ClientTypeChoices.INDIVIDUAL,
        db_index=True,
        verbose_name="Client type"
    )
    category = models.CharField(
        max_length=20,
        choices=ClientCategoryChoices.choices,
        default=ClientCategoryChoices.RESIDENTIAL,
        db_index=True,
        verbose_name="Category"
    )
    status = models.CharField(
        max_length=20,
        choices=ClientStatusChoices.choices,
        default=ClientStatusChoices.ACTIVE,
        db_index=True,
        verbose_name="Status"
    )

    # Company
    company_name = models.CharField(max_length=255, blank=True, verbose_name="Company name")
    company_type = models.CharField(max_length=100, blank=True, verbose_name="Company type")
    business_license = models.CharField(max_length=100, blank=True, verbose_name="Business license")
    tax_id = models.CharField(max_length=100, blank=True, verbose_name="Tax ID")

    # Contact
    contact_person = models.CharField(max_length=200, verbose_name="Contact person")
    contact_title = models.CharField(max_length=100, blank=True, verbose_name="Contact title")
    contact_email = models.EmailField(unique=True, verbose_name="Contact email")
    contact_phone = models.CharField(max_length=30, verbose_name="Contact phone")
    contact_phone2 = models.CharField(max_length=30, blank=True, verbose_name="Second phone")

    # Address
    address = models.TextField(verbose_name="Address")
    city = models.CharField(max_length=100, verbose_name="City")
    province = models.CharField(max_length=100, verbose_name="Province")
    postal_code = models.CharField(max_length=20, blank=True, verbose_name="Postal code")
    country = models.CharField(max_length=100, default='Indonesia', verbose_name="Country")

    # Business
    industry = models.CharField(max_length=100, blank=True, verbose_name="Industry")
    company_size = models.CharField(max_length=50, blank=True, verbose_name="Company size")
    annual_revenue = models.DecimalField(
        max_digits=18, decimal_places=2, null=True, blank=True,
        verbose_name="Annual revenue"
    )
    credit_limit = models.DecimalField(
        max_digits=18, decimal_places=2, null=True, blank=True,
        verbose_name="Credit limit"
    )
    payment_terms = models.CharField(max_length=100, blank=True, verbose_name="Payment terms")
    website = models.URLField(blank=True, verbose_name="Website")
    special_notes = models.TextField(blank=True, verbose_name="Notes")

    class Meta:
        db_table = 'clients'
        verbose_name = 'Client'
        verbose_name_plural = 'Clients'
        ordering = ['-created_at']

    def __str__(self):
        return self.company_name or self.contact_person
