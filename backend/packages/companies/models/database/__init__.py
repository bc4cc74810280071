"""Database models for companies and organizations."""

from packages.companies.models.database.company import CompanyEntity
from packages.companies.models.database.organization import OrganizationEntity

__all__ = [
    "CompanyEntity",
    "OrganizationEntity",
]
