from common.repositories.base import BaseRepository
from packages.companies.models.database.organization import OrganizationEntity
from packages.companies.models.domain.organization import Organization


class OrganizationRepository(BaseRepository[OrganizationEntity, Organization]):
    def __init__(self):
        super().__init__(OrganizationEntity, Organization)
