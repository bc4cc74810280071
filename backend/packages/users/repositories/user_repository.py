from typing import Dict, Iterable

from common.repositories.base import BaseRepository
from packages.users.models.database.user import UserEntity
from packages.users.models.domain.user import User
from common.core.telemetry import trace_span


class UserRepository(BaseRepository[UserEntity, User]):
    def __init__(self):
        super().__init__(UserEntity, User)

    @trace_span
    async def get_map_by_ids(self, ids: Iterable[int]) -> Dict[int, User]:
        """Users keyed by id; unknown ids are simply absent."""
        users = await self.get_by_ids(ids)
        return {user.id: user for user in users}
