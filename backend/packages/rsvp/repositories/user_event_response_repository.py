from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite

from common.core.telemetry import trace_span
from common.db.base import utcnow
from common.repositories.base import BaseRepository
from packages.rsvp.models.database.user_event_response import UserEventResponseEntity
from packages.rsvp.models.domain.enums import ResponseStatus
from packages.rsvp.models.domain.response import UserEventResponse

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class UserEventResponseRepository(
    BaseRepository[UserEventResponseEntity, UserEventResponse]
):
    def __init__(self):
        super().__init__(UserEventResponseEntity, UserEventResponse)

    @trace_span
    async def upsert(
        self,
        user_id: int,
        event_id: int,
        status: ResponseStatus,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> UserEventResponse:
        """
        Insert or update the (user, event) row in one statement.

        Concurrent callers serialize on the unique key; the last write wins.
        Existing notes are kept when ``notes`` is None.
        """
        now = now or utcnow()
        async with self._get_session() as session:
            insert = _INSERTS[session.bind.dialect.name]
            stmt = insert(UserEventResponseEntity).values(
                user_id=user_id,
                event_id=event_id,
                response_status=status.value,
                response_date=now,
                notes=notes,
                created_at=now,
                updated_at=now,
            )
            changes = {
                "response_status": stmt.excluded.response_status,
                "response_date": stmt.excluded.response_date,
                "updated_at": stmt.excluded.updated_at,
            }
            if notes is not None:
                changes["notes"] = stmt.excluded.notes
            await session.execute(
                stmt.on_conflict_do_update(
                    index_elements=["user_id", "event_id"], set_=changes
                )
            )

            result = await session.execute(
                select(UserEventResponseEntity)
                .where(
                    UserEventResponseEntity.user_id == user_id,
                    UserEventResponseEntity.event_id == event_id,
                )
                .execution_options(populate_existing=True)
            )
            return self._entity_to_domain(result.scalar_one())

    @trace_span
    async def get_for_user_event(
        self, user_id: int, event_id: int
    ) -> Optional[UserEventResponse]:
        async with self._get_session() as session:
            result = await session.execute(
                select(UserEventResponseEntity).where(
                    UserEventResponseEntity.user_id == user_id,
                    UserEventResponseEntity.event_id == event_id,
                )
            )
            db_response = result.scalar_one_or_none()
            return self._entity_to_domain(db_response) if db_response else None

    @trace_span
    async def get_by_event_ids_for_user(
        self, user_id: int, event_ids: Iterable[int]
    ) -> Dict[int, UserEventResponse]:
        """The user's own response per event; events without one are absent."""
        event_ids = list(set(event_ids))
        if not event_ids:
            return {}

        async with self._get_session() as session:
            result = await session.execute(
                select(UserEventResponseEntity).where(
                    UserEventResponseEntity.user_id == user_id,
                    UserEventResponseEntity.event_id.in_(event_ids),
                )
            )
            return {
                db_response.event_id: self._entity_to_domain(db_response)
                for db_response in result.scalars().all()
            }

    @trace_span
    async def get_by_event_ids(
        self,
        event_ids: Iterable[int],
        status: Optional[ResponseStatus] = None,
    ) -> Dict[int, List[UserEventResponse]]:
        """Responses from every user keyed by event id, oldest answer first."""
        event_ids = list(set(event_ids))
        if not event_ids:
            return {}

        query = select(UserEventResponseEntity).where(
            UserEventResponseEntity.event_id.in_(event_ids)
        )
        if status is not None:
            query = query.where(UserEventResponseEntity.response_status == status.value)

        async with self._get_session() as session:
            result = await session.execute(
                query.order_by(
                    UserEventResponseEntity.response_date, UserEventResponseEntity.id
                )
            )
            responses: Dict[int, List[UserEventResponse]] = {}
            for db_response in result.scalars().all():
                responses.setdefault(db_response.event_id, []).append(
                    self._entity_to_domain(db_response)
                )
            return responses

    @trace_span
    async def delete_for_user_event(self, user_id: int, event_id: int) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                delete(UserEventResponseEntity).where(
                    UserEventResponseEntity.user_id == user_id,
                    UserEventResponseEntity.event_id == event_id,
                )
            )
            await session.flush()
            return result.rowcount > 0
