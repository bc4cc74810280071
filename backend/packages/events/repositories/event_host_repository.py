from collections import defaultdict
from typing import Dict, Iterable, List

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, select

from common.core.exceptions import ValidationError
from common.core.telemetry import trace_span
from common.repositories.base import BaseRepository
from packages.events.models.database.event import EventHostEntity
from packages.events.models.domain.host import (
    EventHost,
    EventHostCreateModel,
    event_host_adapter,
)


class EventHostRepository(BaseRepository[EventHostEntity, EventHost]):
    def __init__(self):
        super().__init__(EventHostEntity, EventHost)

    def _entity_to_domain(self, entity: EventHostEntity) -> EventHost:
        try:
            return event_host_adapter.validate_python(
                {
                    "id": entity.id,
                    "event_id": entity.event_id,
                    "host_type": entity.host_type,
                    "host_id": entity.host_id,
                    "primary_company_id": entity.primary_company_id,
                    "companies": entity.companies_snapshot or [],
                }
            )
        except PydanticValidationError as e:
            raise ValidationError(
                f"Host {entity.id} of event {entity.event_id} is malformed: "
                f"{e.errors()[0]['msg']}"
            ) from e

    @trace_span
    async def create(self, create_model: EventHostCreateModel) -> EventHost:
        data = create_model.model_dump(exclude_none=True)
        db_host = EventHostEntity(**data)
        async with self._get_session() as session:
            session.add(db_host)
            await session.flush()
            await session.refresh(db_host)
            return self._entity_to_domain(db_host)

    @trace_span
    async def get_by_event_ids(
        self, event_ids: Iterable[int]
    ) -> Dict[int, List[EventHost]]:
        """Host rows keyed by event id, in insertion order."""
        event_ids = list(set(event_ids))
        if not event_ids:
            return {}

        async with self._get_session() as session:
            result = await session.execute(
                select(EventHostEntity)
                .where(EventHostEntity.event_id.in_(event_ids))
                .order_by(EventHostEntity.event_id, EventHostEntity.id)
            )
            hosts: Dict[int, List[EventHost]] = defaultdict(list)
            for db_host in result.scalars().all():
                hosts[db_host.event_id].append(self._entity_to_domain(db_host))
            return dict(hosts)

    @trace_span
    async def delete_for_event(self, event_id: int) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                delete(EventHostEntity).where(EventHostEntity.event_id == event_id)
            )
            await session.flush()
            return result.rowcount
