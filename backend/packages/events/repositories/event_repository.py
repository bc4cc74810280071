from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select

from common.core.exceptions import ValidationError
from common.core.telemetry import trace_span
from common.repositories.base import BaseRepository
from packages.events.models.database.event import EventEntity
from packages.events.models.domain.event import Event, EventCreateModel
from packages.events.models.domain.location import (
    location_from_columns,
    location_to_columns,
)


class EventRepository(BaseRepository[EventEntity, Event]):
    def __init__(self):
        super().__init__(EventEntity, Event)

    def _entity_to_domain(self, entity: EventEntity) -> Event:
        try:
            location = location_from_columns(
                entity.location_type,
                entity.location_details,
                entity.virtual_details,
            )
            return Event(
                id=entity.id,
                title=entity.title,
                description=entity.description,
                start_date=entity.start_date,
                end_date=entity.end_date,
                event_type=entity.event_type,
                location=location,
                weather_location=entity.weather_location,
                is_active=entity.is_active,
                created_at=entity.created_at,
                updated_at=entity.updated_at,
            )
        except PydanticValidationError as e:
            raise ValidationError(
                f"Event {entity.id} has a malformed payload: {e.errors()[0]['msg']}"
            ) from e

    @trace_span
    async def create(self, create_model: EventCreateModel) -> Event:
        data = create_model.model_dump(exclude={"location"})
        data.update(location_to_columns(create_model.location))
        db_event = EventEntity(**data)
        async with self._get_session() as session:
            session.add(db_event)
            await session.flush()
            await session.refresh(db_event)
            return self._entity_to_domain(db_event)

    @trace_span
    async def get_active(self, event_id: int) -> Optional[Event]:
        async with self._get_session() as session:
            result = await session.execute(
                select(EventEntity).where(
                    EventEntity.id == event_id,
                    EventEntity.is_active == True,  # noqa
                )
            )
            db_event = result.scalar_one_or_none()
            return self._entity_to_domain(db_event) if db_event else None

    @trace_span
    async def get_active_in_range(
        self, start: datetime, end: datetime
    ) -> List[Event]:
        """Active events overlapping [start, end], ordered by start date."""
        async with self._get_session() as session:
            result = await session.execute(
                select(EventEntity)
                .where(
                    EventEntity.is_active == True,  # noqa
                    EventEntity.start_date <= end,
                    EventEntity.end_date >= start,
                )
                .order_by(EventEntity.start_date, EventEntity.id)
            )
            return self._entities_to_domain(result.scalars().all())

    @trace_span
    async def get_all_active(self) -> List[Event]:
        async with self._get_session() as session:
            result = await session.execute(
                select(EventEntity)
                .where(EventEntity.is_active == True)  # noqa
                .order_by(EventEntity.start_date, EventEntity.id)
            )
            return self._entities_to_domain(result.scalars().all())
