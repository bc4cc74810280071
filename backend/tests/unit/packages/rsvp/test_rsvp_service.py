import asyncio

import pytest
from sqlalchemy import func, select

from common.core.exceptions import NotFoundError, ValidationError
from packages.rsvp.models.database.user_event_response import UserEventResponseEntity
from packages.rsvp.models.domain.enums import ResponseStatus
from packages.rsvp.services.rsvp_service import RsvpService, parse_status
from tests.factories.calendar_factory import CalendarFactory


async def _responses(db, event_id):
    result = await db.execute(
        select(func.count())
        .select_from(UserEventResponseEntity)
        .where(UserEventResponseEntity.event_id == event_id)
    )
    return result.scalar_one()


class TestParseStatus:
    def test_accepts_known_values(self):
        assert parse_status("accepted") == ResponseStatus.ACCEPTED
        assert parse_status(ResponseStatus.DECLINED) == ResponseStatus.DECLINED

    def test_rejects_unknown_value(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_status("maybe")

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert "accepted, declined, pending" in exc_info.value.message


class TestRsvpService:
    @pytest.fixture
    async def service(self):
        return RsvpService()

    async def test_state_transitions_keep_one_row(
        self, service, test_db, sample_user, earnings_event
    ):
        pending = await service.respond(sample_user.id, earnings_event.id, "pending")
        accepted = await service.respond(sample_user.id, earnings_event.id, "accepted")
        declined = await service.respond(sample_user.id, earnings_event.id, "declined")

        assert pending.id == accepted.id == declined.id
        assert declined.response_status == ResponseStatus.DECLINED
        assert (
            pending.response_date <= accepted.response_date <= declined.response_date
        )
        assert await _responses(test_db, earnings_event.id) == 1

    async def test_accepting_twice_is_one_row(
        self, service, test_db, sample_user, earnings_event
    ):
        await service.respond(sample_user.id, earnings_event.id, "accepted")
        again = await service.respond(sample_user.id, earnings_event.id, "accepted")

        assert again.response_status == ResponseStatus.ACCEPTED
        assert await _responses(test_db, earnings_event.id) == 1

    async def test_invalid_status_writes_nothing(
        self, service, test_db, sample_user, earnings_event
    ):
        with pytest.raises(ValidationError):
            await service.respond(sample_user.id, earnings_event.id, "tentative")

        assert await _responses(test_db, earnings_event.id) == 0

    async def test_missing_event(self, service, sample_user):
        with pytest.raises(NotFoundError) as exc_info:
            await service.respond(sample_user.id, 424242, "accepted")

        assert exc_info.value.code == "EVENT_NOT_FOUND"

    async def test_inactive_event(self, service, test_db, sample_user, aapl):
        event = await CalendarFactory.create_event(
            test_db, companies=[aapl], is_active=False
        )

        with pytest.raises(NotFoundError):
            await service.respond(sample_user.id, event.id, "accepted")

        assert await _responses(test_db, event.id) == 0

    async def test_concurrent_responses_leave_one_row(
        self, service, test_db, sample_user, earnings_event
    ):
        results = await asyncio.gather(
            service.respond(sample_user.id, earnings_event.id, "accepted"),
            service.respond(sample_user.id, earnings_event.id, "declined"),
        )

        assert results[0].id == results[1].id
        assert await _responses(test_db, earnings_event.id) == 1
        stored = await service.get_response(sample_user.id, earnings_event.id)
        assert stored.response_status in (
            ResponseStatus.ACCEPTED,
            ResponseStatus.DECLINED,
        )

    async def test_get_response(self, service, sample_user, earnings_event):
        assert await service.get_response(sample_user.id, earnings_event.id) is None

        await service.respond(sample_user.id, earnings_event.id, "accepted", notes="Yes")
        response = await service.get_response(sample_user.id, earnings_event.id)

        assert response.notes == "Yes"

    async def test_remove_response(self, service, test_db, sample_user, earnings_event):
        await service.respond(sample_user.id, earnings_event.id, "accepted")

        await service.remove_response(sample_user.id, earnings_event.id)

        assert await _responses(test_db, earnings_event.id) == 0
        with pytest.raises(NotFoundError) as exc_info:
            await service.remove_response(sample_user.id, earnings_event.id)
        assert exc_info.value.code == "RESPONSE_NOT_FOUND"
