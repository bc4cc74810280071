from datetime import datetime

import pytest

from common.core.exceptions import ValidationError
from packages.events.models.domain.event import EventCreateModel
from packages.events.models.domain.host import (
    EventHostCreateModel,
    MultiCorpHost,
    SingleCorpHost,
)
from packages.events.models.domain.location import (
    PhysicalDetails,
    PhysicalLocation,
    VirtualLocation,
)
from packages.events.repositories.event_company_repository import (
    EventCompanyRepository,
)
from packages.events.repositories.event_host_repository import EventHostRepository
from packages.events.repositories.event_repository import EventRepository
from tests.factories.calendar_factory import CalendarFactory
from tests.fixtures import SAMPLE_SNAPSHOT

DEC_1 = datetime(2024, 12, 1)
DEC_31 = datetime(2024, 12, 31, 23, 59, 59)


class TestEventRepository:
    @pytest.fixture
    async def repository(self):
        return EventRepository()

    async def test_get_builds_tagged_location(self, repository, earnings_event):
        event = await repository.get(earnings_event.id)

        assert event.title == "Q4 Earnings Call"
        assert isinstance(event.location, VirtualLocation)
        assert event.location.virtual.platform == "Zoom"
        assert event.location_type.value == "virtual"

    async def test_create_splits_location_into_columns(self, repository, test_db):
        created = await repository.create(
            EventCreateModel(
                title="Investor Day",
                start_date=datetime(2024, 12, 5, 9),
                end_date=datetime(2024, 12, 5, 17),
                event_type="catalyst",
                location=PhysicalLocation(
                    physical=PhysicalDetails(venue="NYSE", city="New York")
                ),
            )
        )

        fetched = await repository.get(created.id)
        assert fetched.event_type.value == "catalyst"
        assert isinstance(fetched.location, PhysicalLocation)
        assert fetched.location.physical.venue == "NYSE"

    async def test_create_model_rejects_inverted_dates(self):
        with pytest.raises(ValueError):
            EventCreateModel(
                title="Backwards",
                start_date=datetime(2024, 12, 5),
                end_date=datetime(2024, 12, 4),
                location=VirtualLocation(),
            )

    async def test_malformed_location_surfaces_as_validation_error(
        self, repository, test_db
    ):
        event = await CalendarFactory.create_event(
            test_db, title="Broken", location_type="underwater"
        )

        with pytest.raises(ValidationError):
            await repository.get(event.id)

    async def test_get_active_skips_inactive(self, repository, test_db, aapl):
        inactive = await CalendarFactory.create_event(
            test_db, companies=[aapl], title="Cancelled", is_active=False
        )

        assert await repository.get_active(inactive.id) is None
        assert (await repository.get(inactive.id)).is_active is False

    async def test_get_active_in_range_uses_overlap(self, repository, test_db):
        spanning = await CalendarFactory.create_event(
            test_db,
            title="Year-end conference",
            start_date=datetime(2024, 11, 30, 9),
            duration=datetime(2024, 12, 2) - datetime(2024, 11, 30, 9),
        )
        inside = await CalendarFactory.create_event(
            test_db, title="Mid month", start_date=datetime(2024, 12, 15)
        )
        await CalendarFactory.create_event(
            test_db, title="January", start_date=datetime(2025, 1, 5)
        )
        await CalendarFactory.create_event(
            test_db, title="Inactive", start_date=datetime(2024, 12, 20), is_active=False
        )

        result = await repository.get_active_in_range(DEC_1, DEC_31)

        assert [e.id for e in result] == [spanning.id, inside.id]

    async def test_get_all_active_ordered_by_start(
        self, repository, earnings_event, banking_event
    ):
        result = await repository.get_all_active()

        assert [e.id for e in result] == [banking_event.id, earnings_event.id]


class TestEventCompanyRepository:
    async def test_companies_keyed_by_event_include_inactive(
        self, test_db, aapl, retired_company
    ):
        event = await CalendarFactory.create_event(
            test_db, companies=[aapl, retired_company]
        )
        lonely = await CalendarFactory.create_event(test_db, title="No companies")

        result = await EventCompanyRepository().get_companies_by_event_ids(
            [event.id, lonely.id]
        )

        assert {c.ticker for c in result[event.id]} == {"AAPL", "OLDS"}
        assert lonely.id not in result

    async def test_empty_input(self):
        assert await EventCompanyRepository().get_companies_by_event_ids([]) == {}


class TestEventHostRepository:
    @pytest.fixture
    async def repository(self):
        return EventHostRepository()

    async def test_hosts_keyed_by_event(self, repository, earnings_event, aapl):
        result = await repository.get_by_event_ids([earnings_event.id])

        (host,) = result[earnings_event.id]
        assert isinstance(host, SingleCorpHost)
        assert host.host_id == aapl.id
        assert host.primary_company_id == aapl.id

    async def test_create_multi_corp_snapshot(self, repository, earnings_event):
        created = await repository.create(
            EventHostCreateModel(
                event_id=earnings_event.id,
                host_type="multi_corp",
                companies_snapshot=SAMPLE_SNAPSHOT,
            )
        )

        assert isinstance(created, MultiCorpHost)
        assert [c.ticker for c in created.companies] == ["MSFT", "NVDA"]

        result = await repository.get_by_event_ids([earnings_event.id])
        assert [h.host_type for h in result[earnings_event.id]] == [
            "single_corp",
            "multi_corp",
        ]

    async def test_malformed_host_surfaces_as_validation_error(
        self, repository, test_db, earnings_event
    ):
        await CalendarFactory.create_host(
            test_db, earnings_event, host_type="single_corp", host_id=None
        )

        with pytest.raises(ValidationError):
            await repository.get_by_event_ids([earnings_event.id])
