import pytest
from pydantic import ValidationError as PydanticValidationError

from packages.events.models.domain.host import (
    EventHostCreateModel,
    MultiCorpHost,
    NonCompanyHost,
    SingleCorpHost,
    event_host_adapter,
)
from tests.fixtures import SAMPLE_SNAPSHOT


class TestEventHostUnion:
    def test_discriminates_on_host_type(self):
        single = event_host_adapter.validate_python(
            {"id": 1, "event_id": 1, "host_type": "single_corp", "host_id": 5}
        )
        org = event_host_adapter.validate_python(
            {"id": 2, "event_id": 1, "host_type": "non_company", "host_id": 9}
        )

        assert isinstance(single, SingleCorpHost)
        assert isinstance(org, NonCompanyHost)

    def test_unknown_host_type_rejected(self):
        with pytest.raises(PydanticValidationError):
            event_host_adapter.validate_python(
                {"id": 1, "event_id": 1, "host_type": "consortium", "host_id": 5}
            )

    def test_single_corp_requires_host_id(self):
        with pytest.raises(PydanticValidationError):
            event_host_adapter.validate_python(
                {"id": 1, "event_id": 1, "host_type": "single_corp"}
            )


class TestMultiCorpHost:
    def test_primary_snapshot_prefers_flagged_entry(self):
        host = MultiCorpHost(id=1, event_id=1, companies=SAMPLE_SNAPSHOT)

        assert host.primary_snapshot().ticker == "NVDA"

    def test_primary_snapshot_falls_back_to_first(self):
        snapshot = [dict(entry, is_primary=False) for entry in SAMPLE_SNAPSHOT]
        host = MultiCorpHost(id=1, event_id=1, companies=snapshot)

        assert host.primary_snapshot().ticker == "MSFT"

    def test_primary_snapshot_empty(self):
        assert MultiCorpHost(id=1, event_id=1).primary_snapshot() is None


class TestEventHostCreateModel:
    def test_multi_corp_without_host_id(self):
        model = EventHostCreateModel(
            event_id=1, host_type="multi_corp", companies_snapshot=SAMPLE_SNAPSHOT
        )
        assert model.host_id is None

    def test_non_company_requires_host_id(self):
        with pytest.raises(PydanticValidationError):
            EventHostCreateModel(event_id=1, host_type="non_company")
