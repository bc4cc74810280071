import pytest
from fastapi import HTTPException

from common.core.config import settings
from packages.auth.dependencies import get_current_user, get_service_account


class TestGetCurrentUser:
    async def test_valid_header(self):
        user = await get_current_user(x_user_id="42")

        assert user.user_id == 42

    async def test_missing_header(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(x_user_id=None)

        assert exc_info.value.status_code == 401

    @pytest.mark.parametrize("value", ["abc", "0", "-3", "1.5"])
    async def test_invalid_header(self, value):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(x_user_id=value)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "X-User-Id header invalid"


class TestGetServiceAccount:
    async def test_valid_key(self, monkeypatch):
        monkeypatch.setattr(settings, "service_api_key", "sa_secret")

        account = await get_service_account(x_api_key="sa_secret")

        assert account.name == settings.service_account_name

    async def test_missing_key(self, monkeypatch):
        monkeypatch.setattr(settings, "service_api_key", "sa_secret")

        with pytest.raises(HTTPException) as exc_info:
            await get_service_account(x_api_key=None)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "API key required"

    async def test_wrong_key(self, monkeypatch):
        monkeypatch.setattr(settings, "service_api_key", "sa_secret")

        with pytest.raises(HTTPException) as exc_info:
            await get_service_account(x_api_key="sa_guess")

        assert exc_info.value.detail == "Invalid API key"

    async def test_unconfigured_rejects_everything(self, monkeypatch):
        monkeypatch.setattr(settings, "service_api_key", None)

        with pytest.raises(HTTPException) as exc_info:
            await get_service_account(x_api_key="anything")

        assert exc_info.value.status_code == 401
