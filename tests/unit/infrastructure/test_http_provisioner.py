"""Tests for the HTTP user-provisioning client."""

import httpx
import pytest

from src.core.exceptions import DuplicateUserError, ProvisioningError
from src.infrastructure.provisioning.http_provisioner import HTTPUserProvisioner

ENDPOINT = "http://provisioning.test/createTeamMember"


def _provisioner(handler, api_key: str | None = "key-123") -> HTTPUserProvisioner:
    return HTTPUserProvisioner(
        endpoint_url=ENDPOINT,
        api_key=api_key,
        timeout=5.0,
        transport=httpx.MockTransport(handler),
        max_retries=3,
        retry_delay=0,
    )


class TestHTTPUserProvisioner:
    async def test_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"success": True, "userId": "u-1", "message": "ok"})

        result = await _provisioner(handler).create_user({"email": "a@b.c"})

        assert result.user_id == "u-1"
        assert result.message == "ok"
        assert seen["auth"] == "Bearer key-123"
        assert seen["url"] == ENDPOINT

    async def test_no_api_key_no_auth_header(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"success": True, "userId": "u-1"})

        result = await _provisioner(handler, api_key="").create_user({"email": "a@b.c"})
        assert seen["auth"] is None
        assert result.message == "User created"

    async def test_conflict_is_duplicate(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(409, json={"success": False, "message": "exists"})

        with pytest.raises(DuplicateUserError) as exc_info:
            await _provisioner(handler).create_user({"email": "a@b.c"})
        assert exc_info.value.details["email"] == "a@b.c"

    async def test_already_exists_code_is_duplicate(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400, json={"success": False, "code": "auth/email-already-exists"}
            )

        with pytest.raises(DuplicateUserError):
            await _provisioner(handler).create_user({"email": "a@b.c"})

    async def test_server_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="boom")

        with pytest.raises(ProvisioningError) as exc_info:
            await _provisioner(handler).create_user({"email": "a@b.c"})
        assert exc_info.value.details["status_code"] == 500
        assert not isinstance(exc_info.value, DuplicateUserError)

    async def test_unsuccessful_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": False, "message": "weak password"})

        with pytest.raises(ProvisioningError) as exc_info:
            await _provisioner(handler).create_user({"email": "a@b.c"})
        assert "weak password" in exc_info.value.message

    async def test_missing_user_id(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True})

        with pytest.raises(ProvisioningError):
            await _provisioner(handler).create_user({"email": "a@b.c"})

    async def test_unreachable_endpoint(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ProvisioningError) as exc_info:
            await _provisioner(handler).create_user({"email": "a@b.c"})
        assert "unreachable" in exc_info.value.message
        assert exc_info.value.details["status_code"] is None

    async def test_connect_error_is_retried(self):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            if len(attempts) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"success": True, "userId": "u-2"})

        result = await _provisioner(handler).create_user({"email": "a@b.c"})

        assert result.user_id == "u-2"
        assert len(attempts) == 3

    async def test_gives_up_after_max_retries(self):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ProvisioningError):
            await _provisioner(handler).create_user({"email": "a@b.c"})
        assert len(attempts) == 3

    async def test_server_answer_is_not_retried(self):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            return httpx.Response(503, text="busy")

        with pytest.raises(ProvisioningError):
            await _provisioner(handler).create_user({"email": "a@b.c"})
        assert len(attempts) == 1
