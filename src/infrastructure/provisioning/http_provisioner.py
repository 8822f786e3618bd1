"""
HTTP client for the user-provisioning endpoint.

The endpoint creates the sign-in account and the profile document in one
call and answers ``{"success": true, "userId": ..., "message": ...}``.
Connection failures are retried with exponential backoff; any answer from
the endpoint, error or not, is final.
"""

from typing import Any

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.config import get_logger, get_settings
from src.core.exceptions import DuplicateUserError, ProvisioningError
from src.core.interfaces.user_provisioner import IUserProvisioner, ProvisionedUser

logger = get_logger(__name__)

DUPLICATE_EMAIL_MARKER = "already-exists"

# The request never reached the endpoint, so no account can have been created
RETRYABLE_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)


class HTTPUserProvisioner(IUserProvisioner):
    """Posts new team members to the provisioning endpoint."""

    def __init__(
        self,
        endpoint_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
    ):
        settings = get_settings().provisioning
        self.endpoint_url = endpoint_url or settings.endpoint_url
        self.api_key = api_key if api_key is not None else settings.api_key
        self.timeout = timeout or settings.timeout
        self.max_retries = max_retries or settings.max_retries
        self.retry_delay = retry_delay if retry_delay is not None else settings.retry_delay
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _get_retry_decorator(self) -> Any:
        return retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.retry_delay, max=self.retry_delay * 8),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "provisioning_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            return await client.post(self.endpoint_url, json=payload, headers=self._headers())

    async def create_user(self, payload: dict[str, Any]) -> ProvisionedUser:
        email = payload.get("email", "")
        try:
            response = await self._get_retry_decorator()(self._post)(payload)
        except httpx.HTTPError as e:
            logger.error("provisioning_request_failed", error=str(e))
            raise ProvisioningError(f"endpoint unreachable: {e}") from e

        body = self._parse_body(response)
        error_code = str(body.get("code") or body.get("error") or "")

        if response.status_code == 409 or DUPLICATE_EMAIL_MARKER in error_code:
            logger.warning("provisioning_duplicate_email", email=email)
            raise DuplicateUserError(email)

        if response.status_code >= 400 or not body.get("success", False):
            reason = body.get("message") or response.text[:200] or "unknown error"
            logger.error(
                "provisioning_rejected",
                status_code=response.status_code,
                reason=reason,
            )
            raise ProvisioningError(reason, status_code=response.status_code)

        user_id = body.get("userId")
        if not user_id:
            raise ProvisioningError("response carries no userId", status_code=response.status_code)

        logger.info("user_provisioned", user_id=user_id)
        return ProvisionedUser(
            user_id=user_id,
            message=body.get("message") or "User created",
        )

    @staticmethod
    def _parse_body(response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}


_provisioner: HTTPUserProvisioner | None = None


def get_user_provisioner() -> HTTPUserProvisioner:
    """Get singleton provisioning client."""
    global _provisioner
    if _provisioner is None:
        _provisioner = HTTPUserProvisioner()
    return _provisioner
