"""
Client for the external authentication service.

The service owns credential validation and session issuance. This module
only forwards payloads and interprets the answers:

- ``POST {AUTHSERVER}/auth`` with a :class:`LoginPayload` issues a session.
- ``POST {AUTHSERVER}/check`` with ``{"Auth": token}`` validates one.

An empty body, an error-coded body or a session whose ``Auth`` differs
from the presented token all mean "not authenticated". Transport failures
are logged and raised as :class:`AuthServiceError`; nothing is retried.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from mercass.database.entities.session import AuthResponse, LoginPayload, SessionInfo
from mercass.exceptions import AuthServiceError

logger = logging.getLogger(__name__)


class AuthDelegateClient:
    def __init__(self, http: httpx.AsyncClient, base_url: str):
        self.http = http
        self.base_url = base_url.rstrip("/")

    async def _post(self, endpoint: str, payload: dict) -> Any:
        url = f"{self.base_url}/{endpoint}"
        try:
            response = await self.http.post(url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Auth service call to %s failed: %s", endpoint, e)
            raise AuthServiceError(f"Kimlik doğrulama servisine ulaşılamadı: {e}") from e
        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("Auth service returned invalid JSON from %s", endpoint)
            raise AuthServiceError("Kimlik doğrulama servisi geçersiz yanıt döndü") from e

    async def authenticate(self, payload: LoginPayload) -> AuthResponse:
        """
        Ask the auth service to open a session.

        Returns
        -------
        AuthResponse
            The service body; `is_error` is set when it carries an `ErrCode`.

        Raises
        ------
        AuthServiceError
            On transport failure or an unusable body.
        """
        body = await self._post("auth", payload.model_dump())
        if not isinstance(body, dict):
            raise AuthServiceError("Kimlik doğrulama servisi boş yanıt döndü")
        return AuthResponse.model_validate(body)

    async def check(self, token: str) -> Optional[SessionInfo]:
        """
        Validate a session token.

        Returns
        -------
        SessionInfo | None
            The session when the service confirms `token`, otherwise None.
        """
        if not token:
            return None
        body = await self._post("check", {"Auth": token})
        if not isinstance(body, dict) or body.get("ErrCode"):
            reason = body.get("ErrMessage") if isinstance(body, dict) else "empty response"
            logger.info("Session rejected by auth service", extra={"extra": {"reason": reason}})
            return None
        if body.get("Auth") != token:
            logger.info("Session token mismatch")
            return None
        try:
            return SessionInfo.model_validate(body)
        except ValidationError:
            logger.info("Session body missing required fields")
            return None
