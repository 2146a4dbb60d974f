"""
Account API Client
HTTP access to the account endpoints used by the settings form.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

DEFAULT_TIMEOUT = 20


class AccountApiError(Exception):
    """Non-success response from the account API."""

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: Optional[List[Dict[str, str]]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


def _raise_for_error(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    message = body.get("message") or response.reason_phrase or "Request failed"
    raise AccountApiError(response.status_code, message, body.get("errors"))


class AccountApiClient:
    """Thin async wrapper over ``/api/account``.

    ``transport`` is forwarded to :class:`httpx.AsyncClient`, which lets the
    form run against an in-process ASGI app.
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url, transport=transport, timeout=timeout
        )

    async def __aenter__(self) -> "AccountApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_account(self) -> Dict[str, Any]:
        r = await self._client.get("/api/account")
        _raise_for_error(r)
        return r.json()

    async def update_account(self, data: Dict[str, str]) -> Dict[str, Any]:
        r = await self._client.put("/api/account", json=data)
        _raise_for_error(r)
        return r.json()

    async def update_avatar(
        self, data: bytes, content_type: str, filename: str = "avatar.png"
    ) -> Dict[str, Optional[str]]:
        r = await self._client.post(
            "/api/account/avatar",
            files={"avatar": (filename, data, content_type)},
        )
        _raise_for_error(r)
        return r.json()

    async def is_username_unique(self, username: str) -> bool:
        r = await self._client.get("/api/account/username", params={"value": username})
        _raise_for_error(r)
        return bool(r.json()["unique"])


__all__ = ["AccountApiClient", "AccountApiError"]
