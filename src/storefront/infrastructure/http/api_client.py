"""Thin JSON client for the storefront REST backend.

Every failure (connection error, timeout, non-2xx status) is raised as
ServiceError carrying the server's message when it sent one, so the
application layer only ever has to catch domain exceptions.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import requests

from storefront.domain.exceptions import ServiceError, UnauthorizedError

logger = logging.getLogger(__name__)


class ApiClient:

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
        on_unauthorized: Callable[[], None] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._session = session or requests.Session()
        self._on_unauthorized = on_unauthorized

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: dict[str, Any]) -> Any:
        return self.request("POST", path, json=body)

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise ServiceError(f"Could not reach the server: {exc}") from exc

        if response.status_code == 401:
            if self._on_unauthorized is not None:
                self._on_unauthorized()
            raise UnauthorizedError("Your session has expired, please log in again", 401)
        if not 200 <= response.status_code < 300:
            raise ServiceError(_error_message(response), response.status_code)

        return _decode(response)


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_message(response: requests.Response) -> str:
    """Prefer ``{"message": ...}``, then a plain string body."""
    body = _decode(response)
    if isinstance(body, dict):
        message = body.get("message")
        return str(message) if message else ""
    if isinstance(body, str):
        return body.strip()
    return ""
