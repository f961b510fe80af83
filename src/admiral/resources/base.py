"""Base resource helpers."""

from __future__ import annotations

from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..client import Admiral

Params = Optional[dict[str, Any] | list[tuple[str, Any]]]
Payload = Optional[dict[str, Any] | list[Any]]


class Resource:
    """Shared request helpers for resource classes."""

    def __init__(self, client: "Admiral") -> None:
        self._client = client

    @property
    def _logger(self):
        return self._client._logger

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        json: Optional[dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> Payload:
        return self._client.request(method, path, params=params, json=json, timeout=timeout)

    def _get(self, path: str, *, params: Params = None, timeout: Optional[int] = None) -> Payload:
        return self._request("GET", path, params=params, timeout=timeout)

    def _post(
        self,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> Payload:
        return self._request("POST", path, json=json, timeout=timeout)

    def _patch(
        self,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> Payload:
        return self._request("PATCH", path, json=json, timeout=timeout)

    def _delete(self, path: str, *, timeout: Optional[int] = None) -> Payload:
        return self._request("DELETE", path, timeout=timeout)
