"""Core Admiral client with a raw-request escape hatch."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import requests

from .errors import TransportFailure
from .resources.placement_zones import PlacementZones
from .resources.tags import Tags
from .tools import placement_zones as placement_zone_tools

DEFAULT_HOST = os.environ.get("ADMIRAL_HOST", "localhost")
ADMIRAL_PORT = int(os.environ.get("ADMIRAL_PORT", "8282"))
DEFAULT_SCHEME = os.environ.get("ADMIRAL_SCHEME", "http")
AUTH_TOKEN_HEADER = "x-xenon-auth-token"


class Admiral:
    """Resource-grouped client for the Admiral document store API."""

    placement_zones: PlacementZones
    tags: Tags
    tools: Any

    def __init__(
        self,
        *,
        host: Optional[str] = None,
        port: Optional[int | str] = None,
        scheme: Optional[str] = None,
        token: Optional[str] = None,
        default_timeout: int = 20,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Create an Admiral client bound to an API instance.

        Parameters
        ----------
        host
            Hostname or IP for the Admiral API.
        port
            API port number.
        scheme
            URL scheme, ``http`` or ``https``.
        token
            Auth token sent with every request. Defaults to ``ADMIRAL_TOKEN``.
        default_timeout
            Default request timeout in seconds.
        session
            Optional requests session to reuse connections.
        """
        self.host = host or DEFAULT_HOST
        self.port = int(port or ADMIRAL_PORT)
        self.scheme = scheme or DEFAULT_SCHEME
        self.token = token if token is not None else os.environ.get("ADMIRAL_TOKEN")
        self.default_timeout = default_timeout
        self._logger = logging.getLogger(__name__)
        self._session = session

        self.tags: Tags = Tags(self)
        self.placement_zones: PlacementZones = PlacementZones(self, tags=self.tags)
        self.tools = type("Tools", (), {})()
        self.tools.placement_zones = placement_zone_tools

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any] | list[tuple[str, Any]]] = None,
        json: Optional[dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> Optional[dict[str, Any] | list[Any]]:
        """Send a raw request to the Admiral API.

        Parameters
        ----------
        method
            HTTP method (GET, POST, PATCH, DELETE).
        path
            Document or factory path, e.g. ``/resources/pools/abc``.
        params
            Query parameters for the request.
        json
            JSON payload for the request.
        timeout
            Timeout in seconds for this request.

        Returns
        -------
        dict | list | None
            Parsed JSON payload, or None if the response is empty.

        Raises
        ------
        TransportFailure
            If the request fails, the server answers with an error status, or the
            body is not JSON.
        """
        if not path.startswith("/"):
            path = "/" + path
        url = f"{self.base_url}{path}"

        headers = {AUTH_TOKEN_HEADER: self.token} if self.token else None
        requester = self._session or requests
        self._logger.debug("%s %s", method, url)
        try:
            response = requester.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=timeout or self.default_timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            # Extract error message from response body if available
            error_msg = str(exc)
            server_message = None
            try:
                error_body = response.json()
                if isinstance(error_body, dict):
                    # Admiral reports failures in `message`; proxies use the others
                    for field in ("message", "error", "detail"):
                        if field in error_body:
                            server_message = str(error_body[field])
                            error_msg = f"{exc}\nServer message: {server_message}"
                            break
            except (ValueError, AttributeError, KeyError):
                pass  # Response wasn't JSON or didn't have expected fields
            self._logger.warning("Request failed for %s %s: %s", method, url, error_msg)
            raise TransportFailure(
                error_msg,
                status_code=getattr(exc.response, "status_code", None),
                server_message=server_message,
            ) from exc
        except requests.RequestException as exc:
            self._logger.warning("Request failed for %s %s: %s", method, url, exc)
            raise TransportFailure(f"{method} {url} failed: {exc}") from exc

        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError as exc:
            self._logger.warning("Response from %s %s was not JSON", method, url)
            raise TransportFailure(f"{method} {url} returned a non-JSON body") from exc
        if isinstance(payload, (dict, list)):
            return payload
        return None
