"""
Transport Client
================

Single point of HTTP configuration for the backend API. Wraps one
``httpx.AsyncClient`` configured with the base URL, the JSON headers and
cookie-based credentials, and turns every failure into a ``TransportError``
after logging it.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import httpx

from core.config import Settings

logger = logging.getLogger(__name__)

NETWORK_ERROR = "network"
HTTP_ERROR = "http"


class TransportError(Exception):
    """A request that failed, with the upstream status and body when a response arrived."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 body: Any = None, kind: str = HTTP_ERROR):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.kind = kind

    @property
    def is_network_error(self) -> bool:
        return self.kind == NETWORK_ERROR

    def __str__(self):
        if self.status_code is None:
            return self.message
        return f"{self.message} (status {self.status_code})"


@dataclass(frozen=True)
class TransportConfig:
    base_url: str
    headers: Mapping[str, str] = field(
        default_factory=lambda: {"Content-Type": "application/json"})
    with_credentials: bool = True

    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def from_settings(cls, settings: Settings) -> "TransportConfig":
        return cls(base_url=settings.API_URL.rstrip("/"))


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: Any


def decode_body(response: httpx.Response) -> Any:
    """JSON body when there is one, ``None`` when empty, text otherwise."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class TransportClient:
    def __init__(self, config: TransportConfig,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        logger.debug("API base resolved to -> %s", config.base_url)

        client_options = {
            "base_url": config.base_url,
            "headers": dict(config.headers),
            "follow_redirects": True,
        }
        if transport is not None:
            client_options["transport"] = transport
        self.client = httpx.AsyncClient(**client_options)

    async def request(self, method: str, path: str, json: Any = None,
                      params: Optional[Dict[str, Any]] = None,
                      binary: bool = False) -> TransportResponse:
        """
        Sends one request and returns its status and body.
        With ``binary=True`` the body is returned as raw bytes, never decoded.
        """
        if not self.config.with_credentials:
            # Drop anything the session picked up so far
            self.client.cookies.clear()

        try:
            response = await self.client.request(method, path, json=json, params=params)
        except httpx.RequestError as e:
            error = TransportError(f"{method} {path} failed: {e}", kind=NETWORK_ERROR)
            self._log_failure(error)
            raise error from e

        if response.is_error:
            body = decode_body(response)
            error = TransportError(f"{method} {path} failed",
                                   status_code=response.status_code,
                                   body=body, kind=HTTP_ERROR)
            self._log_failure(error)
            raise error

        body = response.content if binary else decode_body(response)
        return TransportResponse(status_code=response.status_code, body=body)

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None,
                  binary: bool = False) -> TransportResponse:
        return await self.request("GET", path, params=params, binary=binary)

    async def post(self, path: str, json: Any = None,
                   params: Optional[Dict[str, Any]] = None) -> TransportResponse:
        return await self.request("POST", path, json=json, params=params)

    async def put(self, path: str, json: Any = None,
                  params: Optional[Dict[str, Any]] = None) -> TransportResponse:
        return await self.request("PUT", path, json=json, params=params)

    async def delete(self, path: str,
                     params: Optional[Dict[str, Any]] = None) -> TransportResponse:
        return await self.request("DELETE", path, params=params)

    @staticmethod
    def _log_failure(error: TransportError):
        if error.status_code is not None:
            logger.error("API Error: %s %s", error.status_code, error.body)
        else:
            logger.error("API Error: %s", error.message)

    async def close(self):
        """Closes the async client session."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
