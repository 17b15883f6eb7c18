from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Collection, Protocol, TypeVar

import httpx
import structlog
from pydantic import ValidationError

from clouding.core.errors import (
    APIError,
    ErrorEnvelopeDecodeError,
    ResponseDecodeError,
    TransportError,
)
from clouding.domain.models import CloudingModel, ErrorEnvelope

logger = structlog.get_logger()

DEFAULT_ENDPOINT = "https://api.clouding.io"
DEFAULT_API_VERSION = "v1"
DEFAULT_USER_AGENT = "clouding-python/0.1.0"

M = TypeVar("M", bound=CloudingModel)


@dataclass(frozen=True)
class TransportResponse:
    """Raw outcome of one HTTP exchange."""

    status_code: int
    content: bytes = b""


class Transport(Protocol):
    """Capability the resource clients need from the HTTP layer."""

    async def send(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> TransportResponse:
        ...


class HTTPTransport:
    """Signed JSON transport sharing one connection pool across calls."""

    def __init__(
        self,
        token: str,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._token = token
        self._base_url = f"{endpoint.rstrip('/')}/{api_version.strip('/')}"
        self._timeout = timeout
        self._user_agent = user_agent
        self._client = client

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-API-KEY": self._token,
            "User-Agent": self._user_agent,
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HTTPTransport":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def send(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> TransportResponse:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = await self._get_client().request(
                method,
                url,
                json=body,
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            logger.warning("http_transport_error", method=method, url=url, error=str(exc))
            raise TransportError(
                f"{method} {url} failed: {exc}",
                details={"method": method, "url": url},
            ) from exc

        logger.debug("http_exchange", method=method, url=url, status=response.status_code)
        return TransportResponse(status_code=response.status_code, content=response.content)


class ResourceClient:
    """One exchange per operation, with fixed success statuses."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def _exchange(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        expected: Collection[int],
        body: dict[str, Any] | None = None,
    ) -> TransportResponse:
        response = await self._transport.send(method, path, body)
        if response.status_code not in expected:
            raise self._error_from(response, operation)
        return response

    @staticmethod
    def _error_from(response: TransportResponse, operation: str) -> Exception:
        try:
            envelope = ErrorEnvelope.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning(
                "error_envelope_undecodable",
                operation=operation,
                status=response.status_code,
            )
            error = ErrorEnvelopeDecodeError(operation, response.status_code, str(exc))
            error.__cause__ = exc
            return error

        logger.warning(
            "clouding_api_error",
            operation=operation,
            status=response.status_code,
            title=envelope.title,
            trace_id=envelope.trace_id,
        )
        return APIError(operation, response.status_code, envelope)

    @staticmethod
    def _decode(response: TransportResponse, model: type[M], operation: str) -> M:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            raise ResponseDecodeError(
                operation,
                str(exc),
                status_code=response.status_code,
            ) from exc
