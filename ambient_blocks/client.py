"""HTTP client for the Ambient data logging service."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import aiohttp

from . import constants

LOGGER = logging.getLogger(__name__)

_BODY_PREVIEW_LIMIT = 200


class AmbientClientError(RuntimeError):
    """Base class for failures while talking to Ambient."""

    def __init__(
        self, message: str, *, status: Optional[int] = None, body: str = ""
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class AmbientApiError(AmbientClientError):
    """Raised when Ambient answers with a non-success HTTP status."""

    def __init__(self, status: int, body: str) -> None:
        preview = body.strip()
        if len(preview) > _BODY_PREVIEW_LIMIT:
            preview = preview[:_BODY_PREVIEW_LIMIT] + "..."
        message = f"Ambient returned HTTP {status}"
        if preview:
            message = f"{message}: {preview}"
        super().__init__(message, status=status, body=body)


class AmbientConnectionError(AmbientClientError):
    """Raised when the request never produced an HTTP response."""


@dataclass(slots=True)
class SendResult:
    """Outcome of a single transmission to Ambient."""

    channel_id: str
    payload: Dict[str, float] = field(default_factory=dict)
    status: Optional[int] = None
    body: str = ""
    error: Optional[AmbientClientError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AmbientClient:
    """Sends slot values to one Ambient channel.

    The client is a thin wrapper around ``POST /api/v2/channels/{id}/data``.
    A shared :class:`aiohttp.ClientSession` may be supplied; otherwise a
    short-lived session is opened for each request.
    """

    def __init__(
        self,
        channel_id: str,
        write_key: str,
        *,
        base_url: str = constants.DEFAULT_AMBIENT_BASE_URL,
        timeout: float = constants.DEFAULT_TIMEOUT_SECONDS,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.channel_id = channel_id
        self.write_key = write_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session

    @property
    def url(self) -> str:
        channel = quote(str(self.channel_id), safe="")
        return f"{self._base_url}/api/v2/channels/{channel}/data"

    def build_payload(self, data: Mapping[str, float]) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"writeKey": self.write_key}
        payload.update(data)
        return payload

    async def send(self, data: Mapping[str, float]) -> SendResult:
        """Transmit ``data`` and return the response details.

        Raises:
            AmbientApiError: If Ambient answers with status 400 or above.
            AmbientConnectionError: On transport failures or timeouts.
        """

        owns_session = self._session is None
        session = self._session
        if session is None:
            session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )

        url = self.url
        LOGGER.debug("POST %s (%d values)", url, len(data))

        try:
            async with asyncio.timeout(self._timeout):
                async with session.post(
                    url, json=self.build_payload(data)
                ) as response:
                    body = await response.text()
                    if response.status >= 400:
                        raise AmbientApiError(response.status, body)
                    return SendResult(
                        channel_id=self.channel_id,
                        payload=dict(data),
                        status=response.status,
                        body=body,
                    )
        except asyncio.TimeoutError as exc:
            raise AmbientConnectionError(
                f"Ambient request timed out after {self._timeout:.1f}s"
            ) from exc
        except aiohttp.ClientError as exc:
            raise AmbientConnectionError(f"Cannot reach Ambient: {exc}") from exc
        finally:
            if owns_session:
                await session.close()
