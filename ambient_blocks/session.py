"""Buffered Ambient session backing the block handlers."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, Optional, Set, Union

import aiohttp

from . import constants
from .blocks import DataSlot
from .client import AmbientClient, AmbientClientError, SendResult
from .config import AmbientConfig

LOGGER = logging.getLogger(__name__)

ClientFactory = Callable[[str, str], AmbientClient]


class AmbientSession:
    """Holds the current Ambient client and the slot buffer.

    One session is created per extension instance and handed to the block
    dispatcher. All methods except :meth:`drain` are synchronous and are
    expected to run on the host's event loop.
    """

    def __init__(
        self,
        config: Optional[AmbientConfig] = None,
        *,
        http_session: Optional[aiohttp.ClientSession] = None,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self._config = config or AmbientConfig()
        self._http_session = http_session
        self._client_factory = client_factory or self._default_client_factory
        self._client: Optional[AmbientClient] = None
        self._buffer: Dict[DataSlot, float] = {}
        self._pending: Set[asyncio.Task[SendResult]] = set()

    def _default_client_factory(self, channel_id: str, write_key: str) -> AmbientClient:
        return AmbientClient(
            channel_id,
            write_key,
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            session=self._http_session,
        )

    @property
    def client(self) -> AmbientClient:
        """The current client, built from the placeholder credentials if needed."""

        if self._client is None:
            self._client = self._client_factory(
                self._config.channel_id, self._config.write_key
            )
        return self._client

    @property
    def initialized(self) -> bool:
        return self._client is not None

    @property
    def buffer(self) -> Dict[str, float]:
        """Snapshot of the buffered values keyed by slot label."""

        return {slot.value: value for slot, value in self._buffer.items()}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def init(self, channel_id: str, write_key: str) -> None:
        """Replace the client with one bound to the given credentials."""

        self._client = self._client_factory(channel_id, write_key)
        LOGGER.info("Ambient client initialised for channel %s", channel_id)

    def set_data(self, slot: Union[DataSlot, str], value: float) -> None:
        """Buffer ``value`` for ``slot``, overwriting any earlier value.

        Raises:
            ValueError: If ``slot`` is not one of ``d1`` to ``d8``.
        """

        data_slot = DataSlot(slot)
        self._buffer[data_slot] = value
        LOGGER.debug("Buffered %s=%s", data_slot.value, value)

    def clear(self) -> None:
        self._buffer.clear()

    def send(self) -> asyncio.Task[SendResult]:
        """Transmit the buffered values and empty the buffer.

        The request runs as a task on the running loop; the buffer is cleared
        before the request is scheduled. The returned task never raises:
        failures are logged and reported through :attr:`SendResult.error`.

        Raises:
            RuntimeError: If no event loop is running. The buffer is still
                emptied and nothing is transmitted.
        """

        client = self.client
        if (
            client.channel_id == constants.PLACEHOLDER_CHANNEL_ID
            and client.write_key == constants.PLACEHOLDER_WRITE_KEY
        ):
            LOGGER.warning(
                "Sending to Ambient with placeholder credentials; run the init block first"
            )

        snapshot = self.buffer
        self.clear()

        loop = asyncio.get_running_loop()
        task = loop.create_task(self._transmit(client, snapshot))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every in-flight transmission to finish."""

        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def _transmit(
        self, client: AmbientClient, data: Dict[str, float]
    ) -> SendResult:
        try:
            result = await client.send(data)
        except AmbientClientError as exc:
            LOGGER.error(
                "Ambient send failed (channel=%s, status=%s): %s",
                client.channel_id,
                exc.status,
                exc,
            )
            error = exc
        except Exception as exc:
            LOGGER.exception(
                "Ambient send failed unexpectedly (channel=%s)", client.channel_id
            )
            error = AmbientClientError(f"Ambient send failed unexpectedly: {exc}")
            error.__cause__ = exc
        else:
            LOGGER.info(
                "Ambient send completed (channel=%s, status=%s, values=%d)",
                client.channel_id,
                result.status,
                len(data),
            )
            return result

        return SendResult(
            channel_id=client.channel_id,
            payload=dict(data),
            status=error.status,
            body=error.body,
            error=error,
        )
