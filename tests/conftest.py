import asyncio
from typing import Dict, List, Optional, Tuple

import pytest

from ambient_blocks.client import SendResult


class RecordingClient:
    """Stand-in for AmbientClient that records every transmission."""

    def __init__(self, factory: "RecordingClientFactory", channel_id: str, write_key: str) -> None:
        self._factory = factory
        self.channel_id = channel_id
        self.write_key = write_key

    async def send(self, data: Dict[str, float]) -> SendResult:
        self._factory.sent.append((self.channel_id, self.write_key, dict(data)))
        if self._factory.gate is not None:
            await self._factory.gate.wait()
        if self._factory.error is not None:
            raise self._factory.error
        return SendResult(
            channel_id=self.channel_id, payload=dict(data), status=200, body=""
        )


class RecordingClientFactory:
    def __init__(self) -> None:
        self.created: List[Tuple[str, str]] = []
        self.sent: List[Tuple[str, str, Dict[str, float]]] = []
        self.error: Optional[Exception] = None
        self.gate: Optional[asyncio.Event] = None

    def __call__(self, channel_id: str, write_key: str) -> RecordingClient:
        self.created.append((channel_id, write_key))
        return RecordingClient(self, channel_id, write_key)


@pytest.fixture
def client_factory() -> RecordingClientFactory:
    return RecordingClientFactory()
