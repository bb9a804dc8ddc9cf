"""Route host block invocations to the Ambient session."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .blocks import (
    ARG_CHANNEL_ID,
    ARG_SLOT,
    ARG_VALUE,
    ARG_WRITE_KEY,
    BlockOpcode,
    DataSlot,
)
from .client import SendResult
from .session import AmbientSession

LOGGER = logging.getLogger(__name__)

BlockArgs = Mapping[str, Any]
BlockResult = Optional["asyncio.Task[SendResult]"]
BlockHandler = Callable[[BlockArgs], BlockResult]


class BlockDispatchError(RuntimeError):
    """Raised when a block invocation cannot be routed."""


class UnknownBlockError(BlockDispatchError):
    def __init__(self, opcode: str) -> None:
        super().__init__(f"Unknown block opcode: {opcode}")
        self.opcode = opcode


def to_number(value: Any) -> float:
    """Coerce a host argument to a number the way block hosts do.

    Unparseable input, NaN and infinities become ``0`` so every buffered
    value serialises as a plain JSON number.
    """

    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = "" if value is None else str(value).strip()
        # float() accepts digit separators, block hosts do not.
        if not text or "_" in text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class BlockDispatcher:
    """Explicit opcode -> handler table over a single :class:`AmbientSession`."""

    def __init__(self, session: AmbientSession) -> None:
        self._session = session
        self._handlers: Dict[BlockOpcode, BlockHandler] = {
            BlockOpcode.INIT: self._handle_init,
            BlockOpcode.SET_DATA: self._handle_set_data,
            BlockOpcode.SEND: self._handle_send,
            BlockOpcode.CLEAR: self._handle_clear,
        }

    @property
    def session(self) -> AmbientSession:
        return self._session

    def dispatch(
        self, opcode: Union[BlockOpcode, str], args: Optional[BlockArgs] = None
    ) -> BlockResult:
        """Run the handler for ``opcode``.

        Command blocks produce no value for the host. For ``ambientSend`` the
        scheduled transmission task is returned so callers can await it.

        Raises:
            UnknownBlockError: If ``opcode`` names no known block.
        """

        try:
            resolved = BlockOpcode(opcode)
        except ValueError as exc:
            raise UnknownBlockError(str(opcode)) from exc

        LOGGER.debug("Dispatching block %s", resolved.value)
        return self._handlers[resolved](args or {})

    def _handle_init(self, args: BlockArgs) -> None:
        self._session.init(
            to_string(args.get(ARG_CHANNEL_ID)), to_string(args.get(ARG_WRITE_KEY))
        )
        return None

    def _handle_set_data(self, args: BlockArgs) -> None:
        slot_label = to_string(args.get(ARG_SLOT)).strip()
        try:
            slot = DataSlot(slot_label)
        except ValueError:
            LOGGER.warning("Ignoring value for unknown data slot %r", slot_label)
            return None
        self._session.set_data(slot, to_number(args.get(ARG_VALUE)))
        return None

    def _handle_send(self, args: BlockArgs) -> "asyncio.Task[SendResult]":
        return self._session.send()

    def _handle_clear(self, args: BlockArgs) -> None:
        self._session.clear()
        return None
