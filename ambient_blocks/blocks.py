"""Block and menu definitions exposed to the host runtime."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional


class BlockOpcode(str, Enum):
    INIT = "ambientInit"
    SET_DATA = "ambientSetData"
    SEND = "ambientSend"
    CLEAR = "ambientClear"


class DataSlot(str, Enum):
    """Ambient's eight data fields."""

    D1 = "d1"
    D2 = "d2"
    D3 = "d3"
    D4 = "d4"
    D5 = "d5"
    D6 = "d6"
    D7 = "d7"
    D8 = "d8"


class BlockType(str, Enum):
    COMMAND = "command"


class ArgumentType(str, Enum):
    STRING = "string"
    NUMBER = "number"


SLOT_MENU = "dataSlots"

# Argument names, matching the placeholders in the block text.
ARG_CHANNEL_ID = "CHANNELID"
ARG_WRITE_KEY = "WRITEKEY"
ARG_SLOT = "SLOT"
ARG_VALUE = "VALUE"


@dataclass(frozen=True, slots=True)
class ArgumentSpec:
    type: ArgumentType
    default_value: Any
    menu: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type.value,
            "defaultValue": self.default_value,
        }
        if self.menu:
            payload["menu"] = self.menu
        return payload


@dataclass(frozen=True, slots=True)
class BlockSpec:
    opcode: BlockOpcode
    message_id: str
    default_text: str
    description: str
    arguments: Dict[str, ArgumentSpec] = field(default_factory=dict)
    block_type: BlockType = BlockType.COMMAND

    def as_dict(self, format_message: Callable[[str, str], str]) -> Dict[str, Any]:
        return {
            "opcode": self.opcode.value,
            "blockType": self.block_type.value,
            "blockAllThreads": False,
            "text": format_message(self.message_id, self.default_text),
            "func": self.opcode.value,
            "arguments": {
                name: argument.as_dict() for name, argument in self.arguments.items()
            },
        }


BLOCKS: tuple[BlockSpec, ...] = (
    BlockSpec(
        opcode=BlockOpcode.INIT,
        message_id="ambient.init",
        default_text="Init Channel ID: [CHANNELID] Write Key: [WRITEKEY]",
        description="Initialize Ambient",
        arguments={
            ARG_CHANNEL_ID: ArgumentSpec(ArgumentType.STRING, "Channel ID"),
            ARG_WRITE_KEY: ArgumentSpec(ArgumentType.STRING, "Write Key"),
        },
    ),
    BlockSpec(
        opcode=BlockOpcode.SET_DATA,
        message_id="ambient.setData",
        default_text="Set data [SLOT] to [VALUE]",
        description="Buffer a value for one data slot",
        arguments={
            ARG_SLOT: ArgumentSpec(ArgumentType.STRING, DataSlot.D1.value, SLOT_MENU),
            ARG_VALUE: ArgumentSpec(ArgumentType.NUMBER, 0),
        },
    ),
    BlockSpec(
        opcode=BlockOpcode.SEND,
        message_id="ambient.send",
        default_text="Send data",
        description="Send buffered data to Ambient",
    ),
    BlockSpec(
        opcode=BlockOpcode.CLEAR,
        message_id="ambient.clear",
        default_text="Clear data",
        description="Discard buffered data",
    ),
)


def build_menus() -> Dict[str, Any]:
    return {
        SLOT_MENU: {
            "acceptReporters": False,
            "items": [slot.value for slot in DataSlot],
        }
    }
