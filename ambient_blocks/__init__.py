"""Ambient data logging blocks for visual-programming hosts."""

from .blocks import BlockOpcode, DataSlot
from .client import (
    AmbientApiError,
    AmbientClient,
    AmbientClientError,
    AmbientConnectionError,
    SendResult,
)
from .config import BlocksConfig, load_config
from .dispatch import BlockDispatcher, BlockDispatchError, UnknownBlockError
from .extension import AmbientExtension
from .session import AmbientSession
from .version import __version__

__all__ = [
    "AmbientApiError",
    "AmbientClient",
    "AmbientClientError",
    "AmbientConnectionError",
    "AmbientExtension",
    "AmbientSession",
    "BlockDispatchError",
    "BlockDispatcher",
    "BlockOpcode",
    "BlocksConfig",
    "DataSlot",
    "SendResult",
    "UnknownBlockError",
    "__version__",
    "load_config",
]
