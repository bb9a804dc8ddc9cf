"""Host-facing Ambient extension: registration metadata plus block dispatch."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

import aiohttp

from . import constants
from .blocks import BLOCKS, BlockOpcode, build_menus
from .config import BlocksConfig, default_config
from .dispatch import BlockArgs, BlockDispatcher, BlockResult
from .i18n import TRANSLATIONS, format_message
from .logging import configure_logging
from .session import AmbientSession, ClientFactory

LOGGER = logging.getLogger(__name__)


class AmbientExtension:
    """Owns the session and dispatcher for one host runtime."""

    def __init__(
        self,
        config: Optional[BlocksConfig] = None,
        *,
        locale: Optional[str] = None,
        http_session: Optional[aiohttp.ClientSession] = None,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self._config = config or default_config()
        self.locale = locale or self._config.extension.locale
        self.extension_url = self._config.extension.extension_url
        self.session = AmbientSession(
            self._config.ambient,
            http_session=http_session,
            client_factory=client_factory,
        )
        self.dispatcher = BlockDispatcher(self.session)

    @classmethod
    def start(cls, config: BlocksConfig, **kwargs: Any) -> "AmbientExtension":
        """Configure logging from ``config`` and build the extension."""

        configure_logging(
            config.logging.level,
            log_path=config.logging.path,
            log_network=config.logging.log_network,
        )
        instance = cls(config, **kwargs)
        LOGGER.info(
            "%s extension ready (locale=%s, endpoint=%s)",
            constants.EXTENSION_ID,
            instance.locale,
            config.ambient.base_url,
        )
        return instance

    @property
    def name(self) -> str:
        return self._format("ambient.name", "Ambient")

    def _format(self, message_id: str, default: str) -> str:
        return format_message(message_id, default, self.locale)

    def get_info(self) -> Dict[str, Any]:
        """Block metadata in the shape the host runtime registers."""

        return {
            "id": constants.EXTENSION_ID,
            "name": self.name,
            "extensionURL": self.extension_url,
            "blockIconURI": self._config.extension.block_icon_uri,
            "showStatusButton": False,
            "blocks": [block.as_dict(self._format) for block in BLOCKS],
            "menus": build_menus(),
        }

    def entry(self) -> Dict[str, Any]:
        """Catalog entry shown in the host's extension library."""

        return {
            "name": self._format("ambient.entry.name", "Ambient"),
            "extensionId": constants.EXTENSION_ID,
            "extensionURL": self.extension_url,
            "collaborator": constants.EXTENSION_COLLABORATOR,
            "iconURL": self._config.extension.icon_url,
            "insetIconURL": self._config.extension.inset_icon_url,
            "description": self._format(
                "ambient.entry.description", "Send sensor data to Ambient"
            ),
            "featured": True,
            "disabled": False,
            "bluetoothRequired": False,
            "internetConnectionRequired": True,
            "helpLink": constants.HELP_LINK,
            "translationMap": TRANSLATIONS,
        }

    def dispatch(
        self, opcode: Union[BlockOpcode, str], args: Optional[BlockArgs] = None
    ) -> BlockResult:
        return self.dispatcher.dispatch(opcode, args)

    async def aclose(self) -> None:
        """Wait for in-flight sends before the host shuts down."""

        pending = self.session.pending_count
        if pending:
            LOGGER.info("Waiting for %d Ambient send(s) to finish", pending)
        await self.session.drain()
