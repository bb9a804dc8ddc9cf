"""Configuration loader for ambient-blocks."""

from __future__ import annotations

from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import constants


@dataclass(slots=True)
class AmbientConfig:
    base_url: str = constants.DEFAULT_AMBIENT_BASE_URL
    timeout_seconds: float = constants.DEFAULT_TIMEOUT_SECONDS
    channel_id: str = constants.PLACEHOLDER_CHANNEL_ID
    write_key: str = constants.PLACEHOLDER_WRITE_KEY


@dataclass(slots=True)
class ExtensionConfig:
    locale: str = constants.DEFAULT_LOCALE
    extension_url: str = constants.DEFAULT_EXTENSION_URL
    icon_url: str = constants.DEFAULT_ICON_URL
    inset_icon_url: str = constants.DEFAULT_INSET_ICON_URL
    block_icon_uri: str = constants.DEFAULT_BLOCK_ICON_URI


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    path: Optional[Path] = None
    log_network: bool = False


@dataclass(slots=True)
class BlocksConfig:
    ambient: AmbientConfig
    extension: ExtensionConfig
    logging: LoggingConfig
    raw: ConfigParser
    path: Path


def default_config() -> BlocksConfig:
    """Build a configuration from defaults only, without touching disk."""

    return BlocksConfig(
        ambient=AmbientConfig(),
        extension=ExtensionConfig(),
        logging=LoggingConfig(),
        raw=_default_parser(),
        path=constants.DEFAULT_CONFIG_PATH,
    )


def _default_parser() -> ConfigParser:
    parser = ConfigParser()
    parser.read_dict(
        {
            "ambient": {
                "base_url": constants.DEFAULT_AMBIENT_BASE_URL,
                "timeout_seconds": str(constants.DEFAULT_TIMEOUT_SECONDS),
                "channel_id": constants.PLACEHOLDER_CHANNEL_ID,
                "write_key": constants.PLACEHOLDER_WRITE_KEY,
            },
            "extension": {
                "locale": constants.DEFAULT_LOCALE,
                "extension_url": constants.DEFAULT_EXTENSION_URL,
                "icon_url": constants.DEFAULT_ICON_URL,
                "inset_icon_url": constants.DEFAULT_INSET_ICON_URL,
                "block_icon_uri": constants.DEFAULT_BLOCK_ICON_URI,
            },
            "logging": {
                "level": "INFO",
                "path": "",
                "log_network": "false",
            },
        }
    )
    return parser


def load_config(path: Optional[Path] = None) -> BlocksConfig:
    """Load configuration from disk, applying defaults where necessary."""

    config_path = path or constants.DEFAULT_CONFIG_PATH
    parser = _default_parser()

    if config_path.exists():
        parser.read(config_path)

    try:
        timeout_seconds = parser.getfloat(
            "ambient", "timeout_seconds", fallback=constants.DEFAULT_TIMEOUT_SECONDS
        )
    except ValueError:
        timeout_seconds = constants.DEFAULT_TIMEOUT_SECONDS
    if timeout_seconds <= 0:
        timeout_seconds = constants.DEFAULT_TIMEOUT_SECONDS

    ambient = AmbientConfig(
        base_url=parser.get("ambient", "base_url").rstrip("/"),
        timeout_seconds=timeout_seconds,
        channel_id=parser.get("ambient", "channel_id"),
        write_key=parser.get("ambient", "write_key"),
    )

    extension = ExtensionConfig(
        locale=parser.get("extension", "locale").strip() or constants.DEFAULT_LOCALE,
        extension_url=parser.get("extension", "extension_url"),
        icon_url=parser.get("extension", "icon_url"),
        inset_icon_url=parser.get("extension", "inset_icon_url"),
        block_icon_uri=parser.get("extension", "block_icon_uri"),
    )

    log_path_value = parser.get("logging", "path", fallback="").strip()
    try:
        log_network = parser.getboolean("logging", "log_network", fallback=False)
    except ValueError:
        log_network = False

    logging_config = LoggingConfig(
        level=parser.get("logging", "level", fallback="INFO"),
        path=Path(log_path_value).expanduser() if log_path_value else None,
        log_network=log_network,
    )

    return BlocksConfig(
        ambient=ambient,
        extension=extension,
        logging=logging_config,
        raw=parser,
        path=config_path,
    )
