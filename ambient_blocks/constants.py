"""Constants used across the ambient-blocks package."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "ambient-blocks"
DEFAULT_CONFIG_FILENAME = f"{APP_NAME}.cfg"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / APP_NAME / DEFAULT_CONFIG_FILENAME

EXTENSION_ID = "ambient"
EXTENSION_COLLABORATOR = "610t"
DEFAULT_EXTENSION_URL = "https://610t.github.io/ambient/dist/ambient.mjs"
HELP_LINK = "https://610t.github.io/ambient/"

DEFAULT_ICON_URL = "entry-icon.png"
DEFAULT_INSET_ICON_URL = "inset-icon.svg"
DEFAULT_BLOCK_ICON_URI = "block-icon.png"

DEFAULT_LOCALE = "en"

DEFAULT_AMBIENT_BASE_URL = "https://ambidata.io"
DEFAULT_TIMEOUT_SECONDS = 10.0

# Credentials used when a send happens before any init block ran.
PLACEHOLDER_CHANNEL_ID = "Channel ID"
PLACEHOLDER_WRITE_KEY = "Write Key"
