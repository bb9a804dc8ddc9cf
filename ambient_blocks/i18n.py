"""Translated block and catalog strings."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from . import constants

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "ambient.name": "Ambient",
        "ambient.init": "Init Channel ID: [CHANNELID] Write Key: [WRITEKEY]",
        "ambient.setData": "Set data [SLOT] to [VALUE]",
        "ambient.send": "Send data",
        "ambient.clear": "Clear data",
        "ambient.entry.name": "Ambient",
        "ambient.entry.description": "Send sensor data to Ambient",
    },
    "ja": {
        "ambient.name": "Ambient",
        "ambient.init": "チャネルID: [CHANNELID] ライトキー: [WRITEKEY] で初期化する",
        "ambient.setData": "データ [SLOT] を [VALUE] にする",
        "ambient.send": "データを送る",
        "ambient.clear": "データを消す",
        "ambient.entry.name": "Ambient",
        "ambient.entry.description": "センサーのデータを Ambient に送ります",
    },
}


def resolve_locale(
    locale: Optional[str], translations: Mapping[str, Mapping[str, str]] = TRANSLATIONS
) -> Optional[str]:
    """Return the table key to use for ``locale``, or ``None`` when unsupported.

    ``ja-JP`` and ``ja_JP`` both resolve to ``ja`` when only the primary
    language has a table.
    """

    if not locale:
        return None
    tag = locale.strip().replace("_", "-")
    if tag in translations:
        return tag
    lowered = tag.lower()
    if lowered in translations:
        return lowered
    primary = lowered.split("-", 1)[0]
    if primary in translations:
        return primary
    return None


def format_message(
    message_id: str, default: str, locale: Optional[str] = constants.DEFAULT_LOCALE
) -> str:
    table_key = resolve_locale(locale)
    if table_key is None:
        return default
    return TRANSLATIONS[table_key].get(message_id, default)
