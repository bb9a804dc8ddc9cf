"""Tests for the host-facing extension shell."""

import logging
from pathlib import Path

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from ambient_blocks import constants
from ambient_blocks.config import load_config
from ambient_blocks.extension import AmbientExtension
from ambient_blocks.logging import reset_logging


def test_get_info_describes_blocks_and_menus(client_factory):
    extension = AmbientExtension(client_factory=client_factory)

    info = extension.get_info()

    assert info["id"] == "ambient"
    assert info["name"] == "Ambient"
    assert info["extensionURL"] == constants.DEFAULT_EXTENSION_URL
    assert info["showStatusButton"] is False
    opcodes = [block["opcode"] for block in info["blocks"]]
    assert opcodes == ["ambientInit", "ambientSetData", "ambientSend", "ambientClear"]
    init_block = info["blocks"][0]
    assert init_block["func"] == "ambientInit"
    assert init_block["blockType"] == "command"
    assert init_block["text"] == "Init Channel ID: [CHANNELID] Write Key: [WRITEKEY]"
    assert init_block["arguments"]["CHANNELID"] == {
        "type": "string",
        "defaultValue": "Channel ID",
    }
    set_block = info["blocks"][1]
    assert set_block["arguments"]["SLOT"]["menu"] == "dataSlots"
    assert set_block["arguments"]["VALUE"]["type"] == "number"
    assert info["menus"]["dataSlots"]["items"] == [f"d{n}" for n in range(1, 9)]


def test_get_info_uses_locale(client_factory):
    extension = AmbientExtension(locale="ja-JP", client_factory=client_factory)

    texts = {block["opcode"]: block["text"] for block in extension.get_info()["blocks"]}

    assert texts["ambientSend"] == "データを送る"
    assert "[SLOT]" in texts["ambientSetData"]


def test_entry_metadata(client_factory):
    entry = AmbientExtension(client_factory=client_factory).entry()

    assert entry["extensionId"] == "ambient"
    assert entry["collaborator"] == "610t"
    assert entry["helpLink"] == constants.HELP_LINK
    assert entry["featured"] is True
    assert entry["internetConnectionRequired"] is True
    assert set(entry["translationMap"]) == {"en", "ja"}


def test_start_keeps_host_root_handlers(tmp_path: Path, client_factory):
    config_path = tmp_path / "ambient-blocks.cfg"
    log_path = tmp_path / "logs" / "ambient.log"
    config_path.write_text(
        f"[logging]\nlevel = DEBUG\npath = {log_path}\n", encoding="utf-8"
    )
    root = logging.getLogger()
    host_handler = logging.NullHandler()
    root.addHandler(host_handler)
    saved_level = root.level

    try:
        extension = AmbientExtension.start(
            load_config(config_path), client_factory=client_factory
        )

        assert host_handler in root.handlers
        assert root.level == saved_level
        assert logging.getLogger("ambient_blocks").level == logging.DEBUG
        assert "extension ready" in log_path.read_text(encoding="utf-8")
        assert extension.locale == "en"
    finally:
        reset_logging()
        root.removeHandler(host_handler)


@pytest.mark.asyncio
async def test_blocks_send_to_ambient_end_to_end(tmp_path: Path):
    received = []

    async def handler(request: web.Request) -> web.StreamResponse:
        received.append((request.match_info["channel"], await request.json()))
        return web.Response(status=200)

    app = web.Application()
    app.router.add_post("/api/v2/channels/{channel}/data", handler)

    async with TestServer(app) as server:
        config_path = tmp_path / "ambient-blocks.cfg"
        config_path.write_text(
            f"[ambient]\nbase_url = {server.make_url('/')}\n", encoding="utf-8"
        )
        extension = AmbientExtension(load_config(config_path))

        extension.dispatch("ambientInit", {"CHANNELID": "100", "WRITEKEY": "key"})
        extension.dispatch("ambientSetData", {"SLOT": "d1", "VALUE": 20})
        extension.dispatch("ambientSetData", {"SLOT": "d8", "VALUE": "3.5"})
        task = extension.dispatch("ambientSend")
        await extension.aclose()

    result = task.result()
    assert result.ok
    assert result.status == 200
    assert received == [("100", {"writeKey": "key", "d1": 20.0, "d8": 3.5})]
