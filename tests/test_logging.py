import logging
from pathlib import Path

import pytest

from ambient_blocks.logging import configure_logging, reset_logging


@pytest.fixture
def bare_root():
    root = logging.getLogger()
    saved = list(root.handlers)
    for handler in saved:
        root.removeHandler(handler)
    try:
        yield root
    finally:
        reset_logging()
        for handler in saved:
            root.addHandler(handler)


def test_console_handler_added_when_root_has_none(bare_root):
    logger = configure_logging("WARNING")

    assert bare_root.handlers == []
    assert logger.level == logging.WARNING
    assert [type(handler) for handler in logger.handlers] == [logging.StreamHandler]


def test_reconfigure_replaces_own_handlers(bare_root, tmp_path: Path):
    configure_logging("INFO")
    logger = configure_logging("INFO", log_path=tmp_path / "ambient.log")

    assert len(logger.handlers) == 2
    assert sum(isinstance(h, logging.FileHandler) for h in logger.handlers) == 1


def test_log_network_routes_aiohttp_client(bare_root, tmp_path: Path):
    log_path = tmp_path / "ambient.log"
    configure_logging("DEBUG", log_path=log_path, log_network=True)

    logging.getLogger("aiohttp.client").warning("connection reset")

    assert "connection reset" in log_path.read_text(encoding="utf-8")

    reset_logging()
    assert logging.getLogger("aiohttp.client").handlers == []
    assert logging.getLogger("ambient_blocks").handlers == []
