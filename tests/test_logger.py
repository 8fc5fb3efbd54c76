import logging
import sys
from logging.handlers import RotatingFileHandler

import pytest

from site_scraper.logger import LOGGER_NAME, configure


@pytest.fixture()
def restore_logger():
    yield
    configure()


def test_configure_writes_to_stderr_only(restore_logger):
    lg = configure(level="DEBUG")

    assert lg is logging.getLogger(LOGGER_NAME)
    assert lg.level == logging.DEBUG
    assert not lg.propagate
    assert len(lg.handlers) == 1
    assert lg.handlers[0].stream is sys.stderr


def test_configure_adds_rotating_file_and_replaces_old_handlers(tmp_path, restore_logger):
    log_file = tmp_path / "scraper.log"
    configure(log_file=log_file)
    lg = configure(log_file=log_file, log_format="%(levelname)s %(message)s")

    file_handlers = [h for h in lg.handlers if isinstance(h, RotatingFileHandler)]
    assert len(lg.handlers) == 2
    assert len(file_handlers) == 1

    lg.warning("crawl aborted")
    file_handlers[0].flush()
    assert log_file.read_text(encoding="utf-8").strip() == "WARNING crawl aborted"
