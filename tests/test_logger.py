import logging
from pathlib import Path

import pytest

from codeintel.logger import configure_logging, get_logger, resolve_level


@pytest.fixture
def restore_root_logger():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        (" Warning ", logging.WARNING),
        ("error", logging.ERROR),
        ("bogus", logging.INFO),
        (logging.CRITICAL, logging.CRITICAL),
    ],
)
def test_resolve_level(name, expected) -> None:
    assert resolve_level(name) == expected


def test_log_file_receives_structured_events(tmp_path: Path, restore_root_logger) -> None:
    log_file = tmp_path / "logs" / "run.log"
    configure_logging(level="debug", enable_console=False, log_file=log_file)

    get_logger("codeintel.test").info("chunks_written", chunks=3)
    get_logger("codeintel.test").debug("cache_hit", reference="Foo")

    text = log_file.read_text(encoding="utf-8")
    assert "chunks_written" in text
    assert "chunks=3" in text
    assert "cache_hit" in text


def test_file_level_filters_lower_events(tmp_path: Path, restore_root_logger) -> None:
    log_file = tmp_path / "run.log"
    configure_logging(level="WARNING", enable_console=False, log_file=log_file)

    log = get_logger("codeintel.test")
    log.info("not_interesting")
    log.warning("unresolved_relations", count=2)

    text = log_file.read_text(encoding="utf-8")
    assert "not_interesting" not in text
    assert "unresolved_relations" in text
