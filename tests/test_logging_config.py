import logging

from coriolis.logging_config import setup_logging
from coriolis.path import build_great_circle_path
from coriolis.point import make_point


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def _reset(logger):
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "coriolis.log"
    logger = logging.getLogger("coriolis")
    try:
        setup_logging(logging.DEBUG, str(log_file))
        setup_logging(logging.DEBUG, str(log_file))
        assert len(logger.handlers) == 2

        build_great_circle_path(make_point(0, 0), make_point(60, 0), -2)
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "clamped to 0" in text
        assert "Built great-circle path: depth=0 points=2" in text
    finally:
        _reset(logger)


def test_setup_logging_closes_replaced_handlers(tmp_path):
    logger = logging.getLogger("coriolis")
    try:
        returned = setup_logging(logging.INFO, str(tmp_path / "first.log"))
        assert returned is logger
        (first,) = _file_handlers(logger)
        assert first.stream is not None

        setup_logging(logging.INFO, str(tmp_path / "second.log"))
        assert first not in logger.handlers
        assert first.stream is None
        (second,) = _file_handlers(logger)
        assert second.baseFilename.endswith("second.log")

        setup_logging(logging.INFO)
        assert _file_handlers(logger) == []
        assert second.stream is None
        assert len(logger.handlers) == 1
    finally:
        _reset(logger)
