import logging

from rich.logging import RichHandler

from robotstxt.utils.logging import get_logger, setup_logger


def test_setup_logger_is_idempotent():
    setup_logger("DEBUG")
    logger = setup_logger("warning")
    assert logger is get_logger()
    assert logger.level == logging.WARNING
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
    assert get_logger("robotstxt.parser").parent is logger


def test_unknown_level_falls_back_to_info():
    assert setup_logger("chatty").level == logging.INFO
