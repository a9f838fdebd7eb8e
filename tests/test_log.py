import logging

import pytest

from lineyaml import log as log_module
from lineyaml.document import parse
from lineyaml.errors import InternalError


def test_log_prefixes_timestamp(caplog):
    with caplog.at_level(logging.DEBUG, logger="lineyaml"):
        log_module.log("hello")
    message = caplog.records[-1].getMessage()
    assert message.startswith("[")
    assert message.endswith("] hello")


def test_parse_failure_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="lineyaml"):
        with pytest.raises(InternalError):
            parse("a\nb\n")
    assert any("Parsing failed (internal)" in record.getMessage() for record in caplog.records)


def test_setup_logging_adds_one_handler():
    logger = log_module.logger
    before = list(logger.handlers)
    level = logger.level
    try:
        log_module.setup_logging(logging.WARNING)
        log_module.setup_logging(logging.WARNING)
        added = [h for h in logger.handlers if h not in before]
        assert len(added) == 1
        assert logger.level == logging.WARNING
    finally:
        logger.handlers[:] = before
        logger.setLevel(level)
