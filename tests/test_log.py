import logging

from quicklink.log import LogConfig, get_logger, setup_logging


def test_plain_handler_writes_to_stderr(capsys):
    logger = setup_logging(LogConfig(level="info", no_color=True))
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1

    get_logger("quicklink.store").info("saved %d links", 3)
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "INFO quicklink.store: saved 3 links" in captured.err


def test_repeated_setup_replaces_handler_and_defaults_to_warning():
    setup_logging(LogConfig(no_color=True))
    logger = setup_logging(LogConfig(level="bogus", no_color=True))
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
