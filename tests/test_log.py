"""Tests for CLI logging setup."""

import structlog

from realmgen.log import configure_logging


def test_info_by_default(capsys):
    configure_logging()
    log = structlog.get_logger()

    log.debug("hidden_event")
    log.info("shown_event", town="Millbrook")

    err = capsys.readouterr().err
    assert "shown_event" in err
    assert "Millbrook" in err
    assert "hidden_event" not in err


def test_verbose_shows_debug(capsys):
    configure_logging(verbose=True)
    structlog.get_logger().debug("debug_event")
    assert "debug_event" in capsys.readouterr().err


def test_stdout_left_clean(capsys):
    configure_logging()
    structlog.get_logger().warning("warning_event")
    assert capsys.readouterr().out == ""
