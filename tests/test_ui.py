"""Tests for console helpers and logger setup."""

from __future__ import annotations

import io
import logging

from pathcrypt.ui import (
    ColorizingStreamHandler,
    PlainFormatter,
    colorize,
    format_table,
    init_logger,
    strip_ansi,
)


def test_colorize_and_strip():
    text = colorize("done", "green", "bold")
    assert text != "done"
    assert strip_ansi(text) == "done"
    assert colorize("plain", "no-such-style") == "plain"


def test_format_table_aligns_ansi_cells():
    table = format_table([[colorize("OK", "green"), "a"], ["FAILED", "bb"]],
                         headers=["Status", "Source"])
    lines = strip_ansi(table).splitlines()
    assert len({len(line) for line in lines}) == 1
    assert "| OK     | a      |" in lines
    assert format_table([]) == ""


def test_handler_writes_plain_text_to_non_tty():
    stream = io.StringIO()
    handler = ColorizingStreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    record = logging.LogRecord("t", logging.WARNING, __file__, 1,
                               colorize("careful", "red"), None, None)
    handler.emit(record)
    assert stream.getvalue() == "careful\n"


def test_plain_formatter_strips_ansi():
    record = logging.LogRecord("t", logging.INFO, __file__, 1,
                               colorize("hi", "cyan"), None, None)
    assert PlainFormatter("%(message)s").format(record) == "hi"


def test_init_logger_is_idempotent(tmp_path):
    logfile = tmp_path / "x.log"
    logger = init_logger("pathcrypt-ui-test", level="debug", logfile=str(logfile))
    again = init_logger("pathcrypt-ui-test", level="debug", logfile=str(logfile))
    try:
        assert logger is again
        assert len(logger.handlers) == 2
        assert logger.level == logging.DEBUG
        logger.info(colorize("to file", "green"))
        for h in logger.handlers:
            h.flush()
        assert "to file" in logfile.read_text(encoding="utf-8")
        assert "\x1b[" not in logfile.read_text(encoding="utf-8")
    finally:
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
