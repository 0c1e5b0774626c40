import logging

import pytest

from ambros.parrot import ParrotLogger

LOGGER_NAME = "test.parrot"


@pytest.fixture
def parrot():
    return ParrotLogger(logging.getLogger(LOGGER_NAME))


def test_println_prints_and_logs(parrot, capsys, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        parrot.println("hello")
    assert capsys.readouterr().out == "hello\n"
    assert [r.getMessage() for r in caplog.records] == ["hello"]


def test_print_has_no_newline(parrot, capsys, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        parrot.print("hello")
    assert capsys.readouterr().out == "hello"
    assert caplog.records[0].levelno == logging.INFO


def test_info_formats_arguments(parrot, capsys, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        parrot.info("%d files", 2)
    out = capsys.readouterr().out
    assert out == "[INFO] 2 files\n"
    assert caplog.records[0].getMessage() == out[len("[INFO] ") :].rstrip("\n")


def test_debug_prefix_and_level(parrot, capsys, caplog):
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        parrot.debug("starting %s", "job")
    out = capsys.readouterr().out
    assert out.startswith("[DEBUG] ")
    assert "job" in out
    assert caplog.records[0].levelno == logging.DEBUG


def test_warn_level(parrot, capsys, caplog):
    with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
        parrot.warn("careful")
    assert capsys.readouterr().out.startswith("[WARN] ")
    assert caplog.records[0].levelno == logging.WARNING
    assert caplog.records[0].getMessage() == "careful"


def test_error_with_exception(parrot, capsys, caplog):
    with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
        parrot.error("failed", ValueError("boom"))
    assert capsys.readouterr().out == "[ERROR] failed: boom\n"
    assert caplog.records[0].levelno == logging.ERROR


def test_error_without_exception(parrot, capsys, caplog):
    with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
        parrot.error("failed", None)
    out = capsys.readouterr().out
    assert out.startswith("[ERROR] ")
    assert ":" not in out
    assert caplog.records[0].getMessage() == "failed"


def test_without_logger_only_prints(capsys):
    parrot = ParrotLogger(None)
    parrot.info("quiet")
    parrot.println("line")
    out = capsys.readouterr().out
    assert out.splitlines() == ["[INFO] quiet", "line"]