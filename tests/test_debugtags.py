import logging

import pytest

from c3mbus.debugtags import DebugTagManager, LogLevel

TAG = "TAG"
TAG2 = "TAG2"


@pytest.fixture
def manager():
    return DebugTagManager(logger=logging.getLogger("test.debugtags"))


@pytest.fixture
def captured(caplog):
    caplog.set_level(1, logger="test.debugtags")
    return caplog


def test_unset_tag_uses_default(manager):
    assert manager.get_tag_level(TAG2) == LogLevel.VERBOSE
    assert manager.get_tag_level_str(TAG2) == "VERBOSE"


def test_tag_level_limits_messages(manager, captured):
    manager.set_tag_level(TAG, LogLevel.WARN)
    results = [
        manager.log(level, TAG, "message")
        for level in (LogLevel.ERROR, LogLevel.WARN, LogLevel.INFO, LogLevel.DBG, LogLevel.VERBOSE)
    ]
    assert results == [True, True, False, False, False]
    assert len(captured.records) == 2
    assert captured.records[0].levelno == logging.ERROR
    assert captured.records[1].levelno == logging.WARNING


def test_other_tag_logs_everything(manager, captured):
    manager.set_tag_level(TAG, LogLevel.WARN)
    for level in (LogLevel.ERROR, LogLevel.WARN, LogLevel.INFO, LogLevel.DBG, LogLevel.VERBOSE):
        assert manager.log(level, TAG2, "message")
    assert len(captured.records) == 5


def test_message_contains_tag_and_text(manager, captured):
    manager.log(LogLevel.INFO, TAG, "Info message")
    text = captured.records[0].getMessage()
    assert TAG in text
    assert "Info message" in text


def test_set_to_default_restores(manager):
    manager.set_tag_level(TAG, LogLevel.WARN)
    assert manager.get_tag_level(TAG) == LogLevel.WARN
    manager.set_tag_to_default_level(TAG)
    assert manager.get_tag_level(TAG) == manager.default_level


def test_level_is_capped_by_default():
    manager = DebugTagManager(default_level=LogLevel.INFO)
    manager.set_tag_level(TAG, LogLevel.VERBOSE)
    assert manager.get_tag_level(TAG) == LogLevel.INFO
    manager.set_tag_level(TAG, LogLevel.ERROR)
    assert manager.get_tag_level(TAG) == LogLevel.ERROR


def test_level_strings(manager):
    manager.set_tag_level(TAG, LogLevel.INFO)
    assert manager.get_tag_level_str(TAG) == "INFO"
    manager.set_tag_level(TAG, LogLevel.NO_DEBUG)
    assert manager.get_tag_level_str(TAG) == "NONE"
    manager.set_tag_level(TAG, LogLevel.DBG)
    assert manager.get_tag_level_str(TAG) == "DBG"


def test_unknown_level_string():
    manager = DebugTagManager(default_level=7)
    assert manager.get_tag_level_str(TAG) == "UNKNOWN"


def test_disabled_manager_logs_nothing(captured):
    manager = DebugTagManager(default_level=LogLevel.NO_DEBUG, logger=logging.getLogger("test.debugtags"))
    manager.set_tag_level(TAG, LogLevel.VERBOSE)
    assert manager.get_tag_level_str(TAG) == "NONE"
    assert not manager.log(LogLevel.ERROR, TAG, "Error message")
    assert captured.records == []


def test_log_at_no_debug_raises(manager):
    with pytest.raises(ValueError):
        manager.log(LogLevel.NO_DEBUG, TAG, "message")


def test_error_if_non_zero(manager, captured):
    assert manager.log_error_if_non_zero(TAG, -1, "Error message")
    assert not manager.log_error_if_non_zero(TAG, 0, "Error message")
    assert len(captured.records) == 1
    assert "Code: -1. Error message" in captured.records[0].getMessage()


def test_error_if_zero(manager, captured):
    assert manager.log_error_if_zero(TAG, 0, "Error message if zero")
    assert not manager.log_error_if_zero(TAG, -1, "Error message if zero")
    assert len(captured.records) == 1
    assert "Code: 0. Error message if zero" in captured.records[0].getMessage()


def test_log_if_code(manager, captured):
    assert manager.log_if_code(LogLevel.WARN, TAG, -1, -1, "Warning")
    assert not manager.log_if_code(LogLevel.ERROR, TAG, -2, -1, "Error")
    assert manager.log_if_code(LogLevel.ERROR, TAG, -2, -2, "Error")
    assert [r.levelno for r in captured.records] == [logging.WARNING, logging.ERROR]