import logging

import pytest

from core.desktop.devtools.interface.tui_log_view import (
    LEVELS,
    LogCaptureHandler,
    LogEvent,
    LogState,
    install_log_capture,
)


@pytest.fixture
def capture():
    logger = logging.getLogger("taskdeck")
    saved_handlers, saved_level = list(logger.handlers), logger.level
    handler = install_log_capture()
    yield handler
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def test_capture_records_taskdeck_loggers(capture):
    logging.getLogger("taskdeck.storage").debug("wrote %d bytes", 12)
    logging.getLogger("taskdeck.tui").warning("slow render")
    logging.getLogger("elsewhere").warning("not ours")
    messages = [(line.target, line.message) for line in capture.records]
    assert messages == [("taskdeck.storage", "wrote 12 bytes"), ("taskdeck.tui", "slow render")]
    assert capture.records[1].level_name == "WARNING"


def test_reinstall_replaces_previous_handler(capture):
    second = install_log_capture()
    handlers = [h for h in logging.getLogger("taskdeck").handlers if isinstance(h, LogCaptureHandler)]
    assert handlers == [second]


def test_buffer_is_bounded():
    handler = LogCaptureHandler(capacity=2)
    for idx in range(3):
        handler.emit(logging.LogRecord("taskdeck.x", logging.INFO, __file__, 1, "m%d", (idx,), None))
    assert [line.message for line in handler.records] == ["m1", "m2"]


def _state_with(*records):
    handler = LogCaptureHandler()
    for name, level, message in records:
        handler.emit(logging.LogRecord(name, level, __file__, 1, message, None, None))
    return LogState(handler)


def test_level_threshold_and_per_target_override():
    state = _state_with(
        ("taskdeck.a", logging.DEBUG, "a-debug"),
        ("taskdeck.a", logging.ERROR, "a-error"),
        ("taskdeck.b", logging.INFO, "b-info"),
    )
    assert len(state.visible_lines()) == 3
    state.transition(LogEvent.MINUS)
    state.transition(LogEvent.MINUS)
    assert state.display_level == logging.WARNING
    assert [line.message for line in state.visible_lines()] == ["a-error"]
    state.transition(LogEvent.PLUS)
    assert state.display_level == logging.INFO

    state.set_display_level(logging.DEBUG)
    assert state.current_target() == "taskdeck.a"
    state.transition(LogEvent.LEFT)
    assert state.threshold_for("taskdeck.a") == logging.INFO
    assert [line.message for line in state.visible_lines()] == ["a-error", "b-info"]
    state.transition(LogEvent.RIGHT)
    state.transition(LogEvent.RIGHT)
    assert state.threshold_for("taskdeck.a") == logging.DEBUG


def test_target_focus_and_hide():
    state = _state_with(("taskdeck.a", logging.INFO, "x"), ("taskdeck.b", logging.INFO, "y"))
    state.transition(LogEvent.SPACE_BAR)
    assert state.focus_targets
    state.transition(LogEvent.DOWN)
    state.transition(LogEvent.DOWN)
    assert state.current_target() == "taskdeck.b"
    state.transition(LogEvent.HIDE)
    assert state.hide_targets and not state.focus_targets
    state.transition(LogEvent.SPACE_BAR)
    assert not state.focus_targets


def test_scrolling_is_clamped():
    state = _state_with(*[("taskdeck.a", logging.INFO, f"m{i}") for i in range(5)])
    state.transition(LogEvent.PREV_PAGE)
    assert state.scroll == 4
    state.transition(LogEvent.NEXT_PAGE)
    assert state.scroll == 0
    state.transition(LogEvent.UP)
    assert state.visible_lines()[-1].message == "m3"


def test_unknown_display_level_falls_back_to_debug():
    state = LogState()
    state.set_display_level(logging.ERROR)
    assert state.display_level == logging.ERROR
    state.set_display_level(5)
    assert state.display_level == LEVELS[0]
