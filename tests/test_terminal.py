import threading

import pytest

from untangle.terminal import (
    MAX_LOG_LINES,
    MIN_HEIGHT,
    TRIM_COUNT,
    LogLevel,
    Terminal,
    classify,
)


@pytest.mark.parametrize(
    "line, level",
    [
        ("ERROR: Variable 'x' not found", LogLevel.ERROR),
        ("[ERROR] boom", LogLevel.ERROR),
        ("[EXEC] ERROR: failed", LogLevel.ERROR),
        ("WARNING: Node type 'ASSERT' execution not implemented yet", LogLevel.WARNING),
        ("[WARN] careful", LogLevel.WARNING),
        ("[EXEC] Response: Status 200", LogLevel.EXEC),
        ("DEBUG Executor: Node ID: 1", LogLevel.DEBUG),
        ("Response: ok", LogLevel.RESPONSE),
        ("Status 404", LogLevel.RESPONSE),
        ("No node selected", LogLevel.NORMAL),
    ],
)
def test_classify(line, level):
    assert classify(line) is level


def test_log_level_colors():
    assert classify("ERROR: boom").color == (1.0, 0.3, 0.3, 1.0)
    assert classify("plain line").color == (1.0, 1.0, 1.0, 1.0)


def test_log_stores_and_echoes(capsys):
    terminal = Terminal()
    terminal.log("Request completed")
    assert terminal.lines == ["Request completed"]
    assert capsys.readouterr().out == "Request completed\n"


def test_clear():
    terminal = Terminal()
    terminal.log("a")
    terminal.log("b")
    terminal.clear()
    assert terminal.lines == []
    assert len(terminal) == 0


def test_trim_when_over_limit(capsys):
    terminal = Terminal()
    for i in range(MAX_LOG_LINES + 1):
        terminal.log(f"line {i}")
    capsys.readouterr()
    lines = terminal.lines
    assert len(lines) == MAX_LOG_LINES + 1 - TRIM_COUNT
    assert lines[0] == f"line {TRIM_COUNT}"
    assert lines[-1] == f"line {MAX_LOG_LINES}"


def test_no_trim_at_limit(capsys):
    terminal = Terminal()
    for i in range(MAX_LOG_LINES):
        terminal.log(f"line {i}")
    capsys.readouterr()
    assert len(terminal) == MAX_LOG_LINES
    assert terminal.lines[0] == "line 0"


def test_filter_is_case_insensitive(capsys):
    terminal = Terminal()
    for line in ["[EXEC] GET Request", "hello", "[exec] lower"]:
        terminal.log(line)
    capsys.readouterr()
    assert terminal.filtered("exec") == ["[EXEC] GET Request", "[exec] lower"]
    assert terminal.filtered("HELLO") == ["hello"]


def test_empty_filter_returns_everything(capsys):
    terminal = Terminal()
    terminal.log("a")
    terminal.log("b")
    capsys.readouterr()
    assert terminal.filtered("") == terminal.lines
    assert terminal.filtered() == ["a", "b"]


def test_toggle_visible():
    terminal = Terminal()
    assert terminal.visible is True
    assert terminal.toggle_visible() is False
    assert terminal.toggle_visible() is True
    assert terminal.visible is True


def test_clamp_raises_small_height_to_minimum():
    terminal = Terminal()
    terminal.height = 10.0
    assert terminal.clamp_height(1000.0) == MIN_HEIGHT
    assert terminal.height == MIN_HEIGHT


def test_clamp_limits_to_available_height():
    terminal = Terminal()
    terminal.height = 5000.0
    result = terminal.clamp_height(600.0)
    assert result == 600.0 - MIN_HEIGHT
    assert terminal.height == result


def test_clamp_keeps_height_within_bounds():
    terminal = Terminal()
    before = terminal.height
    assert terminal.clamp_height(1000.0) == before


def test_concurrent_logging_loses_nothing(capsys):
    terminal = Terminal()

    def worker(tag):
        for i in range(200):
            terminal.log(f"{tag}-{i}")

    threads = [threading.Thread(target=worker, args=(t,)) for t in "abcd"]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    capsys.readouterr()
    assert len(terminal) == 4 * 200
    assert len(terminal.filtered("a-")) == 200