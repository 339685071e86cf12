import time

import pytest

from tuiapps.render import Buffer, Color, Rect
from tuiapps.stopwatch import AppState, Message, StopwatchApp, format_duration
from tuiapps.terminal import Frame, KeyCode, KeyEvent


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class FakeTerminal:
    def __init__(self, keys):
        self.keys = list(keys)
        self.draws = 0
        self.entered = False
        self.exited = False

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.exited = True
        return False

    def draw(self, render):
        buf = Buffer(Rect(0, 0, 60, 20))
        render(Frame(buf))
        self.draws += 1
        return buf

    def read_event(self, timeout):
        if self.keys:
            return KeyEvent(self.keys.pop(0))
        time.sleep(min(timeout or 0.01, 0.01))
        return None


def text_of(line):
    return "".join(span.text for span in line.spans)


def make_app(now=0.0):
    clock = FakeClock(now)
    return StopwatchApp(clock=clock), clock


def test_format_duration_zero():
    assert format_duration(0) == "00:00.000"


def test_format_duration_values_from_source_docs():
    assert format_duration(0.693) == "00:00.693"
    assert format_duration(1.413) == "00:01.413"


def test_format_duration_negative_raises():
    with pytest.raises(ValueError):
        format_duration(-1.0)


@pytest.mark.parametrize("code, message", [
    ("q", Message.QUIT),
    (" ", Message.START_OR_SPLIT),
    ("s", Message.STOP),
    (KeyCode.ENTER, Message.STOP),
    ("x", Message.TICK),
    (KeyCode.LEFT, Message.TICK),
])
def test_handle_event_keys(code, message):
    app, _ = make_app()
    assert app.handle_event(KeyEvent(code)) is message


def test_handle_event_non_key_is_tick():
    app, _ = make_app()
    assert app.handle_event(None) is Message.TICK


def test_start_or_split_starts_then_splits():
    app, clock = make_app(10.0)
    app.start_or_split()
    assert app.state is AppState.RUNNING
    assert app.splits == [10.0]
    clock.now = 11.0
    app.start_or_split()
    assert app.splits == [10.0, 11.0]
    assert app.state is AppState.RUNNING


def test_record_split_ignored_when_stopped():
    app, _ = make_app()
    app.record_split()
    assert app.splits == []


def test_stop_records_split_and_freezes_elapsed():
    app, clock = make_app(0.0)
    app.start()
    clock.now = 2.5
    app.stop()
    assert app.state is AppState.STOPPED
    assert app.splits == [0.0, 2.5]
    clock.now = 100.0
    assert app.elapsed() == 2.5


def test_elapsed_while_running_follows_clock():
    app, clock = make_app(5.0)
    app.start()
    clock.now = 7.0
    assert app.elapsed() == 2.0


def test_elapsed_without_splits_is_zero():
    app, clock = make_app(3.0)
    assert app.elapsed() == 0.0
    app.state = AppState.RUNNING
    assert app.elapsed() == 0.0


def test_start_clears_previous_splits():
    app, clock = make_app(0.0)
    app.start()
    clock.now = 1.0
    app.stop()
    clock.now = 4.0
    app.start()
    assert app.splits == [4.0]


def test_tick_updates_fps_after_a_second():
    app, clock = make_app(0.0)
    clock.now = 0.5
    app.tick()
    assert app.frames == 1
    assert app.fps == 0.0
    clock.now = 2.0
    app.tick()
    assert app.fps == 1.0
    assert app.frames == 0
    assert app.start_time == 2.0


def test_update_dispatches_messages():
    app, _ = make_app()
    app.update(Message.START_OR_SPLIT)
    assert app.state is AppState.RUNNING
    app.update(Message.STOP)
    assert app.state is AppState.STOPPED
    app.update(Message.TICK)
    assert app.frames == 1
    app.update(Message.QUIT)
    assert app.state is AppState.QUITTING


def test_split_lines_newest_first():
    app, clock = make_app(0.0)
    app.start()
    clock.now = 0.5
    app.record_split()
    clock.now = 1.25
    app.record_split()
    lines = app.split_lines()
    assert len(lines) == 2
    assert text_of(lines[0]) == f"#02 -- {format_duration(0.75)} -- {format_duration(1.25)}"
    assert text_of(lines[1]) == f"#01 -- {format_duration(0.5)} -- {format_duration(0.5)}"
    assert lines[0].spans[1].style.fg is Color.YELLOW


def test_split_lines_empty_with_one_split():
    app, _ = make_app()
    app.start()
    assert app.split_lines() == []


def test_ui_draws_title_timer_and_help():
    app, _ = make_app()
    buf = Buffer(Rect(0, 0, 60, 20))
    app.ui(Frame(buf))
    lines = buf.lines()
    assert lines[0].startswith("Stopwatch Example")
    assert lines[0].rstrip().endswith("fps")
    assert "00:00.000" in lines[2]
    assert lines[10].startswith("Splits:")
    assert lines[-1].rstrip() == "space start enter stop q quit"


def test_ui_help_shows_split_when_running():
    app, _ = make_app()
    app.start()
    buf = Buffer(Rect(0, 0, 60, 20))
    app.ui(Frame(buf))
    assert buf.lines()[-1].rstrip() == "space split enter stop q quit"
    assert buf[0, 2].style.fg is Color.GREEN


@pytest.mark.asyncio
async def test_run_loop_handles_keys_until_quit():
    app = StopwatchApp()
    terminal = FakeTerminal([" ", " ", "s", "q"])
    await app._run_on(terminal)
    assert app.state is AppState.QUITTING
    assert len(app.splits) == 3
    assert terminal.draws == 4
    assert terminal.entered and terminal.exited