import asyncio
import threading
import time

import pytest

from tuiapps.counter_async import (
    Action,
    AsyncCounterApp,
    AsyncTui,
    Event,
    _run_loop,
    get_action,
    ui,
    update,
)
from tuiapps.render import Buffer, Rect
from tuiapps.terminal import Frame, KeyCode, KeyEvent, KeyEventKind, ResizeEvent


class FakeTerminal:
    def __init__(self, events=()):
        self.events = list(events)
        self.entered = 0
        self.exited = 0
        self.frames = []
        self._lock = threading.Lock()

    def __enter__(self):
        self.entered += 1
        return self

    def __exit__(self, exc_type, exc, tb):
        self.exited += 1
        return False

    def read_event(self, timeout):
        with self._lock:
            item = self.events.pop(0) if self.events else None
        if isinstance(item, BaseException):
            raise item
        if item is not None:
            return item
        time.sleep(min(timeout or 0.0, 0.01))
        return None

    def draw(self, render):
        buf = Buffer(Rect(0, 0, 50, 6))
        render(Frame(buf))
        self.frames.append(buf)
        return buf


@pytest.mark.parametrize(
    "code, expected",
    [
        ("j", Action.INCREMENT),
        ("k", Action.DECREMENT),
        ("J", Action.NETWORK_REQUEST_AND_THEN_INCREMENT),
        ("K", Action.NETWORK_REQUEST_AND_THEN_DECREMENT),
        ("q", Action.QUIT),
        ("x", Action.NONE),
        (KeyCode.LEFT, Action.NONE),
    ],
)
def test_get_action_for_keys(code, expected):
    assert get_action(AsyncCounterApp(), KeyEvent(code)) is expected


@pytest.mark.parametrize(
    "event, expected",
    [
        (Event.ERROR, Action.NONE),
        (Event.TICK, Action.TICK),
        (Event.RENDER, Action.RENDER),
        (Event.INIT, Action.NONE),
        (Event.QUIT, Action.NONE),
        (ResizeEvent(10, 10), Action.NONE),
    ],
)
def test_get_action_for_other_events(event, expected):
    assert get_action(AsyncCounterApp(), event) is expected


def test_update_counts_both_ways_and_below_zero():
    app = AsyncCounterApp()
    update(app, Action.INCREMENT)
    assert app.counter == 1
    update(app, Action.DECREMENT)
    update(app, Action.DECREMENT)
    assert app.counter == -1


def test_update_quit_and_passive_actions():
    app = AsyncCounterApp()
    for action in (Action.TICK, Action.RENDER, Action.NONE):
        update(app, action)
    assert (app.counter, app.should_quit) == (0, False)
    update(app, Action.QUIT)
    assert app.should_quit is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "request_action, result",
    [
        (Action.NETWORK_REQUEST_AND_THEN_INCREMENT, Action.INCREMENT),
        (Action.NETWORK_REQUEST_AND_THEN_DECREMENT, Action.DECREMENT),
    ],
)
async def test_network_request_sends_action_later(request_action, result):
    app = AsyncCounterApp(network_delay=0.01)
    update(app, request_action)
    assert app.counter == 0
    assert app.action_tx.empty()
    sent = await asyncio.wait_for(app.action_tx.get(), timeout=2)
    assert sent is result


def test_ui_shows_counter_in_rounded_block():
    app = AsyncCounterApp(counter=3)
    buf = Buffer(Rect(0, 0, 50, 6))
    ui(Frame(buf), app)
    lines = buf.lines()
    assert lines[0][0] == "╭"
    assert lines[-1][-1] == "╯"
    assert "async counter app" in lines[0]
    assert any("Counter: 3" in line for line in lines)
    assert any("Press j or k to increment or decrement." in line for line in lines)


def test_invalid_rates_rejected():
    with pytest.raises(ValueError):
        AsyncTui(FakeTerminal(), tick_rate=0)
    with pytest.raises(ValueError):
        AsyncTui(FakeTerminal(), frame_rate=-1.0)


async def _collect_until(tui, predicate, limit=500):
    seen = []
    for _ in range(limit):
        event = await asyncio.wait_for(tui.next(), timeout=2)
        seen.append(event)
        if predicate(event):
            break
    return seen


@pytest.mark.asyncio
async def test_tui_emits_init_tick_and_render():
    terminal = FakeTerminal()
    tui = AsyncTui(terminal, tick_rate=50.0, frame_rate=100.0)
    tui.enter()
    try:
        first = await asyncio.wait_for(tui.next(), timeout=2)
        seen = await _collect_until(tui, lambda e: False, limit=10)
    finally:
        await tui.exit()
    assert first is Event.INIT
    assert Event.TICK in seen
    assert Event.RENDER in seen
    assert terminal.entered == 1


@pytest.mark.asyncio
async def test_tui_drops_key_releases_and_reports_errors():
    terminal = FakeTerminal([
        KeyEvent("x", kind=KeyEventKind.RELEASE),
        RuntimeError("read failed"),
        KeyEvent("y"),
    ])
    tui = AsyncTui(terminal, tick_rate=10.0, frame_rate=10.0)
    tui.enter()
    try:
        seen = await _collect_until(tui, lambda e: isinstance(e, KeyEvent))
    finally:
        await tui.exit()
    keys = [e for e in seen if isinstance(e, KeyEvent)]
    assert keys == [KeyEvent("y")]
    assert Event.ERROR in seen


@pytest.mark.asyncio
async def test_tui_exit_restores_terminal_once():
    terminal = FakeTerminal()
    tui = AsyncTui(terminal, tick_rate=10.0, frame_rate=10.0)
    tui.enter()
    await tui.exit()
    await tui.exit()
    assert (terminal.entered, terminal.exited) == (1, 1)


@pytest.mark.asyncio
async def test_run_loop_counts_and_quits():
    terminal = FakeTerminal([KeyEvent("j"), KeyEvent("j"), KeyEvent("k"), KeyEvent("q")])
    tui = AsyncTui(terminal, tick_rate=20.0, frame_rate=200.0)
    app = AsyncCounterApp()
    await asyncio.wait_for(_run_loop(tui, app), timeout=5)
    assert app.counter == 1
    assert app.should_quit is True
    assert terminal.exited == 1
    assert terminal.frames
    assert any("Counter:" in line for line in terminal.frames[-1].lines())