import json

import pytest

from tuiapps.json_app import CurrentlyEditing, CurrentScreen, JsonApp
from tuiapps.json_editor import handle_key, run_app
from tuiapps.render import Buffer, Rect
from tuiapps.terminal import Frame, KeyCode, KeyEvent, KeyEventKind


def press(code):
    return KeyEvent(code)


class FakeTerminal:
    def __init__(self, events):
        self._events = list(events)
        self.frames = []

    def draw(self, render):
        buf = Buffer(Rect(0, 0, 80, 24))
        render(Frame(buf))
        self.frames.append(buf)
        return buf

    def read_event(self, timeout):
        return self._events.pop(0)


def feed(app, codes):
    results = [handle_key(app, press(code)) for code in codes]
    return results


def test_e_starts_editing_key():
    app = JsonApp()
    assert handle_key(app, press("e")) is None
    assert app.current_screen is CurrentScreen.EDITING
    assert app.currently_editing is CurrentlyEditing.KEY


def test_typing_and_enter_saves_pair():
    app = JsonApp()
    feed(app, ["e", "k", "e", "y", KeyCode.ENTER, "v", KeyCode.ENTER])
    assert app.pairs == {"key": "v"}
    assert app.current_screen is CurrentScreen.MAIN
    assert app.currently_editing is None
    assert app.key_input == ""


def test_tab_switches_boxes():
    app = JsonApp()
    feed(app, ["e", "a", KeyCode.TAB, "b"])
    assert app.key_input == "a"
    assert app.value_input == "b"
    assert app.currently_editing is CurrentlyEditing.VALUE


def test_backspace_removes_last_character_and_tolerates_empty():
    app = JsonApp()
    feed(app, ["e", "a", "b", KeyCode.BACKSPACE])
    assert app.key_input == "a"
    feed(app, [KeyCode.BACKSPACE, KeyCode.BACKSPACE])
    assert app.key_input == ""


def test_escape_cancels_editing():
    app = JsonApp()
    feed(app, ["e", "a", KeyCode.ESC])
    assert app.current_screen is CurrentScreen.MAIN
    assert app.currently_editing is None
    assert app.pairs == {}


def test_release_events_are_ignored():
    app = JsonApp()
    assert handle_key(app, KeyEvent("e", kind=KeyEventKind.RELEASE)) is None
    assert app.current_screen is CurrentScreen.MAIN


def test_repeat_ignored_while_editing():
    app = JsonApp()
    feed(app, ["e"])
    handle_key(app, KeyEvent("x", kind=KeyEventKind.REPEAT))
    assert app.key_input == ""


@pytest.mark.parametrize("answer, expected", [("y", True), ("n", False), ("q", False)])
def test_exit_answers(answer, expected):
    app = JsonApp()
    assert handle_key(app, press("q")) is None
    assert app.current_screen is CurrentScreen.EXITING
    assert handle_key(app, press(answer)) is expected


def test_other_keys_on_exit_screen_keep_running():
    app = JsonApp()
    feed(app, ["q"])
    assert handle_key(app, press("z")) is None
    assert app.current_screen is CurrentScreen.EXITING


def test_run_app_builds_pairs_and_asks_to_print():
    events = [press(c) for c in ["e", "a", KeyCode.ENTER, "b", KeyCode.ENTER, "q", "y"]]
    terminal = FakeTerminal(events)
    app = JsonApp()
    assert run_app(terminal, app) is True
    assert json.loads(app.to_json()) == {"a": "b"}
    assert len(terminal.frames) == len(events)


def test_run_app_skips_non_key_events():
    terminal = FakeTerminal([None, press("q"), press("n")])
    app = JsonApp()
    assert run_app(terminal, app) is False
    assert len(terminal.frames) == 3