"""Interactive editor that builds a flat JSON object from typed key/value pairs."""

from __future__ import annotations

import argparse
import sys
from typing import Optional

import blessed

from .json_app import CurrentlyEditing, CurrentScreen, JsonApp
from .json_ui import ui
from .terminal import KeyCode, KeyEvent, KeyEventKind, Terminal


def _edit_input(app: JsonApp, key: KeyEvent) -> None:
    editing = app.currently_editing
    code = key.code
    if code is KeyCode.ENTER:
        if editing is CurrentlyEditing.KEY:
            app.currently_editing = CurrentlyEditing.VALUE
        elif editing is CurrentlyEditing.VALUE:
            app.save_key_value()
            app.current_screen = CurrentScreen.MAIN
    elif code is KeyCode.BACKSPACE:
        if editing is CurrentlyEditing.KEY:
            app.key_input = app.key_input[:-1]
        elif editing is CurrentlyEditing.VALUE:
            app.value_input = app.value_input[:-1]
    elif code is KeyCode.ESC:
        app.current_screen = CurrentScreen.MAIN
        app.currently_editing = None
    elif code is KeyCode.TAB:
        app.toggle_editing()
    elif isinstance(code, str):
        if editing is CurrentlyEditing.KEY:
            app.key_input += code
        elif editing is CurrentlyEditing.VALUE:
            app.value_input += code


def handle_key(app: JsonApp, key: KeyEvent) -> Optional[bool]:
    """Apply one key to the app.

    Returns True or False once the user has answered the exit question
    (whether to print the JSON), and None while the editor keeps running.
    """
    if key.kind is KeyEventKind.RELEASE:
        return None
    screen = app.current_screen
    if screen is CurrentScreen.MAIN:
        if key.code == "e":
            app.current_screen = CurrentScreen.EDITING
            app.currently_editing = CurrentlyEditing.KEY
        elif key.code == "q":
            app.current_screen = CurrentScreen.EXITING
    elif screen is CurrentScreen.EXITING:
        if key.code == "y":
            return True
        if key.code in ("n", "q"):
            return False
    elif screen is CurrentScreen.EDITING and key.kind is KeyEventKind.PRESS:
        _edit_input(app, key)
    return None


def run_app(terminal, app: JsonApp) -> bool:
    """Draw and handle keys until the user leaves; return whether to print."""
    while True:
        terminal.draw(lambda frame: ui(frame, app))
        event = terminal.read_event(None)
        if not isinstance(event, KeyEvent):
            continue
        outcome = handle_key(app, event)
        if outcome is not None:
            return outcome


def main(argv=None) -> int:
    argparse.ArgumentParser(
        description="Enter key/value pairs and print them as a JSON object."
    ).parse_args(argv)
    app = JsonApp()
    try:
        # Drawing goes to stderr so the JSON on stdout can be piped elsewhere.
        with Terminal(blessed.Terminal(stream=sys.stderr)) as terminal:
            do_print = run_app(terminal, app)
    except OSError as err:
        print(repr(err))
        return 0
    if do_print:
        app.print_json()
    return 0