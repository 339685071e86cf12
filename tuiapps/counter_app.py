"""A counter that ticks in the background; j/k or the arrows change it."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from enum import Enum, auto

import blessed

from .events import EventHandler, Tui
from .render import Alignment, Block, BorderSet, Color, Paragraph, Style
from .terminal import Frame, KeyCode, KeyEvent, KeyModifiers, Terminal

_U8_MAX = 255


class Action(Enum):
    TICK = auto()
    INCREMENT = auto()
    DECREMENT = auto()
    QUIT = auto()
    NONE = auto()


@dataclass
class CounterApp:
    """Counter between 0 and 255 and whether the application should quit."""

    should_quit: bool = False
    counter: int = 0

    def tick(self) -> None:
        """Handle the periodic tick; nothing changes."""

    def quit(self) -> None:
        self.should_quit = True

    def increment_counter(self) -> None:
        if self.counter < _U8_MAX:
            self.counter += 1

    def decrement_counter(self) -> None:
        if self.counter > 0:
            self.counter -= 1


def update(app: CounterApp, key_event: KeyEvent) -> None:
    """Change the app according to one key press."""
    code = key_event.code
    if code is KeyCode.ESC or code == "q":
        app.quit()
    elif code in ("c", "C"):
        if key_event.modifiers == KeyModifiers.CONTROL:
            app.quit()
    elif code is KeyCode.RIGHT or code == "j":
        app.increment_counter()
    elif code is KeyCode.LEFT or code == "k":
        app.decrement_counter()


def render(app: CounterApp, frame: Frame) -> None:
    text = (
        "\n        Press `Esc`, `Ctrl-C` or `q` to stop running.\n"
        "Press `j` and `k` to increment and decrement the counter respectively.\n"
        f"Counter: {app.counter}\n      "
    )
    block = Block(
        title="Counter App",
        title_alignment=Alignment.CENTER,
        borders=True,
        border_set=BorderSet.ROUNDED,
    )
    paragraph = Paragraph(text, block=block, style=Style(fg=Color.YELLOW),
                          alignment=Alignment.CENTER)
    frame.render_widget(paragraph, frame.area)


def main(argv=None) -> int:
    argparse.ArgumentParser(description="A ticking counter; j/k change it, q quits.").parse_args(argv)
    app = CounterApp()
    terminal = Terminal(blessed.Terminal(stream=sys.stderr))
    events = EventHandler(250, terminal)
    tui = Tui(terminal, events)
    tui.enter()
    try:
        while not app.should_quit:
            tui.draw(lambda frame: render(app, frame))
            event = tui.events.next()
            if isinstance(event, KeyEvent):
                update(app, event)
    finally:
        tui.exit()
    return 0