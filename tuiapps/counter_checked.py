"""A counter that reports an error once it climbs past two."""

from __future__ import annotations

import argparse
import sys
from contextlib import ExitStack
from dataclasses import dataclass

from .counter_basic import _counter_paragraph
from .render import Buffer, Rect
from .terminal import Frame, KeyCode, KeyEvent, KeyEventKind, Terminal

_U8_MAX = 255
_LIMIT = 2


class CounterOverflowError(Exception):
    """Raised when the counter goes above its allowed limit."""


@dataclass
class App:
    """Counter state; ``exit`` becomes true once the user asks to quit."""

    counter: int = 0
    exit: bool = False

    def run(self, terminal) -> None:
        """Draw and handle events until the user quits."""
        while not self.exit:
            terminal.draw(self._render_frame)
            try:
                self._handle_events(terminal)
            except (RuntimeError, OSError) as err:
                raise RuntimeError("handle events failed") from err

    def _render_frame(self, frame: Frame) -> None:
        frame.render_widget(self, frame.area)

    def _handle_events(self, terminal) -> None:
        event = terminal.read_event(None)
        if isinstance(event, KeyEvent) and event.kind is KeyEventKind.PRESS:
            try:
                self.handle_key_event(event)
            except CounterOverflowError as err:
                raise RuntimeError(f"handling key event failed:\n{event!r}") from err

    def handle_key_event(self, key_event: KeyEvent) -> None:
        if key_event.code == "q":
            self.exit = True
        elif key_event.code is KeyCode.LEFT:
            self.decrement_counter()
        elif key_event.code is KeyCode.RIGHT:
            self.increment_counter()

    def decrement_counter(self) -> None:
        if self.counter <= 0:
            raise OverflowError("attempt to subtract with overflow")
        self.counter -= 1

    def increment_counter(self) -> None:
        if self.counter >= _U8_MAX:
            raise OverflowError("attempt to add with overflow")
        self.counter += 1
        if self.counter > _LIMIT:
            raise CounterOverflowError("counter overflow")

    def render(self, area: Rect, buf: Buffer) -> None:
        _counter_paragraph(self.counter).render(area, buf)


def _report(err: BaseException) -> None:
    print(f"Error: {err}", file=sys.stderr)
    cause = err.__cause__
    while cause is not None:
        print(f"  caused by: {cause}", file=sys.stderr)
        cause = cause.__cause__


def main(argv=None) -> int:
    argparse.ArgumentParser(
        description="Count with the arrow keys; counting past two is an error."
    ).parse_args(argv)
    stack = ExitStack()
    terminal = stack.enter_context(Terminal())
    status = 0
    try:
        App().run(terminal)
    except RuntimeError as err:
        status = 1
        failure = err
    else:
        failure = None
    finally:
        try:
            stack.close()
        except OSError as err:
            print(
                "failed to restore terminal. Run `reset` or restart your terminal "
                f"to recover: {err}",
                file=sys.stderr,
            )
    if failure is not None:
        _report(failure)
    return status