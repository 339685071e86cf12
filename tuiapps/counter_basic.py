"""A counter driven by the arrow keys, drawn inside a thick bordered block."""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from .render import Alignment, Block, BorderSet, Buffer, Color, Line, Paragraph, Rect, Span, Style
from .terminal import Frame, KeyCode, KeyEvent, KeyEventKind, Terminal

_U8_MAX = 255
_TITLE_STYLE = Style(bold=True)
_KEY_STYLE = Style(fg=Color.BLUE, bold=True)
_COUNTER_STYLE = Style(fg=Color.YELLOW)


def _counter_paragraph(counter: int) -> Paragraph:
    title = Line(Span(" Counter App Tutorial ", _TITLE_STYLE), alignment=Alignment.CENTER)
    instructions = Line(
        [
            Span(" Decrement "),
            Span("<Left>", _KEY_STYLE),
            Span(" Increment "),
            Span("<Right>", _KEY_STYLE),
            Span(" Quit "),
            Span("<Q> ", _KEY_STYLE),
        ],
        alignment=Alignment.CENTER,
    )
    block = Block.bordered(title=title, title_bottom=instructions, border_set=BorderSet.THICK)
    counter_text = [Line([Span("Value: "), Span(str(counter), _COUNTER_STYLE)])]
    return Paragraph(counter_text, block=block, alignment=Alignment.CENTER)


@dataclass
class App:
    """Counter state; ``exit`` becomes true once the user asks to quit."""

    counter: int = 0
    exit: bool = False

    def run(self, terminal) -> None:
        """Draw and handle events until the user quits."""
        while not self.exit:
            terminal.draw(self._draw)
            self._handle_events(terminal)

    def _draw(self, frame: Frame) -> None:
        frame.render_widget(self, frame.area)

    def _handle_events(self, terminal) -> None:
        event = terminal.read_event(None)
        # Only presses count; some terminals also report releases and repeats.
        if isinstance(event, KeyEvent) and event.kind is KeyEventKind.PRESS:
            self.handle_key_event(event)

    def handle_key_event(self, key_event: KeyEvent) -> None:
        if key_event.code == "q":
            self.exit = True
        elif key_event.code is KeyCode.LEFT:
            self._decrement_counter()
        elif key_event.code is KeyCode.RIGHT:
            self._increment_counter()

    def _increment_counter(self) -> None:
        if self.counter >= _U8_MAX:
            raise OverflowError("attempt to add with overflow")
        self.counter += 1

    def _decrement_counter(self) -> None:
        if self.counter <= 0:
            raise OverflowError("attempt to subtract with overflow")
        self.counter -= 1

    def render(self, area: Rect, buf: Buffer) -> None:
        _counter_paragraph(self.counter).render(area, buf)


def main(argv=None) -> int:
    argparse.ArgumentParser(description="Count with the arrow keys; q quits.").parse_args(argv)
    with Terminal() as terminal:
        App().run(terminal)
    return 0