"""Key events, frames and a terminal that draws buffers and restores itself."""

from __future__ import annotations

import sys
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Callable, Optional, Union

import blessed

from .render import Buffer, Paragraph, Rect, Style


class KeyCode(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    TAB = "tab"


class KeyEventKind(Enum):
    PRESS = "press"
    RELEASE = "release"
    REPEAT = "repeat"


class KeyModifiers(IntFlag):
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4


@dataclass(frozen=True)
class KeyEvent:
    """A key event; ``code`` is a KeyCode or a single character."""

    code: Union[KeyCode, str]
    modifiers: KeyModifiers = KeyModifiers.NONE
    kind: KeyEventKind = KeyEventKind.PRESS


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


class Frame:
    """One frame being drawn into a buffer."""

    def __init__(self, buffer: Buffer):
        self.buffer = buffer

    @property
    def area(self) -> Rect:
        return self.buffer.area

    def render_widget(self, widget, area: Rect) -> None:
        if isinstance(widget, str):
            widget = Paragraph(widget)
        widget.render(area, self.buffer)


_SEQUENCE_KEYS = {
    "KEY_LEFT": KeyCode.LEFT,
    "KEY_RIGHT": KeyCode.RIGHT,
    "KEY_UP": KeyCode.UP,
    "KEY_DOWN": KeyCode.DOWN,
    "KEY_ENTER": KeyCode.ENTER,
    "KEY_ESCAPE": KeyCode.ESC,
    "KEY_BACKSPACE": KeyCode.BACKSPACE,
    "KEY_DELETE": KeyCode.BACKSPACE,
    "KEY_TAB": KeyCode.TAB,
}

_CHAR_KEYS = {
    "\r": KeyCode.ENTER,
    "\n": KeyCode.ENTER,
    "\t": KeyCode.TAB,
    "\x1b": KeyCode.ESC,
    "\x7f": KeyCode.BACKSPACE,
    "\x08": KeyCode.BACKSPACE,
}


def _translate_key(keystroke) -> Optional[KeyEvent]:
    if keystroke.is_sequence:
        code = _SEQUENCE_KEYS.get(keystroke.name)
        return KeyEvent(code) if code else None
    text = str(keystroke)
    if not text:
        return None
    if text in _CHAR_KEYS:
        return KeyEvent(_CHAR_KEYS[text])
    if ord(text) < 32:
        return KeyEvent(chr(ord(text) + 96), KeyModifiers.CONTROL)
    return KeyEvent(text)


class Terminal:
    """A terminal drawing whole frames, restored on leaving its context."""

    def __init__(self, term: Optional[blessed.Terminal] = None, *,
                 alternate_screen: bool = True, size: Optional[tuple[int, int]] = None):
        self._term = term or blessed.Terminal(stream=sys.stdout)
        self._alternate = alternate_screen
        self._fixed_size = size
        self._previous: Optional[Buffer] = None
        self._stack: Optional[ExitStack] = None

    @property
    def size(self) -> tuple[int, int]:
        return self._fixed_size or (self._term.width, self._term.height)

    def __enter__(self) -> "Terminal":
        stack = ExitStack()
        try:
            if self._alternate:
                stack.enter_context(self._term.fullscreen())
            if self._term.is_a_tty:
                stack.enter_context(self._term.cbreak())
            stack.enter_context(self._term.hidden_cursor())
        except BaseException:
            stack.close()
            raise
        self._stack = stack
        self._previous = None
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._stack is not None:
            self._stack.close()
            self._stack = None
        self._term.stream.flush()
        return False

    def draw(self, render: Callable[[Frame], None]) -> Buffer:
        """Render a frame and write the cells that changed; return the buffer."""
        width, height = self.size
        buf = Buffer(Rect(0, 0, width, height))
        render(Frame(buf))
        self._write(buf)
        self._previous = buf
        return buf

    def _write(self, buf: Buffer) -> None:
        term = self._term
        prev = self._previous
        full = prev is None or prev.area != buf.area
        out = [term.clear] if full else []
        for x, y in buf.area.positions():
            cell = buf[x, y]
            if full or cell != prev[x, y]:
                out.append(f"{term.move_xy(x, y)}{self._sequence(cell.style)}"
                           f"{cell.symbol}{term.normal}")
        if out:
            term.stream.write("".join(str(part) for part in out))
            term.stream.flush()

    def _sequence(self, style: Style) -> str:
        term = self._term
        parts = []
        if style.fg is not None:
            parts.append(getattr(term, style.fg.value))
        if style.bg is not None:
            parts.append(getattr(term, "on_" + style.fg.value if False else "on_" + style.bg.value))
        if style.bold:
            parts.append(term.bold)
        if style.dim:
            parts.append(term.dim)
        return "".join(str(part) for part in parts)

    def read_event(self, timeout: Optional[float] = None):
        """Wait for the next key or resize; None when the timeout passes."""
        if self._previous is not None:
            width, height = self.size
            if (width, height) != (self._previous.area.width, self._previous.area.height):
                return ResizeEvent(width, height)
        keystroke = self._term.inkey(timeout=timeout)
        if not keystroke:
            return None
        return _translate_key(keystroke)