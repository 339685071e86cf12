"""Cell buffers, styled text, blocks, paragraphs and a constraint layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Sequence, Union


@dataclass(frozen=True)
class Rect:
    """A rectangular region of the screen."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inner(self, horizontal: int, vertical: int) -> "Rect":
        """Shrink the rectangle by the given margins on each side."""
        if self.width < 2 * horizontal or self.height < 2 * vertical:
            return Rect(self.x, self.y, 0, 0)
        return Rect(
            self.x + horizontal,
            self.y + vertical,
            self.width - 2 * horizontal,
            self.height - 2 * vertical,
        )

    def intersection(self, other: "Rect") -> "Rect":
        x1, y1 = max(self.x, other.x), max(self.y, other.y)
        x2, y2 = min(self.right, other.right), min(self.bottom, other.bottom)
        return Rect(x1, y1, max(0, x2 - x1), max(0, y2 - y1))

    def positions(self) -> Iterable[tuple[int, int]]:
        for y in range(self.y, self.bottom):
            for x in range(self.x, self.right):
                yield x, y


class Color(Enum):
    """Terminal colours, valued by their terminal capability names."""

    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    GRAY = "white"
    DARK_GRAY = "bright_black"
    LIGHT_RED = "bright_red"
    LIGHT_GREEN = "bright_green"
    LIGHT_YELLOW = "bright_yellow"
    WHITE = "bright_white"


@dataclass(frozen=True)
class Style:
    fg: Optional[Color] = None
    bg: Optional[Color] = None
    bold: bool = False
    dim: bool = False

    def patch(self, other: "Style") -> "Style":
        """Return this style with the settings of ``other`` laid over it."""
        return Style(
            fg=other.fg or self.fg,
            bg=other.bg or self.bg,
            bold=self.bold or other.bold,
            dim=self.dim or other.dim,
        )


@dataclass
class Cell:
    symbol: str = " "
    style: Style = Style()


class Buffer:
    """A grid of styled cells covering a rectangle."""

    def __init__(self, area: Rect):
        self.area = area
        self._cells = [Cell() for _ in range(max(0, area.area))]

    @classmethod
    def with_lines(cls, lines: Sequence[str]) -> "Buffer":
        width = max((len(line) for line in lines), default=0)
        buf = cls(Rect(0, 0, width, len(lines)))
        for y, line in enumerate(lines):
            buf.set_string(0, y, line, Style())
        return buf

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        x, y = pos
        if not (self.area.x <= x < self.area.right and self.area.y <= y < self.area.bottom):
            raise IndexError(f"position {pos} outside {self.area}")
        return self._cells[(y - self.area.y) * self.area.width + (x - self.area.x)]

    def contains(self, x: int, y: int) -> bool:
        return self.area.x <= x < self.area.right and self.area.y <= y < self.area.bottom

    def set_string(self, x: int, y: int, text: str, style: Style = Style()) -> int:
        """Write text from (x, y), clipped to the buffer; return the end column."""
        for ch in text:
            if self.contains(x, y):
                cell = self[x, y]
                cell.symbol = ch
                cell.style = cell.style.patch(style)
            x += 1
        return x

    def set_style(self, area: Rect, style: Style) -> None:
        for x, y in self.area.intersection(area).positions():
            cell = self[x, y]
            cell.style = cell.style.patch(style)

    def lines(self) -> list[str]:
        w = self.area.width
        return [
            "".join(cell.symbol for cell in self._cells[row * w:(row + 1) * w])
            for row in range(self.area.height)
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Buffer):
            return NotImplemented
        return self.area == other.area and self._cells == other._cells

    def __repr__(self) -> str:
        return f"Buffer({self.area!r}, {self.lines()!r})"


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass
class Span:
    text: str
    style: Style = Style()


@dataclass
class Line:
    spans: object = ""
    style: Style = Style()
    alignment: Optional[Alignment] = None

    def __post_init__(self) -> None:
        content = self.spans
        if isinstance(content, str):
            self.spans = [Span(content)] if content else []
        elif isinstance(content, Span):
            self.spans = [content]
        else:
            self.spans = [s if isinstance(s, Span) else Span(str(s)) for s in content]

    def width(self) -> int:
        return sum(len(span.text) for span in self.spans)

    def cells(self) -> list[tuple[str, Style]]:
        return [(ch, self.style.patch(span.style)) for span in self.spans for ch in span.text]


TextLike = Union[str, Span, Line, Sequence[Union[str, Span, Line]]]


def _to_lines(text: TextLike) -> list[Line]:
    if isinstance(text, str):
        return [Line(part) for part in text.split("\n")]
    if isinstance(text, (Span, Line)):
        return [text if isinstance(text, Line) else Line(text)]
    return [item if isinstance(item, Line) else Line(item) for item in text]


def _render_cells(buf, cells, x, y, width, alignment) -> None:
    offset = 0
    if alignment is Alignment.CENTER:
        offset = max(0, (width - len(cells)) // 2)
    elif alignment is Alignment.RIGHT:
        offset = max(0, width - len(cells))
    limit = x + width
    for column, (ch, style) in enumerate(cells, start=x + offset):
        if column >= limit:
            break
        buf.set_string(column, y, ch, style)


@dataclass(frozen=True)
class BorderSet:
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str


BorderSet.PLAIN = BorderSet("┌", "┐", "└", "┘", "─", "│")
BorderSet.THICK = BorderSet("┏", "┓", "┗", "┛", "━", "┃")
BorderSet.ROUNDED = BorderSet("╭", "╮", "╰", "╯", "─", "│")


@dataclass
class Block:
    title: Optional[TextLike] = None
    title_bottom: Optional[TextLike] = None
    borders: bool = False
    border_set: BorderSet = BorderSet.PLAIN
    style: Style = Style()
    title_alignment: Alignment = Alignment.LEFT

    @classmethod
    def bordered(cls, **kwargs) -> "Block":
        return cls(borders=True, **kwargs)

    def inner(self, area: Rect) -> Rect:
        """The area left for content inside borders and titles."""
        if self.borders:
            return area.inner(1, 1)
        top = 1 if self.title is not None else 0
        bottom = 1 if self.title_bottom is not None else 0
        return Rect(area.x, area.y + top, area.width, max(0, area.height - top - bottom))

    def render(self, area: Rect, buf: Buffer) -> None:
        if area.is_empty():
            return
        buf.set_style(area, self.style)
        if self.borders:
            b = self.border_set
            last_x, last_y = area.right - 1, area.bottom - 1
            for x in range(area.x, area.right):
                buf.set_string(x, area.y, b.horizontal)
                buf.set_string(x, last_y, b.horizontal)
            for y in range(area.y, area.bottom):
                buf.set_string(area.x, y, b.vertical)
                buf.set_string(last_x, y, b.vertical)
            buf.set_string(area.x, area.y, b.top_left)
            buf.set_string(last_x, area.y, b.top_right)
            buf.set_string(area.x, last_y, b.bottom_left)
            buf.set_string(last_x, last_y, b.bottom_right)
        pad = 1 if self.borders else 0
        width = area.width - 2 * pad
        for title, row in ((self.title, area.y), (self.title_bottom, area.bottom - 1)):
            if title is None:
                continue
            for line in _to_lines(title)[:1]:
                _render_cells(buf, line.cells(), area.x + pad, row, width,
                              line.alignment or self.title_alignment)


def _wrap(cells, width, trim):
    rows = []
    while len(cells) > width > 0:
        cut = next((i for i in range(width, 0, -1) if cells[i][0] == " "), None)
        if cut is None:
            rows.append(cells[:width])
            cells = cells[width:]
        else:
            rows.append(cells[:cut])
            cells = cells[cut + 1:]
        if trim:
            while cells and cells[0][0] == " ":
                cells = cells[1:]
    rows.append(cells)
    return rows


@dataclass
class Paragraph:
    text: TextLike = ""
    block: Optional[Block] = None
    style: Style = Style()
    alignment: Alignment = Alignment.LEFT
    wrap: bool = False
    trim: bool = True

    def render(self, area: Rect, buf: Buffer) -> None:
        if area.is_empty():
            return
        buf.set_style(area, self.style)
        inner = area
        if self.block is not None:
            self.block.render(area, buf)
            inner = self.block.inner(area)
        rows = []
        for line in _to_lines(self.text):
            cells = line.cells()
            align = line.alignment or self.alignment
            pieces = _wrap(cells, inner.width, self.trim) if self.wrap else [cells]
            rows.extend((piece, align) for piece in pieces)
        for y, (cells, align) in zip(range(inner.y, inner.bottom), rows):
            _render_cells(buf, cells, inner.x, y, inner.width, align)


class Direction(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Length:
    length: int


@dataclass(frozen=True)
class Min:
    minimum: int


@dataclass(frozen=True)
class Percentage:
    percent: int


def split(area: Rect, direction: Direction, constraints, margin: int = 0) -> list[Rect]:
    """Divide an area along one axis according to the constraints."""
    inner = area.inner(margin, margin)
    horizontal = direction is Direction.HORIZONTAL
    total = inner.width if horizontal else inner.height
    sizes = []
    for c in constraints:
        if isinstance(c, Length):
            sizes.append(c.length)
        elif isinstance(c, Percentage):
            sizes.append(total * c.percent // 100)
        elif isinstance(c, Min):
            sizes.append(c.minimum)
        else:
            raise TypeError(f"unknown constraint {c!r}")
    excess = total - sum(sizes)
    if excess > 0 and sizes:
        targets = [i for i, c in enumerate(constraints) if isinstance(c, Min)] or [len(sizes) - 1]
        share, rest = divmod(excess, len(targets))
        for i in targets:
            sizes[i] += share
        sizes[targets[-1]] += rest
    elif excess < 0:
        deficit = -excess
        for i in reversed(range(len(sizes))):
            take = min(sizes[i], deficit)
            sizes[i] -= take
            deficit -= take
    rects, pos = [], inner.x if horizontal else inner.y
    for size in sizes:
        if horizontal:
            rects.append(Rect(pos, inner.y, size, inner.height))
        else:
            rects.append(Rect(inner.x, pos, inner.width, size))
        pos += size
    return rects


def clear(area: Rect, buf: Buffer) -> None:
    """Reset every cell of the area to a blank, unstyled cell."""
    for x, y in buf.area.intersection(area).positions():
        cell = buf[x, y]
        cell.symbol = " "
        cell.style = Style()