"""The smallest applications: a hello-world screen and a bordered greeting."""

from __future__ import annotations

import argparse
import time

from .render import Alignment, Block, Paragraph
from .terminal import Frame, KeyEvent, Terminal


def render_hello(frame: Frame) -> None:
    frame.render_widget("hello world", frame.area)


def render_quickstart(frame: Frame) -> None:
    widget = Paragraph("Hello world!", block=Block.bordered(), alignment=Alignment.CENTER)
    frame.render_widget(widget, frame.area.inner(2, 2))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Show a greeting on the terminal.")
    parser.add_argument("--quickstart", action="store_true",
                        help="draw a bordered greeting once and wait five seconds")
    args = parser.parse_args(argv)
    if args.quickstart:
        Terminal(alternate_screen=False).draw(render_quickstart)
        time.sleep(5)
        return 0
    with Terminal() as terminal:
        while True:
            terminal.draw(render_hello)
            if isinstance(terminal.read_event(), KeyEvent):
                break
    return 0