"""Screen layout of the JSON editor."""

from __future__ import annotations

from .json_app import CurrentlyEditing, CurrentScreen, JsonApp
from .render import (
    Block,
    Color,
    Direction,
    Length,
    Line,
    Min,
    Paragraph,
    Percentage,
    Rect,
    Span,
    Style,
    clear,
    split,
)
from .terminal import Frame

_SCREEN_LABELS = {
    CurrentScreen.MAIN: Span("Normal Mode", Style(fg=Color.GREEN)),
    CurrentScreen.EDITING: Span("Editing Mode", Style(fg=Color.YELLOW)),
    CurrentScreen.EXITING: Span("Exiting", Style(fg=Color.LIGHT_RED)),
}

_EDITING_LABELS = {
    CurrentlyEditing.KEY: Span("Editing Json Key", Style(fg=Color.GREEN)),
    CurrentlyEditing.VALUE: Span("Editing Json Value", Style(fg=Color.LIGHT_GREEN)),
    None: Span("Not Editing Anything", Style(fg=Color.DARK_GRAY)),
}

_MAIN_HINT = "(q) to quit / (e) to make new pair"
_KEY_HINTS = {
    CurrentScreen.MAIN: _MAIN_HINT,
    CurrentScreen.EDITING: "(ESC) to cancel/(Tab) to switch boxes/enter to complete",
    CurrentScreen.EXITING: _MAIN_HINT,
}


def ui(frame: Frame, app: JsonApp) -> None:
    """Draw the whole editor screen for the app's current state."""
    chunks = split(frame.area, Direction.VERTICAL, [Length(3), Min(1), Length(3)])

    title = Paragraph(
        Span("Create New Json", Style(fg=Color.GREEN)),
        block=Block(borders=True),
    )
    frame.render_widget(title, chunks[0])

    items = [
        Line(Span(f"{key:<25} : {value}", Style(fg=Color.YELLOW)))
        for key, value in app.pairs.items()
    ]
    frame.render_widget(Paragraph(items), chunks[1])

    navigation = Line([
        _SCREEN_LABELS[app.current_screen],
        Span(" | ", Style(fg=Color.WHITE)),
        _EDITING_LABELS[app.currently_editing],
    ])
    mode_footer = Paragraph(navigation, block=Block(borders=True))
    hint = Span(_KEY_HINTS[app.current_screen], Style(fg=Color.RED))
    key_notes_footer = Paragraph(Line(hint), block=Block(borders=True))

    footer_chunks = split(chunks[2], Direction.HORIZONTAL, [Percentage(50), Percentage(50)])
    frame.render_widget(mode_footer, footer_chunks[0])
    frame.render_widget(key_notes_footer, footer_chunks[1])

    if app.currently_editing is not None:
        popup_block = Block(title="Enter a new key-value pair", style=Style(bg=Color.DARK_GRAY))
        area = centered_rect(60, 25, frame.area)
        frame.render_widget(popup_block, area)

        popup_chunks = split(area, Direction.HORIZONTAL,
                             [Percentage(50), Percentage(50)], margin=1)
        active_style = Style(fg=Color.BLACK, bg=Color.LIGHT_YELLOW)
        editing_key = app.currently_editing is CurrentlyEditing.KEY
        key_block = Block(title="Key", borders=True,
                          style=active_style if editing_key else Style())
        value_block = Block(title="Value", borders=True,
                            style=Style() if editing_key else active_style)

        frame.render_widget(Paragraph(app.key_input, block=key_block), popup_chunks[0])
        frame.render_widget(Paragraph(app.value_input, block=value_block), popup_chunks[1])

    if app.current_screen is CurrentScreen.EXITING:
        clear(frame.area, frame.buffer)
        popup_block = Block(title="Y/N", style=Style(bg=Color.DARK_GRAY))
        exit_text = Span(
            "Would you like to output the buffer as json? (y/n)",
            Style(fg=Color.RED),
        )
        # Wrapping without trimming keeps the text whole at the block's edge.
        exit_paragraph = Paragraph(exit_text, block=popup_block, wrap=True, trim=False)
        frame.render_widget(exit_paragraph, centered_rect(60, 25, frame.area))


def centered_rect(percent_x: int, percent_y: int, r: Rect) -> Rect:
    """A rectangle centred in ``r`` taking the given percentages of it."""
    side_y = (100 - percent_y) // 2
    rows = split(r, Direction.VERTICAL,
                 [Percentage(side_y), Percentage(percent_y), Percentage(side_y)])
    side_x = (100 - percent_x) // 2
    columns = split(rows[1], Direction.HORIZONTAL,
                    [Percentage(side_x), Percentage(percent_x), Percentage(side_x)])
    return columns[1]