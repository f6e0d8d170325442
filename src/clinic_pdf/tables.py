"""Paginated table rendering against a LayoutCursor."""
from collections.abc import Sequence
from dataclasses import dataclass

from clinic_pdf.constants import Color, ROW_HEIGHT
from clinic_pdf.layout import LayoutCursor
from clinic_pdf.sink import PageSink


@dataclass(frozen=True)
class Column:
    """A table column anchored at a fixed x-offset."""

    x: float
    header: str = ""
    align: str = "left"


@dataclass(frozen=True)
class RowFill:
    """Background band drawn behind each row, alternating by index parity."""

    x: float = 15
    width: float = 180
    rise: float = 5
    even: tuple[int, int, int] = Color.ROW_EVEN
    odd: tuple[int, int, int] = Color.ROW_ODD


def advance_or_break(sink: PageSink, cursor: LayoutCursor, height: float) -> float:
    """
    Position the next line of content.

    Breaks to a new page when the line would pass the bottom threshold and
    returns the top offset; otherwise advances the cursor by height.
    """
    if cursor.will_overflow(height):
        sink.add_page()
        return cursor.break_page()
    return cursor.advance(height)


def keep_together(sink: PageSink, cursor: LayoutCursor, height: float) -> None:
    """Start a new page up front when a block of the given height would not fit."""
    if cursor.will_overflow(height):
        sink.add_page()
        cursor.break_page()


class TableRenderer:
    """Draws a header line once, then rows with check-then-draw page breaks."""

    def __init__(
        self,
        sink: PageSink,
        cursor: LayoutCursor,
        columns: Sequence[Column],
        row_height: float = ROW_HEIGHT,
        fill: RowFill | None = None,
        header_size: float = 9,
        body_size: float = 9,
    ):
        self.sink = sink
        self.cursor = cursor
        self.columns = columns
        self.row_height = row_height
        self.fill = fill
        self.header_size = header_size
        self.body_size = body_size

    def render(self, rows: Sequence[Sequence[str]]) -> int:
        """Render rows in order and return the number of page breaks taken."""
        pages_before = self.cursor.page_index
        if any(column.header for column in self.columns):
            self._draw_header()

        self.sink.use_font("", self.body_size)
        for index, row in enumerate(rows):
            y = advance_or_break(self.sink, self.cursor, self.row_height)
            if self.fill is not None:
                self._draw_fill(index, y)
            self.sink.set_text_color(*Color.BLACK)
            for column, value in zip(self.columns, row):
                self.sink.place_text(column.x, y, value, align=column.align)
        return self.cursor.page_index - pages_before

    def _draw_header(self) -> None:
        y = advance_or_break(self.sink, self.cursor, self.row_height)
        self.sink.use_font("B", self.header_size)
        for column in self.columns:
            self.sink.place_text(column.x, y, column.header, align=column.align)

    def _draw_fill(self, index: int, y: float) -> None:
        color = self.fill.even if index % 2 == 0 else self.fill.odd
        self.sink.set_fill_color(*color)
        self.sink.fill_rect(self.fill.x, y - self.fill.rise, self.fill.width, self.row_height)
