"""Tests for paginated table rendering."""
import math

import pytest

from clinic_pdf.constants import Color
from clinic_pdf.layout import LayoutCursor
from clinic_pdf.tables import Column, RowFill, TableRenderer, advance_or_break, keep_together


def _rows(count):
    return [(f"row {i}",) for i in range(1, count + 1)]


class TestPagination:
    def test_forty_rows_from_offset_92(self, sink):
        cursor = LayoutCursor(y=92)

        breaks = TableRenderer(sink, cursor, (Column(15),)).render(_rows(40))

        ops = sink.text_ops()
        first_page = [op for op in ops if op[0] == 0]
        second_page = [op for op in ops if op[0] == 1]
        assert breaks == 1
        assert len(first_page) == 25
        assert len(second_page) == 15
        assert first_page[-1] == (0, 15, 267, "row 25")
        assert second_page[0] == (1, 15, 20, "row 26")
        assert second_page[-1] == (1, 15, 118, "row 40")
        assert [op for op in sink.ops if op[0] == "add_page"] == [("add_page", 1)]

    @pytest.mark.parametrize("start, height, threshold", [(92, 7, 270), (100, 6, 270), (20, 7, 270), (150, 9, 200)])
    def test_break_index(self, sink, start, height, threshold):
        cursor = LayoutCursor(y=start, bottom_threshold=threshold)

        TableRenderer(sink, cursor, (Column(15),), row_height=height).render(_rows(60))

        first_on_new_page = next(op for op in sink.text_ops() if op[0] == 1)
        assert first_on_new_page[3] == f"row {math.ceil((threshold - start) / height)}"
        assert first_on_new_page[2] == 20

    def test_row_landing_on_threshold_stays_on_page(self, sink):
        cursor = LayoutCursor(y=256)

        TableRenderer(sink, cursor, (Column(15),)).render(_rows(3))

        assert sink.text_ops() == [(0, 15, 263, "row 1"), (0, 15, 270, "row 2"), (1, 15, 20, "row 3")]

    def test_page_count_from_top_offset(self, sink):
        cursor = LayoutCursor()

        TableRenderer(sink, cursor, (Column(15),)).render(_rows(35))
        assert cursor.page_count == 1

        TableRenderer(sink, cursor, (Column(15),)).render(_rows(1))
        assert cursor.page_count == 2

    def test_no_rows_never_adds_page(self, sink):
        cursor = LayoutCursor(y=269)

        breaks = TableRenderer(sink, cursor, (Column(15),)).render([])

        assert breaks == 0
        assert sink.ops == [("font", "", 9)]


class TestHeaderAndColumns:
    def test_header_drawn_once_in_bold(self, sink):
        cursor = LayoutCursor(y=140)
        columns = (Column(15, "#"), Column(45, "Medicine"))

        TableRenderer(sink, cursor, columns).render([("1", "Paracetamol"), ("2", "Cetirizine")])

        assert sink.text_ops() == [
            (0, 15, 147, "#"),
            (0, 45, 147, "Medicine"),
            (0, 15, 154, "1"),
            (0, 45, 154, "Paracetamol"),
            (0, 15, 161, "2"),
            (0, 45, 161, "Cetirizine"),
        ]
        assert ("font", "B", 9) in sink.ops

    def test_alignment_passed_to_sink(self, sink):
        TableRenderer(sink, LayoutCursor(), (Column(20), Column(190, align="right"))).render([("1. CRP", "x")])

        aligns = [op[5] for op in sink.ops if op[0] == "text"]
        assert aligns == ["left", "right"]


class TestRowFill:
    def test_fill_alternates_by_parity(self, sink):
        cursor = LayoutCursor(y=113)

        TableRenderer(sink, cursor, (Column(20),), fill=RowFill()).render(_rows(3))

        fills = [op[1:] for op in sink.ops if op[0] == "fill_color"]
        rects = [op for op in sink.ops if op[0] == "rect"]
        assert fills == [Color.ROW_EVEN, Color.ROW_ODD, Color.ROW_EVEN]
        assert rects[0] == ("rect", 0, 15, 115, 180, 7)
        assert rects[1] == ("rect", 0, 15, 122, 180, 7)

    def test_no_fill_by_default(self, sink):
        TableRenderer(sink, LayoutCursor(), (Column(20),)).render(_rows(2))

        assert not [op for op in sink.ops if op[0] in ("rect", "fill_color")]


def test_advance_or_break(sink):
    cursor = LayoutCursor(y=260)

    assert advance_or_break(sink, cursor, 7) == 267
    assert advance_or_break(sink, cursor, 7) == 20
    assert sink.ops == [("add_page", 1)]


def test_keep_together(sink):
    cursor = LayoutCursor(y=240)

    keep_together(sink, cursor, 30)
    assert cursor.y == 240

    keep_together(sink, cursor, 31)
    assert cursor.y == 20
    assert sink.ops == [("add_page", 1)]
