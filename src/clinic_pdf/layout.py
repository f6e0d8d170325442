"""Vertical write cursor and the page-break rule."""
from dataclasses import dataclass

from clinic_pdf.constants import BOTTOM_THRESHOLD, PAGE_HEIGHT, TOP_OFFSET


@dataclass
class LayoutCursor:
    """
    Current vertical write position on the active page.

    The cursor only does arithmetic. Callers check ``will_overflow`` before
    drawing a row; on overflow they start a new page on their sink and call
    ``break_page``, then draw the pending row at the reset position.
    Otherwise they ``advance`` and draw at the new position.
    """

    y: float = TOP_OFFSET
    page_index: int = 0
    page_height: float = PAGE_HEIGHT
    bottom_threshold: float = BOTTOM_THRESHOLD
    top_offset: float = TOP_OFFSET

    def advance(self, height: float) -> float:
        """Move down by height and return the new position."""
        if height < 0:
            raise ValueError("Cursor cannot move up within a page")
        self.y += height
        return self.y

    def will_overflow(self, height: float) -> bool:
        """True when advancing by height would pass the bottom threshold."""
        return self.y + height > self.bottom_threshold

    def break_page(self) -> float:
        """Reset to the top offset of the next page."""
        self.page_index += 1
        self.y = self.top_offset
        return self.y

    @property
    def page_count(self) -> int:
        return self.page_index + 1
