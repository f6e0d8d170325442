"""Page sink: the canvas writer the assembler draws on, built on FPDF2."""
from typing import Protocol

from fpdf import FPDF

from clinic_pdf.constants import CURRENCY_SYMBOL, PAGE_HEIGHT, PAGE_WIDTH

BODY_FONT = "helvetica"
UNICODE_FONT = "body"


class PageSink(Protocol):
    """Drawing primitives the layout engine relies on."""

    def add_page(self) -> None: ...

    def use_font(self, style: str = "", size: float = 10) -> None: ...

    def set_text_color(self, r: int, g: int = -1, b: int = -1) -> None: ...

    def set_fill_color(self, r: int, g: int = -1, b: int = -1) -> None: ...

    def set_draw_color(self, r: int, g: int = -1, b: int = -1) -> None: ...

    def set_line_width(self, width: float) -> None: ...

    def place_text(self, x: float, y: float, text: str, align: str = "left") -> None: ...

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def place_image(self, source: str, x: float, y: float, w: float, h: float) -> None: ...

    def watermark(self, text: str, x: float, y: float, angle: float, size: float) -> None: ...

    def to_bytes(self) -> bytes: ...


class PdfSink(FPDF):
    """FPDF document with absolute-position drawing helpers.

    Page breaks are driven by LayoutCursor, so FPDF's own automatic break
    is switched off.
    """

    def __init__(self, font_path: str | None = None):
        super().__init__(orientation="P", unit="mm", format=(PAGE_WIDTH, PAGE_HEIGHT))
        self.set_auto_page_break(auto=False)
        self._unicode_font = False
        self._body_family = BODY_FONT
        if font_path:
            self.add_font(UNICODE_FONT, "", font_path)
            self.add_font(UNICODE_FONT, "B", font_path)
            self._body_family = UNICODE_FONT
            self._unicode_font = True
        self.add_page()
        self.use_font()

    def use_font(self, style: str = "", size: float = 10) -> None:
        self.set_font(self._body_family, style, size)

    def place_text(self, x: float, y: float, text: str, align: str = "left") -> None:
        """Write text with its baseline at y; x is the left, center or right anchor."""
        text = self._encodable(text)
        width = self.get_string_width(text)
        if align == "right":
            x -= width
        elif align == "center":
            x -= width / 2
        self.text(x, y, text)

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        self.rect(x, y, w, h, style="F")

    def place_image(self, source: str, x: float, y: float, w: float, h: float) -> None:
        self.image(source, x, y, w, h)

    def watermark(self, text: str, x: float, y: float, angle: float, size: float) -> None:
        """Centered rotated text at low opacity."""
        self.use_font("B", size)
        with self.local_context(fill_opacity=0.1), self.rotation(angle, x, y):
            self.place_text(x, y, text, align="center")

    def to_bytes(self) -> bytes:
        return bytes(self.output())

    def _encodable(self, text: str) -> str:
        if self._unicode_font:
            return text
        # Core fonts only cover latin-1
        text = text.replace(CURRENCY_SYMBOL, "Rs.")
        return text.encode("latin-1", "replace").decode("latin-1")
