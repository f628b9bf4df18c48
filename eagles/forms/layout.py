"""
Layout primitives for quote documents.

Section composers work in top-down page coordinates (y=0 is the top edge,
like pdfplumber reports them) and talk to a "pen" instead of a canvas:

    CanvasPen    draws on a reportlab canvas (bottom-up coordinates)
    RecordingPen captures (op, x, y, payload) tuples, no PDF involved

Both share the same wrapping rules, so the heights a composer gets back are
identical whether or not anything is actually drawn.
"""

from abc import ABC, abstractmethod

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics

PAGE_W, PAGE_H = A4
MARGIN = 50
CONTENT_W = PAGE_W - 2 * MARGIN
LEADING = 1.2   # line height as a multiple of font size

BLACK = "#000000"
GRAY = "#666666"
ELLIPSIS = "..."


def wrap_lines(text, font, size, width=None):
    s = "" if text is None else str(text)
    if width:
        return simpleSplit(s, font, size, width) or [""]
    return s.split("\n")


def line_height(size):
    return size * LEADING


def fit_text(text, width, font="Helvetica", size=9):
    """Truncate to fit a column, with a trailing ellipsis."""
    s = str(text)
    if pdfmetrics.stringWidth(s, font, size) <= width:
        return s
    while s and pdfmetrics.stringWidth(s + ELLIPSIS, font, size) > width:
        s = s[:-1]
    return s.rstrip() + ELLIPSIS


class LayoutCursor:
    """The running "next write position" threaded through every composer."""

    def __init__(self, y=MARGIN):
        self.y = float(y)

    def advance(self, dy):
        self.y += dy
        return self.y

    def overflowed(self, limit=PAGE_H - MARGIN):
        return self.y > limit

    def __repr__(self):
        return f"LayoutCursor(y={self.y:.1f})"


class _Pen(ABC):
    """Shared text/rect logic; subclasses only implement the two primitives."""

    def text(self, text, x, y, font="Helvetica", size=10, color=BLACK,
             width=None, align="left"):
        """Draw text with its top at y. Returns the height used."""
        lines = wrap_lines(text, font, size, width)
        lh = line_height(size)
        for i, ln in enumerate(lines):
            lx = x
            if align == "center" and width:
                lx = x + width / 2
            elif align == "right" and width:
                lx = x + width
            self._draw_text(ln, lx, y + i * lh, font, size, color, align)
        return len(lines) * lh

    def rect(self, x, y, w, h, fill=None, stroke=None, line_width=0.5):
        self._draw_rect(x, y, w, h, fill, stroke, line_width)

    @abstractmethod
    def _draw_text(self, s, x, y, font, size, color, align):
        ...

    @abstractmethod
    def _draw_rect(self, x, y, w, h, fill, stroke, line_width):
        ...


class CanvasPen(_Pen):
    def __init__(self, c, page_height=PAGE_H):
        self.c = c
        self.page_height = page_height

    def Y(self, top_y):
        return self.page_height - top_y

    def _draw_text(self, s, x, y, font, size, color, align):
        c = self.c
        c.setFont(font, size)
        c.setFillColor(HexColor(color))
        # top of line box -> baseline
        rl_y = self.Y(y + pdfmetrics.getAscent(font, size))
        if align == "right":
            c.drawRightString(x, rl_y, s)
        elif align == "center":
            c.drawCentredString(x, rl_y, s)
        else:
            c.drawString(x, rl_y, s)

    def _draw_rect(self, x, y, w, h, fill, stroke, line_width):
        c = self.c
        rl_y = self.Y(y) - h
        if fill:
            c.setFillColor(HexColor(fill))
            c.rect(x, rl_y, w, h, fill=1, stroke=0)
        if stroke:
            c.setStrokeColor(HexColor(stroke))
            c.setLineWidth(line_width)
            c.rect(x, rl_y, w, h, fill=0, stroke=1)


class RecordingPen(_Pen):
    def __init__(self):
        self.ops = []

    def _draw_text(self, s, x, y, font, size, color, align):
        self.ops.append(("text", x, y, {"text": s, "font": font, "size": size,
                                        "color": color, "align": align}))

    def _draw_rect(self, x, y, w, h, fill, stroke, line_width):
        self.ops.append(("rect", x, y, {"w": w, "h": h, "fill": fill,
                                        "stroke": stroke}))

    def texts(self):
        return [op[3]["text"] for op in self.ops if op[0] == "text"]

    def rects(self):
        return [op for op in self.ops if op[0] == "rect"]

    def find(self, text):
        """First text op whose string equals text, or None."""
        for op in self.ops:
            if op[0] == "text" and op[3]["text"] == text:
                return op
        return None
