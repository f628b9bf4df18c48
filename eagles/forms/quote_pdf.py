"""
Eagles Events Quotation PDF
===========================
Single-page A4 quotation built top-down in one column:

    masthead -> QUOTATION title -> quote details -> customer information
    -> event details -> items table -> cost summary -> payment information
    -> banking details -> special notes (optional) -> footer

Every section composer takes (pen, cursor, quote): it draws at cursor.y and
advances the cursor by the height it used. Nothing is re-measured and no
section looks back at what was drawn before it.

Output is streamed by the reportlab canvas into a ChunkCollector (see
pdf_stream.py) whose Future resolves to the finished PDF bytes.
"""

import os
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, Future

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from ..core.company import COMPANY, BANKING, FOOTER_LINES, CURRENCY_SYMBOL
from .formatting import format_currency, format_number
from .layout import (
    BLACK, CONTENT_W, GRAY, MARGIN, PAGE_H, CanvasPen, LayoutCursor,
    fit_text,
)
from .pdf_stream import ChunkCollector, StreamSink
from .quote_model import normalize_quote, quote_id, validate_quote

log = logging.getLogger("eagles.quote_pdf")

RENDER_WORKERS = int(os.environ.get("PDF_RENDER_WORKERS", "4"))
PDF_INVARIANT = os.environ.get("PDF_INVARIANT", "1").lower() not in ("0", "false", "no")

# ═══════════════════════════════════════════════════════════════════════════════
# GRID
# ═══════════════════════════════════════════════════════════════════════════════
LEFT_COL = 70
RIGHT_COL = 300
LABEL_W = 80
VALUE_W = 200
RIGHT_EDGE = MARGIN + CONTENT_W

HEADER_FILL = "#f5f5f5"
ROW_BORDER = "#e0e0e0"

# Items table: x of each column, header row / body row heights
TABLE_COLS = [("Item/Service", 70), ("Qty", 300), ("Unit Price", 350), ("Total", 450)]
NAME_W = 200
HEADER_ROW_H = 20
ROW_H = 18
EMPTY_ITEMS_TEXT = "No items selected"

NOTES_TITLE = "Special Notes & Requirements:"


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def section_header(pen, cursor, text):
    pen.text(text, MARGIN, cursor.y, "Helvetica-Bold", 12, BLACK)
    cursor.advance(20)


def label_value(pen, label, value, x, y, label_w=LABEL_W):
    """Gray label, bold value to its right. Returns height of the value."""
    pen.text(label, x, y, "Helvetica", 10, GRAY)
    vx = x + label_w + 10
    width = min(VALUE_W, RIGHT_EDGE - vx)
    return pen.text(value, vx, y, "Helvetica-Bold", 10, BLACK, width=width)


def centered(pen, cursor, text, font="Helvetica", size=10, color=GRAY):
    return pen.text(text, MARGIN, cursor.y, font, size, color,
                    width=CONTENT_W, align="center")


def money(amount):
    return format_currency(amount, CURRENCY_SYMBOL)


# ═══════════════════════════════════════════════════════════════════════════════
# SECTION COMPOSERS
# ═══════════════════════════════════════════════════════════════════════════════

def draw_masthead(pen, cursor, quote):
    centered(pen, cursor, COMPANY["name"], "Helvetica-Bold", 28, BLACK)
    cursor.advance(40)
    centered(pen, cursor, COMPANY["tagline"], "Helvetica", 14, GRAY)
    cursor.advance(30)
    centered(pen, cursor, COMPANY["address"])
    cursor.advance(15)
    centered(pen, cursor, COMPANY["phone"])
    cursor.advance(15)
    centered(pen, cursor, COMPANY["email"])
    cursor.advance(30)


def draw_title(pen, cursor, quote):
    centered(pen, cursor, "QUOTATION", "Helvetica-Bold", 20, BLACK)
    cursor.advance(25)


def draw_quote_details(pen, cursor, quote):
    section_header(pen, cursor, "Quote Details:")
    pen.text(f"Reference: {quote['reference']}", LEFT_COL, cursor.y)
    cursor.advance(15)
    pen.text(f"Event Date: {quote['event_date']}", LEFT_COL, cursor.y)
    cursor.advance(30)


def draw_customer_info(pen, cursor, quote):
    section_header(pen, cursor, "Customer Information:")
    rows = [
        (("Name:", quote["customer_name"]), ("Phone:", quote["phone"])),
        (("Company:", quote["company"]), ("Location:", quote["location"])),
        (("Email:", quote["email"]), ("Event Type:", quote["event_type"])),
    ]
    for i, (left, right) in enumerate(rows):
        h = max(label_value(pen, *left, LEFT_COL, cursor.y),
                label_value(pen, *right, RIGHT_COL, cursor.y))
        last = i == len(rows) - 1
        cursor.advance(max(h, 12) + (8 if last else 0))


def draw_event_details(pen, cursor, quote):
    section_header(pen, cursor, "Event Details:")
    h = label_value(pen, "Services:", quote["services"], LEFT_COL, cursor.y)
    cursor.advance(max(h, 12))
    label_value(pen, "Guest Count:", quote["guest_count"], LEFT_COL, cursor.y)
    cursor.advance(20)


def draw_items_table(pen, cursor, quote):
    section_header(pen, cursor, "Selected Items & Services:")
    items = quote["items"]
    if not items:
        pen.text(EMPTY_ITEMS_TEXT, LEFT_COL, cursor.y)
        cursor.advance(20)
        return

    pen.rect(MARGIN, cursor.y, CONTENT_W, HEADER_ROW_H, fill=HEADER_FILL)
    for label, x in TABLE_COLS:
        pen.text(label, x, cursor.y + 6, "Helvetica-Bold", 9, BLACK)
    cursor.advance(25)

    for idx, item in enumerate(items, 1):
        log.debug("Item %d: %s, Qty: %s, Price: %s, Total: %s", idx,
                  item["name"], item["quantity"], item["price"], item["line_total"])
        pen.rect(MARGIN, cursor.y, CONTENT_W, ROW_H, stroke=ROW_BORDER, line_width=0.5)
        ty = cursor.y + 5
        cells = [
            fit_text(item["name"], NAME_W, "Helvetica", 9),
            format_number(item["quantity"]),
            money(item["price"]),
            money(item["line_total"]),
        ]
        for text, (_, x) in zip(cells, TABLE_COLS):
            pen.text(text, x, ty, "Helvetica", 9, BLACK)
        cursor.advance(ROW_H)
    cursor.advance(20)


def draw_cost_summary(pen, cursor, quote):
    section_header(pen, cursor, "Cost Summary:")
    pen.text(f"Total Amount: {money(quote['total_amount'])}", LEFT_COL, cursor.y,
             "Helvetica-Bold", 14, BLACK)
    cursor.advance(25)


def draw_payment_info(pen, cursor, quote):
    section_header(pen, cursor, "Payment Information:")
    label_value(pen, "Payment Method:", quote["payment_method"], LEFT_COL, cursor.y)
    cursor.advance(12)
    label_value(pen, "Payment Status:", quote["payment_status"], LEFT_COL, cursor.y)
    cursor.advance(20)


def draw_banking_details(pen, cursor, quote):
    section_header(pen, cursor, "Banking Details:")
    for i, (label, value) in enumerate(BANKING):
        y = cursor.y + i * 12
        pen.text(label, LEFT_COL, y, "Helvetica", 10, GRAY)
        pen.text(value, LEFT_COL + 80, y, "Helvetica-Bold", 10, BLACK)
    cursor.advance(75)


def draw_notes(pen, cursor, quote):
    if not quote["notes"]:
        return
    cursor.advance(15)
    section_header(pen, cursor, NOTES_TITLE)
    h = pen.text(quote["notes"], LEFT_COL, cursor.y, "Helvetica", 10, BLACK,
                 width=CONTENT_W - 40)
    cursor.advance(h)


def draw_footer(pen, cursor, quote):
    cursor.advance(30)
    for line in FOOTER_LINES:
        centered(pen, cursor, line)
        cursor.advance(12)


SECTIONS = (
    draw_masthead,
    draw_title,
    draw_quote_details,
    draw_customer_info,
    draw_event_details,
    draw_items_table,
    draw_cost_summary,
    draw_payment_info,
    draw_banking_details,
    draw_notes,
    draw_footer,
)


def compose_quote(pen, quote, cursor=None) -> LayoutCursor:
    """Run every section on a normalized quote. Returns the final cursor."""
    cursor = cursor or LayoutCursor(MARGIN)
    for section in SECTIONS:
        section(pen, cursor, quote)
    if cursor.overflowed(PAGE_H - MARGIN):
        # TODO: agree a pagination rule for long item lists / notes with the
        # business before adding page breaks; content currently runs off-page.
        log.warning("Quote %s content ends at y=%.0f, past the page bottom (%.0f)",
                    quote["reference"], cursor.y, PAGE_H - MARGIN)
    return cursor


# ═══════════════════════════════════════════════════════════════════════════════
# ORCHESTRATION
# ═══════════════════════════════════════════════════════════════════════════════

def _new_canvas(sink, quote):
    c = canvas.Canvas(sink, pagesize=A4, invariant=1 if PDF_INVARIANT else 0)
    c.setTitle(f"Quotation {quote['reference']}")
    c.setAuthor(COMPANY["name"])
    return c


def _render_normalized(quote, collector: ChunkCollector, canvas_factory=None):
    try:
        c = (canvas_factory or _new_canvas)(StreamSink(collector), quote)
        compose_quote(CanvasPen(c), quote)
        c.showPage()
        c.save()
    except Exception as e:
        collector.fail(e)
        return
    if collector.finish():
        log.info("PDF generation completed for quote %s: %d items, %d bytes",
                 quote["reference"], len(quote["items"]),
                 len(collector.future.result()), extra={"quote_id": quote["id"]})


def render_to_collector(record, collector: ChunkCollector, canvas_factory=None):
    """Render record into collector. Never raises: failures go to collector.fail."""
    try:
        quote = normalize_quote(record)
    except Exception as e:
        collector.fail(e)
        return
    _render_normalized(quote, collector, canvas_factory)


_executor = None
_executor_lock = threading.Lock()


def _get_executor():
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=RENDER_WORKERS,
                                           thread_name_prefix="quote-pdf")
        return _executor


def _start(record):
    validate_quote(record)
    qid = quote_id(record)
    log.info("PDF generation started for quote %s", qid, extra={"quote_id": str(qid)})
    return ChunkCollector(label=str(qid))


def render_quote_document(record, canvas_factory=None) -> Future:
    """Start rendering a quote PDF. Returns a Future resolving to the bytes.

    Raises InvalidQuoteError immediately (nothing is rendered) when the record
    is missing or has no id. The record is read before this returns, so later
    changes to it do not reach the document. Any later failure surfaces
    through the Future as QuoteRenderError.
    """
    collector = _start(record)
    quote = normalize_quote(record)
    _get_executor().submit(_render_normalized, quote, collector, canvas_factory)
    return collector.future


def generate_quote_pdf(record, canvas_factory=None) -> bytes:
    """Blocking render in the calling thread. Raises QuoteRenderError on failure."""
    collector = _start(record)
    render_to_collector(record, collector, canvas_factory)
    return collector.future.result()
