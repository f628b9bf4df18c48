"""Quotation PDF generation.

Key exports:
    render_quote_document() - start a render, returns Future[bytes]
    generate_quote_pdf()    - blocking render, returns bytes
"""

from .errors import InvalidQuoteError, QuoteRenderError
from .quote_pdf import generate_quote_pdf, render_quote_document

__all__ = ["InvalidQuoteError", "QuoteRenderError",
           "generate_quote_pdf", "render_quote_document"]
