"""Errors raised by the quote document pipeline."""


class InvalidQuoteError(ValueError):
    """Quote record missing or without an identifier. Raised before drawing."""


class QuoteRenderError(RuntimeError):
    """The PDF writer failed. The writer's exception is kept on .original."""

    def __init__(self, message, original=None):
        super().__init__(message)
        self.original = original
