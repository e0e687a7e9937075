"""Custom exceptions for rich text rendering."""


class RichTextError(Exception):
    """Base exception for rich text errors."""
    pass


class MarkupParseError(RichTextError):
    """Raised when markup cannot be parsed or serialized.

    Internal to the sanitizer: sanitize() converts it to an empty result
    and never lets it reach the caller.
    """
    pass


class OutputError(RichTextError):
    """Rendered output could not be written to disk."""
    pass
