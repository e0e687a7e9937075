"""Rich text rendering: safe HTML from untrusted text or markup."""

__version__ = "0.1.0"

from .classify import looks_like_markup
from .errors import MarkupParseError, OutputError, RichTextError
from .plain import PlainText, format_plain
from .policy import DEFAULT_POLICY, AllowlistPolicy
from .render import ContentKind, RenderedContent, render
from .sanitize import sanitize

__all__ = [
    "AllowlistPolicy",
    "ContentKind",
    "DEFAULT_POLICY",
    "MarkupParseError",
    "OutputError",
    "PlainText",
    "RenderedContent",
    "RichTextError",
    "format_plain",
    "looks_like_markup",
    "render",
    "sanitize",
]
