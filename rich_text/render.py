"""Route untrusted content to the sanitizer or the plain-text formatter."""

import logging
from dataclasses import dataclass
from enum import Enum
from html import escape

from .classify import looks_like_markup
from .plain import PlainText, format_plain
from .policy import DEFAULT_POLICY, AllowlistPolicy
from .sanitize import sanitize

logger = logging.getLogger(__name__)


class ContentKind(Enum):
    MARKUP = "markup"
    PLAIN = "plain"


@dataclass(frozen=True)
class RenderedContent:
    """Display-ready content.

    Use factory classmethods instead of constructing directly:
        RenderedContent.from_markup(safe_markup)
        RenderedContent.from_plain(plain_text)

    For MARKUP, ``markup`` is sanitized and may be injected as trusted
    HTML. For PLAIN, ``plain`` holds the paragraph blocks, which are
    escaped on output.
    """

    kind: ContentKind
    markup: str = ""
    plain: PlainText | None = None

    @classmethod
    def from_markup(cls, markup: str) -> "RenderedContent":
        return cls(kind=ContentKind.MARKUP, markup=markup)

    @classmethod
    def from_plain(cls, plain: PlainText) -> "RenderedContent":
        return cls(kind=ContentKind.PLAIN, plain=plain)

    @property
    def is_markup(self) -> bool:
        return self.kind == ContentKind.MARKUP

    def fragment(self, paragraph_class: str | None = None) -> str:
        """HTML for the content alone, without a wrapper element."""
        if self.is_markup:
            return self.markup
        if self.plain is None:
            return ""
        return self.plain.to_html(paragraph_class=paragraph_class)

    def to_html(self, class_name: str | None = None, paragraph_class: str | None = None) -> str:
        """HTML for the content wrapped in a <div>, optionally with a class."""
        open_tag = f'<div class="{escape(class_name)}">' if class_name else "<div>"
        return f"{open_tag}{self.fragment(paragraph_class)}</div>"


def render(content: str | None, policy: AllowlistPolicy = DEFAULT_POLICY) -> RenderedContent:
    """Render untrusted content for display.

    Markup-looking content is sanitized against the policy; anything else
    is split into plain paragraphs. None is treated as an empty string.
    """
    text = "" if content is None else str(content)

    if looks_like_markup(text):
        logger.debug("Rendering %d chars as markup", len(text))
        return RenderedContent.from_markup(sanitize(text, policy))

    logger.debug("Rendering %d chars as plain text", len(text))
    return RenderedContent.from_plain(format_plain(text))
