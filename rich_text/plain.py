"""Paragraph formatting for plain, multi-line text."""

import re
from dataclasses import dataclass
from html import escape

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class PlainText:
    """Plain text split into display blocks.

    Attributes:
        text: The original content, untouched.
        paragraphs: One entry per non-blank line, in order. Empty when the
            content has at most one non-blank line and is shown as a
            single unwrapped block.
    """
    text: str
    paragraphs: tuple[str, ...] = ()

    @property
    def is_single_block(self) -> bool:
        return not self.paragraphs

    @property
    def blocks(self) -> tuple[str, ...]:
        return (self.text,) if self.is_single_block else self.paragraphs

    def to_html(self, paragraph_class: str | None = None) -> str:
        """Escape the blocks for display. Nothing is interpreted as markup."""
        if self.is_single_block:
            return escape(self.text)
        open_tag = f'<p class="{escape(paragraph_class)}">' if paragraph_class else "<p>"
        return "".join(f"{open_tag}{escape(p)}</p>" for p in self.paragraphs)


def format_plain(content: str) -> PlainText:
    """Split text into one paragraph per non-blank line.

    Blank (whitespace-only) lines are dropped; kept lines are not trimmed.
    With zero or one non-blank line the original content is returned as a
    single block, so one-liners are never wrapped in a paragraph.
    """
    lines = [line for line in _LINE_BREAK.split(content) if line.strip()]
    if len(lines) <= 1:
        return PlainText(text=content)
    return PlainText(text=content, paragraphs=tuple(lines))
