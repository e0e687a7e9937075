"""Heuristic check for whether a string should be treated as markup."""

import re

# "<" or "</" followed by an ASCII letter
_TAG_START = re.compile(r"</?[A-Za-z]")


def looks_like_markup(content: str) -> bool:
    """Return True if content contains something shaped like a tag.

    Matches ``<``, an optional ``/``, an ASCII letter, and a ``>`` anywhere
    after it. This only decides which rendering path to take; it does not
    validate markup. Prose such as "a < b" stays plain, while prose that
    mentions "<b>" is routed to the sanitizer, which handles it safely.
    """
    match = _TAG_START.search(content)
    # A ">" after the first candidate covers every later candidate too
    return match is not None and ">" in content[match.end():]
