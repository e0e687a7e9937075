"""Allowlist sanitization of untrusted markup.

Parses the input with BeautifulSoup's html.parser builder, rewrites the
tree so only elements and attributes permitted by an AllowlistPolicy
survive, and serializes the result. Disallowed elements are replaced by
their flattened text, so reader-visible content is kept while structure
and attributes are dropped.
"""

import logging
import re
import warnings

from bs4 import (
    BeautifulSoup,
    MarkupResemblesLocatorWarning,
    NavigableString,
    ParserRejectedMarkup,
    Tag,
)
from bs4.element import PreformattedString

from .errors import MarkupParseError
from .policy import DEFAULT_POLICY, AllowlistPolicy

logger = logging.getLogger(__name__)

# Short inputs like "a.html" trip bs4's filename heuristic; they are content here.
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

# Comments, doctypes, declarations, processing instructions and CDATA
# all derive from PreformattedString. None of them is visible text.
_HIDDEN_STRINGS = PreformattedString

# Characters html.parser treats as collapsible whitespace
_ASCII_SPACES = "\x20\x0a\x09\x0c\x0d"

# The parser keeps whitespace-only text as is inside these
_PRESERVE_WHITESPACE_TAGS = frozenset({"pre", "textarea"})

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def sanitize(content: str, policy: AllowlistPolicy = DEFAULT_POLICY) -> str:
    """Rewrite markup so that only allowlisted elements and attributes remain.

    Args:
        content: Untrusted markup.
        policy: Allowlist to enforce. Defaults to DEFAULT_POLICY.

    Returns:
        Safe markup string, or "" if the input could not be parsed.
        Never raises and never returns the raw input.
    """
    try:
        soup = _parse(content)
        flattened, stripped = _rewrite(soup, policy)
        _normalize_text(soup)
        result = _serialize(soup)
    except MarkupParseError as e:
        logger.warning("Discarding markup that could not be sanitized: %s", e)
        return ""

    if flattened or stripped:
        logger.debug(
            "Sanitized markup: %d elements flattened, %d attributes stripped",
            flattened, stripped,
        )
    return result


def _parse(content: str) -> BeautifulSoup:
    try:
        # Surrogates cannot be encoded, which bs4 does for text without tags
        return BeautifulSoup(_LONE_SURROGATE.sub("\ufffd", content), "html.parser")
    except (ParserRejectedMarkup, AssertionError, ValueError, TypeError, RecursionError) as e:
        raise MarkupParseError(f"{type(e).__name__}: {e}") from e


def _serialize(soup: BeautifulSoup) -> str:
    try:
        return soup.decode(formatter="minimal")
    except (ValueError, TypeError, RecursionError) as e:
        raise MarkupParseError(f"{type(e).__name__}: {e}") from e


def _rewrite(root: BeautifulSoup, policy: AllowlistPolicy) -> tuple[int, int]:
    """Walk the tree in pre-order and apply the policy in place.

    Uses an explicit stack. Children are pushed from a copy of the child
    list, so replacing or removing a node never skips a sibling.

    Returns:
        (elements flattened to text, attributes stripped)
    """
    flattened = 0
    stripped = 0
    stack = list(reversed(root.contents))

    while stack:
        node = stack.pop()

        if isinstance(node, _HIDDEN_STRINGS):
            node.extract()
            continue
        if not isinstance(node, Tag):
            continue  # text

        tag = node.name.lower()
        if not policy.allows_tag(tag):
            node.replace_with(NavigableString(flatten_text(node)))
            flattened += 1
            continue

        stripped += _filter_attributes(node, tag, policy)
        stack.extend(reversed(list(node.contents)))

    return flattened, stripped


def _normalize_text(root: BeautifulSoup) -> None:
    """Merge adjacent text nodes and collapse whitespace-only runs.

    Removing a node can leave text nodes side by side that the parser
    would have read as one string. Each run is merged and, outside
    <pre>/<textarea>, a whitespace-only run becomes "\\n" or " " exactly
    as html.parser would produce it, so re-parsing the output gives the
    same tree. Iterative, so deep trees cannot hit the recursion limit.
    """
    stack = [(root, False)]
    while stack:
        tag, preserve = stack.pop()
        run = []
        for child in list(tag.contents) + [None]:
            if isinstance(child, NavigableString):
                run.append(child)
                continue
            if run:
                _merge_run(run, preserve)
                run = []
            if isinstance(child, Tag):
                stack.append((child, preserve or child.name in _PRESERVE_WHITESPACE_TAGS))


def _merge_run(run: list[NavigableString], preserve: bool) -> None:
    text = "".join(run)
    if not text:
        for node in run:
            node.extract()
        return
    if not preserve and all(ch in _ASCII_SPACES for ch in text):
        text = "\n" if "\n" in text else " "
    if len(run) == 1 and text == run[0]:
        return
    run[0].replace_with(NavigableString(text))
    for node in run[1:]:
        node.extract()


def _filter_attributes(node: Tag, tag: str, policy: AllowlistPolicy) -> int:
    """Drop every attribute the policy does not permit, then apply forced ones."""
    allowed = policy.attributes_for(tag)
    forced = policy.forced_for(tag)
    removed = 0

    for name in list(node.attrs):
        key = name.lower()
        if key.startswith("on") or key == "style":
            keep = False
        elif key in forced:
            keep = True  # overwritten below
        elif key not in allowed:
            keep = False
        elif key in policy.url_attributes:
            keep = policy.is_safe_url(_attr_text(node[name]))
        else:
            keep = True

        if not keep:
            del node[name]
            removed += 1

    for key, value in forced.items():
        node[key] = value
    return removed


def _attr_text(value) -> str:
    # bs4 splits multi-valued attributes (class, rel, ...) into lists
    if isinstance(value, list):
        return " ".join(value)
    return value or ""


def flatten_text(node: Tag) -> str:
    """Concatenate all visible text below node, discarding markup."""
    return "".join(
        str(child) for child in node.descendants
        if isinstance(child, NavigableString) and not isinstance(child, _HIDDEN_STRINGS)
    )
