"""Allowlist policy for markup sanitization."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Tags that can execute script or load active content. No policy may allow them.
FORBIDDEN_TAGS = frozenset({
    "script", "style", "iframe", "object", "embed", "svg", "math",
    "template", "frame", "frameset", "noscript", "link", "meta", "base",
    "form",
})

DEFAULT_TAGS = frozenset({
    "p", "br", "hr", "blockquote", "ul", "ol", "li",
    "b", "strong", "i", "em", "u", "code", "pre", "span", "a",
    "h1", "h2", "h3", "h4", "h5", "h6",
})

DEFAULT_URL_PREFIXES = ("http://", "https://", "mailto:", "/", "#")


def _frozen_rules(rules: Mapping[str, frozenset[str]]) -> Mapping[str, frozenset[str]]:
    return MappingProxyType({tag: frozenset(attrs) for tag, attrs in rules.items()})


def _frozen_forced(rules: Mapping[str, Mapping[str, str]]) -> Mapping[str, Mapping[str, str]]:
    return MappingProxyType({tag: MappingProxyType(dict(attrs)) for tag, attrs in rules.items()})


@dataclass(frozen=True)
class AllowlistPolicy:
    """Which tags and attributes survive sanitization.

    Anything not listed here is removed. Event handler (``on*``) and
    ``style`` attributes are stripped regardless of the rules below, and
    a policy that tries to allow them is rejected at construction.

    Attributes:
        allowed_tags: Permitted tag names (lower-case).
        allowed_attributes: Per-tag attribute allowlist. Tags without an
            entry keep no attributes.
        forced_attributes: Attributes set on every surviving element of a
            tag after filtering, overwriting any value from the input.
        url_attributes: Attributes whose value must start with one of
            ``safe_url_prefixes`` (after trimming whitespace).
        safe_url_prefixes: Accepted URL prefixes, matched case-sensitively.
    """

    allowed_tags: frozenset[str] = DEFAULT_TAGS
    allowed_attributes: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: {"a": frozenset({"href", "title"})}
    )
    forced_attributes: Mapping[str, Mapping[str, str]] = field(
        default_factory=lambda: {"a": {"target": "_blank", "rel": "noopener noreferrer"}}
    )
    url_attributes: frozenset[str] = frozenset({"href"})
    safe_url_prefixes: tuple[str, ...] = DEFAULT_URL_PREFIXES

    def __post_init__(self) -> None:
        """Validate and freeze the policy."""
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "allowed_tags", frozenset(self.allowed_tags))
        object.__setattr__(self, "allowed_attributes", _frozen_rules(self.allowed_attributes))
        object.__setattr__(self, "forced_attributes", _frozen_forced(self.forced_attributes))
        object.__setattr__(self, "url_attributes", frozenset(self.url_attributes))
        object.__setattr__(self, "safe_url_prefixes", tuple(self.safe_url_prefixes))

        errors = []

        if not self.allowed_tags:
            errors.append("allowed_tags cannot be empty")
        for tag in sorted(self.allowed_tags):
            if not (tag.isascii() and tag.isalnum() and tag == tag.lower()):
                errors.append(f"tag names must be lower-case alphanumeric, got {tag!r}")
        unsafe = sorted(self.allowed_tags & FORBIDDEN_TAGS)
        if unsafe:
            errors.append(f"allowed_tags cannot include {', '.join(unsafe)}")

        for label, rules in (
            ("allowed_attributes", self.allowed_attributes),
            ("forced_attributes", self.forced_attributes),
        ):
            for tag, attrs in rules.items():
                if tag not in self.allowed_tags:
                    errors.append(f"{label} has a rule for disallowed tag {tag!r}")
                for name in attrs:
                    if name.lower().startswith("on") or name.lower() == "style":
                        errors.append(f"{label} cannot permit {name!r} on {tag!r}")

        if not self.safe_url_prefixes:
            errors.append("safe_url_prefixes cannot be empty")
        elif any(not prefix for prefix in self.safe_url_prefixes):
            errors.append("safe_url_prefixes cannot contain an empty prefix")

        if errors:
            raise ValueError(f"Invalid AllowlistPolicy: {'; '.join(errors)}")

    def allows_tag(self, name: str) -> bool:
        return name.lower() in self.allowed_tags

    def attributes_for(self, tag: str) -> frozenset[str]:
        return self.allowed_attributes.get(tag.lower(), frozenset())

    def forced_for(self, tag: str) -> Mapping[str, str]:
        return self.forced_attributes.get(tag.lower(), MappingProxyType({}))

    def is_safe_url(self, value: str) -> bool:
        """True if the trimmed value starts with an accepted prefix."""
        return value.strip().startswith(self.safe_url_prefixes)


DEFAULT_POLICY = AllowlistPolicy()
