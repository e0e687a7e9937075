#!/usr/bin/env python3
"""CLI for rendering untrusted text to safe HTML."""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from rich_text.classify import looks_like_markup
from rich_text.errors import RichTextError
from rich_text.policy import DEFAULT_POLICY
from rich_text.render import render
from rich_text.safe_io import atomic_write

CLASS_NAME_ENV = "RICH_TEXT_CLASS_NAME"
PARAGRAPH_CLASS_ENV = "RICH_TEXT_PARAGRAPH_CLASS"


def show_policy() -> None:
    """Print the default allowlist and exit."""
    print("Permitted tags:")
    print("  " + " ".join(sorted(DEFAULT_POLICY.allowed_tags)))
    print("Permitted attributes:")
    for tag, attrs in sorted(DEFAULT_POLICY.allowed_attributes.items()):
        print(f"  {tag:<10} {' '.join(sorted(attrs))}")
    print("Forced attributes:")
    for tag, attrs in sorted(DEFAULT_POLICY.forced_attributes.items()):
        pairs = " ".join(f'{k}="{v}"' for k, v in attrs.items())
        print(f"  {tag:<10} {pairs}")
    print("Link prefixes:")
    print("  " + " ".join(DEFAULT_POLICY.safe_url_prefixes))


def read_input(source: str | None) -> str:
    """Read content from a file path, or stdin for None / "-"."""
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def configure_logging(verbose: bool) -> None:
    # INFO with bare messages by default, DEBUG with module names for -v
    handler = logging.StreamHandler(sys.stderr)
    package_logger = logging.getLogger("rich_text")
    if verbose:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
        package_logger.setLevel(logging.DEBUG)
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.setLevel(logging.INFO)
    package_logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rich-text",
        description="Render untrusted text or markup as HTML that is safe to display.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Content that looks like markup is sanitized against an allowlist; anything
else is split into one paragraph per non-blank line and escaped.

Environment:
  {CLASS_NAME_ENV}       default for --class-name
  {PARAGRAPH_CLASS_ENV}  default for --paragraph-class

Examples:
  rich-text answer.html
  echo '<b>hi</b><script>x()</script>' | rich-text --fragment
  rich-text notes.txt --class-name prose -o notes.html
        """,
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help='Input file (default: stdin, or "-")',
    )
    parser.add_argument(
        "--class-name",
        default=os.environ.get(CLASS_NAME_ENV),
        metavar="NAME",
        help="Class attribute for the wrapper <div>",
    )
    parser.add_argument(
        "--paragraph-class",
        default=os.environ.get(PARAGRAPH_CLASS_ENV),
        metavar="NAME",
        help="Class attribute for plain-text paragraphs",
    )
    parser.add_argument(
        "--fragment",
        action="store_true",
        help="Print the rendered content without the wrapper <div>",
    )
    parser.add_argument(
        "--classify",
        action="store_true",
        help='Print "markup" or "plain" for the input and exit',
    )
    parser.add_argument(
        "--show-policy",
        action="store_true",
        help="Print the permitted tags and link prefixes and exit",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    # Load environment variables from .env file before defaults are read
    load_dotenv()

    args = build_parser().parse_args(argv)

    if args.show_policy:
        show_policy()
        sys.exit(0)

    configure_logging(args.verbose)

    try:
        content = read_input(args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read input: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)

    if args.classify:
        print("markup" if looks_like_markup(content) else "plain")
        sys.exit(0)

    rendered = render(content)
    if args.fragment:
        output = rendered.fragment(paragraph_class=args.paragraph_class)
    else:
        output = rendered.to_html(
            class_name=args.class_name, paragraph_class=args.paragraph_class,
        )

    if args.output is None:
        print(output)
        return

    try:
        atomic_write(args.output, output + "\n")
    except RichTextError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    logging.getLogger("rich_text").info("Saved to: %s", args.output)


if __name__ == "__main__":
    main()
