#!/usr/bin/env python3
"""Entry point for running the CLI from a source checkout."""

from rich_text.cli import main

if __name__ == "__main__":
    main()
