"""Tests for atomic file writer."""

from unittest.mock import patch

import pytest

from rich_text.errors import OutputError
from rich_text.safe_io import atomic_write


class TestAtomicWrite:
    def test_creates_file(self, tmp_path):
        target = tmp_path / "out.html"
        atomic_write(target, "<p>hi</p>")
        assert target.read_text() == "<p>hi</p>"

    def test_overwrites_existing(self, tmp_path):
        target = tmp_path / "out.html"
        target.write_text("old")
        atomic_write(target, "new")
        assert target.read_text() == "new"

    def test_creates_parent_dirs(self, tmp_path):
        target = tmp_path / "a" / "b" / "out.html"
        atomic_write(str(target), "deep")
        assert target.read_text() == "deep"

    def test_failure_leaves_original(self, tmp_path):
        """Simulated rename failure keeps the original content."""
        target = tmp_path / "out.html"
        target.write_text("original")

        with patch("rich_text.safe_io.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OutputError, match="disk full"):
                atomic_write(target, "should not appear")

        assert target.read_text() == "original"

    def test_failure_cleans_temp_file(self, tmp_path):
        target = tmp_path / "out.html"

        with patch("rich_text.safe_io.os.replace", side_effect=OSError("fail")):
            with pytest.raises(OutputError):
                atomic_write(target, "content")

        assert list(tmp_path.iterdir()) == []
