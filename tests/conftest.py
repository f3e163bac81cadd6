# tests/conftest.py
"""
Pytest configuration and fixtures.
"""

import os

import pytest

# Human-readable logs and a fixed environment for tests
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_JSON", "false")

from hootspot.config import get_settings  # noqa: E402
from hootspot.schemas.analysis import Analysis, Finding  # noqa: E402


SOURCE_TEXT = (
    "You are wrong. They want chaos. Everyone knows the experts lied to you, "
    "and only a fool would trust them again. “Wake up,” he said. "
    "If we don't act now, everything will be lost!"
)


def make_finding(
    pattern_name: str,
    quote: str,
    *,
    display_name: str | None = None,
    strength: int = 5,
    category: str = "category_sociopolitical_rhetorical",
    explanation: str = "",
) -> Finding:
    """Build a Finding with sensible defaults."""
    return Finding(
        pattern_name=pattern_name,
        display_name=display_name if display_name is not None else pattern_name,
        specific_quote=quote,
        explanation=explanation or f"{pattern_name} detected",
        strength=strength,
        category=category,
    )


@pytest.fixture
def source_text() -> str:
    return SOURCE_TEXT


@pytest.fixture
def sample_analysis() -> Analysis:
    """Analysis mixing overlapping, duplicate and unmatched quotes."""
    return Analysis(
        analysis_summary="The text leans on fear and ridicule.",
        findings=[
            make_finding("Ad Hominem", "You are wrong.", display_name="Ad Hominem",
                         strength=6, category="category_interpersonal_psychological"),
            make_finding("Bandwagon", "Everyone knows", strength=4),
            make_finding("Appeal to Fear", "If we don't act now, everything will be lost",
                         display_name="Fear Appeal", strength=9),
            make_finding("Ad Hominem", "only a fool would trust them",
                         strength=7, category="category_interpersonal_psychological"),
            make_finding("Poisoning the Well", "the experts lied to you",
                         display_name="Poisoning", strength=5, category="category_covert_indirect_control"),
            make_finding("Bandwagon", "Everyone knows", strength=4),
            make_finding("Strawman", "They secretly plan to ban all cars", strength=3),
        ],
    )


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached; clear between tests so env overrides apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(name="make_finding")
def make_finding_fixture():
    """Factory fixture for findings."""
    return make_finding
