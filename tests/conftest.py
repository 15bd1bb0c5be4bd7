"""Pytest configuration and shared fixtures for legislative news tests.

This module provides:
- Custom markers
- Environment isolation between tests
- In-memory cache and fake store fixtures
- Sample article rows
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

# Add project root to Python path to allow imports from legis_news and storage
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from legis_news.cache.memory import MemoryCache  # noqa: E402
from tests.fakes import FakeArticleStore, FakeClock, make_article_row  # noqa: E402


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers",
        "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers",
        "integration: mark test as an integration test (multiple components wired together)"
    )


# ==================== Environment Fixtures ====================

@pytest.fixture(scope="function", autouse=True)
def isolate_environment():
    """Restore environment variables after each test."""
    original_env = os.environ.copy()

    yield

    os.environ.clear()
    os.environ.update(original_env)


# ==================== Data Fixtures ====================

@pytest.fixture
def sample_rows() -> List[Dict[str, Any]]:
    """Five articles across two states and two topics."""
    return [
        make_article_row(1, state="Texas", topic="Energy", title="Texas grid reliability bill advances"),
        make_article_row(2, state="Texas", topic="Education", title="Texas school funding formula revised"),
        make_article_row(3, state="California", topic="Energy", title="California solar mandate expanded"),
        make_article_row(4, state="California", topic="Education", title="California teacher pay raise approved"),
        make_article_row(5, state="Texas", topic="Energy", title="Texas pipeline water rights dispute"),
    ]


# ==================== Component Fixtures ====================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_cache(clock) -> MemoryCache:
    """MemoryCache driven by a manually advanced clock."""
    return MemoryCache(clock=clock)


@pytest.fixture
def fake_store(sample_rows) -> FakeArticleStore:
    return FakeArticleStore(
        articles=sample_rows,
        states=[("California", "CA"), ("Texas", "TX")],
        topics=[("Education", None), ("Energy", None)],
    )
