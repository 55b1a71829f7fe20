"""
Pytest plugin for gitplay testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
discovered by pytest.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["gitplay.testing.conftest"]

Or import the fixtures directly:

    from gitplay.testing.fixtures import playground, committed_playground
"""

# Re-export all fixtures for pytest auto-discovery
from gitplay.testing.fixtures import (
    committed_playground,
    initialized_playground,
    playground,
    sequential_hashes,
    staged_playground,
)

__all__ = [
    "sequential_hashes",
    "playground",
    "initialized_playground",
    "staged_playground",
    "committed_playground",
]
