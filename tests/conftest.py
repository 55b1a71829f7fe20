"""Shared fixtures for the gitplay test suite."""

from gitplay.testing.conftest import (  # noqa: F401
    committed_playground,
    initialized_playground,
    playground,
    sequential_hashes,
    staged_playground,
)
