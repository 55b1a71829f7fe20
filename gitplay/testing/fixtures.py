"""
Pytest fixtures for gitplay testing.

Provides ready-made sessions in common states and helpers for building
model objects in tests of applications that embed the playground.
"""

import itertools
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Generator

import pytest

from gitplay.session import PlaygroundSession
from gitplay.types.repository import (
    CLEAN,
    COMMITTED,
    DIRTY,
    MODIFIED,
    UNTRACKED,
    Commit,
    FileEntry,
    RepositoryState,
)


def sequential_hash_factory(prefix: str = "c") -> Callable[[], str]:
    """
    Return a hash factory producing predictable hashes ("c000001", "c000002", ...).

    Example:
        ```python
        session = PlaygroundSession(hash_factory=sequential_hash_factory())
        ```
    """
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter):06d}"


# ============================================================================
# Session Fixtures
# ============================================================================


@pytest.fixture
def sequential_hashes() -> Callable[[], str]:
    """Provide a fresh sequential hash factory."""
    return sequential_hash_factory()


@pytest.fixture
def playground(
    sequential_hashes: Callable[[], str],
) -> Generator[PlaygroundSession, None, None]:
    """
    Provide an uninitialized PlaygroundSession with the demo files.

    Example:
        ```python
        def test_my_lesson(playground):
            playground.execute("git init")
            assert playground.current_branch_name() == "main"
        ```
    """
    session = PlaygroundSession(session_id="test-session", hash_factory=sequential_hashes)
    yield session
    session.close()


@pytest.fixture
def initialized_playground(playground: PlaygroundSession) -> PlaygroundSession:
    """Provide a session after `git init`."""
    playground.execute("git init")
    return playground


@pytest.fixture
def staged_playground(initialized_playground: PlaygroundSession) -> PlaygroundSession:
    """Provide a session with every demo file staged."""
    initialized_playground.execute("git add .")
    return initialized_playground


@pytest.fixture
def committed_playground(staged_playground: PlaygroundSession) -> PlaygroundSession:
    """Provide a session with one commit holding every demo file."""
    staged_playground.execute('git commit -m "Initial commit"')
    return staged_playground


# ============================================================================
# Helper Functions
# ============================================================================


def create_commit(
    hash: str = "abc1234",
    message: str = "Test commit",
    **kwargs: Any,
) -> Commit:
    """
    Create a Commit with customizable fields.

    Args:
        hash: Commit hash
        message: Commit message
        **kwargs: Additional fields to override

    Returns:
        Commit object
    """
    defaults: dict[str, Any] = {
        "date": datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc),
        "author": "Git User",
        "files": ("README.md",),
    }
    defaults.update(kwargs)
    return Commit(hash=hash, message=message, **defaults)


def create_file_entry(
    name: str = "README.md",
    status: str = UNTRACKED,
    content: str | None = None,
) -> FileEntry:
    """Create a FileEntry; content defaults to a line naming the file."""
    return FileEntry(
        name=name,
        content=content if content is not None else f"contents of {name}",
        status=status,
    )


def create_state(
    commits: list[Commit] | None = None,
    files: list[FileEntry] | None = None,
    branch: str = "main",
    **kwargs: Any,
) -> RepositoryState:
    """
    Create an initialized RepositoryState.

    Args:
        commits: History of the current branch (default: one commit)
        files: Known files (default: README.md committed)
        branch: Current branch name
        **kwargs: Additional fields to override

    Returns:
        RepositoryState object
    """
    if commits is None:
        commits = [create_commit()]
    if files is None:
        files = [create_file_entry(status=COMMITTED)]

    dirty = any(f.status in (UNTRACKED, MODIFIED) for f in files)
    defaults: dict[str, Any] = {
        "initialized": True,
        "current_branch": branch,
        "branches": {branch: list(commits)},
        "working_directory": DIRTY if dirty else CLEAN,
    }
    defaults.update(kwargs)
    return RepositoryState(commits=list(commits), files=list(files), **defaults)


__all__ = [
    # Fixtures (exported for documentation, actual fixtures are auto-discovered)
    "sequential_hashes",
    "playground",
    "initialized_playground",
    "staged_playground",
    "committed_playground",
    # Helper functions
    "sequential_hash_factory",
    "create_commit",
    "create_file_entry",
    "create_state",
]
