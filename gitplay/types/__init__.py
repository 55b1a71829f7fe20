"""gitplay type definitions.

This module exports all data model types used by the playground.
"""

from gitplay.types.repository import (
    CLEAN,
    COMMITTED,
    DIRTY,
    FILE_STATUSES,
    MODIFIED,
    STAGED,
    UNTRACKED,
    WORKING_DIRECTORY_STATES,
    Commit,
    FileEntry,
    RepositoryState,
)
from gitplay.types.results import CommandRecord, CommandResult
from gitplay.types.saved import SavedRepository

__all__ = [
    # Repository types
    "Commit",
    "FileEntry",
    "RepositoryState",
    # File statuses
    "UNTRACKED",
    "STAGED",
    "MODIFIED",
    "COMMITTED",
    "FILE_STATUSES",
    # Working directory states
    "CLEAN",
    "DIRTY",
    "WORKING_DIRECTORY_STATES",
    # Result types
    "CommandResult",
    "CommandRecord",
    # Saved repositories
    "SavedRepository",
]
