"""Repository-related data models."""

from dataclasses import dataclass, field
from datetime import datetime

UNTRACKED = "untracked"
STAGED = "staged"
MODIFIED = "modified"
COMMITTED = "committed"

FILE_STATUSES = (UNTRACKED, STAGED, MODIFIED, COMMITTED)

CLEAN = "clean"
DIRTY = "modified"

WORKING_DIRECTORY_STATES = (CLEAN, DIRTY)


@dataclass(frozen=True)
class Commit:
    """A recorded commit. Never changed once created."""

    hash: str
    message: str
    date: datetime
    author: str
    files: tuple[str, ...] = ()


@dataclass
class FileEntry:
    """A file known to the playground."""

    name: str
    content: str
    status: str  # "untracked", "staged", "modified", "committed"


@dataclass
class RepositoryState:
    """Full state of a playground repository."""

    initialized: bool = False
    current_branch: str | None = None
    branches: dict[str, list[Commit]] = field(default_factory=dict)
    commits: list[Commit] = field(default_factory=list)
    files: list[FileEntry] = field(default_factory=list)
    working_directory: str = CLEAN  # "clean" or "modified"

    @property
    def staged_files(self) -> list[str]:
        """Names of files currently in the staging area."""
        return [f.name for f in self.files if f.status == STAGED]

    @property
    def head(self) -> Commit | None:
        """Last commit on the current branch, if any."""
        return self.commits[-1] if self.commits else None
