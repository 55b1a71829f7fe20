"""
In-memory repository model for the playground.

Holds the single mutable RepositoryState of one playground. Read accessors
hand out copies so callers (visualizations, tests) cannot change the state
behind the interpreter's back. Mutators do no validation; the interpreter
checks preconditions before calling them.
"""

import random
import string
from collections.abc import Callable
from dataclasses import replace

from gitplay.config import PlaygroundConfig
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

_HASH_ALPHABET = string.ascii_lowercase + string.digits
_rng = random.SystemRandom()

# Attempts before giving up on finding an unused hash
_MAX_HASH_ATTEMPTS = 100


def random_hash(length: int = 7) -> str:
    """Return a pseudo-random lowercase base-36 identifier."""
    return "".join(_rng.choice(_HASH_ALPHABET) for _ in range(length))


def copy_state(state: RepositoryState) -> RepositoryState:
    """
    Copy a RepositoryState deeply enough that the copy can be mutated freely.

    Commits are immutable and shared; containers and FileEntry objects are new.
    """
    return RepositoryState(
        initialized=state.initialized,
        current_branch=state.current_branch,
        branches={name: list(commits) for name, commits in state.branches.items()},
        commits=list(state.commits),
        files=[replace(entry) for entry in state.files],
        working_directory=state.working_directory,
    )


class Repository:
    """
    State holder for one simulated repository.

    Example:
        ```python
        repo = Repository()
        repo.mark_initialized("main")
        state = repo.snapshot()
        state.files.clear()  # does not touch the repository
        ```
    """

    def __init__(
        self,
        config: PlaygroundConfig | None = None,
        hash_factory: Callable[[], str] | None = None,
    ) -> None:
        """
        Create a repository seeded with the configured demo files.

        Args:
            config: Playground configuration (default: PlaygroundConfig())
            hash_factory: Callable returning a new commit hash (default: random base-36)
        """
        self.config = config or PlaygroundConfig()
        self._hash_factory = hash_factory or (
            lambda: random_hash(self.config.hash_length)
        )
        self._state = RepositoryState(
            files=[
                FileEntry(name=name, content=content, status=UNTRACKED)
                for name, content in self.config.seed_files
            ],
        )
        self.refresh_working_directory()

    @classmethod
    def from_state(
        cls,
        state: RepositoryState,
        config: PlaygroundConfig | None = None,
        hash_factory: Callable[[], str] | None = None,
    ) -> "Repository":
        """Build a repository holding a copy of an existing state."""
        repo = cls(config=config, hash_factory=hash_factory)
        repo._state = copy_state(state)
        repo.refresh_working_directory()
        return repo

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def snapshot(self) -> RepositoryState:
        """Return a copy of the full repository state."""
        return copy_state(self._state)

    def get_state(self) -> RepositoryState:
        """Alias for snapshot()."""
        return self.snapshot()

    def current_branch_name(self) -> str | None:
        return self._state.current_branch

    def tracked_files(self) -> list[FileEntry]:
        """Return copies of every known file, in seed/creation order."""
        return [replace(entry) for entry in self._state.files]

    @property
    def initialized(self) -> bool:
        return self._state.initialized

    @property
    def commits(self) -> list[Commit]:
        return list(self._state.commits)

    @property
    def branch_names(self) -> list[str]:
        return list(self._state.branches)

    def has_branch(self, name: str) -> bool:
        return name in self._state.branches

    def find_file(self, name: str) -> FileEntry | None:
        """Return a copy of the file called `name`, or None."""
        for entry in self._state.files:
            if entry.name == name:
                return replace(entry)
        return None

    def files_with_status(self, *statuses: str) -> list[FileEntry]:
        return [replace(f) for f in self._state.files if f.status in statuses]

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def mark_initialized(self, branch: str) -> None:
        self._state.initialized = True
        self._state.current_branch = branch
        self._state.branches = {branch: []}
        self._state.commits = []

    def set_status(self, name: str, status: str) -> None:
        for entry in self._state.files:
            if entry.name == name:
                entry.status = status
                return
        raise KeyError(name)

    def write_file(self, name: str, content: str) -> FileEntry:
        """
        Simulate an edit in the working directory.

        A new name becomes an untracked file; a committed file becomes
        modified; any other status is left as it is.
        """
        for entry in self._state.files:
            if entry.name == name:
                entry.content = content
                if entry.status == COMMITTED:
                    entry.status = MODIFIED
                self.refresh_working_directory()
                return replace(entry)

        entry = FileEntry(name=name, content=content, status=UNTRACKED)
        self._state.files.append(entry)
        self.refresh_working_directory()
        return replace(entry)

    def append_commit(self, commit: Commit) -> None:
        """Append a commit to the working history and sync the current branch."""
        self._state.commits.append(commit)
        if self._state.current_branch is not None:
            self._state.branches[self._state.current_branch] = list(self._state.commits)

    def create_branch(self, name: str) -> None:
        self._state.branches[name] = list(self._state.commits)

    def switch_branch(self, name: str) -> None:
        self._state.current_branch = name
        self._state.commits = list(self._state.branches[name])

    def refresh_working_directory(self) -> str:
        """Recompute the clean/modified summary from file statuses."""
        dirty = any(f.status in (UNTRACKED, MODIFIED) for f in self._state.files)
        self._state.working_directory = DIRTY if dirty else CLEAN
        return self._state.working_directory

    def generate_hash(self) -> str:
        """
        Produce a commit hash not used by any commit in this repository.

        Raises:
            RuntimeError: If the hash factory keeps returning used hashes
        """
        used = {c.hash for commits in self._state.branches.values() for c in commits}
        used.update(c.hash for c in self._state.commits)

        for _ in range(_MAX_HASH_ATTEMPTS):
            candidate = self._hash_factory()
            if candidate not in used:
                return candidate

        raise RuntimeError("Could not generate an unused commit hash")
