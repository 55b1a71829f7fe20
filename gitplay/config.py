"""
Playground configuration.

Holds the constants the simulated repository uses: the fake repository path
printed by `git init`, the default branch, the placeholder author and the
demo files every new repository starts with.
"""

import os
from dataclasses import dataclass, field

from gitplay.exceptions import ConfigurationError

DEFAULT_SEED_FILES: tuple[tuple[str, str], ...] = (
    ("README.md", "# My Project\n\nThis is a sample project."),
    ("index.js", 'console.log("Hello, World!");'),
    ("style.css", "body { margin: 0; padding: 20px; }"),
)

MIN_HASH_LENGTH = 4
MAX_HASH_LENGTH = 40


@dataclass
class PlaygroundConfig:
    """Configuration for a playground repository."""

    repo_path: str = "/playground"
    default_branch: str = "main"
    author: str = "Git User"
    default_message: str = "Commit message"
    hash_length: int = 7
    seed_files: tuple[tuple[str, str], ...] = field(
        default_factory=lambda: DEFAULT_SEED_FILES
    )

    def __post_init__(self) -> None:
        if not MIN_HASH_LENGTH <= self.hash_length <= MAX_HASH_LENGTH:
            raise ConfigurationError(
                f"hash_length must be between {MIN_HASH_LENGTH} and "
                f"{MAX_HASH_LENGTH}, got {self.hash_length}"
            )
        if not self.default_branch or any(c.isspace() for c in self.default_branch):
            raise ConfigurationError(
                f"Invalid default branch name: {self.default_branch!r}"
            )
        names = [name for name, _ in self.seed_files]
        if len(names) != len(set(names)):
            raise ConfigurationError("Seed file names must be unique")

    @classmethod
    def from_env(cls) -> "PlaygroundConfig":
        """
        Create a configuration from environment variables.

        Environment variables:
            GITPLAY_REPO_PATH: Path shown by `git init` (optional, default: /playground)
            GITPLAY_DEFAULT_BRANCH: Branch created by `git init` (optional, default: main)
            GITPLAY_AUTHOR: Author recorded on commits (optional, default: Git User)
            GITPLAY_HASH_LENGTH: Length of generated commit hashes (optional, default: 7)

        Returns:
            Configured PlaygroundConfig instance

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        defaults = cls()
        raw_length = os.environ.get("GITPLAY_HASH_LENGTH")

        if raw_length is None:
            hash_length = defaults.hash_length
        else:
            try:
                hash_length = int(raw_length)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid GITPLAY_HASH_LENGTH: {raw_length}. Must be an integer"
                ) from None

        return cls(
            repo_path=os.environ.get("GITPLAY_REPO_PATH", defaults.repo_path),
            default_branch=os.environ.get(
                "GITPLAY_DEFAULT_BRANCH", defaults.default_branch
            ),
            author=os.environ.get("GITPLAY_AUTHOR", defaults.author),
            hash_length=hash_length,
        )
