"""Command result data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command line: terminal output and/or error text."""

    output: str = ""
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


@dataclass
class CommandRecord:
    """One entry of a session's command history."""

    command: str
    result: CommandResult
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def subcommand(self) -> str | None:
        """Second token of the command line (e.g. "commit"), if any."""
        parts = self.command.split()
        if len(parts) < 2 or parts[0] != "git":
            return None
        return parts[1]
