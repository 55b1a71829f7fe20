"""
Playground sessions.

A PlaygroundSession is the caller-owned unit of state: one repository, one
interpreter, a command history and a list of state-change subscribers. Hosts
create one session per user or browser tab; nothing is shared between
sessions.
"""

import uuid
from collections.abc import Callable
from typing import Any

from gitplay.config import PlaygroundConfig
from gitplay.interpreter import CommandInterpreter
from gitplay.logging import get_logger, log_state_change
from gitplay.repository import Repository
from gitplay.types.repository import FileEntry, RepositoryState
from gitplay.types.results import CommandRecord, CommandResult

logger = get_logger("sessions")

StateHandler = Callable[[RepositoryState], Any]


class PlaygroundSession:
    """
    One learner's simulated Git terminal.

    Example:
        ```python
        from gitplay import PlaygroundSession

        with PlaygroundSession() as session:
            unsubscribe = session.on_state_change(lambda state: redraw(state))

            session.execute("git init")
            session.execute("git add .")
            result = session.execute('git commit -m "Initial commit"')
            print(result.output)

            unsubscribe()
        ```
    """

    def __init__(
        self,
        session_id: str | None = None,
        config: PlaygroundConfig | None = None,
        hash_factory: Callable[[], str] | None = None,
    ) -> None:
        """
        Initialize a session with a freshly seeded repository.

        Args:
            session_id: Identifier used in logs and by SessionRegistry (default: random UUID)
            config: Playground configuration (default: PlaygroundConfig())
            hash_factory: Callable returning new commit hashes (optional)
        """
        self.session_id = session_id or str(uuid.uuid4())
        self.config = config or PlaygroundConfig()
        self._hash_factory = hash_factory
        self._history: list[CommandRecord] = []
        self._subscribers: list[StateHandler] = []
        self._interpreter = self._build_interpreter(
            Repository(config=self.config, hash_factory=hash_factory)
        )

    @classmethod
    def restore(
        cls,
        state: RepositoryState,
        session_id: str | None = None,
        config: PlaygroundConfig | None = None,
        hash_factory: Callable[[], str] | None = None,
    ) -> "PlaygroundSession":
        """Create a session whose repository starts from a saved snapshot."""
        session = cls(session_id=session_id, config=config, hash_factory=hash_factory)
        session._interpreter = session._build_interpreter(
            Repository.from_state(state, config=session.config, hash_factory=hash_factory)
        )
        return session

    def _build_interpreter(self, repository: Repository) -> CommandInterpreter:
        return CommandInterpreter(
            repository=repository,
            config=self.config,
            session_id=self.session_id,
        )

    @property
    def interpreter(self) -> CommandInterpreter:
        """Get the underlying interpreter (for advanced use cases)."""
        return self._interpreter

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def execute(self, command_line: str) -> CommandResult:
        """
        Run one command line and notify subscribers if it succeeded.

        Args:
            command_line: Raw text typed by the learner

        Returns:
            CommandResult from the interpreter
        """
        result = self._interpreter.execute(command_line)
        self._history.append(CommandRecord(command=command_line, result=result))

        if result.ok:
            self._notify()

        return result

    def write_file(self, name: str, content: str) -> FileEntry:
        """
        Simulate editing a file in the working directory.

        Args:
            name: File name; unknown names create a new untracked file
            content: New file content

        Returns:
            Copy of the updated FileEntry
        """
        entry = self._interpreter.repository.write_file(name, content)
        self._notify()
        return entry

    def reset(self) -> None:
        """Replace the repository with a fresh one and clear history."""
        logger.info("Resetting session %s", self.session_id)
        self._interpreter = self._build_interpreter(
            Repository(config=self.config, hash_factory=self._hash_factory)
        )
        self._history.clear()
        self._notify()

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def snapshot(self) -> RepositoryState:
        return self._interpreter.repository.snapshot()

    def current_branch_name(self) -> str | None:
        return self._interpreter.repository.current_branch_name()

    def tracked_files(self) -> list[FileEntry]:
        return self._interpreter.repository.tracked_files()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def on_state_change(self, handler: StateHandler) -> Callable[[], None]:
        """
        Register a handler called after every successful command.

        Every handler receives the same RepositoryState snapshot.

        Args:
            handler: Callable taking a RepositoryState

        Returns:
            Function that removes the handler; calling it twice is harmless
        """
        self._subscribers.append(handler)

        def unsubscribe() -> None:
            if handler in self._subscribers:
                self._subscribers.remove(handler)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _notify(self) -> None:
        if not self._subscribers:
            return

        state = self.snapshot()
        log_state_change(self.session_id, state)

        for handler in list(self._subscribers):
            try:
                handler(state)
            except Exception:
                logger.exception(
                    "State-change handler %r failed in session %s", handler, self.session_id
                )

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def history(self, subcommand: str | None = None) -> list[CommandRecord]:
        """
        Get executed commands, optionally filtered by subcommand.

        Args:
            subcommand: Subcommand to filter by (e.g., "commit")

        Returns:
            List of CommandRecord objects, oldest first
        """
        if subcommand is None:
            return list(self._history)
        return [r for r in self._history if r.subcommand == subcommand]

    def was_executed(self, subcommand: str) -> bool:
        """Check if a subcommand was run at least once (successfully or not)."""
        return any(r.subcommand == subcommand for r in self._history)

    def execution_count(self, subcommand: str) -> int:
        """Number of times a subcommand was run."""
        return sum(1 for r in self._history if r.subcommand == subcommand)

    def close(self) -> None:
        """Drop all subscribers."""
        self._subscribers.clear()

    def __enter__(self) -> "PlaygroundSession":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - drops subscribers."""
        self.close()
