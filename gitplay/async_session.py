"""
gitplay async session.

Provides an async interface to a PlaygroundSession for hosts that run an
event loop (websocket terminals, async web frameworks). Commands are
serialized so only one is in flight per session.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from gitplay.config import PlaygroundConfig
from gitplay.session import PlaygroundSession, StateHandler
from gitplay.types.repository import FileEntry, RepositoryState
from gitplay.types.results import CommandRecord, CommandResult


class AsyncPlaygroundSession:
    """
    Async wrapper around PlaygroundSession.

    Example:
        ```python
        import asyncio
        from gitplay import AsyncPlaygroundSession

        async def main():
            async with AsyncPlaygroundSession() as session:
                await session.execute("git init")
                result = await session.execute("git status")
                print(result.output)

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        session_id: str | None = None,
        config: PlaygroundConfig | None = None,
        hash_factory: Callable[[], str] | None = None,
        session: PlaygroundSession | None = None,
    ) -> None:
        """
        Initialize the async session.

        Args:
            session_id: Identifier for a new session (ignored when session is given)
            config: Playground configuration (ignored when session is given)
            hash_factory: Callable returning new commit hashes (ignored when session is given)
            session: Existing PlaygroundSession to wrap (optional)
        """
        self._session = session or PlaygroundSession(
            session_id=session_id,
            config=config,
            hash_factory=hash_factory,
        )
        self._lock = asyncio.Lock()

    @property
    def session(self) -> PlaygroundSession:
        """Get the wrapped synchronous session."""
        return self._session

    @property
    def session_id(self) -> str:
        return self._session.session_id

    @property
    def busy(self) -> bool:
        """True while a command is being executed."""
        return self._lock.locked()

    async def execute(self, command_line: str) -> CommandResult:
        """Run one command line once no other command is in flight."""
        async with self._lock:
            return self._session.execute(command_line)

    async def write_file(self, name: str, content: str) -> FileEntry:
        async with self._lock:
            return self._session.write_file(name, content)

    async def reset(self) -> None:
        async with self._lock:
            self._session.reset()

    def snapshot(self) -> RepositoryState:
        return self._session.snapshot()

    def current_branch_name(self) -> str | None:
        return self._session.current_branch_name()

    def tracked_files(self) -> list[FileEntry]:
        return self._session.tracked_files()

    def on_state_change(self, handler: StateHandler) -> Callable[[], None]:
        return self._session.on_state_change(handler)

    def history(self, subcommand: str | None = None) -> list[CommandRecord]:
        return self._session.history(subcommand)

    async def close(self) -> None:
        """Drop all subscribers."""
        self._session.close()

    async def __aenter__(self) -> "AsyncPlaygroundSession":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - drops subscribers."""
        await self.close()
