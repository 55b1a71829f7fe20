"""gitplay - a mock Git command interpreter for teaching Git."""

from gitplay.async_session import AsyncPlaygroundSession
from gitplay.config import PlaygroundConfig
from gitplay.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    GitPlayError,
    NotFoundError,
    NotInitializedError,
    PreconditionError,
    ServerError,
    UnknownCommandError,
    UsageError,
    ValidationError,
)
from gitplay.interpreter import CommandInterpreter
from gitplay.logging import configure_logging, get_logger
from gitplay.registry import SessionRegistry
from gitplay.repository import Repository
from gitplay.serialize import state_from_dict, state_from_json, state_to_dict, state_to_json
from gitplay.session import PlaygroundSession
from gitplay.store import RepositoryStoreClient, RetryConfig
from gitplay.types import (
    CommandRecord,
    CommandResult,
    Commit,
    FileEntry,
    RepositoryState,
    SavedRepository,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Sessions
    "PlaygroundSession",
    "AsyncPlaygroundSession",
    "SessionRegistry",
    # Core
    "CommandInterpreter",
    "Repository",
    "PlaygroundConfig",
    # Saved repositories
    "RepositoryStoreClient",
    "RetryConfig",
    "SavedRepository",
    # Types
    "Commit",
    "FileEntry",
    "RepositoryState",
    "CommandResult",
    "CommandRecord",
    # Exceptions
    "GitPlayError",
    "UsageError",
    "NotInitializedError",
    "PreconditionError",
    "NotFoundError",
    "ConflictError",
    "UnknownCommandError",
    "ValidationError",
    "ConfigurationError",
    "AuthenticationError",
    "ServerError",
    # Serialization
    "state_to_dict",
    "state_from_dict",
    "state_to_json",
    "state_from_json",
    # Logging
    "configure_logging",
    "get_logger",
]
