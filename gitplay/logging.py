"""
gitplay logging utilities.

Provides configurable logging for executed commands, session state
changes and repository store HTTP traffic. Commit messages and file
contents are learner input, so only truncated previews are ever logged.
"""

import logging
from typing import Any

from gitplay.types.repository import RepositoryState
from gitplay.types.results import CommandResult

# Create package-specific loggers
_sdk_logger = logging.getLogger("gitplay")
_command_logger = logging.getLogger("gitplay.commands")
_session_logger = logging.getLogger("gitplay.sessions")
_store_logger = logging.getLogger("gitplay.store")

# Maximum length of learner-provided text shown in log lines
_PREVIEW_LENGTH = 60

# Request headers never written to logs
_SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "set-cookie"})


def configure_logging(
    level: int = logging.INFO,
    command_level: int | None = None,
    session_level: int | None = None,
    store_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure gitplay logging.

    Args:
        level: Default log level for all gitplay loggers (default: INFO)
        command_level: Log level for command execution logging (default: same as level)
        session_level: Log level for session lifecycle logging (default: same as level)
        store_level: Log level for repository store HTTP logging (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from gitplay.logging import configure_logging

        # Trace every command a learner types
        configure_logging(level=logging.INFO, command_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _sdk_logger.setLevel(level)
    _sdk_logger.addHandler(handler)

    _command_logger.setLevel(command_level if command_level is not None else level)

    _session_logger.setLevel(session_level if session_level is not None else level)

    _store_logger.setLevel(store_level if store_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a gitplay logger.

    Args:
        name: Logger name suffix (e.g., "commands", "sessions"). If None, returns main logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _sdk_logger
    return logging.getLogger(f"gitplay.{name}")


def truncate_message(text: str, limit: int = _PREVIEW_LENGTH) -> str:
    """
    Shorten learner-provided text for a single log line.

    Newlines are flattened and anything past `limit` characters is replaced
    with "...".
    """
    flat = text.replace("\n", "\\n")
    if len(flat) <= limit:
        return flat
    return f"{flat[:limit]}..."


def summarize_state(state: RepositoryState) -> dict[str, Any]:
    """
    Build a compact summary of repository state for logging.

    File contents and commit messages are left out; only counts and names are kept.
    """
    counts: dict[str, int] = {}
    for entry in state.files:
        counts[entry.status] = counts.get(entry.status, 0) + 1

    return {
        "initialized": state.initialized,
        "branch": state.current_branch,
        "branches": sorted(state.branches),
        "commits": len(state.commits),
        "files": counts,
        "working_directory": state.working_directory,
    }


def log_command(
    command: str,
    result: CommandResult,
    session_id: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log an executed command at DEBUG level.

    Args:
        command: Raw command line
        result: Result returned to the caller
        session_id: Owning session (optional)
        elapsed_ms: Execution time in milliseconds (optional)
    """
    if not _command_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [truncate_message(command)]

    if session_id:
        log_parts.append(f"session={session_id}")

    if result.error:
        log_parts.append(f"error={truncate_message(result.error)}")
    else:
        log_parts.append("ok")

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    _command_logger.debug(" | ".join(log_parts))


def log_state_change(session_id: str, state: RepositoryState) -> None:
    """
    Log a state-change notification at DEBUG level.

    Args:
        session_id: Session whose state changed
        state: Snapshot handed to subscribers
    """
    if not _session_logger.isEnabledFor(logging.DEBUG):
        return

    _session_logger.debug("state changed: session=%s | %s", session_id, summarize_state(state))



def safe_log_headers(headers: dict[str, str]) -> dict[str, str]:
    """Copy request headers with credentials replaced by "[REDACTED]"."""
    return {
        key: "[REDACTED]" if key.lower() in _SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def log_store_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
) -> None:
    """
    Log a repository store request at DEBUG level with credentials masked.

    Request bodies carry learner files, so they are never logged.

    Args:
        method: HTTP method (GET, POST, PUT)
        url: Request URL
        headers: Request headers (optional)
    """
    if not _store_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if headers:
        log_parts.append(f"headers={safe_log_headers(headers)}")

    _store_logger.debug(" | ".join(log_parts))


def log_store_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log a repository store response at DEBUG level.

    Args:
        status_code: HTTP status code
        url: Request URL
        elapsed_ms: Request duration in milliseconds (optional)
    """
    if not _store_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    _store_logger.debug(" | ".join(log_parts))


# Export public API
__all__ = [
    "configure_logging",
    "get_logger",
    "truncate_message",
    "summarize_state",
    "log_command",
    "log_state_change",
    "safe_log_headers",
    "log_store_request",
    "log_store_response",
]
