"""
Conversion of repository snapshots to and from plain data.

The dict shape uses the camelCase keys a browser visualization expects
(`currentBranch`, `workingDirectory`, `stagedFiles`, ...). Loading also
accepts snake_case keys.
"""

import json
from datetime import datetime
from typing import Any

from gitplay.exceptions import ValidationError
from gitplay.types.repository import (
    FILE_STATUSES,
    WORKING_DIRECTORY_STATES,
    Commit,
    FileEntry,
    RepositoryState,
)

_MISSING = object()


def _get(data: dict[str, Any], camel: str, snake: str, default: Any = _MISSING) -> Any:
    """Get value from dict, trying camelCase first then snake_case."""
    if camel in data:
        return data[camel]
    if snake in data:
        return data[snake]
    if default is _MISSING:
        raise ValidationError(f"Missing required field: {camel}")
    return default


def commit_to_dict(commit: Commit) -> dict[str, Any]:
    return {
        "hash": commit.hash,
        "message": commit.message,
        "date": commit.date.isoformat(),
        "author": commit.author,
        "files": list(commit.files),
    }


def file_to_dict(entry: FileEntry) -> dict[str, Any]:
    return {"name": entry.name, "content": entry.content, "status": entry.status}


def state_to_dict(state: RepositoryState) -> dict[str, Any]:
    """Convert a RepositoryState into JSON-compatible data."""
    return {
        "initialized": state.initialized,
        "currentBranch": state.current_branch,
        "branches": {
            name: [commit_to_dict(c) for c in commits]
            for name, commits in state.branches.items()
        },
        "commits": [commit_to_dict(c) for c in state.commits],
        "stagedFiles": state.staged_files,
        "workingDirectory": state.working_directory,
        "files": [file_to_dict(f) for f in state.files],
    }


def state_to_json(state: RepositoryState) -> str:
    """Serialize a RepositoryState to compact JSON with a fixed key order."""
    return json.dumps(state_to_dict(state), separators=(",", ":"), ensure_ascii=False)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing "Z" for UTC."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _require_dict(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _require_list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValidationError(f"{what} must be a list, got {type(value).__name__}")
    return value


def _parse_commit(data: Any) -> Commit:
    data = _require_dict(data, "Commit")
    for key in ("hash", "message", "author"):
        if key in data and not isinstance(data[key], str):
            raise ValidationError(f"Commit {key} must be a string, got {data[key]!r}")
    try:
        date = parse_timestamp(data["date"])
        return Commit(
            hash=data["hash"],
            message=data["message"],
            date=date,
            author=data["author"],
            files=tuple(_require_list(data.get("files", []), "Commit files")),
        )
    except KeyError as e:
        raise ValidationError(f"Commit is missing field: {e.args[0]}") from None
    except (AttributeError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid commit date: {e}") from None


def _parse_file(data: Any) -> FileEntry:
    data = _require_dict(data, "File")
    status = data.get("status")
    if status not in FILE_STATUSES:
        raise ValidationError(f"Unknown file status: {status!r}")
    if "name" not in data:
        raise ValidationError("File is missing field: name")
    if not isinstance(data["name"], str):
        raise ValidationError(f"File name must be a string, got {data['name']!r}")
    content = data.get("content", "")
    if not isinstance(content, str):
        raise ValidationError(f"Content of '{data['name']}' must be a string")
    return FileEntry(name=data["name"], content=content, status=status)


def state_from_dict(data: dict[str, Any]) -> RepositoryState:
    """
    Build a RepositoryState from data produced by state_to_dict.

    The derived `stagedFiles` key is ignored; staging is read from file statuses.

    Raises:
        ValidationError: If a field is missing, has the wrong type or holds an
            unknown value
    """
    data = _require_dict(data, "Repository state")

    working_directory = _get(data, "workingDirectory", "working_directory")
    if working_directory not in WORKING_DIRECTORY_STATES:
        raise ValidationError(f"Unknown working directory state: {working_directory!r}")

    branches = _require_dict(_get(data, "branches", "branches"), "branches")
    current_branch = _get(data, "currentBranch", "current_branch")
    if current_branch is not None and current_branch not in branches:
        raise ValidationError(f"Current branch '{current_branch}' has no branch entry")

    return RepositoryState(
        initialized=bool(_get(data, "initialized", "initialized")),
        current_branch=current_branch,
        branches={
            name: [_parse_commit(c) for c in _require_list(commits, f"Branch '{name}'")]
            for name, commits in branches.items()
        },
        commits=[
            _parse_commit(c)
            for c in _require_list(_get(data, "commits", "commits"), "commits")
        ],
        files=[
            _parse_file(f)
            for f in _require_list(_get(data, "files", "files"), "files")
        ],
        working_directory=working_directory,
    )


def state_from_json(text: str) -> RepositoryState:
    """
    Parse JSON produced by state_to_json.

    Raises:
        ValidationError: If the text is not valid JSON or not a valid state
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e.msg}") from None
    if not isinstance(data, dict):
        raise ValidationError("Repository state must be a JSON object")
    return state_from_dict(data)


__all__ = [
    "commit_to_dict",
    "file_to_dict",
    "state_to_dict",
    "state_to_json",
    "state_from_dict",
    "state_from_json",
]
