"""
Tests for snapshot serialization.
"""

import json

import pytest

from gitplay.exceptions import ValidationError
from gitplay.serialize import (
    state_from_dict,
    state_from_json,
    state_to_dict,
    state_to_json,
)
from gitplay.session import PlaygroundSession
from gitplay.testing import create_commit, create_file_entry, create_state
from gitplay.types.repository import STAGED


class TestStateToDict:
    def test_wire_keys(self) -> None:
        data = state_to_dict(create_state())

        assert list(data) == [
            "initialized",
            "currentBranch",
            "branches",
            "commits",
            "stagedFiles",
            "workingDirectory",
            "files",
        ]

    def test_commit_shape(self) -> None:
        data = state_to_dict(create_state())

        assert data["commits"][0] == {
            "hash": "abc1234",
            "message": "Test commit",
            "date": "2024-01-15T10:30:00+00:00",
            "author": "Git User",
            "files": ["README.md"],
        }

    def test_staged_files_derived(self) -> None:
        state = create_state(
            files=[
                create_file_entry("a.txt", status=STAGED),
                create_file_entry("b.txt"),
            ]
        )

        assert state_to_dict(state)["stagedFiles"] == ["a.txt"]


class TestStateFromDict:
    def test_restores_session_state(self, committed_playground: PlaygroundSession) -> None:
        committed_playground.execute("git branch feature")
        committed_playground.write_file("index.js", "changed")
        state = committed_playground.snapshot()

        assert state_from_json(state_to_json(state)) == state

    def test_accepts_snake_case(self) -> None:
        data = {
            "initialized": True,
            "current_branch": "main",
            "branches": {"main": []},
            "commits": [],
            "files": [],
            "working_directory": "clean",
        }

        state = state_from_dict(data)

        assert state.current_branch == "main"

    def test_accepts_zulu_dates(self) -> None:
        data = state_to_dict(create_state())
        data["commits"][0]["date"] = "2024-01-15T10:30:00Z"

        state = state_from_dict(data)

        assert state.commits[0] == create_commit()

    def test_unknown_status(self) -> None:
        data = state_to_dict(create_state())
        data["files"][0]["status"] = "deleted"

        with pytest.raises(ValidationError) as exc_info:
            state_from_dict(data)

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert "deleted" in exc_info.value.message

    def test_unknown_working_directory(self) -> None:
        data = state_to_dict(create_state())
        data["workingDirectory"] = "dirty"

        with pytest.raises(ValidationError):
            state_from_dict(data)

    def test_missing_field(self) -> None:
        data = state_to_dict(create_state())
        del data["files"]

        with pytest.raises(ValidationError, match="files"):
            state_from_dict(data)

    def test_current_branch_without_entry(self) -> None:
        data = state_to_dict(create_state())
        data["currentBranch"] = "ghost"

        with pytest.raises(ValidationError, match="ghost"):
            state_from_dict(data)

    def test_bad_commit_date(self) -> None:
        data = state_to_dict(create_state())
        data["commits"][0]["date"] = "yesterday"

        with pytest.raises(ValidationError):
            state_from_dict(data)

    def test_non_object_commit(self) -> None:
        data = state_to_dict(create_state())
        data["branches"]["main"] = ["oops"]

        with pytest.raises(ValidationError, match="Commit must be an object"):
            state_from_dict(data)

    def test_non_object_file(self) -> None:
        data = state_to_dict(create_state())
        data["files"] = ["README.md"]

        with pytest.raises(ValidationError, match="File must be an object"):
            state_from_dict(data)

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("branches", ["main"]),
            ("commits", {"hash": "abc1234"}),
            ("files", "README.md"),
        ],
    )
    def test_wrong_container_type(self, key: str, value: object) -> None:
        data = state_to_dict(create_state())
        data[key] = value
        data["currentBranch"] = None

        with pytest.raises(ValidationError, match=key):
            state_from_dict(data)

    def test_non_string_file_content(self) -> None:
        data = state_to_dict(create_state())
        data["files"][0]["content"] = 42

        with pytest.raises(ValidationError, match="must be a string"):
            state_from_dict(data)

    def test_non_string_commit_hash(self) -> None:
        data = state_to_dict(create_state())
        data["commits"][0]["hash"] = ["abc1234"]

        with pytest.raises(ValidationError, match="Commit hash must be a string"):
            state_from_dict(data)

    def test_non_list_commit_files(self) -> None:
        data = state_to_dict(create_state())
        data["commits"][0]["files"] = 7

        with pytest.raises(ValidationError, match="Commit files must be a list"):
            state_from_dict(data)

    def test_non_object_state(self) -> None:
        with pytest.raises(ValidationError, match="Repository state must be an object"):
            state_from_dict(["not", "a", "state"])


class TestStateJson:
    def test_deterministic(self) -> None:
        state = create_state()

        assert state_to_json(state) == state_to_json(create_state())

    def test_compact(self) -> None:
        text = state_to_json(create_state())

        assert ", " not in text
        assert json.loads(text)["currentBranch"] == "main"

    def test_invalid_json(self) -> None:
        with pytest.raises(ValidationError, match="Invalid JSON"):
            state_from_json("{not json")

    def test_non_object(self) -> None:
        with pytest.raises(ValidationError):
            state_from_json("[]")
