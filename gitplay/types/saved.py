"""Saved repository data models."""

from dataclasses import dataclass
from datetime import datetime

from gitplay.types.repository import RepositoryState


@dataclass
class SavedRepository:
    """A repository snapshot stored by the lesson backend."""

    repository_id: int
    name: str
    state: RepositoryState
    user_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
