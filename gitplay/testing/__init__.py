"""gitplay testing utilities.

Provides fixtures and model builders for testing applications that embed
the playground. Requires pytest: install with `pip install gitplay[testing]`.
"""

from gitplay.testing.fixtures import (
    create_commit,
    create_file_entry,
    create_state,
    sequential_hash_factory,
)

__all__ = [
    "sequential_hash_factory",
    "create_commit",
    "create_file_entry",
    "create_state",
]
