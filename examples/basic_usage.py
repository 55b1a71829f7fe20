#!/usr/bin/env python3
"""
Basic gitplay usage example.

Walks through the first lesson of the playground: init, add, commit, log.
Run with: python examples/basic_usage.py
"""

from gitplay import GitPlayError, PlaygroundSession, ConfigurationError
from gitplay import PlaygroundConfig, state_to_json

print("=== gitplay Basic Usage Example ===\n")

# 1. Exception hierarchy
print("1. Testing exception classes...")
try:
    PlaygroundConfig(hash_length=1)
except ConfigurationError as e:
    print(f"   Caught {type(e).__name__}: {e}")
    print(f"   Code: {e.code}, Message: {e.message}")
    assert isinstance(e, GitPlayError)

print("\n   OK: Exception classes working\n")

# 2. Running commands
print("2. Running a first lesson...")
session = PlaygroundSession()

updates = []
unsubscribe = session.on_state_change(updates.append)

for line in [
    "git status",
    "git init",
    "git status",
    "git add .",
    'git commit -m "Initial commit"',
    "git log --oneline",
]:
    result = session.execute(line)
    print(f"   $ {line}")
    for text in (result.output, result.error):
        for out_line in text.splitlines():
            print(f"     {out_line}")

unsubscribe()
print(f"\n   Visualization updates received: {len(updates)}")
assert len(updates) == 5, "Every successful command should notify subscribers"

print("\n   OK: Commands working\n")

# 3. Snapshots for a visualization
print("3. Serializing the repository snapshot...")
state = session.snapshot()
print(f"   Branch: {state.current_branch}, commits: {len(state.commits)}")
print(f"   JSON: {state_to_json(state)[:80]}...")

print("\n   OK: Snapshot serialization working\n")
