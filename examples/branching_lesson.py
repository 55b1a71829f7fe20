#!/usr/bin/env python3
"""
gitplay - Branching Lesson Example

This example plays through the branching lesson with two learners sharing
one host process:
1. Each learner gets an isolated session from a SessionRegistry
2. Learner one creates a feature branch, commits on it, and merges it
3. Learner two only initializes, proving sessions do not leak state
4. Commands are driven through the async wrapper, one at a time
"""

import asyncio
import logging

from gitplay import AsyncPlaygroundSession, SessionRegistry, configure_logging


async def branching_lesson(session: AsyncPlaygroundSession) -> None:
    """Run the branching lesson steps and print the terminal transcript."""
    steps = [
        "git init",
        "git add .",
        'git commit -m "Initial commit"',
        "git branch feature",
        "git checkout feature",
    ]
    for line in steps:
        await run(session, line)

    await session.write_file("feature.js", "export const feature = true;")
    print("   (edited feature.js)")

    for line in [
        "git add feature.js",
        'git commit -m "Add feature flag"',
        "git checkout main",
        "git log --oneline",
        "git merge feature",
        "git log --oneline",
        "git branch",
    ]:
        await run(session, line)


async def run(session: AsyncPlaygroundSession, line: str) -> None:
    result = await session.execute(line)
    print(f"   $ {line}")
    text = result.output if result.ok else f"error: {result.error}"
    for out_line in text.splitlines():
        print(f"     {out_line}")


def main() -> None:
    """Run the branching lesson for two learners."""
    print("=== gitplay Branching Lesson ===\n")
    configure_logging(level=logging.WARNING)

    registry = SessionRegistry()

    # Step 1: Learner one plays the lesson
    print("1. Learner one:")
    learner_one = AsyncPlaygroundSession(session=registry.get("learner-1"))
    asyncio.run(branching_lesson(learner_one))

    # Step 2: Learner two has a separate repository
    print("\n2. Learner two:")
    learner_two = AsyncPlaygroundSession(session=registry.get("learner-2"))
    asyncio.run(run(learner_two, "git init"))
    asyncio.run(run(learner_two, "git log"))

    # Step 3: Summary
    print("\n3. Sessions:")
    for session_id in registry.session_ids():
        state = registry.get(session_id).snapshot()
        print(f"   {session_id}: branches={list(state.branches)} commits={len(state.commits)}")

    print("\n=== Lesson complete ===")


if __name__ == "__main__":
    main()
