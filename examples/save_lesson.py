#!/usr/bin/env python3
"""
gitplay - Save and Resume Example

Saves a learner's repository to the lesson backend and resumes it in a new
session. Requires a running backend:

    export GITPLAY_STORE_URL="http://localhost:5000"
    export GITPLAY_STORE_TOKEN="..."
    python examples/save_lesson.py
"""

import logging
import sys

from gitplay import GitPlayError, PlaygroundSession, RepositoryStoreClient, configure_logging


def main() -> int:
    configure_logging(level=logging.INFO, store_level=logging.DEBUG)

    session = PlaygroundSession()
    for line in ["git init", "git add README.md", 'git commit -m "Add readme"']:
        session.execute(line)

    try:
        with RepositoryStoreClient.from_env() as store:
            saved = store.create("first-lesson", session.snapshot())
            print(f"Saved repository {saved.repository_id} ({saved.name})")

            session.execute("git add .")
            session.execute('git commit -m "Add the rest"')
            store.update(saved.repository_id, session.snapshot())

            resumed = PlaygroundSession.restore(store.get(saved.repository_id).state)
    except GitPlayError as e:
        print(f"Store error: {e}", file=sys.stderr)
        return 1

    print(resumed.execute("git log --oneline").output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
