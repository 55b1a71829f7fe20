"""
Mock Git command interpreter.

Parses a `git <subcommand> [args...]` line, runs the matching handler against
a Repository and returns terminal-style text. Handlers signal failures by
raising GitPlayError subclasses; `CommandInterpreter.execute` turns every
failure into a CommandResult so callers never see an exception.
"""

import time
from collections.abc import Callable
from datetime import datetime, timezone

from gitplay.config import PlaygroundConfig
from gitplay.exceptions import (
    ConflictError,
    GitPlayError,
    NotFoundError,
    NotInitializedError,
    PreconditionError,
    UnknownCommandError,
    UsageError,
)
from gitplay.logging import get_logger, log_command
from gitplay.repository import Repository
from gitplay.types.repository import (
    COMMITTED,
    MODIFIED,
    STAGED,
    UNTRACKED,
    Commit,
)
from gitplay.types.results import CommandResult

logger = get_logger("commands")

# Characters removed from a commit message given with -m
_QUOTE_CHARS = str.maketrans("", "", "'\"")

# Number of content characters `git show` prints per file
_SHOW_CONTENT_LENGTH = 100

# Short hash length used by `log --oneline` and merge output
_SHORT_HASH_LENGTH = 7

# Subcommands allowed before `git init`
_UNGUARDED = frozenset({"init", "help"})

HELP_TEXT = """\
Supported commands:
  git init                  Create an empty repository
  git status                Show staged, modified and untracked files
  git add <file|.>          Stage a file, or every change with '.'
  git commit -m "<message>" Record staged files as a new commit
  git branch [<name>]       List branches, or create one
  git checkout <branch>     Switch to another branch
  git log [--oneline]       Show commit history, newest first
  git diff                  Show changes to modified files
  git show [<hash>]         Show a commit and its files
  git reset HEAD|--hard     Unstage changes, or discard them
  git merge <branch>        Merge another branch into the current one
  git help                  Show this message
"""


def _format_date(value: datetime) -> str:
    return value.strftime("%a %b %d %H:%M:%S %Y %z").rstrip()


def _short(commit_hash: str) -> str:
    return commit_hash[:_SHORT_HASH_LENGTH]


class CommandInterpreter:
    """
    Dispatches Git-like command lines to handlers.

    One interpreter owns one Repository. It is not thread-safe; callers must
    submit one command at a time.

    Example:
        ```python
        interpreter = CommandInterpreter()
        interpreter.execute("git init")
        interpreter.execute("git add .")
        result = interpreter.execute('git commit -m "Initial commit"')
        print(result.output)
        ```
    """

    def __init__(
        self,
        repository: Repository | None = None,
        config: PlaygroundConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        session_id: str | None = None,
    ) -> None:
        """
        Initialize the interpreter.

        Args:
            repository: Repository to operate on (default: a new seeded Repository)
            config: Playground configuration (default: the repository's configuration)
            clock: Callable returning the commit timestamp (default: current UTC time)
            session_id: Owning session, used in log lines (optional)
        """
        self.repository = repository or Repository(config=config)
        self.config = config or self.repository.config
        self.session_id = session_id
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._handlers: dict[str, Callable[[list[str]], str]] = {
            "init": self._init,
            "status": self._status,
            "add": self._add,
            "commit": self._commit,
            "branch": self._branch,
            "checkout": self._checkout,
            "log": self._log,
            "diff": self._diff,
            "show": self._show,
            "reset": self._reset,
            "merge": self._merge,
            "help": self._help,
        }

    @property
    def commands(self) -> list[str]:
        """Subcommands this interpreter accepts."""
        return list(self._handlers)

    def execute(self, command_line: str) -> CommandResult:
        """
        Run one command line.

        Args:
            command_line: Raw text typed by the learner

        Returns:
            CommandResult with output on success or error text on failure
        """
        start = time.perf_counter()
        try:
            result = CommandResult(output=self._dispatch(command_line))
        except GitPlayError as e:
            result = CommandResult(error=e.message)
        except Exception as e:
            logger.exception("Unexpected error while executing %r", command_line)
            result = CommandResult(error=str(e) or "Unknown error occurred")

        log_command(
            command_line,
            result,
            session_id=self.session_id,
            elapsed_ms=(time.perf_counter() - start) * 1000,
        )
        return result

    def _dispatch(self, command_line: str) -> str:
        parts = command_line.strip().split()
        program = parts[0] if parts else ""

        if program != "git":
            raise UnknownCommandError(
                f"Command not found: {program}. This is a Git playground - "
                "only Git commands are supported."
            )

        subcommand = parts[1] if len(parts) > 1 else ""
        args = parts[2:]

        handler = self._handlers.get(subcommand)
        if handler is None:
            raise UnknownCommandError(
                f"Unknown git command: {subcommand}. Try 'git status' or 'git help'."
            )

        if subcommand not in _UNGUARDED and not self.repository.initialized:
            raise NotInitializedError()

        return handler(args)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _init(self, args: list[str]) -> str:
        if self.repository.initialized:
            raise ConflictError("Repository already initialized.")

        self.repository.mark_initialized(self.config.default_branch)
        self.repository.refresh_working_directory()
        return f"Initialized empty Git repository in {self.config.repo_path}/.git/"

    def _status(self, args: list[str]) -> str:
        repo = self.repository
        output = f"On branch {repo.current_branch_name()}\n"

        untracked = repo.files_with_status(UNTRACKED)
        modified = repo.files_with_status(MODIFIED)
        staged = repo.files_with_status(STAGED)

        if not repo.commits:
            output += "\nNo commits yet\n"

        if staged:
            output += "\nChanges to be committed:\n"
            for entry in staged:
                output += f"  new file:   {entry.name}\n"

        if modified:
            output += "\nChanges not staged for commit:\n"
            for entry in modified:
                output += f"  modified:   {entry.name}\n"

        if untracked:
            output += "\nUntracked files:\n"
            for entry in untracked:
                output += f"  {entry.name}\n"
            output += (
                "\nnothing added to commit but untracked files present "
                '(use "git add" to track)\n'
            )

        if not (staged or modified or untracked):
            output += "\nnothing to commit, working tree clean\n"

        return output

    def _add(self, args: list[str]) -> str:
        if not args:
            raise UsageError(
                "Nothing specified, nothing added. Maybe you wanted to say 'git add .'?"
            )

        repo = self.repository
        target = args[0]

        if target == ".":
            pending = repo.files_with_status(UNTRACKED, MODIFIED)
            for entry in pending:
                repo.set_status(entry.name, STAGED)
            repo.refresh_working_directory()
            if not pending:
                return "No files to add."
            return f"Added {len(pending)} file(s) to staging area."

        entry = repo.find_file(target)
        if entry is None:
            raise NotFoundError(f"pathspec '{target}' did not match any files")

        if entry.status in (STAGED, COMMITTED):
            return f"File '{target}' is already staged or committed."

        repo.set_status(target, STAGED)
        repo.refresh_working_directory()
        return f"Added '{target}' to staging area."

    def _commit(self, args: list[str]) -> str:
        repo = self.repository
        staged = repo.files_with_status(STAGED)

        if not staged:
            raise PreconditionError(
                "No changes added to the commit. Use 'git add' to stage files."
            )

        message = self.config.default_message
        if "-m" in args:
            index = args.index("-m")
            if index + 1 < len(args):
                message = " ".join(args[index + 1:]).translate(_QUOTE_CHARS)

        commit = Commit(
            hash=repo.generate_hash(),
            message=message,
            date=self._clock(),
            author=self.config.author,
            files=tuple(entry.name for entry in staged),
        )
        repo.append_commit(commit)

        for entry in staged:
            repo.set_status(entry.name, COMMITTED)
        repo.refresh_working_directory()

        count = len(staged)
        noun = "file" if count == 1 else "files"
        return (
            f"[{repo.current_branch_name()} {commit.hash}] {message}\n"
            f" {count} {noun} changed"
        )

    def _branch(self, args: list[str]) -> str:
        repo = self.repository

        if not args:
            current = repo.current_branch_name()
            return "".join(
                f"* {name}\n" if name == current else f"  {name}\n"
                for name in repo.branch_names
            )

        name = args[0]
        if repo.has_branch(name):
            raise ConflictError(f"A branch named '{name}' already exists.")

        repo.create_branch(name)
        repo.refresh_working_directory()
        return f"Created branch '{name}'."

    def _checkout(self, args: list[str]) -> str:
        if not args:
            raise UsageError("You must specify a branch name.")

        name = args[0]
        if not self.repository.has_branch(name):
            raise NotFoundError(f"Branch '{name}' does not exist.")

        self.repository.switch_branch(name)
        self.repository.refresh_working_directory()
        return f"Switched to branch '{name}'"

    def _log(self, args: list[str]) -> str:
        commits = self.repository.commits
        if not commits:
            raise PreconditionError("No commits found.")

        if "--oneline" in args:
            return "".join(
                f"{_short(c.hash)} {c.message}\n" for c in reversed(commits)
            )

        return "".join(self._format_commit(c) for c in reversed(commits))

    def _diff(self, args: list[str]) -> str:
        modified = self.repository.files_with_status(MODIFIED)
        if not modified:
            return "No changes detected."

        output = ""
        for entry in modified:
            output += f"diff --git a/{entry.name} b/{entry.name}\n"
            output += f"--- a/{entry.name}\n"
            output += f"+++ b/{entry.name}\n"
            output += "@@ -1,1 +1,1 @@\n"
            output += f"-{entry.content}\n"
            output += f"+{entry.content} (modified)\n"
        return output

    def _show(self, args: list[str]) -> str:
        commits = self.repository.commits
        if not commits:
            raise PreconditionError("No commits found.")

        if not args:
            commit = commits[-1]
        else:
            prefix = args[0]
            matches = [c for c in commits if c.hash.startswith(prefix)]
            if not matches:
                raise NotFoundError(f"Commit '{prefix}' not found.")
            commit = matches[0]

        output = self._format_commit(commit)
        if commit.files:
            output += "Files changed in this commit:\n"
            for name in commit.files:
                entry = self.repository.find_file(name)
                if entry is None:
                    continue
                preview = entry.content[:_SHOW_CONTENT_LENGTH]
                if len(entry.content) > _SHOW_CONTENT_LENGTH:
                    preview += "..."
                output += f"+++ {name}\n"
                output += f"    Content: {preview}\n"
        return output

    def _reset(self, args: list[str]) -> str:
        if not args:
            raise UsageError(
                "Please specify what to reset. Try 'git reset HEAD' or 'git reset --hard'."
            )

        repo = self.repository
        target = args[0]

        if target in ("HEAD", "--soft"):
            for entry in repo.files_with_status(STAGED):
                repo.set_status(entry.name, MODIFIED)
            repo.refresh_working_directory()
            return "Unstaged all changes. Files moved back to working directory."

        if target == "--hard":
            for entry in repo.files_with_status(STAGED, MODIFIED):
                repo.set_status(entry.name, COMMITTED)
            repo.refresh_working_directory()
            return "Hard reset complete. All changes discarded."

        raise UsageError(
            f"Unknown reset option: {target}. Try 'git reset HEAD' or 'git reset --hard'."
        )

    def _merge(self, args: list[str]) -> str:
        if not args:
            raise UsageError("Please specify a branch to merge.")

        repo = self.repository
        source = args[0]
        current = repo.current_branch_name()

        if not repo.has_branch(source):
            raise NotFoundError(f"Branch '{source}' does not exist.")

        if source == current:
            raise PreconditionError("Cannot merge a branch into itself.")

        commit = Commit(
            hash=repo.generate_hash(),
            message=f"Merge branch '{source}' into {current}",
            date=self._clock(),
            author=self.config.author,
        )
        repo.append_commit(commit)
        repo.refresh_working_directory()
        return f"Merge completed. Created merge commit {_short(commit.hash)}."

    def _help(self, args: list[str]) -> str:
        return HELP_TEXT

    def _format_commit(self, commit: Commit) -> str:
        return (
            f"commit {commit.hash}\n"
            f"Author: {commit.author}\n"
            f"Date: {_format_date(commit.date)}\n\n"
            f"    {commit.message}\n\n"
        )
