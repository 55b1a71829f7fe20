"""gitplay exception classes."""


class GitPlayError(Exception):
    """Base exception for all gitplay errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(GitPlayError):
    """Raised when playground configuration is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class UsageError(GitPlayError):
    """Raised when a command is missing or has malformed arguments."""

    def __init__(self, message: str) -> None:
        super().__init__("USAGE_ERROR", message)


class NotInitializedError(GitPlayError):
    """Raised when a command needs a repository and `git init` has not run."""

    def __init__(
        self, message: str = "Not a git repository. Run 'git init' first."
    ) -> None:
        super().__init__("NOT_INITIALIZED", message)


class PreconditionError(GitPlayError):
    """Raised when repository state does not allow the command (nothing staged, no commits)."""

    def __init__(self, message: str) -> None:
        super().__init__("PRECONDITION_FAILED", message)


class NotFoundError(GitPlayError):
    """Raised when a file, branch or commit is not found."""

    def __init__(self, message: str) -> None:
        super().__init__("NOT_FOUND", message)


class ConflictError(GitPlayError):
    """Raised on conflicts (branch already exists, repository already initialized)."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFLICT", message)


class UnknownCommandError(GitPlayError):
    """Raised for a program other than git or an unsupported subcommand."""

    def __init__(self, message: str) -> None:
        super().__init__("UNKNOWN_COMMAND", message)


class ValidationError(GitPlayError):
    """Raised when serialized state cannot be loaded."""

    def __init__(self, message: str) -> None:
        super().__init__("VALIDATION_ERROR", message)


class AuthenticationError(GitPlayError):
    """Raised when the repository store rejects the credentials."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__("AUTHENTICATION_ERROR", message)
        self.status_code = status_code


class ServerError(GitPlayError):
    """Raised on repository store server errors (5xx) or connection failures."""

    def __init__(self, code: str, message: str, status_code: int | None = None) -> None:
        super().__init__(code, message)
        self.status_code = status_code
