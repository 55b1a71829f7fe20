"""
HTTP client for the lesson backend's saved repositories.

Saves and loads repository snapshots through the `/api/repositories`
endpoints with automatic retry and error handling.
"""

import os
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx

from gitplay.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    GitPlayError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from gitplay.logging import get_logger, log_store_request, log_store_response
from gitplay.serialize import parse_timestamp, state_from_dict, state_to_dict
from gitplay.types.repository import RepositoryState
from gitplay.types.saved import SavedRepository

logger = get_logger("store")

REPOSITORIES_PATH = "/api/repositories"


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    # Methods safe to resend; every POST creates a new row
    retry_methods: list[str] = field(default_factory=lambda: ["GET", "PUT"])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # seconds
    jitter: float = 0.1  # 0.1 = ±10%


class RepositoryStoreClient:
    """
    Client for saving playground repositories to the lesson backend.

    Handles:
    - Bearer token or session cookie authentication
    - Exponential backoff with jitter for retries
    - Retry-After header respect for rate limiting
    - Error response parsing into typed exceptions

    Example:
        >>> with RepositoryStoreClient("http://localhost:5000", token="...") as store:
        ...     saved = store.create("my-lesson", session.snapshot())
        ...     store.update(saved.repository_id, session.snapshot())
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        cookies: dict[str, str] | None = None,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the store client.

        Args:
            base_url: Base URL of the lesson backend (e.g., "http://localhost:5000")
            token: Optional bearer token sent with every request
            cookies: Optional session cookies (the backend's login session)
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            transport: Optional httpx transport, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
            cookies=cookies,
            transport=transport,
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> "RepositoryStoreClient":
        """
        Create a client from environment variables.

        Environment variables:
            GITPLAY_STORE_URL: Base URL of the lesson backend (required)
            GITPLAY_STORE_TOKEN: Bearer token (optional)

        Raises:
            ConfigurationError: If GITPLAY_STORE_URL is not set
        """
        base_url = os.environ.get("GITPLAY_STORE_URL")
        if not base_url:
            raise ConfigurationError("GITPLAY_STORE_URL environment variable is required")
        token = os.environ.get("GITPLAY_STORE_TOKEN") or None
        return cls(base_url, token=token, **kwargs)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "RepositoryStoreClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def list_repositories(self) -> list[SavedRepository]:
        """List the signed-in user's saved repositories."""
        data = self._request("GET", REPOSITORIES_PATH)
        if not isinstance(data, list):
            raise ValidationError("Expected a list of repositories")
        return [parse_saved_repository(item) for item in data]

    def get(self, repository_id: int) -> SavedRepository:
        """
        Find a saved repository by id.

        Raises:
            NotFoundError: If the user has no repository with that id
        """
        for saved in self.list_repositories():
            if saved.repository_id == repository_id:
                return saved
        raise NotFoundError(f"Repository {repository_id} not found")

    def create(self, name: str, state: RepositoryState) -> SavedRepository:
        """Save a new repository snapshot under a name."""
        body = {"name": name, "state": state_to_dict(state)}
        saved = parse_saved_repository(self._request("POST", REPOSITORIES_PATH, body))
        logger.debug("Saved repository %s as id=%s", name, saved.repository_id)
        return saved

    def update(self, repository_id: int, state: RepositoryState) -> SavedRepository:
        """Replace the snapshot of an existing saved repository."""
        body = {"state": state_to_dict(state)}
        path = f"{REPOSITORIES_PATH}/{repository_id}"
        saved = parse_saved_repository(self._request("PUT", path, body))
        logger.debug("Updated repository id=%s", repository_id)
        return saved

    def _request(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> Any:
        def make_request() -> httpx.Response:
            request = self._client.build_request(method, path, json=body)
            log_store_request(method, str(request.url), dict(request.headers))
            start = time.perf_counter()
            response = self._client.send(request)
            log_store_response(
                response.status_code,
                str(request.url),
                elapsed_ms=(time.perf_counter() - start) * 1000,
            )
            return response

        retry = method.upper() in self.retry_config.retry_methods
        return self._execute_with_retry(make_request, retry=retry)

    def _execute_with_retry(
        self, request_fn: Callable[[], httpx.Response], retry: bool = True
    ) -> Any:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            request_fn: Function that makes the HTTP request
            retry: False sends the request exactly once

        Raises:
            GitPlayError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                response = request_fn()

                if response.status_code < 400:
                    return response.json()

                error = self._parse_error_response(response)

                if not retry or not self._should_retry(response.status_code, attempt):
                    raise error

                last_error = error
                retry_after = response.headers.get("Retry-After")
                wait_time = self._get_backoff_time(attempt, retry_after)
                logger.warning(
                    "Retrying after HTTP %d in %.2fs (attempt %d)",
                    response.status_code, wait_time, attempt + 1,
                )
                time.sleep(wait_time)

            except httpx.RequestError as e:
                if not retry or attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                wait_time = self._get_backoff_time(attempt, None)
                logger.warning("Connection failed (%s), retrying in %.2fs", e, wait_time)
                time.sleep(wait_time)

        if last_error:
            if isinstance(last_error, GitPlayError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        if attempt >= self.retry_config.max_retries:
            return False
        return status_code in self.retry_config.retry_on

    def _get_backoff_time(self, attempt: int, retry_after: str | None) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass  # Fall through to exponential backoff

        base_wait = self.retry_config.backoff_factor ** attempt

        jitter_range = base_wait * self.retry_config.jitter
        wait_time = base_wait + random.uniform(-jitter_range, jitter_range)

        return min(wait_time, self.retry_config.max_backoff)

    def _parse_error_response(self, response: httpx.Response) -> GitPlayError:
        """Parse an error response (`{"message": ...}`) into a typed exception."""
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        status_code = response.status_code
        message = data.get("message") or f"HTTP {status_code}"

        if status_code in (401, 403):
            return AuthenticationError(message, status_code)
        elif status_code == 404:
            return NotFoundError(message)
        elif status_code == 409:
            return ConflictError(message)
        elif status_code == 429:
            return ServerError("RATE_LIMITED", message, status_code)
        elif status_code >= 500:
            return ServerError("SERVER_ERROR", message, status_code)
        else:
            return ValidationError(message)


def parse_saved_repository(data: Any) -> SavedRepository:
    """
    Build a SavedRepository from a backend row.

    Raises:
        ValidationError: If the row is missing fields or holds an invalid state
    """
    if not isinstance(data, dict):
        raise ValidationError("Repository must be a JSON object")
    try:
        repository_id = int(data["id"])
        name = data["name"]
        state = data["state"]
    except KeyError as e:
        raise ValidationError(f"Repository is missing field: {e.args[0]}") from None
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid repository id: {data.get('id')!r}") from None
    if not isinstance(state, dict):
        raise ValidationError("Repository state must be a JSON object")

    return SavedRepository(
        repository_id=repository_id,
        name=name,
        state=state_from_dict(state),
        user_id=data.get("userId"),
        created_at=_optional_timestamp(data.get("createdAt")),
        updated_at=_optional_timestamp(data.get("updatedAt")),
    )


def _optional_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}") from None
