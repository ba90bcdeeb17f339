"""TaskQueueSettings: environment-driven configuration (pydantic-settings)."""

from __future__ import annotations

from datetime import timedelta

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .retry import RetryPolicy
from .params import (
    BACKEND_SERVICE,
    QUEUE_ASYNC_ACTIONS,
    QUEUE_ASYNC_DELETE,
    QUEUE_ASYNC_HOST_RENAME,
    RESAVE_ENTITY_PATH,
)

MAX_ASYNC_ETA = timedelta(days=30)
DEFAULT_ASYNC_DELETE_DELAY = timedelta(seconds=90)


class TaskQueueSettings(BaseSettings):
    """Settings loaded from DEFERRED_TASKS_* env vars (and a local .env).

    Durations accept seconds or ISO-8601 durations, e.g.
    ``DEFERRED_TASKS_ASYNC_DELETE_DELAY=PT90S``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DEFERRED_TASKS_",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        str_strip_whitespace=True,
    )

    # ---- Scheduling policy -------------------------------------------------
    async_delete_delay: timedelta = DEFAULT_ASYNC_DELETE_DELAY
    max_async_eta: timedelta = MAX_ASYNC_ETA

    # ---- Queue routing -----------------------------------------------------
    async_actions_queue: str = QUEUE_ASYNC_ACTIONS
    async_delete_queue: str = QUEUE_ASYNC_DELETE
    async_host_rename_queue: str = QUEUE_ASYNC_HOST_RENAME
    resave_path: str = RESAVE_ENTITY_PATH
    resave_service: str = BACKEND_SERVICE

    # ---- Submission retries ------------------------------------------------
    retry_max_attempts: int = Field(3, ge=1)
    retry_base_delay: float = Field(0.1, ge=0)
    retry_max_delay: float = Field(5.0, ge=0)
    retry_jitter: bool = True

    # ---- SQS ---------------------------------------------------------------
    sqs_region: str = "us-east-1"

    @model_validator(mode="after")
    def _check(self) -> TaskQueueSettings:
        if self.async_delete_delay < timedelta(0):
            raise ValueError("async_delete_delay must not be negative")
        if self.max_async_eta <= timedelta(0):
            raise ValueError("max_async_eta must be positive")
        if self.retry_base_delay > self.retry_max_delay:
            raise ValueError("retry_base_delay must be <= retry_max_delay")
        return self

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.retry_max_attempts,
            base_delay=self.retry_base_delay,
            max_delay=self.retry_max_delay,
            jitter=self.retry_jitter,
        )
