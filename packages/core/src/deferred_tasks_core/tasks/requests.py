"""Typed enqueue requests and the QueueTask handed to queue clients.

Request models stay strongly typed; they only become the string mapping
the queue carries in :meth:`to_params`.
"""

from __future__ import annotations

import enum
from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.trid import Trid
from ..params import (
    PARAM_CLIENT_TRANSACTION_ID,
    PARAM_HOST_KEY,
    PARAM_IS_SUPERUSER,
    PARAM_REQUESTED_TIME,
    PARAM_REQUESTING_CLIENT_ID,
    PARAM_RESAVE_TIMES,
    PARAM_RESOURCE_KEY,
    PARAM_SERVER_TRANSACTION_ID,
    format_resave_times,
)
from ..utils import ensure_utc, format_instant


class DeliveryMethod(str, enum.Enum):
    """How the queue service delivers a task."""

    POST = "POST"  # push: the queue invokes the target
    PULL = "PULL"  # pull: a worker leases the task


class TaskTarget(BaseModel):
    """Handler a push task is delivered to."""

    model_config = ConfigDict(frozen=True)

    path: str
    service: str


class QueueTask(BaseModel):
    """One submission to a queue client."""

    model_config = ConfigDict(frozen=True)

    queue_name: str = Field(..., min_length=1)
    params: dict[str, str] = Field(default_factory=dict)
    delay: timedelta = timedelta(0)
    method: DeliveryMethod = DeliveryMethod.PULL
    target: TaskTarget | None = None

    @field_validator("delay")
    @classmethod
    def _non_negative_delay(cls, v: timedelta) -> timedelta:
        if v < timedelta(0):
            raise ValueError("delay must not be negative")
        return v


class _Request(BaseModel):
    model_config = ConfigDict(frozen=True)

    resource_key: str = Field(..., min_length=1)
    requested_time: datetime

    @field_validator("requested_time")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class ResaveRequest(_Request):
    """Re-save one entity at each of ``resave_times``.

    ``resave_times`` is ascending and de-duplicated. Only the first instant
    is scheduled; the rest ride along as the next link of the chain.
    """

    resave_times: tuple[datetime, ...] = Field(..., min_length=1)

    @field_validator("resave_times")
    @classmethod
    def _sorted_unique(cls, v: tuple[datetime, ...]) -> tuple[datetime, ...]:
        return tuple(sorted({ensure_utc(t) for t in v}))

    @property
    def first_resave(self) -> datetime:
        return self.resave_times[0]

    @property
    def remaining_resaves(self) -> tuple[datetime, ...]:
        return self.resave_times[1:]

    @property
    def eta_delay(self) -> timedelta:
        return self.first_resave - self.requested_time

    def to_params(self) -> dict[str, str]:
        params = {
            PARAM_RESOURCE_KEY: self.resource_key,
            PARAM_REQUESTED_TIME: format_instant(self.requested_time),
        }
        if self.remaining_resaves:
            params[PARAM_RESAVE_TIMES] = format_resave_times(self.remaining_resaves)
        return params


class DeleteRequest(_Request):
    """Asynchronously delete a resource on behalf of a client."""

    requesting_client_id: str
    trid: Trid
    is_superuser: bool = False

    def to_params(self) -> dict[str, str]:
        params = {
            PARAM_RESOURCE_KEY: self.resource_key,
            PARAM_REQUESTING_CLIENT_ID: self.requesting_client_id,
            PARAM_SERVER_TRANSACTION_ID: self.trid.server_transaction_id,
            PARAM_IS_SUPERUSER: "true" if self.is_superuser else "false",
            PARAM_REQUESTED_TIME: format_instant(self.requested_time),
        }
        if self.trid.client_transaction_id is not None:
            params[PARAM_CLIENT_TRANSACTION_ID] = self.trid.client_transaction_id
        return params


class DnsRefreshRequest(_Request):
    """Refresh DNS for a renamed host."""

    def to_params(self) -> dict[str, str]:
        return {
            PARAM_HOST_KEY: self.resource_key,
            PARAM_REQUESTED_TIME: format_instant(self.requested_time),
        }
