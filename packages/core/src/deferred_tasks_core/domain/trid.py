"""Trid: client/server transaction id pair carried by delete requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ..primitives.id_generator import UUID4Generator

if TYPE_CHECKING:
    from ..primitives.id_generator import IIDGenerator


class Trid(BaseModel):
    """Transaction id pair.

    The server id is always present; the client id is whatever the client
    supplied, if anything.
    """

    model_config = ConfigDict(frozen=True)

    server_transaction_id: str = Field(..., min_length=1)
    client_transaction_id: str | None = None

    @classmethod
    def create(
        cls,
        client_transaction_id: str | None = None,
        *,
        id_generator: IIDGenerator | None = None,
    ) -> Trid:
        """Generate a fresh server transaction id and pair it with the client's."""
        generator = id_generator or UUID4Generator()
        return cls(
            server_transaction_id=generator.next_id(),
            client_transaction_id=client_transaction_id,
        )
