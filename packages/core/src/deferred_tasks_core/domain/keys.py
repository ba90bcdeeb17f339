"""VKey: stable, serializable references to persisted entities."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

E = TypeVar("E")

_KIND_PREFIX = "kind:"
_KEY_SEPARATOR = "@key:"


class VKey(BaseModel, Generic[E]):
    """Reference to a persisted entity.

    Generic over the entity's capability type (``VKey[Host]``) for typing
    only; the wire form carries just the kind name and the primary key.
    Two keys for the same logical entity stringify identically.

    Usage::

        key = VKey.create(Host, "5-ROID")
        key.stringify()   # 'kind:Host@key:IjUtUk9JRCI'
    """

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., min_length=1, pattern=r"^[^@:]+$")
    key: str | int

    @classmethod
    def create(cls, entity_type: type[Any], key: str | int) -> VKey[Any]:
        """Build a key whose kind is the entity class name."""
        return cls(kind=entity_type.__name__, key=key)

    def stringify(self) -> str:
        """Encode this key as an opaque string suitable for a task parameter."""
        raw = json.dumps(self.key, separators=(",", ":")).encode("utf-8")
        encoded = base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
        return f"{_KIND_PREFIX}{self.kind}{_KEY_SEPARATOR}{encoded}"

    @classmethod
    def parse(cls, text: str) -> VKey[Any]:
        """Decode a string produced by :meth:`stringify`.

        Raises:
            ValueError: If *text* is not a stringified key.
        """
        if not text.startswith(_KIND_PREFIX) or _KEY_SEPARATOR not in text:
            raise ValueError(f"Not a stringified VKey: {text!r}")
        kind, encoded = text[len(_KIND_PREFIX) :].split(_KEY_SEPARATOR, 1)
        padded = encoded + "=" * (-len(encoded) % 4)
        try:
            key = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Malformed VKey payload in {text!r}") from e
        return cls(kind=kind, key=key)

    def __str__(self) -> str:
        return f"VKey<{self.kind}>({self.key!r})"


@runtime_checkable
class Keyed(Protocol):
    """Any persisted entity that can hand out a reference to itself."""

    @property
    def repo_id(self) -> str:
        """Repository identifier, used in log lines."""
        ...

    def create_vkey(self) -> VKey[Any]:
        """Return the reference for this entity."""
        ...


def vkey_for(entity: VKey[Any] | Keyed) -> VKey[Any]:
    """Return the :class:`VKey` of a live entity, or the key itself."""
    if isinstance(entity, VKey):
        return entity
    if isinstance(entity, Keyed):
        return entity.create_vkey()
    raise TypeError(
        f"Cannot build a reference for {type(entity).__name__}; "
        "expected a VKey or an entity with create_vkey()"
    )


def reference_for(entity: VKey[Any] | Keyed | str) -> str:
    """Resolve *entity* to the opaque string a task handler re-resolves later.

    Strings are assumed to already be stringified keys and pass through.
    """
    if isinstance(entity, str):
        return entity
    return vkey_for(entity).stringify()
