"""TaskSerializer: JSON body for queue task parameters."""

from __future__ import annotations

import json

from deferred_tasks_core.primitives.exceptions import TaskSerializationError


class TaskSerializer:
    """Serialize/deserialize task parameters to/from a JSON object body.

    Key order is preserved so handlers see parameters in submission order.
    """

    def serialize(self, params: dict[str, str]) -> str:
        """Encode parameters to a JSON string."""
        try:
            return json.dumps(params, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise TaskSerializationError(str(e)) from e

    def deserialize(self, body: str | bytes) -> dict[str, str]:
        """Decode a message body back into parameters."""
        try:
            raw = body.decode("utf-8") if isinstance(body, bytes) else body
            data = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TaskSerializationError(str(e)) from e
        if not isinstance(data, dict) or not all(
            isinstance(v, str) for v in data.values()
        ):
            raise TaskSerializationError("Task body must be a JSON object of strings")
        return data
