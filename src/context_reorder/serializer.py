"""JSON (de)serialization of chunk lists."""

from __future__ import annotations

import json
from collections.abc import Sequence

from pydantic import ValidationError as PydanticValidationError

from context_reorder.exceptions import ValidationError
from context_reorder.models import Chunk


def serialize_chunks(chunks: Sequence[Chunk]) -> str:
    """Serialize chunks to a JSON array string."""
    return json.dumps([c.model_dump(mode="json") for c in chunks], ensure_ascii=False)


def deserialize_chunks(data: str | bytes) -> list[Chunk]:
    """Parse a JSON array into chunks.

    Each element must carry a non-empty string ``id``, a string ``text`` and a
    finite numeric ``score``.  Values are not coerced.  Unknown top-level keys
    are kept on the chunk; metadata keys are matched as written, so
    ``sectionIndex`` is not read as ``section_index``.

    Raises:
        ValidationError: If the JSON is malformed, the top level is not an
            array, or any element is invalid.  Nothing is returned partially.
    """
    try:
        parsed = json.loads(data)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Failed to parse JSON: {e}") from e

    if not isinstance(parsed, list):
        raise ValidationError("Failed to parse JSON: expected an array")

    chunks: list[Chunk] = []
    for i, item in enumerate(parsed):
        if not isinstance(item, dict):
            raise ValidationError(f"Deserialized chunk at index {i} is not an object")
        try:
            chunks.append(Chunk.model_validate(item))
        except PydanticValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise ValidationError(
                f"Deserialized chunk at index {i} is invalid ({fields})"
            ) from e
    return chunks
