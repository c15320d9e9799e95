"""Locate the JSON object embedded in a free-form model reply."""

from __future__ import annotations

import json
import re
from typing import Any

from repograder.errors import GenerationError

UNPARSABLE = "unparsable response"

# Opening or closing code fence, with an optional language tag.
_FENCE_RE = re.compile(r"```[A-Za-z0-9_-]*[ \t]*\n?")
# Greedy: first "{" through the last "}".
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def strip_code_fences(text: str) -> str:
    """Remove Markdown code-fence markers, keeping their contents."""
    return _FENCE_RE.sub("", text)


def extract_json_object(text: str) -> dict[str, Any]:
    """Return the JSON object embedded in ``text``.

    Tolerates code fences and commentary around the object. Raises
    GenerationError("unparsable response") when no brace span exists, the
    span is not valid JSON, or it does not decode to an object.
    """
    cleaned = strip_code_fences(text.strip()).strip()
    match = _OBJECT_RE.search(cleaned)
    if match is None:
        raise GenerationError(UNPARSABLE)
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise GenerationError(UNPARSABLE) from e
    if not isinstance(payload, dict):
        raise GenerationError(UNPARSABLE)
    return payload
