"""Pull a JSON object out of free-form model output."""

from __future__ import annotations

import json


def extract_json(text: str) -> dict:
    """Extract the JSON object from an LLM response.

    Models often wrap structured output in ```json fences or add a sentence
    before/after it. Tries, in order:
    1. Direct json.loads on the full text
    2. The same after stripping code fence markers
    3. The span from the first '{' to the last '}'

    Raises ValueError when none of these yields a JSON object. A top-level
    array or scalar is rejected too: callers expect an envelope object.
    """
    text = (text or "").strip()
    if not text:
        raise ValueError("Could not extract JSON from empty text")

    for candidate in (text, _strip_code_fences(text)):
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        return _require_object(data)

    braced = _slice_braces(text)
    if braced is not None:
        try:
            data = json.loads(braced)
        except json.JSONDecodeError:
            pass
        else:
            return _require_object(data)

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def _require_object(data) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers from text."""
    lines = text.split("\n")

    if lines and lines[0].strip().startswith("```"):
        lines = lines[1:]

    while lines and lines[-1].strip() in ("```", ""):
        lines = lines[:-1]

    return "\n".join(lines).strip()


def _slice_braces(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1]
    return None
