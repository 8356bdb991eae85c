"""Helpers for digging a JSON object out of free-form model output."""

import json
import re
from typing import Any

_THINK_PAIR_RE = re.compile(r"<think>.*?</think>", re.DOTALL)
_THINK_OPEN_RE = re.compile(r"<think>.*", re.DOTALL)
_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def strip_think_tags(text: str) -> str:
    """Remove ``<think>`` reasoning blocks, including an unterminated trailing one."""
    text = _THINK_PAIR_RE.sub("", text)
    return _THINK_OPEN_RE.sub("", text)


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Parse the outermost ``{...}`` span of ``text``.

    Returns None when there is no span, it is not valid JSON, or it decodes
    to something other than an object.
    """
    text = _FENCE_RE.sub("", strip_think_tags(text))
    match = _OBJECT_RE.search(text)
    if match is None:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None
