"""Upstream response normalization.

The upstream chat service has answered in several shapes over time:

- ``{"type": "text", "content": "..."}``
- ``{"type": "email_template", "content": {"message": "...", "html": "<p>..</p>"}}``
- ``{"content": {"message": "..."}}``
- ``{"response": "..."}``

Each shape has a matcher; matchers are tried in order and the first one that
claims the payload decides the outcome. Nothing here raises: a payload that
yields no usable text comes back as an ``ExtractionFailure``.
"""

import enum
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

_PARAGRAPH_RE = re.compile(r"<p>(.*?)</p>")
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


class ResponseShape(str, enum.Enum):
    TEXT = "text"
    EMAIL_TEMPLATE = "email_template"
    CONTENT_MESSAGE = "content_message"
    RESPONSE_FIELD = "response_field"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ExtractionFailure:
    reason: str
    shape: ResponseShape = ResponseShape.UNRECOGNIZED


NormalizedAnswer = str | ExtractionFailure


@dataclass(frozen=True)
class ShapeMatcher:
    shape: ResponseShape
    claims: Callable[[dict[str, Any]], bool]
    extract: Callable[[dict[str, Any]], NormalizedAnswer]


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _content_dict(payload: dict[str, Any]) -> dict[str, Any]:
    content = payload.get("content")
    return content if isinstance(content, dict) else {}


def html_to_text(html: str) -> str:
    """Pull readable text out of an HTML fragment.

    ``<p>`` paragraphs are joined with newlines; without paragraphs every tag
    is dropped and whitespace runs collapse to one space.
    """
    paragraphs = _PARAGRAPH_RE.findall(html)
    if paragraphs:
        return "\n".join(paragraphs)
    return _WHITESPACE_RE.sub(" ", _TAG_RE.sub(" ", html)).strip()


def _extract_email_template(payload: dict[str, Any]) -> NormalizedAnswer:
    content = _content_dict(payload)
    message = content.get("message")
    if isinstance(message, str) and message.strip():
        return message

    html = content.get("html")
    if isinstance(html, str) and html:
        text = html_to_text(html)
        if text.strip():
            return text
        return ExtractionFailure("no meaningful text", ResponseShape.EMAIL_TEMPLATE)

    return ExtractionFailure("no content in email_template", ResponseShape.EMAIL_TEMPLATE)


_MATCHERS: tuple[ShapeMatcher, ...] = (
    ShapeMatcher(
        ResponseShape.TEXT,
        claims=lambda p: p.get("type") == "text" and _non_empty_str(p.get("content")),
        extract=lambda p: p["content"],
    ),
    ShapeMatcher(
        ResponseShape.EMAIL_TEMPLATE,
        claims=lambda p: p.get("type") == "email_template",
        extract=_extract_email_template,
    ),
    ShapeMatcher(
        ResponseShape.CONTENT_MESSAGE,
        claims=lambda p: _non_empty_str(_content_dict(p).get("message")),
        extract=lambda p: p["content"]["message"],
    ),
    ShapeMatcher(
        ResponseShape.RESPONSE_FIELD,
        claims=lambda p: _non_empty_str(p.get("response")),
        extract=lambda p: p["response"],
    ),
)


def detect_shape(payload: Any) -> ResponseShape:
    """Return the first shape that claims ``payload``."""
    if isinstance(payload, dict):
        for matcher in _MATCHERS:
            if matcher.claims(payload):
                return matcher.shape
    return ResponseShape.UNRECOGNIZED


def normalize(payload: Any) -> NormalizedAnswer:
    """Extract a single displayable string from an upstream payload."""
    if isinstance(payload, dict):
        for matcher in _MATCHERS:
            if matcher.claims(payload):
                return matcher.extract(payload)
    return ExtractionFailure("unrecognized response format")
