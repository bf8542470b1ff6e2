"""
Reply content normalization.

Command handlers may reply with almost anything: a string, a number, a
list, a dict of arbitrary data, or a dict already shaped like a Discord
message (``{"content": ..., "embeds": [...], "file": ...}``). This module
classifies that value once, at the ``reply()`` boundary, into one of three
variants and turns it into a message payload dict:

- Primitive:         ``42``           -> ``{"content": "42"}``
- RawObject:         ``{"foo": 1}``   -> ``{"content": "```json\\n{...}\\n```"}``
- StructuredMessage: ``{"content": "hi"}`` -> passed through unchanged

Only str, int, float, bool and None are primitives. Every other object
(sets, dataclasses, pydantic models, a bare ``discord.Embed``) is data and
goes to the JSON branch.

A mapping only counts as a structured message when one of its message
fields is *truthy*. ``{"content": ""}`` and ``{"content": 0}`` are rendered
as JSON, not sent as empty messages. Handlers rely on that, so keep it.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

# Fields whose presence marks a mapping as an outbound message payload
MESSAGE_FIELDS = ("content", "embeds", "file")

PRIMITIVE_TYPES = (str, int, float, bool, type(None))

JSON_INDENT = 4


class Primitive(BaseModel):
    """A scalar reply (str, number, bool, None) sent as its string form."""

    kind: Literal["primitive"] = "primitive"
    value: Any

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict[str, Any]:
        return {"content": stringify(self.value)}


class StructuredMessage(BaseModel):
    """A mapping that already looks like a message payload."""

    kind: Literal["message"] = "message"
    payload: Any

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict[str, Any]:
        return self.payload


class RawObject(BaseModel):
    """Arbitrary structured data, rendered as a fenced JSON code block."""

    kind: Literal["raw"] = "raw"
    data: Any

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict[str, Any]:
        return {"content": format_json_block(self.data)}


ReplyContent = Primitive | StructuredMessage | RawObject


def stringify(value: Any) -> str:
    # true/false/null read the way users type them, not Python's True/None
    if isinstance(value, bool) or value is None:
        return json.dumps(value)
    return str(value)


def is_object_or_sequence(value: Any) -> bool:
    """True for anything that isn't a str, number, bool or None."""
    return not isinstance(value, PRIMITIVE_TYPES)


def has_message_data(value: Mapping[str, Any]) -> bool:
    """True if any of content/embeds/file is set to a truthy value."""
    return any(value.get(field) for field in MESSAGE_FIELDS)


def _to_json_data(obj: Any) -> Any:
    """json.dumps fallback: turn common Python objects into plain data."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        # discord.Embed, discord.Colour and friends
        return to_dict()
    return str(obj)


def format_json_block(data: Any) -> str:
    """
    Render data as a Discord ```json fenced code block.

    Objects the JSON encoder can't handle are converted first: pydantic
    models via model_dump(), dataclasses via asdict(), sets as lists and
    discord objects via to_dict(). Anything else (datetimes, ...) is
    rendered with str(). Data JSON can't express at all (non-string keys
    such as tuples, circular references) falls back to its repr().
    """
    try:
        body = json.dumps(data, indent=JSON_INDENT, ensure_ascii=False, default=_to_json_data)
    except (TypeError, ValueError):
        body = repr(data)
    return f"```json\n{body}\n```"


def classify(value: Any) -> ReplyContent:
    """Decide which reply variant a handler's value belongs to."""
    if not is_object_or_sequence(value):
        return Primitive(value=value)
    if isinstance(value, Mapping) and has_message_data(value):
        return StructuredMessage(payload=value)
    return RawObject(data=value)


def normalize(value: Any) -> dict[str, Any]:
    """
    Convert any reply value into a message payload dict.

    Never raises; every input maps onto exactly one of the three variants.

    Args:
        value: Whatever the command handler passed to ``reply()``

    Returns:
        Payload dict with at least one of content/embeds/file set
    """
    return classify(value).to_payload()
