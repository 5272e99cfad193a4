"""
JSON mapping for messages: parse dispatch and serialization.

Every JSON key a message can carry is described once, in a FieldRule: whether
it is required, how a decoded JSON value is read into the model, how the model
value is written back, and what an absent or null key resolves to.
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, NamedTuple, Optional

from pydantic import ValidationError

from chat_types.errors import ChatTypesError, MalformedFieldError, UnsupportedTypeError
from chat_types.models.enums import MessageType, get_status_from_string
from chat_types.models.message import (
    MESSAGE_CLASSES,
    AnyMessage,
    AudioMessage,
    FileMessage,
    ImageMessage,
    Message,
    TextMessage,
)
from chat_types.models.preview_data import PreviewData
from chat_types.models.timestamp import EPOCH, SERVER_TIMESTAMP, ServerTimestamp, Timestamp

logger = logging.getLogger(__name__)

# Discriminator used when `type` is absent or not a string. Never a valid variant.
FALLBACK_TYPE = "error"


class FieldRule(NamedTuple):
    key: str
    attr: str
    required: bool
    read: Callable[[Any], Any]
    write: Callable[[Any], Any]
    default: Any = None


# -- readers: decoded JSON value -> model value. ValueError means wrong shape.

def _identity(value: Any) -> Any:
    return value


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {type(value).__name__}")
    return value


def _number(value: Any) -> float | int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    return value


def _integer(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer, got {type(value).__name__}")
    return value


def _rounded(value: Any) -> int:
    """Round to the nearest integer, halves away from zero (204.5 -> 205)."""
    number = _number(value)
    if isinstance(number, int):
        return number
    if not math.isfinite(number):
        raise ValueError("expected a finite number")
    magnitude = abs(number)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if number < 0 else whole


def _floating(value: Any) -> float:
    return float(_number(value))


def _mapping(value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"expected an object, got {type(value).__name__}")
    return dict(value)


def _metadata(value: Any) -> dict[str, Any]:
    return copy.deepcopy(_mapping(value))


def _status(value: Any):
    return get_status_from_string(value)


def _edited_at(value: Any) -> Timestamp:
    if isinstance(value, Timestamp):
        return value
    if isinstance(value, datetime):
        return Timestamp.from_datetime(value)
    return EPOCH


def _milliseconds(value: Any) -> timedelta:
    return timedelta(milliseconds=_integer(value))


def _wave_form(value: Any) -> tuple[float, ...]:
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise ValueError(f"expected a list of numbers, got {type(value).__name__}")
    return tuple(_floating(level) for level in value)


def _preview_data(value: Any) -> PreviewData:
    try:
        return PreviewData.from_json(_mapping(value))
    except ValidationError as e:
        raise ValueError(f"invalid preview data ({e.error_count()} errors)") from e


# -- writers: model value -> JSON value.

def _status_value(status) -> Optional[str]:
    return status.value if status is not None else None


def _milliseconds_value(length: timedelta) -> int:
    return length // timedelta(milliseconds=1)


def _list_value(values: Optional[tuple[float, ...]]) -> Optional[list[float]]:
    return list(values) if values is not None else None


def _preview_json(preview: Optional[PreviewData]) -> Optional[dict[str, Any]]:
    return preview.to_json() if preview is not None else None


def _server_timestamp(_: Any) -> ServerTimestamp:
    return SERVER_TIMESTAMP


SHARED_RULES = (
    FieldRule("authorId", "author_id", True, _string, _identity),
    FieldRule("id", "id", True, _string, _identity),
    FieldRule("metadata", "metadata", False, _metadata, copy.deepcopy),
    FieldRule("status", "status", False, _status, _status_value),
    FieldRule("timestamp", "timestamp", False, _integer, _identity),
    FieldRule("editedAt", "edited_at", False, _edited_at, _server_timestamp, EPOCH),
)

VARIANT_RULES: dict[type[Message], tuple[FieldRule, ...]] = {
    TextMessage: (
        FieldRule("previewData", "preview_data", False, _preview_data, _preview_json),
        FieldRule("text", "text", True, _string, _identity),
    ),
    FileMessage: (
        FieldRule("fileName", "file_name", True, _string, _identity),
        FieldRule("mimeType", "mime_type", False, _string, _identity),
        FieldRule("size", "size", True, _rounded, _identity),
        FieldRule("uri", "uri", True, _string, _identity),
    ),
    ImageMessage: (
        FieldRule("height", "height", False, _floating, _identity),
        FieldRule("imageName", "image_name", True, _string, _identity),
        FieldRule("size", "size", True, _rounded, _identity),
        FieldRule("uri", "uri", True, _string, _identity),
        FieldRule("width", "width", False, _floating, _identity),
    ),
    AudioMessage: (
        FieldRule("length", "length", True, _milliseconds, _milliseconds_value),
        FieldRule("mimeType", "mime_type", False, _string, _identity),
        FieldRule("waveForm", "wave_form", False, _wave_form, _list_value),
        FieldRule("uri", "uri", True, _string, _identity),
    ),
}


def field_rules(cls: type[Message]) -> tuple[FieldRule, ...]:
    """All rules for a variant, shared fields first."""
    return SHARED_RULES + VARIANT_RULES[cls]


def _json_key(cls: type[Message], error: ValidationError) -> str:
    errors = error.errors()
    if not errors or not errors[0]["loc"]:
        return "<root>"
    name = str(errors[0]["loc"][0])
    for rule in field_rules(cls):
        if name in (rule.attr, rule.key):
            return rule.key
    return name


def parse_variant(cls: type[Message], raw: Any) -> AnyMessage:
    """Build one variant from a decoded JSON mapping, ignoring its `type` key."""
    if not isinstance(raw, Mapping):
        raise MalformedFieldError("<root>", f"expected an object, got {type(raw).__name__}")
    values: dict[str, Any] = {}
    for rule in field_rules(cls):
        value = raw.get(rule.key)
        if value is None:
            if rule.required:
                raise MalformedFieldError(rule.key, "required field is missing")
            values[rule.attr] = rule.default
            continue
        try:
            values[rule.attr] = rule.read(value)
        except (TypeError, ValueError) as e:
            raise MalformedFieldError(rule.key, str(e)) from e
    try:
        return cls(**values)
    except ValidationError as e:
        raise MalformedFieldError(_json_key(cls, e), str(e)) from e


def message_from_json(raw: Any) -> AnyMessage:
    """Parse a decoded JSON mapping into the variant named by its `type` key.

    Raises UnsupportedTypeError when `type` names no variant (absent or
    non-string `type` counts as "error") and MalformedFieldError when a
    required field is missing or a field has the wrong shape.
    """
    if not isinstance(raw, Mapping):
        raise MalformedFieldError("<root>", f"expected an object, got {type(raw).__name__}")
    type_name = raw.get("type")
    if not isinstance(type_name, str):
        type_name = FALLBACK_TYPE
    try:
        message_type = MessageType(type_name)
    except ValueError:
        raise UnsupportedTypeError(type_name) from None
    logger.debug("Parsing %s message id=%r", message_type.value, raw.get("id"))
    return parse_variant(MESSAGE_CLASSES[message_type], raw)


def message_to_json(message: Message) -> dict[str, Any]:
    """Serialize a message. `editedAt` is always the SERVER_TIMESTAMP placeholder."""
    json: dict[str, Any] = {"type": message.type.value}
    for rule in field_rules(message.__class__):
        json[rule.key] = rule.write(getattr(message, rule.attr))
    return json


def try_message_from_json(raw: Any) -> Optional[AnyMessage]:
    """Parse a message. Returns None if invalid."""
    try:
        return message_from_json(raw)
    except ChatTypesError as e:
        logger.warning("Dropping message: %s", e)
        return None


def messages_from_json(raws: Iterable[Any], skip_invalid: bool = False) -> list[AnyMessage]:
    if not skip_invalid:
        return [message_from_json(raw) for raw in raws]
    messages = []
    for raw in raws:
        message = try_message_from_json(raw)
        if message is not None:
            messages.append(message)
    return messages


def messages_to_json(messages: Iterable[Message]) -> list[dict[str, Any]]:
    return [message_to_json(message) for message in messages]


def encode_json_value(value: Any) -> Any:
    """`default=` hook for json.dumps: encodes timestamp values.

    SERVER_TIMESTAMP becomes the `{".sv": "timestamp"}` server-value marker;
    a Timestamp becomes `{"_seconds": ..., "_nanoseconds": ...}`.
    """
    if isinstance(value, ServerTimestamp):
        return {".sv": "timestamp"}
    if isinstance(value, Timestamp):
        return {"_seconds": value.seconds, "_nanoseconds": value.nanoseconds}
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
