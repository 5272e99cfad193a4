"""
chat-types error types: parse failures raised by the JSON codec.
"""

from typing import Any, Optional


class ChatTypesError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class UnsupportedTypeError(ChatTypesError):
    """The `type` discriminator names no known message variant."""

    def __init__(self, message_type: str):
        super().__init__(
            "unsupported_type",
            f"Unsupported message type: {message_type!r}",
            {"type": message_type},
        )
        self.message_type = message_type


class MalformedFieldError(ChatTypesError):
    """A required field is missing, or a field has the wrong shape."""

    def __init__(self, field: str, reason: str = "missing or of the wrong type"):
        super().__init__("malformed_field", f"Field {field!r}: {reason}", {"field": field})
        self.field = field
