"""
chat-types: chat message data model for Python.

Text, file, image and audio messages as immutable values, with the JSON
mapping shared by the chat UI and the message store.
"""

from chat_types.errors import ChatTypesError, UnsupportedTypeError, MalformedFieldError
from chat_types.models.enums import MessageType, Status, get_status_from_string
from chat_types.models.timestamp import Timestamp, ServerTimestamp, EPOCH, SERVER_TIMESTAMP
from chat_types.models.preview_data import PreviewData, PreviewDataImage
from chat_types.models.message import (
    Message,
    TextMessage,
    FileMessage,
    ImageMessage,
    AudioMessage,
    AnyMessage,
    sort_messages,
)
from chat_types.transport.json_codec import (
    message_from_json,
    message_to_json,
    try_message_from_json,
    messages_from_json,
    messages_to_json,
)

__version__ = "0.1.0"
__all__ = [
    "ChatTypesError",
    "UnsupportedTypeError",
    "MalformedFieldError",
    "MessageType",
    "Status",
    "get_status_from_string",
    "Timestamp",
    "ServerTimestamp",
    "EPOCH",
    "SERVER_TIMESTAMP",
    "PreviewData",
    "PreviewDataImage",
    "Message",
    "TextMessage",
    "FileMessage",
    "ImageMessage",
    "AudioMessage",
    "AnyMessage",
    "sort_messages",
    "message_from_json",
    "message_to_json",
    "try_message_from_json",
    "messages_from_json",
    "messages_to_json",
]
