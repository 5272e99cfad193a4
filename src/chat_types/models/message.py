"""
Message variants for text, file, image and audio.

Every variant is a frozen pydantic model. The discriminator is a class
constant (`TextMessage.type is MessageType.TEXT`), so an instance can never
carry a `type` that disagrees with its fields. The JSON mapping lives in
`chat_types.transport.json_codec`; `from_json`/`to_json` here delegate to it.
"""

from __future__ import annotations

import copy
from datetime import timedelta
from typing import Any, ClassVar, Iterable, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from chat_types.models.enums import MessageType, Status
from chat_types.models.preview_data import PreviewData
from chat_types.models.timestamp import Timestamp

SHARED_FIELDS = ("author_id", "id", "metadata", "status", "timestamp", "edited_at")


class Message(BaseModel):
    """Fields and behaviour shared by all message variants.

    Not instantiated directly. Use one of the variants, or
    `Message.from_json` to dispatch on the `type` field.
    """

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    type: ClassVar[MessageType]
    # Fields compared by __eq__, in addition to the concrete class.
    equality_fields: ClassVar[tuple[str, ...]] = SHARED_FIELDS

    author_id: str
    id: str
    metadata: Optional[dict[str, Any]] = None
    status: Optional[Status] = None
    timestamp: Optional[int] = None  # milliseconds
    edited_at: Optional[Timestamp] = None

    @field_validator("metadata", mode="before")
    @classmethod
    def detach_metadata(cls, value: Any) -> Any:
        # Never share nested containers with the caller.
        return copy.deepcopy(value) if isinstance(value, dict) else value

    @classmethod
    def from_json(cls, json: Any) -> AnyMessage:
        """Parse a decoded JSON mapping.

        On `Message` this dispatches on `json["type"]`; on a variant it parses
        that variant directly. Raises UnsupportedTypeError / MalformedFieldError.
        """
        from chat_types.transport.json_codec import message_from_json, parse_variant

        if cls is Message:
            return message_from_json(json)
        return parse_variant(cls, json)

    def to_json(self) -> dict[str, Any]:
        """Serialize to a JSON-ready mapping. `editedAt` is always SERVER_TIMESTAMP."""
        from chat_types.transport.json_codec import message_to_json

        return message_to_json(self)

    def _copy_with(self, overrides: dict[str, Any]) -> Any:
        values = {name: getattr(self, name) for name in self.__class__.model_fields}
        values.update({name: value for name, value in overrides.items() if value is not None})
        return self.__class__(**values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        if other.__class__ is not self.__class__:
            return False
        return all(getattr(self, name) == getattr(other, name) for name in self.equality_fields)

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.id))

    def sort_key(self) -> tuple[bool, int]:
        # Newest first; messages without a timestamp go last.
        if self.timestamp is None:
            return (True, 0)
        return (False, -self.timestamp)

    def compare_to(self, other: Message) -> int:
        """Negative if self sorts before other, zero on a tie, positive otherwise."""
        mine, theirs = self.sort_key(), other.sort_key()
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return self.sort_key() < other.sort_key()


class TextMessage(Message):
    type: ClassVar[MessageType] = MessageType.TEXT
    equality_fields: ClassVar[tuple[str, ...]] = SHARED_FIELDS + ("preview_data", "text")

    text: str
    preview_data: Optional[PreviewData] = None

    def copy_with(
        self,
        *,
        author_id: Optional[str] = None,
        id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
        status: Optional[Status] = None,
        timestamp: Optional[int] = None,
        edited_at: Optional[Timestamp] = None,
        preview_data: Optional[PreviewData] = None,
        text: Optional[str] = None,
    ) -> TextMessage:
        return self._copy_with({
            "author_id": author_id,
            "id": id,
            "metadata": metadata,
            "status": status,
            "timestamp": timestamp,
            "edited_at": edited_at,
            "preview_data": preview_data,
            "text": text,
        })


class FileMessage(Message):
    type: ClassVar[MessageType] = MessageType.FILE
    equality_fields: ClassVar[tuple[str, ...]] = SHARED_FIELDS + ("file_name", "mime_type", "size", "uri")

    file_name: str
    mime_type: Optional[str] = None
    size: int  # bytes
    uri: str  # remote URL or local resource

    def copy_with(
        self,
        *,
        author_id: Optional[str] = None,
        id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
        status: Optional[Status] = None,
        timestamp: Optional[int] = None,
        edited_at: Optional[Timestamp] = None,
        file_name: Optional[str] = None,
        mime_type: Optional[str] = None,
        size: Optional[int] = None,
        uri: Optional[str] = None,
    ) -> FileMessage:
        return self._copy_with({
            "author_id": author_id,
            "id": id,
            "metadata": metadata,
            "status": status,
            "timestamp": timestamp,
            "edited_at": edited_at,
            "file_name": file_name,
            "mime_type": mime_type,
            "size": size,
            "uri": uri,
        })


class ImageMessage(Message):
    type: ClassVar[MessageType] = MessageType.IMAGE
    equality_fields: ClassVar[tuple[str, ...]] = SHARED_FIELDS + (
        "height", "image_name", "size", "uri", "width",
    )

    image_name: str
    size: int  # bytes
    uri: str
    height: Optional[float] = None  # pixels
    width: Optional[float] = None

    def copy_with(
        self,
        *,
        author_id: Optional[str] = None,
        id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
        status: Optional[Status] = None,
        timestamp: Optional[int] = None,
        edited_at: Optional[Timestamp] = None,
        height: Optional[float] = None,
        image_name: Optional[str] = None,
        size: Optional[int] = None,
        uri: Optional[str] = None,
        width: Optional[float] = None,
    ) -> ImageMessage:
        return self._copy_with({
            "author_id": author_id,
            "id": id,
            "metadata": metadata,
            "status": status,
            "timestamp": timestamp,
            "edited_at": edited_at,
            "height": height,
            "image_name": image_name,
            "size": size,
            "uri": uri,
            "width": width,
        })


class AudioMessage(Message):
    type: ClassVar[MessageType] = MessageType.AUDIO
    equality_fields: ClassVar[tuple[str, ...]] = SHARED_FIELDS + (
        "length", "mime_type", "uri", "wave_form",
    )

    length: timedelta
    uri: str
    mime_type: Optional[str] = None
    # Decibel levels, each between 0 and 120.
    wave_form: Optional[tuple[float, ...]] = None

    @field_validator("length")
    @classmethod
    def check_whole_milliseconds(cls, value: timedelta) -> timedelta:
        if value % timedelta(milliseconds=1):
            raise ValueError("length must be a whole number of milliseconds")
        return value

    @field_validator("wave_form", mode="before")
    @classmethod
    def freeze_wave_form(cls, value: Any) -> Any:
        return tuple(value) if isinstance(value, (list, tuple)) else value

    def copy_with(
        self,
        *,
        author_id: Optional[str] = None,
        id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
        status: Optional[Status] = None,
        timestamp: Optional[int] = None,
        edited_at: Optional[Timestamp] = None,
        length: Optional[timedelta] = None,
        mime_type: Optional[str] = None,
        uri: Optional[str] = None,
        wave_form: Optional[Sequence[float]] = None,
    ) -> AudioMessage:
        return self._copy_with({
            "author_id": author_id,
            "id": id,
            "metadata": metadata,
            "status": status,
            "timestamp": timestamp,
            "edited_at": edited_at,
            "length": length,
            "mime_type": mime_type,
            "uri": uri,
            "wave_form": wave_form,
        })


AnyMessage = Union[TextMessage, FileMessage, ImageMessage, AudioMessage]

MESSAGE_CLASSES: dict[MessageType, type[Message]] = {
    MessageType.TEXT: TextMessage,
    MessageType.FILE: FileMessage,
    MessageType.IMAGE: ImageMessage,
    MessageType.AUDIO: AudioMessage,
}


def sort_messages(messages: Iterable[Message]) -> list[Message]:
    """Newest first. Messages without a timestamp go last; ties keep input order."""
    return sorted(messages, key=Message.sort_key)
