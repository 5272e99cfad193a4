"""Pytest configuration and shared fixtures."""
from __future__ import annotations

from datetime import timedelta

import pytest

from chat_types import (
    AudioMessage,
    FileMessage,
    ImageMessage,
    PreviewData,
    PreviewDataImage,
    Status,
    TextMessage,
    Timestamp,
)


@pytest.fixture
def preview() -> PreviewData:
    return PreviewData(
        description="A place for chat",
        image=PreviewDataImage(height=630, url="https://example.com/og.png", width=1200),
        link="https://example.com",
        title="Example",
    )


@pytest.fixture
def text_message(preview: PreviewData) -> TextMessage:
    return TextMessage(
        author_id="u1",
        id="m1",
        text="hello https://example.com",
        metadata={"pinned": True, "tags": ["a", "b"]},
        preview_data=preview,
        status=Status.DELIVERED,
        timestamp=1_700_000_000_000,
        edited_at=Timestamp.from_milliseconds_since_epoch(1_700_000_100_000),
    )


@pytest.fixture
def file_message() -> FileMessage:
    return FileMessage(
        author_id="u2",
        id="m2",
        file_name="report.pdf",
        mime_type="application/pdf",
        size=20_480,
        uri="https://files.example.com/report.pdf",
        status=Status.SENDING,
        timestamp=1_700_000_001_000,
    )


@pytest.fixture
def image_message() -> ImageMessage:
    return ImageMessage(
        author_id="u1",
        id="m3",
        image_name="cat.jpg",
        size=1_024,
        uri="file:///tmp/cat.jpg",
        height=480.0,
        width=640.0,
        timestamp=1_700_000_002_000,
    )


@pytest.fixture
def audio_message() -> AudioMessage:
    return AudioMessage(
        author_id="u3",
        id="m4",
        length=timedelta(milliseconds=4_250),
        uri="https://files.example.com/voice.m4a",
        mime_type="audio/mp4",
        wave_form=[0.0, 12.5, 118.0, 60.25],
        status=Status.READ,
        timestamp=1_700_000_003_000,
    )


@pytest.fixture
def all_messages(text_message, file_message, image_message, audio_message):
    return [text_message, file_message, image_message, audio_message]
