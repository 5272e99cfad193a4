"""Unit tests for timestamp values and sentinels."""

import pickle
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from chat_types import EPOCH, SERVER_TIMESTAMP, ServerTimestamp, Timestamp


def test_from_milliseconds():
    stamp = Timestamp.from_milliseconds_since_epoch(1_500)
    assert stamp.seconds == 1
    assert stamp.nanoseconds == 500_000_000
    assert stamp.to_milliseconds() == 1_500


def test_epoch_is_zero():
    assert EPOCH == Timestamp.from_milliseconds_since_epoch(0)
    assert EPOCH.to_datetime() == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_from_datetime():
    when = datetime(2024, 5, 6, 7, 8, 9, 123_000, tzinfo=timezone.utc)
    stamp = Timestamp.from_datetime(when)
    assert stamp.to_datetime() == when
    assert stamp.nanoseconds == 123_000_000
    assert stamp.to_milliseconds() % 1000 == 123


def test_naive_datetime_is_utc():
    naive = datetime(2024, 5, 6, 7, 8, 9)
    assert Timestamp.from_datetime(naive) == Timestamp.from_datetime(naive.replace(tzinfo=timezone.utc))


def test_nanoseconds_range():
    with pytest.raises(ValidationError):
        Timestamp(seconds=0, nanoseconds=1_000_000_000)
    with pytest.raises(ValidationError):
        Timestamp(seconds=0, nanoseconds=-1)


def test_frozen():
    with pytest.raises(ValidationError):
        EPOCH.seconds = 5


def test_server_timestamp_is_singleton():
    assert ServerTimestamp() is SERVER_TIMESTAMP
    assert pickle.loads(pickle.dumps(SERVER_TIMESTAMP)) is SERVER_TIMESTAMP
    assert repr(SERVER_TIMESTAMP) == "SERVER_TIMESTAMP"
