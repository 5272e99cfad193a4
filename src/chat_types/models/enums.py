"""
Closed enumerations shared by every message variant.
"""

from enum import Enum
from typing import Optional


class MessageType(str, Enum):
    """Discriminator tag: one value per message variant."""
    FILE = "file"
    IMAGE = "image"
    TEXT = "text"
    AUDIO = "audio"


class Status(str, Enum):
    """Delivery state of a message. Transitions are not enforced here."""
    DELIVERED = "delivered"
    ERROR = "error"
    READ = "read"
    SENDING = "sending"


def get_status_from_string(value: Optional[str]) -> Optional[Status]:
    """Map a wire string to a Status. Absent or unknown values give None."""
    if not isinstance(value, str):
        return None
    try:
        return Status(value)
    except ValueError:
        return None
