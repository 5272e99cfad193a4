"""
Link preview attached to text messages.

Extraction lives elsewhere; this module only carries the value and its JSON
mapping.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PreviewDataImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    height: float
    url: str
    width: float


class PreviewData(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    description: Optional[str] = None
    image: Optional[PreviewDataImage] = None
    link: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> PreviewData:
        return cls.model_validate(json)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
