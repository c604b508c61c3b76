"""Shared schema building blocks."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Model exposed to clients with camelCase keys (snake_case in Python)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Meta(BaseModel):
    message: str


class Envelope(BaseModel, Generic[T]):
    """Success envelope: `{"data": ..., "meta": {"message": ...}}`."""

    data: T
    meta: Meta


def envelope(data: T, message: str = "SUCCESSFULLY_FETCHED") -> Envelope[T]:
    return Envelope(data=data, meta=Meta(message=message))
