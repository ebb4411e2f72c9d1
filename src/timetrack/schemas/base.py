"""Shared schema bases: camelCase JSON and the ``{"data": ...}`` envelope."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """JSON keys are camelCase; Python attributes stay snake_case.

    Defaults go through the field validators too, so an omitted id or name
    fails the same way as an invalid one.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        validate_default=True,
    )


class DataResponse(BaseModel, Generic[T]):
    """Success envelope."""

    data: T


class EmptyResponse(BaseModel):
    """Success with nothing to return, rendered as ``{}``."""
