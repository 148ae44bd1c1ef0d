"""Shared pydantic configuration for wire entities."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base model for payloads exchanged with the REST backend.

    Attributes are snake_case in Python and camelCase on the wire.
    Unknown fields sent by the backend are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class EntityResponse(ApiModel):
    """Every entity returned by the backend carries an opaque string id."""

    id: str
