"""Shared pydantic configuration."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class InputModel(BaseModel):
    """Request body accepting camelCase (web client) or snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ReadModel(BaseModel):
    """Response body built from ORM objects."""

    model_config = ConfigDict(from_attributes=True)
