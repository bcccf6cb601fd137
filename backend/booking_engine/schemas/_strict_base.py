"""Strict schema baselines with forbidden extras by default."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictRequestModel(BaseModel):
    """
    Request DTO base that always forbids unexpected fields.

    Clients send camelCase keys; snake_case names are accepted as well.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
