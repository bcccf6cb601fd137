"""
Base schemas with standardized field types for consistent API responses.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import core_schema

T = TypeVar("T")


class StandardizedModel(BaseModel):
    """Response base: built from ORM objects, serialized with camelCase keys."""

    model_config = ConfigDict(
        use_enum_values=True,
        populate_by_name=True,
        from_attributes=True,
        alias_generator=to_camel,
    )


class Money(Decimal):
    """Money field kept as a two-decimal Decimal internally, serialized as float."""

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        def validate_money(value: Any) -> Decimal:
            if isinstance(value, float):
                value = str(value)
            if isinstance(value, (int, str, Decimal)):
                try:
                    amount = Decimal(value)
                except InvalidOperation:
                    raise ValueError(f"Invalid money amount: {value}")
                return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
            raise ValueError(f"Cannot convert {type(value)} to Money")

        return core_schema.no_info_after_validator_function(
            validate_money,
            core_schema.union_schema(
                [
                    core_schema.int_schema(),
                    core_schema.float_schema(),
                    core_schema.str_schema(),
                    core_schema.is_instance_schema(Decimal),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                float,
                info_arg=False,
                return_schema=core_schema.float_schema(),
            ),
        )


class PaginatedResponse(StandardizedModel, Generic[T]):
    """Page of results with the total count across all pages."""

    data: List[T]
    total: int
    page: int
    limit: int
