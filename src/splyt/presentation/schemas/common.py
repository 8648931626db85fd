"""
Shared API schema building blocks.
"""

from decimal import Decimal
from typing import Annotated, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Amounts travel as JSON numbers
Amount = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    """Success envelope wrapped around every payload."""

    success: bool = True
    status: int = 200
    message: str = "OK"
    data: Optional[T] = None


class ErrorResponse(CamelModel):
    """Error body produced by the exception handlers."""

    success: bool = False
    status: int
    error: str
    message: str
