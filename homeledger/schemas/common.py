"""Shared pydantic building blocks for request and response schemas."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StringConstraints
from pydantic.alias_generators import to_camel

from homeledger.services.money import to_display


class ApiModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case (or camelCase) accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Decimal inside the app, 2dp JSON number on the way out
Money = Annotated[Decimal, PlainSerializer(to_display, return_type=float, when_used="json")]

# Request amounts: at most 2 decimal places, fits Numeric(12, 2)
AmountIn = Annotated[Decimal, Field(max_digits=12, decimal_places=2)]

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]

# Primary keys are signed 64-bit integers in the database
MAX_ID = 2**63 - 1

IdIn = Annotated[int, Field(gt=0, le=MAX_ID)]


class MessageResponse(ApiModel):
    """Acknowledgement for deletes."""

    message: str
