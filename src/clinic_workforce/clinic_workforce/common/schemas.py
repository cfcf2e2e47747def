"""Base pydantic models for request/response payloads.

External payloads are camelCase; domain objects are snake_case. The alias
generator is the single mapping between the two.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimals (hours, units) go out as JSON numbers rather than strings.
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class RequestModel(BaseModel):
    """Incoming body: camelCase keys, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


class ResponseModel(BaseModel):
    """Outgoing body built from a domain dataclass."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
