"""
Shared API schemas.

Dependencies: pydantic
System role: Error envelope and casing conventions for all endpoints
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema serialised with camelCase keys; accepts either casing on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(CamelModel):
    """Error envelope returned by every endpoint."""

    success: bool = Field(default=False)
    error: str = Field(description="User-facing error message")
