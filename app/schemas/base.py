"""
Shared pydantic configuration.

Fields are declared snake_case and exchanged with clients as camelCase
(numEmployees, logoUrl, companyHandle, ...).
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase aliases."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,  # Allows conversion from SQLAlchemy models
    )


class RequestModel(CamelModel):
    """Base schema for request bodies and query strings; unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid")
