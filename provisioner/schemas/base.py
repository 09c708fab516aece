"""
Base Schemas.

Response envelope shared by every provisioning API call.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

PayloadT = TypeVar("PayloadT")


class WireModel(BaseModel):
    """
    Immutable model exchanged with the API.

    Wire keys are camelCase (cpuModel, storageClass); Python code uses
    snake_case. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ApiResult(BaseModel, Generic[PayloadT]):
    """
    Standard API response envelope.

    success=False is a generic failure; any error detail the API embeds
    alongside it is not interpreted.
    """

    success: bool
    payload: PayloadT | None = None

    model_config = ConfigDict(frozen=True)
