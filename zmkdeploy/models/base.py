"""Base model for all zmk-deploy Pydantic models.

This module provides a base model class that enforces consistent validation
behavior across all zmk-deploy models.
"""

from pydantic import BaseModel, ConfigDict


class DeployBaseModel(BaseModel):
    """Base model class for all zmk-deploy Pydantic models.

    API payloads carry many more fields than the tool needs, so unknown fields
    are ignored rather than stored.
    """

    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
        validate_assignment=True,
    )

