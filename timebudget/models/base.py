"""Base model for all data models in timebudget.

This module provides a base Pydantic model with the shared configuration
used by projects, phases, time entries and import rows.
"""

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with lenient type coercion (cells arrive as text)
    - Validation on assignment
    - Rejection of unknown fields

    Example:
        >>> class Client(BaseDataModel):
        ...     name: str
        >>> Client(name="Gemeente Utrecht").model_dump()
        {'name': 'Gemeente Utrecht'}
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        strict=False,
        extra="forbid",
        frozen=False,
    )
