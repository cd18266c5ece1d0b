"""Strict Pydantic base model shared across spilib.

Every value object in the library derives from this model so that
validation behaves the same everywhere.
"""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Base model with strict validation.

    It enforces:
    - strict=True: Type coercion is disabled, inputs must match exact types
    - extra="forbid": No additional fields allowed
    - validate_assignment=True: Validation on all field assignments
    - frozen=True: Immutable, error and resource contexts never change
    """

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        validate_assignment=True,
        frozen=True,
        validate_default=True,
        use_enum_values=False,
        arbitrary_types_allowed=False,
    )


__all__ = [
    "StrictBaseModel",
]
