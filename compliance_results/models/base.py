"""Base model shared by records and settings."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable pydantic model."""

    model_config = ConfigDict(frozen=True)
