"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable value compared by content, never persisted on its own."""

    model_config = ConfigDict(frozen=True)
