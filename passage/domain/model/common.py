"""Base model for domain aggregates."""

from datetime import datetime, timezone
from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable aggregate.

    Changes produce a new instance through `evolve`; the loaded instance
    stays as it was.
    """

    model_config = ConfigDict(frozen=True)

    def evolve(self, **changes: Any) -> Self:
        """Copy with `changes` applied and `updated_at` refreshed."""
        return self.model_copy(
            update={**changes, "updated_at": datetime.now(timezone.utc)}
        )
