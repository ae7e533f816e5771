"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class SessionResponse(BaseModel):
    """Response of every use case that (re-)establishes a session.

    `user` is the sanitized user (no password hash or salt).
    """

    token: str
    user: dict
