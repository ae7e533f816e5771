"""Strongly typed identifiers for Passage domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
