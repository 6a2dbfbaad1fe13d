"""Tagged outcome of a single external lookup."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class LookupStatus(str, Enum):
    FOUND = "found"
    NO_MATCH = "no_match"
    FAILED = "failed"


@dataclass(frozen=True)
class LookupOutcome(Generic[T]):
    """Result of one provider call.

    ``NO_MATCH`` and ``FAILED`` both mean "no evidence from this source";
    they are kept apart so callers can log them differently.
    """

    status: LookupStatus
    value: T | None = None
    error: str | None = None

    @classmethod
    def found(cls, value: T) -> LookupOutcome[T]:
        return cls(status=LookupStatus.FOUND, value=value)

    @classmethod
    def no_match(cls) -> LookupOutcome[T]:
        return cls(status=LookupStatus.NO_MATCH)

    @classmethod
    def failed(cls, error: str) -> LookupOutcome[T]:
        return cls(status=LookupStatus.FAILED, error=error)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND
