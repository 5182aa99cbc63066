"""
MutationResult Value Object - Affected-count returned by update/delete.

The backend answers PATCH and DELETE with the number of rows it changed
instead of an entity. Zero is a normal outcome: the row was already deleted,
or a concurrent delete won the race.
"""

from dataclasses import dataclass
from enum import Enum


class MutationOutcome(str, Enum):
    APPLIED = "applied"
    TARGET_GONE = "target_gone"


@dataclass(frozen=True)
class MutationResult:
    affected_count: int

    def __post_init__(self):
        if isinstance(self.affected_count, bool) or not isinstance(
            self.affected_count, int
        ):
            raise ValueError(
                f"Affected count must be an integer, got {self.affected_count!r}"
            )
        if self.affected_count < 0:
            raise ValueError(
                f"Affected count cannot be negative, got {self.affected_count}"
            )

    @property
    def outcome(self) -> MutationOutcome:
        if self.affected_count == 0:
            return MutationOutcome.TARGET_GONE
        return MutationOutcome.APPLIED

    @property
    def applied(self) -> bool:
        return self.outcome is MutationOutcome.APPLIED
