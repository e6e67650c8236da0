"""Global enums — must match DB enum types and CHECK constraints exactly."""

from enum import Enum


class WagerOutcome(str, Enum):
    OPEN = "open"
    WON = "won"
    LOST = "lost"

    @property
    def is_settled(self) -> bool:
        return self is not WagerOutcome.OPEN


class OutcomeFilter(str, Enum):
    """History filter: ALL disables the outcome predicate."""
    ALL = "all"
    WON = "won"
    LOST = "lost"
    OPEN = "open"

    def to_outcome(self) -> WagerOutcome | None:
        if self is OutcomeFilter.ALL:
            return None
        return WagerOutcome(self.value)
