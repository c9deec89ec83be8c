from enum import Enum


class Direction(Enum):
    """Optimization sense of an objective."""
    MINIMIZING = 'minimizing'
    MAXIMIZING = 'maximizing'

    @classmethod
    def of(cls, minimizing: bool) -> "Direction":
        return cls.MINIMIZING if minimizing else cls.MAXIMIZING

    @property
    def is_minimizing(self) -> bool:
        return self is Direction.MINIMIZING

    def combine(self, value: float, penalty: float) -> float:
        """Applies a penalty so that it always makes the value worse."""
        if self is Direction.MINIMIZING:
            return value + penalty
        return value - penalty

    def delta(self, new_value: float, old_value: float) -> float:
        """Signed improvement of `new_value` over `old_value` (positive is better)."""
        if self is Direction.MINIMIZING:
            return old_value - new_value
        return new_value - old_value
