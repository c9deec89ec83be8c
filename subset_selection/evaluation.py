from abc import ABC, abstractmethod
from typing import Dict, Hashable, Optional, Union

from .direction import Direction
from .validation import PenalizingValidation


class Evaluation(ABC):
    """Scalar result of evaluating a solution with an objective."""

    @abstractmethod
    def get_value(self) -> float:
        pass

    def __str__(self) -> str:
        return str(self.get_value())


class SimpleEvaluation(Evaluation):

    def __init__(self, value: float):
        self._value = float(value)

    def get_value(self) -> float:
        return self._value

    def __repr__(self) -> str:
        return f"SimpleEvaluation({self._value})"


class PenalizedEvaluation(Evaluation):
    """
    Evaluation composed of an original (unpenalized) evaluation and any number of
    penalties, each given as a penalizing validation stored under a key.

    Penalties are added to the original value for minimizing objectives and
    subtracted from it for maximizing objectives, so they always make the
    composite value worse. The composite value is cached until the next penalty
    is added.
    """

    def __init__(self, evaluation: Evaluation, minimizing: Union[bool, Direction]):
        self._evaluation = evaluation
        self.direction = minimizing if isinstance(minimizing, Direction) else Direction.of(minimizing)
        # allocated on first insert; usually holds a single entry
        self._penalties: Optional[Dict[Hashable, PenalizingValidation]] = None
        self._cached_value: Optional[float] = None

    def _invalidate(self):
        self._cached_value = None

    def add_penalizing_validation(self, key: Hashable, validation: PenalizingValidation):
        """Stores the validation under `key`, replacing any validation previously stored there."""
        if self._penalties is None:
            self._penalties = {}
        self._penalties[key] = validation
        self._invalidate()

    def get_penalizing_validation(self, key: Hashable) -> Optional[PenalizingValidation]:
        return None if self._penalties is None else self._penalties.get(key)

    def get_evaluation(self) -> Evaluation:
        """Returns the original, unpenalized evaluation."""
        return self._evaluation

    def get_total_penalty(self) -> float:
        if self._penalties is None:
            return 0.0
        return sum(v.get_penalty() for v in self._penalties.values())

    def get_value(self) -> float:
        if self._cached_value is None:
            value = self._evaluation.get_value()
            if self._penalties is not None:
                value = self.direction.combine(value, self.get_total_penalty())
            self._cached_value = value
        return self._cached_value

    def all_passed(self) -> bool:
        return self._penalties is None or all(v.passed() for v in self._penalties.values())

    def __str__(self) -> str:
        if self.all_passed():
            return str(self.get_value())
        return f"{self.get_value()} (unpenalized: {self._evaluation.get_value()})"

    def __repr__(self) -> str:
        num_penalties = 0 if self._penalties is None else len(self._penalties)
        return f"PenalizedEvaluation(value={self.get_value()}, penalties={num_penalties}, {self.direction.value})"
