from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from .data import DistanceData
from .solution import SubsetSolution
from .validation import PenalizingValidation, SimplePenalizingValidation, SimpleValidation, Validation


class Constraint(ABC):
    """
    Interface for constraints. Added to a problem as a rejecting constraint, a
    violation makes a solution inadmissible regardless of its score.
    """

    @abstractmethod
    def validate(self, solution, data) -> Validation:
        pass

    def is_satisfied(self, solution, data) -> bool:
        return self.validate(solution, data).passed()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class PenalizingConstraint(Constraint):
    """Constraint that can also be used as a soft constraint: its validations carry a penalty."""

    @abstractmethod
    def validate(self, solution, data) -> PenalizingValidation:
        pass

    def is_penalizing(self) -> bool:
        return True


class MinimumDistanceConstraint(PenalizingConstraint):
    """
    Requires all selected items to be at least `min_distance` apart.

    Without `penalty_per_violation` this is a purely rejecting constraint and its
    validations carry no penalty. Otherwise the penalty is the number of offending
    pairs times `penalty_per_violation`.
    """

    def __init__(self, min_distance: float, penalty_per_violation: Optional[float] = None):
        if min_distance < 0:
            raise ValueError("Minimum distance should be non-negative.")
        if penalty_per_violation is not None and penalty_per_violation <= 0:
            raise ValueError("Penalty per violation should be positive.")
        self.min_distance = min_distance
        self.penalty_per_violation = penalty_per_violation

    def is_penalizing(self) -> bool:
        return self.penalty_per_violation is not None

    def count_violations(self, solution: SubsetSolution, data: DistanceData) -> int:
        selected = solution.selected_list()
        if len(selected) < 2:
            return 0
        sub = data.submatrix(selected)
        return int(np.count_nonzero(np.triu(sub < self.min_distance, k=1)))

    def validate(self, solution: SubsetSolution, data: DistanceData) -> Validation:
        violations = self.count_violations(solution, data)
        if not self.is_penalizing():
            return SimpleValidation(violations == 0)
        return SimplePenalizingValidation(violations == 0, violations * self.penalty_per_violation)

    def __repr__(self) -> str:
        return f"MinimumDistanceConstraint(min_distance={self.min_distance}, penalty_per_violation={self.penalty_per_violation})"
