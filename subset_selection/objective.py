from abc import ABC, abstractmethod

import numpy as np

from .data import DistanceData, SubsetData
from .direction import Direction
from .evaluation import Evaluation, SimpleEvaluation
from .solution import SubsetSolution


class Objective(ABC):
    """
    Interface for all objectives. An objective evaluates a solution given the problem
    data and knows whether its values are to be minimized or maximized.

    The direction should be fixed before the objective is used by a search; every
    component that combines or compares values of this objective reads it.
    """

    def __init__(self, direction: Direction = Direction.MAXIMIZING):
        self._direction = direction

    @abstractmethod
    def evaluate(self, solution, data) -> Evaluation:
        """Evaluates the solution using the given data."""
        pass

    @property
    def direction(self) -> Direction:
        return self._direction

    def is_minimizing(self) -> bool:
        return self._direction is Direction.MINIMIZING

    def set_minimizing(self):
        self._direction = Direction.MINIMIZING

    def set_maximizing(self):
        self._direction = Direction.MAXIMIZING

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._direction.value})"


class MeanDistanceObjective(Objective):
    """
    Average distance between all pairs of selected items (maximized by default).
    Selections with fewer than two items evaluate to 0.
    """

    def evaluate(self, solution: SubsetSolution, data: DistanceData) -> Evaluation:
        selected = solution.selected_list()
        n = len(selected)
        if n < 2:
            return SimpleEvaluation(0.0)
        sub = data.submatrix(selected)
        # upper triangle counts each pair once
        total = float(np.sum(np.triu(sub, k=1)))
        return SimpleEvaluation(total / (n * (n - 1) / 2))


class ConstantObjective(Objective):
    """Assigns the same value to every solution. Useful for pure feasibility problems."""

    def __init__(self, value: float = 0.0, direction: Direction = Direction.MINIMIZING):
        super().__init__(direction)
        self.value = value

    def evaluate(self, solution, data: SubsetData) -> Evaluation:
        return SimpleEvaluation(self.value)
