from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from .constraint import Constraint, PenalizingConstraint
from .data import SubsetData
from .evaluation import Evaluation, PenalizedEvaluation
from .objective import Objective
from .random_utils import get_random_generator, random_subset
from .solution import SubsetSolution
from .validation import SubsetValidation, UnanimousValidation, Validation


@dataclass
class SubsetProblemSettings:
    """
    Configuration of a subset problem. A missing maximum size means the subset size is
    fixed to the minimum size. Bounds relative to the data are checked by the problem.
    """
    min_subset_size: int
    max_subset_size: Optional[int] = None
    sorted_ids: bool = False

    def __post_init__(self):
        if self.min_subset_size < 0:
            raise ValueError("Minimum subset size should be >= 0.")
        if self.max_subset_size is not None and self.max_subset_size < self.min_subset_size:
            raise ValueError("Maximum subset size should be >= minimum subset size.")


class Problem(ABC):
    """
    A problem combines an objective, the data it is evaluated on, and optional
    constraints. Rejecting constraints make a solution inadmissible; penalizing
    constraints only worsen its evaluation.
    """

    def __init__(self, objective: Objective, data):
        if objective is None:
            raise ValueError("Error while creating problem: objective is required, can not be None.")
        self.objective = objective
        self.data = data
        self._rejecting_constraints: List[Constraint] = []
        self._penalizing_constraints: List[PenalizingConstraint] = []

    @abstractmethod
    def create_random_solution(self):
        pass

    def set_data(self, data):
        self.data = data

    def is_minimizing(self) -> bool:
        return self.objective.is_minimizing()

    #region Constraints
    def add_rejecting_constraint(self, constraint: Constraint):
        self._rejecting_constraints.append(constraint)

    def remove_rejecting_constraint(self, constraint: Constraint) -> bool:
        if constraint in self._rejecting_constraints:
            self._rejecting_constraints.remove(constraint)
            return True
        return False

    def get_rejecting_constraints(self) -> List[Constraint]:
        return list(self._rejecting_constraints)

    def add_penalizing_constraint(self, constraint: PenalizingConstraint):
        if not isinstance(constraint, PenalizingConstraint) or not constraint.is_penalizing():
            raise ValueError(f"Error while adding penalizing constraint: {constraint} does not assign penalties.")
        self._penalizing_constraints.append(constraint)

    def remove_penalizing_constraint(self, constraint: PenalizingConstraint) -> bool:
        if constraint in self._penalizing_constraints:
            self._penalizing_constraints.remove(constraint)
            return True
        return False

    def get_penalizing_constraints(self) -> List[PenalizingConstraint]:
        return list(self._penalizing_constraints)
    #endregion

    def evaluate(self, solution) -> Evaluation:
        """
        Evaluates the solution with the objective. If penalizing constraints have been
        added, the evaluation is wrapped in a PenalizedEvaluation holding one validation
        per constraint (keyed by the constraint itself).
        """
        evaluation = self.objective.evaluate(solution, self.data)
        if not self._penalizing_constraints:
            return evaluation
        penalized = PenalizedEvaluation(evaluation, self.objective.direction)
        for constraint in self._penalizing_constraints:
            penalized.add_penalizing_validation(constraint, constraint.validate(solution, self.data))
        return penalized

    def validate(self, solution) -> Validation:
        """Validates the solution against all rejecting and penalizing constraints."""
        validation = UnanimousValidation()
        for constraint in self._rejecting_constraints + self._penalizing_constraints:
            validation.add_validation(constraint, constraint.validate(solution, self.data))
        return validation

    def reject_solution(self, solution) -> bool:
        """A solution is rejected if it violates any rejecting constraint."""
        return any(not c.is_satisfied(solution, self.data) for c in self._rejecting_constraints)


class SubsetProblem(Problem):
    """
    Subset selection problem: select between `min_subset_size` and `max_subset_size`
    items (inclusive) from the IDs exposed by the subset data.

    The problem holds no solution state. Generating and rejecting solutions is safe from
    concurrent searches; changing the data or size bounds while searches run is not and
    must be synchronized by the caller.
    """

    def __init__(self, objective: Objective, data: SubsetData, min_subset_size: int,
                 max_subset_size: Optional[int] = None, sorted_ids: bool = False):
        """
        Args:
            objective: Objective used to evaluate solutions, can not be None.
            data: Subset data exposing the IDs to select from, can not be None.
            min_subset_size: Minimum subset size, within [0, max_subset_size].
            max_subset_size: Maximum subset size, within [min_subset_size, number of IDs].
                Defaults to `min_subset_size` (fixed size).
            sorted_ids: Whether generated solutions keep their IDs sorted.

        Raises:
            ValueError: if objective or data is None or a size bound is invalid.
        """
        if max_subset_size is None:
            max_subset_size = min_subset_size
        if objective is None:
            raise ValueError("Error while creating subset problem: objective is required, can not be None.")
        if data is None:
            raise ValueError("Error while creating subset problem: subset data is required, can not be None.")
        if min_subset_size < 0:
            raise ValueError("Error while creating subset problem: minimum subset size should be >= 0.")
        if max_subset_size > len(data.get_ids()):
            raise ValueError("Error while creating subset problem: maximum subset size can not be larger "
                             "than number of items in subset data.")
        if min_subset_size > max_subset_size:
            raise ValueError("Error while creating subset problem: minimum subset size should be <= maximum subset size.")

        super().__init__(objective, data)
        self._min_subset_size = min_subset_size
        self._max_subset_size = max_subset_size
        self.sorted_ids = sorted_ids

        logger.debug("[SubsetProblem] Created: {} items, size in [{}, {}], objective={}",
                     len(data.get_ids()), min_subset_size, max_subset_size, objective)

    @classmethod
    def from_settings(cls, objective: Objective, data: SubsetData, settings: SubsetProblemSettings) -> "SubsetProblem":
        return cls(objective, data, settings.min_subset_size, settings.max_subset_size, settings.sorted_ids)

    def set_data(self, data: SubsetData):
        """Replaces the subset data. Subsequently generated solutions use the new IDs."""
        if data is None:
            raise ValueError("Error while setting data in subset problem: subset data can not be None.")
        super().set_data(data)
        logger.debug("[SubsetProblem] Data replaced: {} items", len(data.get_ids()))

    def create_random_solution(self) -> SubsetSolution:
        """
        Creates a solution with a uniformly random size within the size bounds, in which a
        uniformly random subset of that size is selected. Uses the calling thread's generator.
        """
        rng = get_random_generator()
        solution = SubsetSolution(self.data.get_ids(), self.sorted_ids)
        size = self._min_subset_size + int(rng.integers(self._max_subset_size - self._min_subset_size + 1))
        solution.select_all(random_subset(solution.all_ids, size, rng))
        return solution

    def create_empty_solution(self) -> SubsetSolution:
        return SubsetSolution(self.data.get_ids(), self.sorted_ids)

    def has_valid_size(self, solution: SubsetSolution) -> bool:
        return self._min_subset_size <= solution.get_num_selected_ids() <= self._max_subset_size

    def reject_solution(self, solution: SubsetSolution, check_subset_size: bool = True) -> bool:
        """
        A solution is rejected if it violates a rejecting constraint or, when
        `check_subset_size` is set, if its number of selected IDs is out of bounds.
        """
        if check_subset_size and not self.has_valid_size(solution):
            return True
        return super().reject_solution(solution)

    def validate(self, solution: SubsetSolution) -> SubsetValidation:
        return SubsetValidation(self.has_valid_size(solution), super().validate(solution))

    def get_min_subset_size(self) -> int:
        return self._min_subset_size

    def set_min_subset_size(self, min_subset_size: int):
        # zero is only accepted at construction time
        if min_subset_size <= 0:
            raise ValueError("Error while setting minimum subset size: should be > 0.")
        if min_subset_size > self._max_subset_size:
            raise ValueError("Error while setting minimum subset size: should be <= maximum subset size.")
        self._min_subset_size = min_subset_size
        logger.debug("[SubsetProblem] Minimum subset size set to {}", min_subset_size)

    def get_max_subset_size(self) -> int:
        return self._max_subset_size

    def set_max_subset_size(self, max_subset_size: int):
        if max_subset_size < self._min_subset_size:
            raise ValueError("Error while setting maximum subset size: should be >= minimum subset size.")
        if max_subset_size > len(self.data.get_ids()):
            raise ValueError("Error while setting maximum subset size: can not be larger "
                             "than number of items in subset data.")
        self._max_subset_size = max_subset_size
        logger.debug("[SubsetProblem] Maximum subset size set to {}", max_subset_size)

    def __repr__(self) -> str:
        return (f"SubsetProblem(objective={self.objective}, data={self.data}, "
                f"min_subset_size={self._min_subset_size}, max_subset_size={self._max_subset_size})")
