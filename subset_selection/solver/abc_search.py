from typing import List, Optional

from loguru import logger

from ..evaluation import Evaluation
from ..problem import Problem
from ..validation import Validation
from .listeners import LocalSearchListener, SearchListener


class Search:
    """
    Base class for searches that solve a problem. Keeps track of the best solution
    found so far and notifies the attached listeners.

    How solutions are generated, accepted and when a search stops is left to subclasses.
    """

    def __init__(self, problem: Problem, name: Optional[str] = None):
        if problem is None:
            raise ValueError("Error while creating search: problem can not be None.")
        self.problem = problem
        self.name = name if name is not None else self.__class__.__name__
        self._listeners: List[SearchListener] = []

        self.best_solution = None
        self.best_solution_evaluation: Optional[Evaluation] = None
        self.best_solution_validation: Optional[Validation] = None

    #region Listeners
    def add_search_listener(self, listener: SearchListener):
        """
        Attaches a listener.

        Raises:
            IncompatibleSearchListenerError: if the listener can not listen to this kind of search.
        """
        if isinstance(listener, LocalSearchListener):
            listener.check_compatible(self)
        self._listeners.append(listener)
        logger.debug("[{}] Listener added: {}", self.name, listener.__class__.__name__)

    def remove_search_listener(self, listener: SearchListener) -> bool:
        if listener in self._listeners:
            self._listeners.remove(listener)
            return True
        return False

    def get_search_listeners(self) -> List[SearchListener]:
        return list(self._listeners)

    def fire_search_started(self):
        for listener in self._listeners:
            listener.search_started(self)

    def fire_search_stopped(self):
        for listener in self._listeners:
            listener.search_stopped(self)

    def _fire_new_best_solution(self, solution, evaluation: Evaluation, validation: Validation):
        for listener in self._listeners:
            listener.new_best_solution(self, solution, evaluation, validation)
    #endregion

    def compute_delta(self, current_evaluation: Evaluation, previous_evaluation: Evaluation) -> float:
        """Improvement of the current over the previous evaluation; positive means better."""
        return self.problem.objective.direction.delta(current_evaluation.get_value(), previous_evaluation.get_value())

    def update_best_solution(self, solution, evaluation: Optional[Evaluation] = None,
                             validation: Optional[Validation] = None) -> bool:
        """
        Offers a solution as new best solution. It is adopted (as a copy) only if it
        passes validation and improves on the current best.

        Returns:
            True if the best solution was updated.
        """
        if validation is None:
            validation = self.problem.validate(solution)
        if not validation.passed():
            return False
        if evaluation is None:
            evaluation = self.problem.evaluate(solution)
        if self.best_solution is not None and self.compute_delta(evaluation, self.best_solution_evaluation) <= 0:
            return False

        self.best_solution = solution.copy()
        self.best_solution_evaluation = evaluation
        self.best_solution_validation = validation
        logger.debug("[{}] New best solution: {}", self.name, evaluation)
        self._fire_new_best_solution(self.best_solution, evaluation, validation)
        return True

    def __repr__(self) -> str:
        return f"{self.name}(problem={self.problem})"


class LocalSearch(Search):
    """Search that iteratively modifies a single current solution."""

    def __init__(self, problem: Problem, name: Optional[str] = None):
        super().__init__(problem, name)
        self.current_solution = None
        self.current_solution_evaluation: Optional[Evaluation] = None
        self.current_solution_validation: Optional[Validation] = None

    def update_current_solution(self, solution, evaluation: Optional[Evaluation] = None,
                                validation: Optional[Validation] = None):
        """
        Replaces the current solution and notifies the local search listeners exactly once.
        Missing evaluation/validation are computed through the problem.
        """
        if evaluation is None:
            evaluation = self.problem.evaluate(solution)
        if validation is None:
            validation = self.problem.validate(solution)
        self.current_solution = solution
        self.current_solution_evaluation = evaluation
        self.current_solution_validation = validation
        for listener in self._listeners:
            if isinstance(listener, LocalSearchListener):
                listener.modified_current_solution(self, solution, evaluation, validation)

    def update_current_and_best_solution(self, solution, evaluation: Optional[Evaluation] = None,
                                         validation: Optional[Validation] = None) -> bool:
        """Updates the current solution and offers it as new best solution."""
        self.update_current_solution(solution, evaluation, validation)
        return self.update_best_solution(solution, self.current_solution_evaluation, self.current_solution_validation)
