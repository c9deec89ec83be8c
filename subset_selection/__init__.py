"""Problem evaluation core for metaheuristic subset selection."""

from .constraint import Constraint, MinimumDistanceConstraint, PenalizingConstraint
from .data import DistanceData, IdData, SubsetData
from .direction import Direction
from .evaluation import Evaluation, PenalizedEvaluation, SimpleEvaluation
from .exceptions import IncompatibleSearchListenerError, SubsetSelectionError
from .objective import ConstantObjective, MeanDistanceObjective, Objective
from .problem import Problem, SubsetProblem, SubsetProblemSettings
from .solution import IdSet, SubsetSolution
from .validation import (
    FAILED,
    PASSED,
    PenalizingValidation,
    SimplePenalizingValidation,
    SimpleValidation,
    SubsetValidation,
    UnanimousValidation,
    Validation,
)

__all__ = [
    'Constraint', 'MinimumDistanceConstraint', 'PenalizingConstraint',
    'DistanceData', 'IdData', 'SubsetData',
    'Direction',
    'Evaluation', 'PenalizedEvaluation', 'SimpleEvaluation',
    'IncompatibleSearchListenerError', 'SubsetSelectionError',
    'ConstantObjective', 'MeanDistanceObjective', 'Objective',
    'Problem', 'SubsetProblem', 'SubsetProblemSettings',
    'IdSet', 'SubsetSolution',
    'FAILED', 'PASSED', 'PenalizingValidation', 'SimplePenalizingValidation',
    'SimpleValidation', 'SubsetValidation', 'UnanimousValidation', 'Validation',
]
