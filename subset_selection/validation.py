from abc import ABC, abstractmethod
from typing import Dict, Hashable, Optional


class Validation(ABC):
    """Pass/fail result of checking a solution against a constraint."""

    @abstractmethod
    def passed(self) -> bool:
        pass

    def __str__(self) -> str:
        return "passed" if self.passed() else "failed"


class PenalizingValidation(Validation):
    """
    Validation produced by a soft constraint. Besides the verdict it carries a
    non-negative penalty expressing how far the solution is from satisfying the
    constraint (zero when passed).
    """

    @abstractmethod
    def get_penalty(self) -> float:
        pass

    def __str__(self) -> str:
        if self.passed():
            return "passed"
        return f"failed (penalty: {self.get_penalty()})"


class SimpleValidation(Validation):

    def __init__(self, passed: bool):
        self._passed = bool(passed)

    def passed(self) -> bool:
        return self._passed

    def __repr__(self) -> str:
        return f"SimpleValidation(passed={self._passed})"


PASSED = SimpleValidation(True)
FAILED = SimpleValidation(False)


class SimplePenalizingValidation(PenalizingValidation):

    def __init__(self, passed: bool, penalty: float = 0.0):
        if penalty < 0:
            raise ValueError(f"Penalty should be non-negative, got {penalty}.")
        if not passed and penalty == 0:
            raise ValueError("A failed validation should carry a positive penalty.")
        self._passed = bool(passed)
        # a passed validation never carries a penalty
        self._penalty = 0.0 if self._passed else float(penalty)

    def passed(self) -> bool:
        return self._passed

    def get_penalty(self) -> float:
        return self._penalty

    def __repr__(self) -> str:
        return f"SimplePenalizingValidation(passed={self._passed}, penalty={self._penalty})"


class UnanimousValidation(Validation):
    """Keyed collection of validations that passes only if all of them pass."""

    def __init__(self):
        self._validations: Optional[Dict[Hashable, Validation]] = None

    def add_validation(self, key: Hashable, validation: Validation):
        if self._validations is None:
            self._validations = {}
        self._validations[key] = validation

    def get_validation(self, key: Hashable) -> Optional[Validation]:
        return None if self._validations is None else self._validations.get(key)

    def passed(self) -> bool:
        return self._validations is None or all(v.passed() for v in self._validations.values())

    def __len__(self) -> int:
        return 0 if self._validations is None else len(self._validations)


class SubsetValidation(Validation):
    """Validation of a subset solution: a size check combined with the constraint checks."""

    def __init__(self, valid_size: bool, constraint_validation: Validation):
        self._valid_size = valid_size
        self.constraint_validation = constraint_validation

    def valid_size(self) -> bool:
        return self._valid_size

    def passed(self) -> bool:
        return self._valid_size and self.constraint_validation.passed()

    def passed_ignoring_size(self) -> bool:
        return self.constraint_validation.passed()

    def __repr__(self) -> str:
        return f"SubsetValidation(valid_size={self._valid_size}, constraints={self.constraint_validation})"
