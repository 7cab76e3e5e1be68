from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import GpaInputs


class GpaCalculator(ABC):
    """Calculator interface (Strategy Pattern for grading policy)."""

    @abstractmethod
    def gpa(self, inputs: GpaInputs) -> float:
        raise NotImplementedError
