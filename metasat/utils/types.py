# coding: utf-8
"""Shared result types."""
from enum import Enum


class SolverResult(Enum):
    """Outcome of one oracle call."""
    SAT = 0
    UNSAT = 1
    UNKNOWN = 2

    @classmethod
    def from_status(cls, status) -> "SolverResult":
        """Map a pysat-style tri-state status (True/False/None) to a result."""
        if status is True:
            return cls.SAT
        if status is False:
            return cls.UNSAT
        return cls.UNKNOWN
