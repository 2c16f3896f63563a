# coding: utf-8
"""
Construction-time configuration of an oracle session.

A session is opened in exactly one mode; the mode decides which
explanation-specific operations are available on it:

  - PLAIN:       assumption-based solving only
  - ITERATOR:    plus model enumeration (``Oracle.iter_models``)
  - EXPLAIN:     group-indexed clauses plus one minimal explanation
  - ALL_EXPLAIN: group-indexed clauses plus enumeration of all MUSes
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pysat.solvers import SolverNames

from metasat.global_params import global_config

Z3_ENGINE = "z3"


class OracleMode(Enum):
    """Enumeration of available oracle variants."""
    PLAIN = "default"
    ITERATOR = "iterator"
    EXPLAIN = "xplain"
    ALL_EXPLAIN = "allxplain"

    @classmethod
    def from_string(cls, name: str) -> "OracleMode":
        """Convert string to OracleMode enum."""
        name = name.lower()
        for mode in cls:
            if mode.value == name or mode.name.lower() == name:
                return mode
        raise ValueError(f"Unknown oracle mode: {name}")

    @property
    def groups_clauses(self) -> bool:
        """Whether indexed clauses are relaxed with a group selector."""
        return self in (OracleMode.EXPLAIN, OracleMode.ALL_EXPLAIN)


def is_engine_name(name: str) -> bool:
    """Check whether ``name`` names an engine: a pysat solver alias or ``z3``."""
    name = name.lower()
    if name == Z3_ENGINE:
        return True
    for attr, aliases in vars(SolverNames).items():
        if not attr.startswith("_") and isinstance(aliases, tuple) and name in aliases:
            return True
    return False


def _default_solver() -> str:
    return global_config.solver_name


def _default_timeout() -> Optional[float]:
    return global_config.timeout


@dataclass
class OracleConfig:
    """Configuration for one oracle session."""

    mode: OracleMode = OracleMode.PLAIN
    solver_name: str = field(default_factory=_default_solver)
    timeout: Optional[float] = field(default_factory=_default_timeout)  # seconds per solve call

    def __post_init__(self) -> None:
        if isinstance(self.mode, str):
            self.mode = OracleMode.from_string(self.mode)
        self.solver_name = self.solver_name.lower()
        if not is_engine_name(self.solver_name):
            raise ValueError(f"Unknown SAT engine: {self.solver_name}")
        if self.timeout is not None and self.timeout <= 0:
            self.timeout = None

    @classmethod
    def from_option(cls, option: str) -> "OracleConfig":
        """Build a configuration from a single option string.

        A mode name (``"Default"``, ``"Iterator"``, ``"Xplain"``, ``"AllXplain"``,
        any case) selects that mode with the default engine. Any other string is
        taken as an engine name and selects the plain mode.
        """
        try:
            return cls(mode=OracleMode.from_string(option))
        except ValueError:
            pass
        if is_engine_name(option):
            return cls(mode=OracleMode.PLAIN, solver_name=option.lower())
        raise ValueError(f"Unknown oracle option: {option}")
