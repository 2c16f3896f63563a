"""Unsat core computation: minimal explanations of clause groups.

Provides one minimal unsatisfiable subset (deletion-based, MUSX) and the
enumeration of all of them (MARCO) over the indexed clauses of a session.
"""

from metasat.unsat_core.unsat_core import (
    CallbackListener,
    MUSListener,
    UnsatCoreResult,
    enumerate_all_mus,
    minimal_explanation,
)

__all__ = ["CallbackListener", "MUSListener", "UnsatCoreResult",
           "enumerate_all_mus", "minimal_explanation"]
