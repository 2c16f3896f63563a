"""Explanation interface: one minimal explanation, or all of them."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

from metasat.bool.sat.config import OracleMode, Z3_ENGINE
from metasat.unsat_core.marco import enumerate_sets
from metasat.unsat_core.musx import MUSX
from metasat.utils.exceptions import UnsupportedOperation

if TYPE_CHECKING:
    from metasat.bool.sat.oracle import Oracle

logger = logging.getLogger(__name__)


class UnsatCoreResult:
    """Result of unsat core computation."""
    def __init__(self, cores: List[List[int]], is_minimal: bool = False,
                 stats: Optional[Dict[str, Any]] = None):
        self.cores = cores
        self.is_minimal = is_minimal
        self.stats = stats or {}

    def __str__(self) -> str:
        cores_str = "\n".join(
            [f"Core {i + 1}: {core}" for i, core in enumerate(self.cores)])
        minimal_str = ("minimal" if self.is_minimal
                       else "not necessarily minimal")
        return f"Found {len(self.cores)} {minimal_str} unsat cores:\n{cores_str}"


class MUSListener(ABC):
    """Receives the results of an all-MUS enumeration as they are found."""

    @abstractmethod
    def on_subset_found(self, subset: List[int]) -> None:
        """Called once per minimal unsatisfiable subset (sorted group indices)."""

    def on_enumeration_done(self) -> None:
        """Called once after the last subset."""


class CallbackListener(MUSListener):
    """Listener built from plain callables."""
    def __init__(self, on_found: Callable[[List[int]], None],
                 on_done: Optional[Callable[[], None]] = None):
        self._on_found = on_found
        self._on_done = on_done

    def on_subset_found(self, subset: List[int]) -> None:
        self._on_found(subset)

    def on_enumeration_done(self) -> None:
        if self._on_done is not None:
            self._on_done()


def minimal_explanation(oracle: "Oracle") -> List[int]:
    """Group indices of one minimal unsatisfiable subset.

    Only available on sessions opened in ``EXPLAIN`` mode, and only when the
    clause set is unsatisfiable. An empty result means the hard clauses alone
    are contradictory.
    """
    if oracle.mode is not OracleMode.EXPLAIN:
        raise UnsupportedOperation(
            f"This session does not support minimal explanation (mode {oracle.mode.name})")
    if oracle.clearly_unsat:
        logger.info("Hard clauses are contradictory: empty explanation")
        return []

    mus = MUSX(oracle).compute()
    if mus is None:
        raise UnsupportedOperation("The clause set is satisfiable: nothing to explain")
    logger.info("Minimal explanation of %d groups: %s", len(mus), mus)
    return mus


def enumerate_all_mus(oracle: "Oracle",
                      listener: Optional[MUSListener] = None) -> UnsatCoreResult:
    """Enumerate all MUSes of the group-indexed clauses using MARCO.

    ``listener.on_subset_found`` fires once per MUS as soon as it is found,
    ``listener.on_enumeration_done`` once at the end. Only available on
    sessions opened in ``ALL_EXPLAIN`` mode.
    """
    if oracle.mode is not OracleMode.ALL_EXPLAIN:
        raise UnsupportedOperation(
            f"This session does not support MUS enumeration (mode {oracle.mode.name})")

    cores: List[List[int]] = []
    nof_mss = 0
    if oracle.clearly_unsat:
        cores.append([])
        if listener is not None:
            listener.on_subset_found([])
    else:
        map_engine = oracle.config.solver_name
        if map_engine == Z3_ENGINE:
            map_engine = "g4"
        for kind, groups in enumerate_sets(oracle, solver_name=map_engine):
            if kind == "MSS":
                nof_mss += 1
                continue
            cores.append(groups)
            if listener is not None:
                listener.on_subset_found(groups)

    if listener is not None:
        listener.on_enumeration_done()
    logger.info("Enumerated %d MUSes and %d MSSes", len(cores), nof_mss)
    return UnsatCoreResult(cores=cores, is_minimal=True, stats={"mus": len(cores), "mss": nof_mss})
