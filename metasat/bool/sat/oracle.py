# coding: utf-8
"""
Incremental SAT oracle session.

``Oracle`` wraps one incremental engine (a pysat ``Solver`` or, by name
``"z3"``, a ``Z3SATEngine``) and owns the session state the meta-algorithms
rely on:

  - ``nof_vars``: high-water mark of allocated variables
  - ``clearly_unsat``: latched once a clause addition is contradictory
  - ``modelstock``: owned model snapshot, outliving later solve calls
  - group selectors of indexed clauses (explanation modes)

Everything is cleared by ``reset``; nothing is shared between sessions.
"""
import logging
import threading
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Union

from pysat.card import CardEnc, EncType
from pysat.solvers import Solver

from metasat.bool.sat.config import OracleConfig, OracleMode, Z3_ENGINE
from metasat.bool.sat.z3sat_engine import Z3SATEngine
from metasat.utils.exceptions import ContradictionError, OracleTimeout, UnsupportedOperation
from metasat.utils.types import SolverResult

logger = logging.getLogger(__name__)


class Oracle:  # pylint: disable=too-many-instance-attributes,too-many-public-methods
    """
    One incremental SAT session.

    :param config: session configuration, or an option string accepted by
        :meth:`OracleConfig.from_option`
    :param solver_factory: zero-argument callable building the engine; when
        omitted the engine named by ``config.solver_name`` is used

    Clause additions that make the clause set trivially unsatisfiable are
    not reported to the caller: the session latches ``clearly_unsat`` and
    every later satisfiability query answers unsatisfiable without calling
    the engine.
    """

    def __init__(self, config: Union[OracleConfig, str, None] = None,
                 solver_factory: Optional[Callable[[], Any]] = None):
        if isinstance(config, str):
            config = OracleConfig.from_option(config)
        self.config = config or OracleConfig()
        self.mode = self.config.mode
        self.timeout = self.config.timeout
        self._solver_factory = solver_factory or self._default_factory
        self.engine = self._solver_factory()
        self._init_session()

    def _default_factory(self):
        if self.config.solver_name == Z3_ENGINE:
            return Z3SATEngine()
        return Solver(name=self.config.solver_name, use_timer=True)

    def _init_session(self) -> None:
        self.clearly_unsat = False
        self.modelstock: Optional[List[int]] = None
        self.nof_vars = 0
        self.selectors: Dict[int, int] = {}  # group index -> selector variable
        self._groups: Dict[int, int] = {}  # selector variable -> group index

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.delete()

    def delete(self) -> None:
        """Explicit destructor of the engine."""
        if self.engine is not None:
            self.engine.delete()
            self.engine = None

    def reset(self) -> None:
        """Drop every clause, variable, snapshot and the contradiction latch."""
        self.delete()
        self.engine = self._solver_factory()
        self._init_session()
        logger.debug("Oracle session reset (mode %s)", self.mode.name)

    # -------------------------- Variables ------------------------- #

    def new_variables(self, n: int) -> List[int]:
        """Allocate ``n`` fresh variables and return them."""
        if n < 0:
            raise ValueError(f"Cannot allocate a negative number of variables: {n}")
        first = self.nof_vars + 1
        self.nof_vars += n
        return list(range(first, self.nof_vars + 1))

    def next_free_var(self) -> int:
        return self.nof_vars + 1

    def set_number_of_variables(self, n: int) -> None:
        """Raise the variable high-water mark to ``n`` (it never shrinks)."""
        if n < self.nof_vars:
            raise ValueError(f"Variable count cannot shrink from {self.nof_vars} to {n}")
        self.nof_vars = n

    def n_vars(self) -> int:
        """Number of variables the engine has seen in clauses."""
        return self.engine.nof_vars()

    def n_constraints(self) -> int:
        """Number of clauses handed to the engine."""
        return self.engine.nof_clauses()

    def validate_literals(self, lits: Iterable[int]) -> None:
        """Fail on literal 0 or on a literal over an unallocated variable."""
        for lit in lits:
            if lit == 0:
                raise ValueError("0 is not a literal")
            if abs(lit) > self.nof_vars:
                raise ValueError(
                    f"Literal {lit} refers to an unallocated variable "
                    f"(only {self.nof_vars} allocated)")

    # -------------------------- Clauses ------------------------- #

    def add_clause(self, lits: Sequence[int], index: Optional[int] = None) -> Optional[int]:
        """
        Add a clause, optionally tagged with a group index.

        In the explanation modes an indexed clause ``c`` is added as
        ``c \\/ -s`` for a fresh selector ``s`` of its group, so the group can
        be switched on by assuming ``s``. In the other modes the index is
        only echoed back.
        """
        clause = list(lits)
        self.validate_literals(clause)
        if index is not None and self.mode.groups_clauses:
            clause = self._relax(clause, index)
        try:
            self._push(clause)
        except ContradictionError as err:
            self._latch(err)
        return index

    def add_clauses(self, clauses: Iterable[Sequence[int]]) -> None:
        for clause in clauses:
            self.add_clause(clause)

    def _relax(self, clause: List[int], index: int) -> List[int]:
        if index in self.selectors:
            raise ValueError(f"Group index {index} is already registered")
        sel = self.new_variables(1)[0]
        self.selectors[index] = sel
        self._groups[sel] = index
        logger.debug("Clause %s registered with group %d (selector %d)", clause, index, sel)
        return clause + [-sel]

    def group_of(self, selector: int) -> int:
        """Group index whose clause is switched on by ``selector``."""
        return self._groups[selector]

    def _push(self, clause: List[int]) -> None:
        if not clause:
            raise ContradictionError("empty clause")
        if self.engine.add_clause(clause, no_return=False) is False:
            raise ContradictionError(f"clause {clause} conflicts with the clause set")

    def _latch(self, err: ContradictionError) -> None:
        if not self.clearly_unsat:
            logger.warning("Clause set is clearly unsatisfiable: %s", err)
        self.clearly_unsat = True

    def add_atleast(self, lits: Sequence[int], degree: int) -> None:
        """At least ``degree`` of ``lits`` are true."""
        lits = list(lits)
        self.validate_literals(lits)
        try:
            if degree > len(lits):
                raise ContradictionError(f"at least {degree} of {len(lits)} literals")
            if degree <= 0:
                return
            if degree == len(lits):
                for lit in lits:
                    self._push([lit])
            else:
                self._push_encoding(CardEnc.atleast(lits=lits, bound=degree, top_id=self.nof_vars,
                                                    encoding=EncType.seqcounter))
        except ContradictionError as err:
            self._latch(err)

    def add_atmost(self, lits: Sequence[int], degree: int) -> None:
        """At most ``degree`` of ``lits`` are true."""
        lits = list(lits)
        self.validate_literals(lits)
        try:
            if degree < 0:
                raise ContradictionError(f"at most {degree} of {len(lits)} literals")
            if degree >= len(lits):
                return
            if degree == 0:
                for lit in lits:
                    self._push([-lit])
            else:
                self._push_encoding(CardEnc.atmost(lits=lits, bound=degree, top_id=self.nof_vars,
                                                   encoding=EncType.seqcounter))
        except ContradictionError as err:
            self._latch(err)

    def add_exactly(self, lits: Sequence[int], degree: int) -> None:
        """Exactly ``degree`` of ``lits`` are true."""
        self.add_atleast(lits, degree)
        self.add_atmost(lits, degree)

    def _push_encoding(self, cnf) -> None:
        # auxiliary variables of the encoding join the session's variables
        self.set_number_of_variables(max(self.nof_vars, cnf.nv))
        for clause in cnf.clauses:
            self._push(list(clause))

    # -------------------------- Solving ------------------------- #

    def set_timeout(self, seconds: Optional[float]) -> None:
        """Bound each later solve call; ``None`` removes the bound, non-positive values are ignored."""
        if seconds is None:
            self.timeout = None
        elif seconds > 0:
            self.timeout = seconds

    def check(self, assumptions: Optional[Sequence[int]] = None,
              all_groups: bool = True) -> SolverResult:
        """
        Solve under ``assumptions``; ``UNKNOWN`` when the timeout fired.

        In the explanation modes every group-indexed clause is part of the
        clause set, so all group selectors are assumed as well. With
        ``all_groups=False`` only the selectors among ``assumptions`` are,
        which is how subsets of groups are tested.
        """
        assumptions = list(assumptions or [])
        self.validate_literals(assumptions)
        if self.clearly_unsat:
            return SolverResult.UNSAT
        if all_groups and self.mode.groups_clauses:
            assumptions += self.selectors.values()
        result = SolverResult.from_status(self._solve(assumptions))
        logger.debug("Solve under %d assumptions: %s", len(assumptions), result.name)
        return result

    def is_satisfiable(self, assumptions: Optional[Sequence[int]] = None,
                       all_groups: bool = True) -> bool:
        """Solve under ``assumptions``; raises :class:`OracleTimeout` when undecided."""
        result = self.check(assumptions, all_groups)
        if result == SolverResult.UNKNOWN:
            raise OracleTimeout(f"Solve call gave no verdict within {self.timeout} seconds")
        return result == SolverResult.SAT

    def _solve(self, assumptions: List[int]) -> Optional[bool]:
        if not self.timeout:
            return self.engine.solve(assumptions=assumptions)
        timer = threading.Timer(self.timeout, self.engine.interrupt)
        timer.start()
        try:
            return self.engine.solve_limited(assumptions=assumptions, expect_interrupt=True)
        finally:
            timer.cancel()
            # a callback already running must finish before the flag is cleared
            timer.join()
            self.engine.clear_interrupt()

    # -------------------------- Models ------------------------- #

    def model(self) -> List[int]:
        """Live model of the last satisfiable solve, one literal per allocated variable."""
        raw = self.engine.get_model()
        if raw is None:
            raise UnsupportedOperation("No model available: the last solve call was not satisfiable")
        values = {abs(lit): lit > 0 for lit in raw}
        # variables absent from every clause are unconstrained: report them false
        return [var if values.get(var, False) else -var for var in range(1, self.nof_vars + 1)]

    def snapshot_model(self) -> List[int]:
        """Copy the live model into the owned ``modelstock`` and return it."""
        self.modelstock = self.model()
        return self.modelstock

    def value(self, var: int) -> bool:
        """Truth value of ``var``, from ``modelstock`` when a snapshot exists."""
        if not 1 <= var <= self.nof_vars:
            raise ValueError(f"Variable {var} is not allocated")
        model = self.modelstock if self.modelstock is not None else self.model()
        return model[var - 1] > 0

    def core(self) -> List[int]:
        """Failed assumptions of the last unsatisfiable solve."""
        return list(self.engine.get_core() or [])

    def iter_models(self, limit: Optional[int] = None,
                    over: Optional[Iterable[int]] = None) -> Iterator[List[int]]:
        """
        Enumerate models, blocking each one permanently after it is yielded.

        :param limit: maximum number of models, unbounded when ``None``
        :param over: variables the blocking clauses range over (all
            allocated variables by default), i.e. models are distinct on them
        """
        if self.mode is not OracleMode.ITERATOR:
            raise UnsupportedOperation(f"Model iteration needs an iterator session, not {self.mode.name}")
        projection: Optional[Set[int]] = set(over) if over is not None else None
        count = 0
        while limit is None or count < limit:
            if not self.is_satisfiable():
                return
            model = self.model()
            count += 1
            yield model
            self.add_clause([-lit for lit in model if projection is None or abs(lit) in projection])
        logger.debug("Model limit %d reached", limit)

    # -------------------------- Meta-algorithms ------------------------- #

    def find_minimal_model(self, targets: Sequence[int]) -> Optional[List[int]]:
        """See :func:`metasat.bool.minimal_model.find_minimal_model`."""
        from metasat.bool.minimal_model import find_minimal_model  # noqa: PLC0415
        return find_minimal_model(self, targets)

    def find_backbone(self, candidates: Sequence[int]) -> Set[int]:
        """See :func:`metasat.bool.backbone.find_backbone`."""
        from metasat.bool.backbone import find_backbone  # noqa: PLC0415
        return find_backbone(self, candidates)

    def minimal_explanation(self) -> List[int]:
        """See :func:`metasat.unsat_core.unsat_core.minimal_explanation`."""
        from metasat.unsat_core.unsat_core import minimal_explanation  # noqa: PLC0415
        return minimal_explanation(self)

    def enumerate_all_mus(self, listener=None):
        """See :func:`metasat.unsat_core.unsat_core.enumerate_all_mus`."""
        from metasat.unsat_core.unsat_core import enumerate_all_mus  # noqa: PLC0415
        return enumerate_all_mus(self, listener)
