# coding: utf-8
"""
Z3's SAT engine behind the incremental-oracle interface of pysat solvers.

Only the part of the pysat ``Solver`` surface used by ``Oracle`` is provided:
  - add_clause / solve / solve_limited
  - interrupt / clear_interrupt
  - get_model / get_core
  - nof_vars / nof_clauses / delete
"""
from typing import Dict, Iterable, List, Optional

import z3


class Z3SATEngine:
    """Z3 SAT solver wrapper speaking pysat's integer-literal dialect."""
    def __init__(self, logic="QF_FD"):
        self.ctx = z3.Context()
        self.int2z3var: Dict[int, z3.BoolRef] = {}
        self.id2lit: Dict[int, int] = {}  # AST id -> literal, assumptions of the last check only
        self.solver = z3.SolverFor(logic, ctx=self.ctx)
        self._model: Optional[z3.ModelRef] = None
        self._core: Optional[List[int]] = None
        self._nclauses = 0

    def _get_z3var(self, var: int) -> z3.BoolRef:
        if var not in self.int2z3var:
            self.int2z3var[var] = z3.Bool(f"k!{var}", self.ctx)
        return self.int2z3var[var]

    def _to_z3lit(self, lit: int) -> z3.BoolRef:
        b = self._get_z3var(abs(lit))
        return z3.Not(b) if lit < 0 else b

    def add_clause(self, clause: Iterable[int], no_return: bool = True) -> Optional[bool]:
        """Add a clause given as a list of non-zero integers."""
        conds = [self._to_z3lit(t) for t in clause]
        if not conds:
            self.solver.add(z3.BoolVal(False, self.ctx))
        elif len(conds) == 1:
            self.solver.add(conds[0])
        else:
            self.solver.add(z3.Or(*conds))
        self._nclauses += 1
        # z3 never detects contradictions eagerly
        return None if no_return else True

    def solve(self, assumptions: Iterable[int] = ()) -> Optional[bool]:
        """Check satisfiability under assumptions; None means unknown."""
        return self.solve_limited(assumptions=assumptions)

    def solve_limited(self, assumptions: Iterable[int] = (),
                      expect_interrupt: bool = False) -> Optional[bool]:
        """Same as ``solve``; interrupts arrive through ``interrupt``."""
        _ = expect_interrupt
        self.id2lit = {}
        lits = []
        for lit in assumptions:
            expr = self._to_z3lit(lit)
            self.id2lit[expr.get_id()] = lit
            lits.append(expr)
        self._model, self._core = None, None
        res = self.solver.check(*lits)
        if res == z3.sat:
            self._model = self.solver.model()
            return True
        if res == z3.unsat:
            self._core = [self.id2lit[e.get_id()] for e in self.solver.unsat_core()]
            return False
        return None

    def interrupt(self) -> None:
        """Interrupt a running check; safe to call from another thread."""
        self.ctx.interrupt()

    def clear_interrupt(self) -> None:
        """Nothing to clear: z3 resets the cancel flag for each check."""

    def get_model(self) -> Optional[List[int]]:
        """Model of the last satisfiable check over all known variables."""
        if self._model is None:
            return None
        model = []
        for var in sorted(self.int2z3var):
            val = self._model.eval(self.int2z3var[var], model_completion=True)
            model.append(var if z3.is_true(val) else -var)
        return model

    def get_core(self) -> Optional[List[int]]:
        """Failed assumptions of the last unsatisfiable check."""
        return self._core

    def nof_vars(self) -> int:
        return max(self.int2z3var) if self.int2z3var else 0

    def nof_clauses(self) -> int:
        return self._nclauses

    def delete(self) -> None:
        self.solver = None
        self._model, self._core = None, None
