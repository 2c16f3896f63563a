"""Helpers shared by the metasat tests: brute-force semantics and stub engines."""
import itertools
import threading
import time

from metasat.bool.sat.oracle import Oracle


def all_models(nof_vars, clauses):
    """Every total assignment over 1..nof_vars satisfying ``clauses``."""
    for bits in itertools.product([False, True], repeat=nof_vars):
        model = [v if bits[v - 1] else -v for v in range(1, nof_vars + 1)]
        true_lits = set(model)
        if all(any(lit in true_lits for lit in cl) for cl in clauses):
            yield model


def is_sat(nof_vars, clauses):
    return next(all_models(nof_vars, clauses), None) is not None


def random_cnf(rng, nof_vars, nof_clauses, width=3):
    return [[rng.choice([1, -1]) * v for v in rng.sample(range(1, nof_vars + 1), width)]
            for _ in range(nof_clauses)]


def make_oracle(nof_vars, clauses, option="default"):
    oracle = Oracle(option)
    oracle.new_variables(nof_vars)
    oracle.add_clauses(clauses)
    return oracle


def make_grouped_oracle(nof_vars, clauses, option="xplain"):
    """Session where clause ``i`` is registered with group index ``i``."""
    oracle = Oracle(option)
    oracle.new_variables(nof_vars)
    for index, clause in enumerate(clauses):
        oracle.add_clause(clause, index)
    return oracle


class SlowEngine:
    """Engine whose solve calls only return once interrupted, without a verdict."""

    def __init__(self, max_wait=5.0):
        self.max_wait = max_wait
        self.solve_calls = 0
        self._interrupted = threading.Event()

    def add_clause(self, clause, no_return=True):
        return None if no_return else True

    def solve(self, assumptions=()):
        return self.solve_limited(assumptions)

    def solve_limited(self, assumptions=(), expect_interrupt=False):
        self.solve_calls += 1
        self._interrupted.wait(self.max_wait)
        return None

    def interrupt(self):
        self._interrupted.set()

    def clear_interrupt(self):
        self._interrupted.clear()

    def get_model(self):
        return None

    def get_core(self):
        return None

    def nof_vars(self):
        return 0

    def nof_clauses(self):
        return 0

    def delete(self):
        pass


class LateInterruptEngine(SlowEngine):
    """Engine whose interrupt lands only after the solve call has returned."""

    def __init__(self, delay=0.1):
        super().__init__()
        self.delay = delay
        self.interrupted = False
        self._entered = threading.Event()

    def solve_limited(self, assumptions=(), expect_interrupt=False):
        self.solve_calls += 1
        self._entered.wait(self.max_wait)
        return None

    def interrupt(self):
        self._entered.set()
        time.sleep(self.delay)
        self.interrupted = True

    def clear_interrupt(self):
        self.interrupted = False
