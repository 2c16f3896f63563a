"""
Enumeration of Minimal Unsatisfiable Subsets and Maximal Satisfiable Subsets
of the clause groups of an explanation session.

Origin
The algorithm is the core extraction procedure by Liffiton and Malik and
independently by Previti and Marques-Silva:
 Enumerating Infeasibility: Finding Multiple MUSes Quickly
 Mark H. Liffiton and Ammar Malik
 in Proc. 10th International Conference on Integration of
 Artificial Intelligence (AI) and Operations Research (OR) techniques in
 Constraint Programming (CPAIOR-2013), 160-175, May 2013.

Partial MUS Enumeration
 Alessandro Previti, Joao Marques-Silva in Proc. AAAI-2013 July 2013

Idea of the Algorithm
Two solvers exchange information:

    1. The MapSolver enumerates sets of groups that are neither supersets
       of a known MUS nor subsets of a known MSS. It has one variable per
       group. For each MUS, say groups g1, g2, g5, it holds the clause
       !p1 | !p2 | !p5; for each MSS it holds the disjunction of the
       variables of the groups outside the MSS.
    2. The SubsetSolver is the session oracle itself: a set of groups is
       tested by assuming the selectors of its groups. An unsatisfiable set
       is shrunk to an MUS, a satisfiable one is grown to an MSS.
"""
import logging
from typing import Iterator, List, Optional, Tuple, TYPE_CHECKING

from pysat.solvers import Solver

if TYPE_CHECKING:
    from metasat.bool.sat.oracle import Oracle

logger = logging.getLogger(__name__)


class SubsetSolver:
    """Checks subsets of clause groups on the session oracle."""

    def __init__(self, oracle: "Oracle"):
        self.oracle = oracle
        self.groups = sorted(oracle.selectors)
        self.n = len(self.groups)
        self.idcache = {oracle.selectors[grp]: i for i, grp in enumerate(self.groups)}

    def c_var(self, i: int) -> int:
        """Selector literal of the i-th group."""
        return self.oracle.selectors[self.groups[i]]

    def check_subset(self, seed) -> bool:
        """Check if a subset of groups is satisfiable with the hard clauses."""
        return self.oracle.is_satisfiable(self.to_c_lits(seed), all_groups=False)

    def to_c_lits(self, seed) -> List[int]:
        """Convert seed positions to selector literals."""
        return [self.c_var(i) for i in seed]

    def to_groups(self, seed) -> List[int]:
        """Convert seed positions to group indices."""
        return sorted(self.groups[i] for i in seed)

    def complement(self, aset):
        """Return complement of a set w.r.t. all groups."""
        return set(range(self.n)).difference(aset)

    def seed_from_core(self) -> List[int]:
        """Extract seed from the core of the last unsatisfiable check."""
        return [self.idcache[sel] for sel in self.oracle.core()]

    def shrink(self, seed):
        """Shrink seed to minimal unsatisfiable subset."""
        current = set(seed)
        for i in seed:
            if i not in current:
                continue
            current.remove(i)
            if not self.check_subset(current):
                current = set(self.seed_from_core())
            else:
                current.add(i)
        return current

    def grow(self, seed):
        """Grow seed to maximal satisfiable subset."""
        current = list(seed)
        for i in self.complement(current):
            current.append(i)
            if not self.check_subset(current):
                current.pop()
        return current


class MapSolver:
    """Solver for mapping group sets; group position i is variable i + 1."""

    def __init__(self, n: int, solver_name: str = "g4"):
        """Initialization.
              Args:
             n: The number of groups to map.
             solver_name: pysat engine of the map.
        """
        self.solver = Solver(name=solver_name)
        self.n = n
        self.all_n = set(range(n))  # used in complement fairly frequently
        # prefer large seeds
        self.solver.set_phases(literals=[i + 1 for i in range(n)])

    def next_seed(self) -> Optional[List[int]]:
        """Get the seed from the current model, if there is one.
             Returns:
             A seed as a list of 0-based group positions.
        """
        if not self.solver.solve():
            return None
        seed = self.all_n.copy()  # default to all True for "high bias"
        for lit in self.solver.get_model():
            if lit < 0 and -lit - 1 in seed:
                seed.remove(-lit - 1)
        return sorted(seed)

    def complement(self, aset):
        """Return the complement of a given set w.r.t. the set of mapped groups."""
        return self.all_n.difference(aset)

    def block_down(self, frompoint) -> None:
        """Block down from a given set."""
        comp = self.complement(frompoint)
        self.solver.add_clause([i + 1 for i in sorted(comp)])

    def block_up(self, frompoint) -> None:
        """Block up from a given set."""
        self.solver.add_clause([-(i + 1) for i in sorted(frompoint)])

    def delete(self) -> None:
        if self.solver:
            self.solver.delete()
            self.solver = None


def enumerate_sets(oracle: "Oracle", solver_name: str = "g4") -> Iterator[Tuple[str, List[int]]]:
    """MUS/MSS enumeration over the groups of ``oracle``.

    Yields ``("MUS", groups)`` and ``("MSS", groups)`` pairs with sorted
    group indices until the whole power set of groups is covered.
    """
    csolver = SubsetSolver(oracle)
    map_solver = MapSolver(n=csolver.n, solver_name=solver_name)
    try:
        while True:
            seed = map_solver.next_seed()
            if seed is None:
                return
            if csolver.check_subset(seed):
                mss = csolver.grow(seed)
                logger.debug("MSS %s", csolver.to_groups(mss))
                yield "MSS", csolver.to_groups(mss)
                map_solver.block_down(mss)
            else:
                seed = csolver.seed_from_core()
                mus = csolver.shrink(seed)
                logger.debug("MUS %s", csolver.to_groups(mus))
                yield "MUS", csolver.to_groups(mus)
                map_solver.block_up(mus)
    finally:
        map_solver.delete()
