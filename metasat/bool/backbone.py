# coding: utf-8
"""
Backbone literals: literals true in every model of a clause set.

Each candidate ``p`` is tested with two solve calls, ``solve([p])`` and
``solve([-p])``. A literal found forced is added as a unit clause right away;
backbone membership is monotone, so later calls get a smaller search space
without changing their verdicts.
"""
import logging
from typing import Sequence, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from metasat.bool.sat.oracle import Oracle

logger = logging.getLogger(__name__)


def find_backbone(oracle: "Oracle", candidates: Sequence[int]) -> Set[int]:
    """
    Compute the backbone restricted to the variables of ``candidates``.

    :param oracle: session holding the clause set; discovered backbone
        literals are added to it as unit clauses
    :param candidates: literals to test, in probing order
    :return: the forced literals, at most one polarity per variable; empty
        when the clause set is unsatisfiable

    Raises :class:`~metasat.utils.exceptions.OracleTimeout` when a solve call gives
    no verdict.
    """
    candidates = list(candidates)
    oracle.validate_literals(candidates)
    backbone: Set[int] = set()
    for lit in candidates:
        if lit in backbone or -lit in backbone:
            continue
        pos = oracle.is_satisfiable([lit])
        neg = oracle.is_satisfiable([-lit])
        if pos and neg:
            logger.debug("%d is free", lit)
            continue
        if not pos and not neg:
            # clauses only grow, so every later solve call would fail the same way
            logger.warning("Neither %d nor %d is satisfiable: clause set is unsatisfiable", lit, -lit)
            return set()
        forced = lit if pos else -lit
        logger.debug("%d is forced", forced)
        backbone.add(forced)
        oracle.add_clause([forced])

    logger.info("Backbone of %d literals out of %d candidates", len(backbone), len(candidates))
    return backbone
