# coding: utf-8
"""
Subset-minimal models over a set of target literals.

The search refines one model at a time. With ``ts`` the negations of the
target literals true in the current model and ``fs`` the negations of the
false ones:

.. code-block:: python

    # oracle: incremental SAT session
    # targets: literals of interest

    model = solve()
    while some target literal is true in model:
        oracle.add_clause(ts)         # flip at least one of them
        if not oracle.solve(assumptions=fs):
            break                     # no flip keeps the rest false
        model = oracle.model()

    return model

Every round strictly shrinks the set of true target literals, hence at most
``len(targets)`` re-solves. The blocking clauses stay in the session: run the
search on a session that is not needed afterwards for the original problem.
"""
import logging
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from metasat.bool.sat.oracle import Oracle

logger = logging.getLogger(__name__)


def _split(model: Sequence[int], targets: Sequence[int]) -> Tuple[List[int], List[int]]:
    """Negated true targets (blocking literals) and negated false targets (assumptions)."""
    true_lits = set(model)
    ts = [-lit for lit in targets if lit in true_lits]
    fs = [-lit for lit in targets if lit not in true_lits]
    return ts, fs


def find_minimal_model(oracle: "Oracle", targets: Sequence[int]) -> Optional[List[int]]:
    """
    Find a model whose set of true ``targets`` is subset-minimal.

    :param oracle: session holding the clause set; blocking clauses are
        added to it permanently
    :param targets: literals whose true footprint is minimised
    :return: the model snapshot (also kept in ``oracle.modelstock``), or
        ``None`` when the clause set is unsatisfiable

    Raises :class:`~metasat.utils.exceptions.OracleTimeout` when a solve call
    gives no verdict.
    """
    targets = list(targets)
    oracle.validate_literals(targets)
    if not oracle.is_satisfiable():
        logger.info("Clause set is unsatisfiable: no minimal model")
        return None

    model = oracle.snapshot_model()
    rounds = 0
    while True:
        ts, fs = _split(model, targets)
        if not ts:
            break
        logger.debug("Round %d: %d target literals true, blocking %s", rounds, len(ts), ts)
        oracle.add_clause(ts)
        if not oracle.is_satisfiable(fs):
            break
        rounds += 1
        model = oracle.snapshot_model()

    logger.info("Minimal model found after %d re-solves (%d of %d targets true)",
                rounds, len(_split(model, targets)[0]), len(targets))
    return model
