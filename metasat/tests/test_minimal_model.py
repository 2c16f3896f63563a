import random
from unittest import mock

import pytest

from metasat.bool.minimal_model import find_minimal_model
from metasat.bool.sat.config import OracleConfig
from metasat.bool.sat.oracle import Oracle
from metasat.tests.utils import SlowEngine, all_models, make_oracle, random_cnf
from metasat.utils.exceptions import OracleTimeout


def _true_targets(model, targets):
    true_lits = set(model)
    return {lit for lit in targets if lit in true_lits}


def test_exactly_one_of_two_is_true():
    with make_oracle(2, [[1, 2], [-1, -2]]) as oracle:
        model = oracle.find_minimal_model([1, 2])
        assert len(_true_targets(model, [1, 2])) == 1


def test_minimal_model_drops_unneeded_literals():
    with make_oracle(3, [[1, 2, 3], [-1, 2]]) as oracle:
        model = find_minimal_model(oracle, [1, 2, 3])
        assert len(_true_targets(model, [1, 2, 3])) == 1
        assert -1 in model


def test_negative_targets_are_minimised_too():
    with make_oracle(2, [[-1, -2]]) as oracle:
        model = find_minimal_model(oracle, [-1, -2])
        assert _true_targets(model, [-1, -2]) in ({-1}, {-2})


def test_unsatisfiable_clause_set_has_no_minimal_model():
    with make_oracle(1, [[1], [-1]]) as oracle:
        assert find_minimal_model(oracle, [1]) is None
    with make_oracle(2, [[1, 2], [-1, 2], [1, -2], [-1, -2]]) as oracle:
        assert find_minimal_model(oracle, [1, 2]) is None


def test_empty_targets_return_first_model():
    with make_oracle(2, [[1, 2]]) as oracle:
        model = find_minimal_model(oracle, [])
        assert model is not None and (1 in model or 2 in model)
        assert not oracle.clearly_unsat
        assert oracle.is_satisfiable()


def test_forced_target_stays_true():
    with make_oracle(2, [[1], [1, 2]]) as oracle:
        model = find_minimal_model(oracle, [1, 2])
        assert _true_targets(model, [1, 2]) == {1}


def test_result_is_kept_as_snapshot():
    with make_oracle(3, [[1, 2, 3]]) as oracle:
        model = find_minimal_model(oracle, [1, 2, 3])
        assert oracle.modelstock == model
        for var in (1, 2, 3):
            assert oracle.value(var) == (var in model)


@pytest.mark.parametrize("seed", range(15))
def test_random_formulas_are_subset_minimal(seed):
    rng = random.Random(seed)
    nof_vars = 6
    clauses = random_cnf(rng, nof_vars, 12)
    targets = [rng.choice([1, -1]) * v for v in rng.sample(range(1, nof_vars + 1), 4)]
    models = list(all_models(nof_vars, clauses))

    with make_oracle(nof_vars, clauses) as oracle:
        result = find_minimal_model(oracle, targets)

    if not models:
        assert result is None
        return
    assert result in models
    footprint = _true_targets(result, targets)
    for other in models:
        assert not _true_targets(other, targets) < footprint


def test_number_of_solves_is_bounded_by_targets():
    targets = [1, 2, 3, 4, 5]
    with make_oracle(5, [[1, 2, 3, 4, 5]]) as oracle:
        assert oracle.is_satisfiable([1, 2, 3, 4, 5])
        with mock.patch.object(oracle.engine, "solve", wraps=oracle.engine.solve) as spy:
            model = find_minimal_model(oracle, targets)
            # the initial solve plus at most one re-solve per target
            assert spy.call_count <= len(targets) + 1
        assert len(_true_targets(model, targets)) == 1


def test_timeout_aborts_the_search():
    oracle = Oracle(OracleConfig(timeout=0.05), solver_factory=SlowEngine)
    oracle.new_variables(2)
    with pytest.raises(OracleTimeout):
        find_minimal_model(oracle, [1, 2])


def test_z3_engine_finds_minimal_models():
    with make_oracle(3, [[1, 2, 3], [-1, 2]], option="z3") as oracle:
        model = find_minimal_model(oracle, [1, 2, 3])
        assert len(_true_targets(model, [1, 2, 3])) == 1
