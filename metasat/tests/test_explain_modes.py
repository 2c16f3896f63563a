import random

import pytest

from metasat.bool.backbone import find_backbone
from metasat.bool.minimal_model import find_minimal_model
from metasat.tests.utils import all_models, make_grouped_oracle, make_oracle, random_cnf

EXPLAIN_OPTIONS = ["xplain", "allxplain"]


def _true_targets(model, targets):
    true_lits = set(model)
    return {lit for lit in targets if lit in true_lits}


@pytest.mark.parametrize("option", EXPLAIN_OPTIONS)
def test_group_clauses_constrain_plain_solving(option):
    with make_grouped_oracle(1, [[1], [-1]], option=option) as oracle:
        assert not oracle.is_satisfiable()
        assert oracle.is_satisfiable([], all_groups=False)


def test_explanation_leaves_group_clauses_active():
    with make_grouped_oracle(1, [[1], [-1]]) as oracle:
        assert oracle.minimal_explanation() == [0, 1]
        assert not oracle.is_satisfiable()
        assert not oracle.is_satisfiable([1])


@pytest.mark.parametrize("option", EXPLAIN_OPTIONS)
def test_backbone_sees_group_clauses(option):
    with make_grouped_oracle(2, [[1], [-1, 2]], option=option) as oracle:
        assert find_backbone(oracle, [1, 2]) == {1, 2}


@pytest.mark.parametrize("option", EXPLAIN_OPTIONS)
def test_models_satisfy_group_clauses(option):
    clauses = [[1, 2], [-1], [-2, 3]]
    with make_grouped_oracle(3, clauses, option=option) as oracle:
        assert oracle.is_satisfiable()
        assert oracle.model()[:3] == [-1, 2, 3]


@pytest.mark.parametrize("option", EXPLAIN_OPTIONS)
@pytest.mark.parametrize("seed", range(10))
def test_explain_modes_agree_with_default_mode(option, seed):
    rng = random.Random(seed)
    nof_vars = 5
    clauses = random_cnf(rng, nof_vars, 9)
    candidates = list(range(1, nof_vars + 1))

    with make_oracle(nof_vars, clauses) as plain, \
            make_grouped_oracle(nof_vars, clauses, option=option) as grouped:
        assert grouped.is_satisfiable() == plain.is_satisfiable()
        for lit in (1, -1, 3, -3):
            assert grouped.is_satisfiable([lit]) == plain.is_satisfiable([lit])
        assert find_backbone(grouped, candidates) == find_backbone(plain, candidates)


@pytest.mark.parametrize("option", EXPLAIN_OPTIONS)
@pytest.mark.parametrize("seed", range(10))
def test_explain_mode_minimal_models_are_minimal(option, seed):
    rng = random.Random(seed)
    nof_vars = 5
    clauses = random_cnf(rng, nof_vars, 9)
    targets = [rng.choice([1, -1]) * v for v in rng.sample(range(1, nof_vars + 1), 3)]
    models = list(all_models(nof_vars, clauses))

    with make_grouped_oracle(nof_vars, clauses, option=option) as oracle:
        result = find_minimal_model(oracle, targets)

    if not models:
        assert result is None
        return
    assignment = result[:nof_vars]
    assert assignment in models
    footprint = _true_targets(assignment, targets)
    for other in models:
        assert not _true_targets(other, targets) < footprint
