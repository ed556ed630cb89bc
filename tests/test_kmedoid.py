"""Tests for the optimization loop and the run_kmedoid entry point."""

import numpy as np
import pytest

from kmedoid import (
    DegenerateCluster,
    InvalidConfig,
    KMedoidOptions,
    LoopState,
    run_kmedoid,
)
from kmedoid.metrics import compute_clustering_metrics, run_sanity_checks
from kmedoid.seeding import KMeansPlusPlusSeeder, UniformSeeder


@pytest.mark.parametrize("init", ["kmpp", "rand"])
def test_result_has_k_distinct_medoids(init, random_costs):
    for seed in range(5):
        result = run_kmedoid(random_costs, 4, init=init, rng=np.random.default_rng(seed))

        assert len(result.medoids) == 4
        assert len(set(result.medoids)) == 4
        assert all(0 <= m < 40 for m in result.medoids)
        assert result.labels.shape == (40,)
        assert result.counts.sum() == 40


def test_objective_never_increases(random_costs):
    for seed in range(10):
        result = run_kmedoid(random_costs, 5, init="rand", rng=seed)
        history = np.asarray(result.history)

        assert np.all(np.diff(history) <= 1e-9)
        assert result.objective == pytest.approx(history[-1])


def test_labels_consistent_with_costs(random_costs):
    result = run_kmedoid(random_costs, 3, rng=np.random.default_rng(1))
    sub = random_costs[list(result.medoids), :]

    np.testing.assert_allclose(result.costs, sub[result.labels, np.arange(40)])
    np.testing.assert_allclose(result.costs, sub.min(axis=0))
    assert result.objective == pytest.approx(result.costs.sum())
    assert run_sanity_checks(random_costs, result)["all_passed"]


def test_two_blocks_scenario(two_blocks):
    for seed in range(10):
        result = run_kmedoid(two_blocks, 2, rng=np.random.default_rng(seed))

        assert {m // 2 for m in result.medoids} == {0, 1}
        assert result.objective == 0.0
        assert result.counts.tolist() == [2, 2]
        assert result.converged


def test_kmpp_finds_true_medoids_on_separated_pairs():
    C = np.array([
        [0, 1, 1000],
        [1, 0, 1000],
        [1000, 1000, 0],
    ], dtype=float)
    result = run_kmedoid(C, 2, init="kmpp", tolfun=1e-20, maxiter=100, rng=np.random.default_rng(0))

    assert sorted(result.medoids) == [0, 2]
    assert result.objective == 1.0
    assert result.state is LoopState.CONVERGED


def test_blobs_recovered_from_one_seed_per_blob(blobs):
    C, truth = blobs
    result = run_kmedoid(C, [0, 10, 20])

    metrics = compute_clustering_metrics(truth, result.labels)
    assert metrics["ari"] == pytest.approx(1.0)
    assert result.counts.tolist() == [10, 10, 10]
    assert result.converged


def test_explicit_seeds_bypass_seeding(line_costs):
    result = run_kmedoid(line_costs, [0, 3])

    assert result.medoids == (1, 4)
    assert result.history == (6.0, 4.0)
    assert result.n_iter == 1
    assert result.state is LoopState.CONVERGED
    assert result.labels.tolist() == [0, 0, 0, 1, 1, 1]


def test_maxiter_zero_returns_seeded_assignment(line_costs):
    result = run_kmedoid(line_costs, np.array([0, 3]), maxiter=0)

    assert result.state is LoopState.MAX_ITER_REACHED
    assert not result.converged
    assert result.medoids == (0, 3)
    assert result.n_iter == 0
    assert result.objective == 6.0
    assert result.costs.tolist() == [0, 1, 2, 0, 1, 2]


def test_maxiter_zero_keeps_seeder_output(random_costs):
    expected = KMeansPlusPlusSeeder().seed(random_costs, 3, np.random.default_rng(5))
    result = run_kmedoid(random_costs, 3, maxiter=0, rng=np.random.default_rng(5))
    assert result.medoids == expected

    expected = UniformSeeder().seed(random_costs, 3, np.random.default_rng(5))
    result = run_kmedoid(random_costs, 3, init="rand", maxiter=0, rng=np.random.default_rng(5))
    assert result.medoids == expected


def test_max_iter_reached_is_a_result(line_costs):
    result = run_kmedoid(line_costs, [0, 3], maxiter=1)

    assert result.state is LoopState.MAX_ITER_REACHED
    assert result.medoids == (1, 4)
    assert result.objective == 4.0
    assert result.n_iter == 1


def test_large_tolerance_stops_early(line_costs):
    result = run_kmedoid(line_costs, [0, 3], tolfun=10.0)

    assert result.state is LoopState.CONVERGED
    assert result.n_iter == 1
    assert result.medoids == (1, 4)


def test_same_seed_same_result(random_costs):
    a = run_kmedoid(random_costs, 4, rng=11)
    b = run_kmedoid(random_costs, 4, options={"seed": 11})
    c = run_kmedoid(random_costs, 4, KMedoidOptions(seed=11))

    assert a.medoids == b.medoids == c.medoids
    np.testing.assert_array_equal(a.labels, b.labels)


def test_degenerate_cluster_is_reseeded():
    C = np.array([
        [0, 1, 5, 5],
        [5, 9, 5, 5],
        [5, 5, 0, 1],
        [5, 5, 1, 0],
    ], dtype=float)
    result = run_kmedoid(C, [0, 1, 2], rng=np.random.default_rng(0))

    assert result.n_reseeded == 1
    assert result.medoids == (0, 3, 2)
    assert result.counts.tolist() == [2, 1, 1]
    assert result.converged
    assert result.objective == 1.0
    assert run_sanity_checks(C, result)["labels_are_nearest"]

    with pytest.raises(DegenerateCluster):
        run_kmedoid(C, [0, 1, 2], on_degenerate="raise")


@pytest.mark.parametrize("k_or_seeds", [
    1, 0, -2, 6, 7, True, 2.0, "2", [1, 1], [0, 6], [0], [0, 1, 2, 3, 4, 5],
])
def test_invalid_k_or_seeds(k_or_seeds, line_costs):
    with pytest.raises(InvalidConfig):
        run_kmedoid(line_costs, k_or_seeds)


def test_invalid_matrix():
    with pytest.raises(InvalidConfig):
        run_kmedoid(np.zeros((3, 4)), 2)


@pytest.mark.parametrize("options", [
    {"init": "farthest"},
    {"maxiter": -1},
    {"maxiter": 1.5},
    {"tolfun": -1e-3},
    {"display": "loud"},
    {"costfun": "sqeuclidean"},
])
def test_invalid_options(options, line_costs):
    with pytest.raises(InvalidConfig):
        run_kmedoid(line_costs, 2, options)


def test_display_levels(line_costs, capsys):
    run_kmedoid(line_costs, [0, 3], display="off")
    assert capsys.readouterr().out == ""

    run_kmedoid(line_costs, [0, 3], display="final")
    out = capsys.readouterr().out
    assert "converged" in out
    assert "Iter" not in out

    run_kmedoid(line_costs, [0, 3], verbosity="iter")
    out = capsys.readouterr().out
    assert "Iter" in out
    assert "converged" in out


def test_result_to_dict(line_costs):
    d = run_kmedoid(line_costs, [0, 3]).to_dict()

    assert d["medoids"] == [1, 4]
    assert d["counts"] == [3, 3]
    assert d["state"] == "converged"
    assert d["converged"] is True
    assert d["labels"] == [0, 0, 0, 1, 1, 1]


def test_fallback_generator_is_reseedable(random_costs):
    from kmedoid.core import set_seed

    set_seed(99)
    first = run_kmedoid(random_costs, 4, init="rand", maxiter=0)
    set_seed(99)
    second = run_kmedoid(random_costs, 4, init="rand", maxiter=0)

    assert first.medoids == second.medoids


def test_result_views(line_costs):
    result = run_kmedoid(line_costs, [3, 0])

    assert result.medoids == (4, 1)
    assert result.k == 2
    assert result.medoid_labels.tolist() == [1, 1, 1, 4, 4, 4]
    assert result.clusters() == [[3, 4, 5], [0, 1, 2]]
