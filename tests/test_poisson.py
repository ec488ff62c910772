import math

import pytest

from core.models import ScoreProbability
from core.poisson import (
    calculate_expected_goals,
    calculate_poisson_prediction,
    compute_outcome_distribution,
    compute_outcome_probs,
    most_likely_score,
    poisson_pmf,
    score_matrix,
)


def test_poisson_pmf_known_values():
    assert poisson_pmf(2, 0) == pytest.approx(0.1353, abs=1e-3)
    assert poisson_pmf(2, 1) == pytest.approx(0.2707, abs=1e-3)
    assert poisson_pmf(2, 2) == pytest.approx(0.2707, abs=1e-3)


@pytest.mark.parametrize("lmbda", [0.0, 0.3, 1.0, 2.5, 7.0])
def test_poisson_pmf_zero_goals_is_exp_minus_lambda(lmbda):
    assert poisson_pmf(lmbda, 0) == pytest.approx(math.exp(-lmbda))


def test_poisson_pmf_negative_k_is_zero():
    assert poisson_pmf(2, -1) == 0
    assert poisson_pmf(0, -3) == 0


def test_poisson_pmf_lambda_zero_is_degenerate():
    assert poisson_pmf(0, 0) == 1
    for k in range(1, 8):
        assert poisson_pmf(0, k) == 0


def test_poisson_pmf_matches_closed_form():
    lmbda, k = 3.7, 9
    expected = math.exp(-lmbda) * lmbda**k / math.factorial(k)
    assert poisson_pmf(lmbda, k) == pytest.approx(expected, rel=1e-12)


@pytest.mark.parametrize("lmbda", [0.1, 1.0, 2.5, 5.0, 10.0])
def test_poisson_pmf_partial_sum_close_to_one(lmbda):
    probs = [poisson_pmf(lmbda, k) for k in range(31)]
    assert all(p >= 0 for p in probs)
    assert abs(sum(probs) - 1.0) < 1e-6


def test_score_matrix_shape_and_cells():
    m = score_matrix(1.2, 0.8, max_goals=4)
    assert len(m) == 5
    assert all(len(row) == 5 for row in m)
    assert m[2][1] == pytest.approx(poisson_pmf(1.2, 2) * poisson_pmf(0.8, 1))
    assert all(p >= 0 for row in m for p in row)


def test_equal_lambdas_are_symmetric_and_draw_in_range():
    out = compute_outcome_distribution(1.5, 1.5, 6)

    assert abs(out.p_home_win - out.p_away_win) < 1e-9
    assert 0.2 < out.p_draw < 0.3
    assert abs(out.p_home_win + out.p_draw + out.p_away_win - 1.0) < 0.01


@pytest.mark.parametrize("lmbda,max_goals", [(0.4, 3), (1.1, 6), (2.9, 8), (4.0, 10)])
def test_symmetry_for_any_bound(lmbda, max_goals):
    out = compute_outcome_distribution(lmbda, lmbda, max_goals)
    assert out.p_home_win == pytest.approx(out.p_away_win, abs=1e-9)


def test_stronger_home_side_is_favourite():
    out = compute_outcome_distribution(2.5, 1.0, 6)

    assert out.p_home_win > out.p_away_win
    assert out.p_home_win > 0.5
    assert out.p_away_win < 0.2


def test_low_scoring_match_favours_under_and_draw():
    out = compute_outcome_distribution(0.3, 0.3, 6)

    assert out.p_over15 < 0.2
    assert out.p_over25 < 0.1
    assert out.p_draw > 0.5


def test_high_scoring_match_favours_over():
    out = compute_outcome_distribution(2.5, 2.5, 6)

    assert out.p_over15 > 0.85
    assert out.p_over25 > 0.65
    assert out.p_over25 < out.p_over15


def test_increasing_home_lambda_is_monotonic():
    lambdas = [0.5, 1.0, 1.5, 2.0, 2.5]
    outs = [compute_outcome_distribution(lh, 1.2, 6) for lh in lambdas]

    for prev, cur in zip(outs, outs[1:]):
        assert cur.p_home_win > prev.p_home_win
        assert cur.p_away_win < prev.p_away_win


def test_buckets_are_not_normalised():
    out = compute_outcome_distribution(3.0, 3.0, 4)
    matrix_total = sum(sum(row) for row in score_matrix(3.0, 3.0, 4))

    assert out.total_mass == pytest.approx(matrix_total)
    assert out.total_mass < 0.99


def test_zero_lambdas_give_certain_goalless_draw():
    out = compute_outcome_distribution(0.0, 0.0, 6)

    assert out.p_draw == 1.0
    assert out.p_home_win == 0.0
    assert out.p_away_win == 0.0
    assert out.p_over15 == 0.0
    assert out.most_likely_score == ScoreProbability(0, 0, 1.0)


def test_most_likely_score_for_typical_match():
    out = compute_outcome_distribution(1.6, 1.1, 6, include_matrix=True)

    assert (out.most_likely_score.home, out.most_likely_score.away) == (1, 1)
    assert out.most_likely_score.probability == pytest.approx(out.matrix[1][1])
    assert out.most_likely_score == most_likely_score(out.matrix)


def test_most_likely_score_ties_keep_first_cell():
    # λ = 1 => P(0) == P(1); empate entre (0,0), (0,1), (1,0), (1,1)
    best = most_likely_score(score_matrix(1.0, 1.0, 6))
    assert (best.home, best.away) == (0, 0)


def test_most_likely_score_of_empty_matrix():
    assert most_likely_score([]) == ScoreProbability(0, 0, 0.0)


def test_matrix_only_when_requested():
    assert compute_outcome_distribution(1.0, 1.0).matrix is None
    with_matrix = compute_outcome_distribution(1.0, 1.0, include_matrix=True)
    assert len(with_matrix.matrix) == 7
    assert "matrix" in with_matrix.to_dict()


def test_compute_outcome_probs_view():
    probs = compute_outcome_probs(1.4, 0.9)
    dist = compute_outcome_distribution(1.4, 0.9)

    assert set(probs) == {"p_home_win", "p_draw", "p_away_win", "p_over15", "p_over25"}
    assert probs["p_home_win"] == dist.p_home_win
    assert probs["p_over25"] == dist.p_over25


def test_legacy_prediction_uses_bound_ten():
    out = calculate_poisson_prediction(1.5, 1.2)

    assert len(out["score_matrix"]) == 11
    assert out["expected_goals"] == {"home": 1.5, "away": 1.2}
    assert out["home_win"] + out["draw"] + out["away_win"] == pytest.approx(1.0, abs=1e-4)


def test_calculate_expected_goals():
    assert calculate_expected_goals(1.2, 0.8) == pytest.approx(2.4)
    assert calculate_expected_goals(1.0, 1.0, league_average_goals=3.0) == pytest.approx(3.0)
