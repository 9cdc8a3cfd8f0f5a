import pytest

from logic.simulation import (
    default_weights,
    rank_cases,
    run_simulation,
    sample_result,
    weighted_similarity,
)
from logic.validation import ValidationError


def test_sample_result():
    result = sample_result()
    assert result.win_probability == pytest.approx(72.4)
    assert result.matched_cases == 42
    assert len(result.similar_cases) == 2
    assert len(result.issues) == 3
    assert result.contrary_case is not None


def test_overall_similarity():
    case = sample_result().similar_cases[0]
    assert case.overall_similarity == round((85 + 90) / 2)


def test_run_simulation_rejects_empty_text():
    with pytest.raises(ValidationError, match="Please describe the dispute."):
        run_simulation("   ")


def test_run_simulation():
    assert run_simulation("A landlord refused renewal.").matched_cases == 42


def test_equal_weights_give_plain_mean():
    case = sample_result().similar_cases[0]
    assert weighted_similarity(case, default_weights()) == pytest.approx((85 + 90 + 88) / 3)


def test_zero_weights_fall_back_to_mean():
    case = sample_result().similar_cases[1]
    zero = {"fact": 0, "legal": 0, "conclusion": 0}
    assert weighted_similarity(case, zero) == pytest.approx((70 + 80 + 75) / 3)


def test_single_weight():
    case = sample_result().similar_cases[0]
    assert weighted_similarity(case, {"fact": 100, "legal": 0, "conclusion": 0}) == pytest.approx(85)


def test_weight_range():
    case = sample_result().similar_cases[0]
    with pytest.raises(ValueError):
        weighted_similarity(case, {"fact": 120, "legal": 0, "conclusion": 0})


def test_rank_cases():
    result = sample_result()
    ranked = rank_cases(result, default_weights())
    assert [c.case_id for c in ranked] == ["case-1", "case-2"]
