import json

import pytest

from logic.backend_mock import (
    MockFetchError,
    build_result,
    delay_ms,
    fixture_path,
    load_fixture,
)
from model.models import (
    ANALYSIS_TYPES,
    DisputeClassification,
    EmotionEscalation,
    LegalRiskPrediction,
    SimilarCaseMatch,
    StrategyRecommendation,
)


def fixture_result(analysis_type, run_id):
    return build_result(analysis_type, run_id, load_fixture(analysis_type))


@pytest.mark.parametrize("analysis_type", ANALYSIS_TYPES)
def test_every_fixture_loads(analysis_type):
    data = load_fixture(analysis_type)
    assert isinstance(data, dict)
    assert "run_id" not in data


def test_delays():
    assert delay_ms("CLASSIFY") == 1500
    assert delay_ms("SIMILAR") == 1800
    assert delay_ms("STRATEGY", 0.5) == 900
    assert delay_ms("RISK", 0) == 0


def test_unknown_type():
    with pytest.raises(ValueError):
        delay_ms("FORECAST")
    with pytest.raises(ValueError):
        fixture_path("FORECAST")


def test_result_types():
    assert isinstance(fixture_result("CLASSIFY", "r1"), DisputeClassification)
    assert isinstance(fixture_result("RISK", "r2"), LegalRiskPrediction)
    assert isinstance(fixture_result("EMOTION", "r3"), EmotionEscalation)
    assert isinstance(fixture_result("SIMILAR", "r4"), SimilarCaseMatch)
    assert isinstance(fixture_result("STRATEGY", "r5"), StrategyRecommendation)


def test_result_carries_run_id():
    result = fixture_result("STRATEGY", "run-xyz")
    assert result.run_id == "run-xyz"
    assert len(result.scenarios) == 3
    assert result.scenarios[0].next_actions


def test_classification_payload():
    result = fixture_result("CLASSIFY", "r")
    assert result.top_label == "Consumer"
    assert result.scores[0].score == pytest.approx(0.92)


def test_missing_directory(tmp_path):
    with pytest.raises(MockFetchError):
        load_fixture("RISK", str(tmp_path))


def test_invalid_json(tmp_path):
    (tmp_path / "risk.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(MockFetchError):
        load_fixture("RISK", str(tmp_path))


def test_non_object_json(tmp_path):
    (tmp_path / "risk.json").write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(MockFetchError):
        load_fixture("RISK", str(tmp_path))


def test_malformed_payload():
    with pytest.raises(MockFetchError):
        build_result("RISK", "r", {"risk_score": "high"})
    with pytest.raises(MockFetchError):
        build_result("CLASSIFY", "r", {"scores": []})


@pytest.mark.parametrize("summary", ["flat string", ["x"], 42])
def test_strategy_summary_must_be_object(summary):
    with pytest.raises(MockFetchError):
        build_result("STRATEGY", "r", {"expected_win_probability": 80, "summary": summary})


def test_list_items_must_be_objects():
    with pytest.raises(MockFetchError):
        build_result("SIMILAR", "r", {"issue_compare": [], "top_matches": ["not a match"]})
    with pytest.raises(MockFetchError):
        build_result("STRATEGY", "r", {"expected_win_probability": 80, "scenarios": ["plan A"]})
