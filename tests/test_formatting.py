import pytest

from logic.formatting import (
    RISK_FACTOR_EXPLANATIONS,
    effect_variant,
    difficulty_variant,
    format_datetime,
    gauge_variant,
    highlight_segments,
    risk_level_label,
    similarity_percent,
    similarity_variant,
    speed_variant,
    stage_progress,
    winner_variant,
)
from logic.store import DBStore


def test_risk_level_label():
    assert risk_level_label("high") == ("High Risk", "danger")
    assert risk_level_label("medium") == ("Medium Risk", "warning")
    assert risk_level_label("low") == ("Low Risk", "success")


@pytest.mark.parametrize("value,variant", [(88, "danger"), (70, "danger"), (69, "warning"),
                                           (40, "warning"), (39, "success"), (0, "success")])
def test_gauge_variant(value, variant):
    assert gauge_variant(value) == variant


def test_badge_variants():
    assert speed_variant("fast") == "danger"
    assert speed_variant("slow") == "success"
    assert difficulty_variant("hard") == "danger"
    assert effect_variant("high") == "success"
    assert effect_variant("unknown") == "default"


def test_similarity():
    assert similarity_percent(0.95) == 95
    assert similarity_percent(1.4) == 100
    assert similarity_variant(0.95) == "success"
    assert similarity_variant(0.88) == "primary"
    assert similarity_variant(0.75) == "warning"


def test_winner_variant():
    assert winner_variant("Tenant") == "info"
    assert winner_variant("Landlord") == "warning"
    assert winner_variant("Settled") == "default"


def test_every_seed_factor_has_an_explanation():
    factors = DBStore().get_risk_prediction("run-002").risk_factors
    assert all(f in RISK_FACTOR_EXPLANATIONS for f in factors)


def test_highlight_segments():
    segments = highlight_segments("This is Unfair and a lawsuit follows.")
    assert ("Unfair", True) in segments
    assert ("lawsuit", True) in segments
    assert "".join(s for s, _ in segments) == "This is Unfair and a lawsuit follows."


def test_highlight_prefers_longer_phrase():
    segments = highlight_segments("go all the way", ["all", "all the way"])
    assert segments == [("go ", False), ("all the way", True)]


def test_highlight_edge_cases():
    assert highlight_segments("") == []
    assert highlight_segments("calm words", []) == [("calm words", False)]
    assert highlight_segments("calm words") == [("calm words", False)]


def test_stage_progress():
    assert stage_progress("Threats and pressure") == (2, 75.0)
    assert stage_progress("initial") == (0, 25.0)
    assert stage_progress("Lawsuit imminent") == (3, 100.0)
    assert stage_progress("something else") == (-1, 0.0)


def test_format_datetime():
    assert format_datetime("2024-05-20T14:30:00.000+00:00", with_year=True) == "2024-05-20 14:30"
    assert format_datetime("2024-05-20T14:30:00.000+00:00") == "May 20 14:30"
    assert format_datetime("not a date") == "not a date"
    assert format_datetime(None) == "-"
