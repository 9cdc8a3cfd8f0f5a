import json
import os
from typing import Any, Dict, Optional

from model.models import (
    DisputeClassification,
    EmotionEscalation,
    LegalRiskPrediction,
    SimilarCaseMatch,
    StrategyRecommendation,
)
from logic.config import MOCK_DIR

FIXTURES = {
    "CLASSIFY": "classify.json",
    "RISK": "risk.json",
    "EMOTION": "emotion.json",
    "SIMILAR": "similar.json",
    "STRATEGY": "strategy.json",
}

# simulated model latency per analysis type
DELAYS_MS = {
    "CLASSIFY": 1500,
    "RISK": 1500,
    "EMOTION": 1500,
    "SIMILAR": 1800,
    "STRATEGY": 1800,
}

RESULT_TYPES = {
    "CLASSIFY": DisputeClassification,
    "RISK": LegalRiskPrediction,
    "EMOTION": EmotionEscalation,
    "SIMILAR": SimilarCaseMatch,
    "STRATEGY": StrategyRecommendation,
}


class MockFetchError(RuntimeError):
    """A fixture could not be read or does not have the expected shape."""


def _check_type(analysis_type: str):
    if analysis_type not in FIXTURES:
        raise ValueError(f"Unknown analysis type: {analysis_type}")


def fixture_path(analysis_type: str, mock_dir: Optional[str] = None) -> str:
    _check_type(analysis_type)
    return os.path.join(mock_dir or MOCK_DIR, FIXTURES[analysis_type])


def delay_ms(analysis_type: str, scale: float = 1.0) -> int:
    _check_type(analysis_type)
    return int(DELAYS_MS[analysis_type] * scale)


def load_fixture(analysis_type: str, mock_dir: Optional[str] = None) -> Dict[str, Any]:
    """Read the static JSON payload standing in for the model response."""
    path = fixture_path(analysis_type, mock_dir)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise MockFetchError(f"Failed to load mock data '{path}': {e}") from e
    if not isinstance(data, dict):
        raise MockFetchError(f"Mock data '{path}' must be a JSON object")
    return data


def build_result(analysis_type: str, run_id: str, payload: Dict[str, Any]):
    """Turn a fixture payload into the typed result record for `run_id`."""
    _check_type(analysis_type)
    try:
        return RESULT_TYPES[analysis_type].from_dict(run_id, payload)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise MockFetchError(f"Mock data for {analysis_type} is malformed: {e}") from e
