import re
from datetime import datetime
from typing import List, Tuple

ANALYSIS_TYPE_LABELS = {
    "CLASSIFY": "Dispute classification",
    "RISK": "Risk prediction",
    "EMOTION": "Emotion analysis",
    "SIMILAR": "Similar precedents",
    "STRATEGY": "Early resolution",
}

RISK_FACTOR_EXPLANATIONS = {
    "Unilateral termination claim":
        "The other party claims unilateral termination, so a dispute over who failed to perform is likely.",
    "Specific damages amount (50M KRW)":
        "A damages claim with a concrete amount signals a strong intent to litigate.",
    "Threat of civil/criminal action":
        "Explicit mention of legal action suggests a preference for litigation over negotiation.",
    "Breach of a specific clause (Article 5)":
        "Citing a specific clause implies the breach claim has a legal basis.",
    "Stated intent to retain counsel":
        "Having already retained a lawyer means litigation preparation is under way.",
}

HIGHLIGHT_WORDS = [
    "unfair", "hard line", "lawsuit", "damages", "liability",
    "all the way", "can't take", "dismissed", "objection", "warning",
]


def risk_level_label(level: str) -> Tuple[str, str]:
    """(text, badge variant) for a risk level."""
    if level == "high":
        return "High Risk", "danger"
    if level == "medium":
        return "Medium Risk", "warning"
    return "Low Risk", "success"


def gauge_variant(value: float) -> str:
    if value >= 70:
        return "danger"
    if value >= 40:
        return "warning"
    return "success"


def speed_variant(speed: str) -> str:
    return {"fast": "danger", "normal": "warning"}.get(speed, "success")


def difficulty_variant(difficulty: str) -> str:
    return {"easy": "success", "medium": "warning", "hard": "danger"}.get(difficulty, "default")


def effect_variant(effect: str) -> str:
    return {"high": "success", "medium": "warning", "low": "default"}.get(effect, "default")


def similarity_percent(similarity: float) -> int:
    return int(round(max(0.0, min(similarity, 1.0)) * 100))


def similarity_variant(similarity: float) -> str:
    pct = similarity_percent(similarity)
    if pct >= 90:
        return "success"
    if pct >= 80:
        return "primary"
    return "warning"


def winner_variant(winner: str) -> str:
    w = winner.lower()
    if "tenant" in w or "plaintiff" in w:
        return "info"
    if "landlord" in w or "defendant" in w:
        return "warning"
    return "default"


def highlight_segments(text: str, words: List[str] = None) -> List[Tuple[str, bool]]:
    """Split `text` into (segment, is_highlighted) pairs, matching words case-insensitively."""
    words = HIGHLIGHT_WORDS if words is None else words
    if not text:
        return []
    words = [w for w in words if w]
    if not words:
        return [(text, False)]
    # longest first so overlapping phrases win over their parts
    pattern = re.compile("|".join(re.escape(w) for w in sorted(words, key=len, reverse=True)),
                         re.IGNORECASE)
    out: List[Tuple[str, bool]] = []
    pos = 0
    for m in pattern.finditer(text):
        if m.start() > pos:
            out.append((text[pos:m.start()], False))
        out.append((m.group(0), True))
        pos = m.end()
    if pos < len(text):
        out.append((text[pos:], False))
    return out


def format_datetime(iso: str, with_year: bool = False) -> str:
    try:
        dt = datetime.fromisoformat(iso)
    except (TypeError, ValueError):
        return iso or "-"
    if with_year:
        return dt.strftime("%Y-%m-%d %H:%M")
    return dt.strftime("%b %d %H:%M")


ESCALATION_STAGES = [
    ("initial", "Initial"),
    ("escalation", "Escalation"),
    ("threat", "Threat"),
    ("lawsuit", "Lawsuit imminent"),
]

STAGE_ALIASES = {
    "initial": "initial",
    "initial conflict": "initial",
    "escalation": "escalation",
    "heightened escalation": "escalation",
    "threat": "threat",
    "threats and pressure": "threat",
    "lawsuit imminent": "lawsuit",
    "lawsuit": "lawsuit",
}


def stage_progress(stage: str) -> Tuple[int, float]:
    """(index into ESCALATION_STAGES, percent complete); unknown stages give (-1, 0.0)."""
    key = STAGE_ALIASES.get((stage or "").strip().lower(), (stage or "").strip().lower())
    for idx, (stage_id, label) in enumerate(ESCALATION_STAGES):
        if key == stage_id or key == label.lower():
            return idx, (idx + 1) / len(ESCALATION_STAGES) * 100.0
    return -1, 0.0
