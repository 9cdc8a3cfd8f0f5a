from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

ANALYSIS_TYPES = ["CLASSIFY", "RISK", "EMOTION", "SIMILAR", "STRATEGY"]

AUDIT_ACTIONS = [
    "VIEW_RESULT",
    "EXPORT_CSV",
    "EXPORT_PDF",
    "CREATE_REPORT",
    "OPEN_MODAL",
    "RUN_ANALYSIS",
]


class Record:
    """Mixin giving every record a plain-dict view for tables, JSON and CSV."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class User(Record):
    user_id: str
    email: str
    name: str
    role: str           # admin / user
    created_at: str


@dataclass
class Case(Record):
    case_id: str
    user_id: str
    title: str
    raw_text: str
    domain_hint: Optional[str]
    created_at: str     # ISO timestamp


@dataclass
class AnalysisRun(Record):
    run_id: str
    case_id: str
    analysis_type: str
    model_name: str
    status: str         # success / fail / running
    started_at: str
    input_hash: str
    finished_at: Optional[str] = None
    latency_ms: Optional[int] = None


@dataclass
class ClassificationScore(Record):
    label: str
    score: float


@dataclass
class DisputeClassification(Record):
    run_id: str
    top_label: str
    scores: List[ClassificationScore]
    keywords: List[str]
    explanation: str

    @classmethod
    def from_dict(cls, run_id: str, data: Dict[str, Any]) -> "DisputeClassification":
        return cls(
            run_id=run_id,
            top_label=data["top_label"],
            scores=[ClassificationScore(s["label"], float(s["score"])) for s in data["scores"]],
            keywords=list(data.get("keywords", [])),
            explanation=data.get("explanation", ""),
        )


@dataclass
class LegalRiskPrediction(Record):
    run_id: str
    risk_score: int
    win_probability: int
    risk_level: str     # low / medium / high
    risk_factors: List[str]
    notes: str

    @classmethod
    def from_dict(cls, run_id: str, data: Dict[str, Any]) -> "LegalRiskPrediction":
        return cls(
            run_id=run_id,
            risk_score=int(data["risk_score"]),
            win_probability=int(data["win_probability"]),
            risk_level=data["risk_level"],
            risk_factors=list(data.get("risk_factors", [])),
            notes=data.get("notes", ""),
        )


@dataclass
class TrendPoint(Record):
    t: str
    value: float


@dataclass
class EmotionEscalation(Record):
    run_id: str
    stage: str
    aggression_score: int
    escalation_speed: str   # slow / normal / fast
    trend: List[TrendPoint]
    emotion_keywords: List[str]

    @classmethod
    def from_dict(cls, run_id: str, data: Dict[str, Any]) -> "EmotionEscalation":
        return cls(
            run_id=run_id,
            stage=data["stage"],
            aggression_score=int(data["aggression_score"]),
            escalation_speed=data["escalation_speed"],
            trend=[TrendPoint(p["t"], float(p["value"])) for p in data.get("trend", [])],
            emotion_keywords=list(data.get("emotion_keywords", [])),
        )


@dataclass
class IssueCompare(Record):
    input_issue: str
    matched_issue: str


@dataclass
class CaseMatch(Record):
    case_title: str
    similarity: float   # 0..1
    summary: str
    winner: str
    detail: str


@dataclass
class SimilarCaseMatch(Record):
    run_id: str
    issue_compare: List[IssueCompare]
    top_matches: List[CaseMatch]

    @classmethod
    def from_dict(cls, run_id: str, data: Dict[str, Any]) -> "SimilarCaseMatch":
        return cls(
            run_id=run_id,
            issue_compare=[IssueCompare(i["input_issue"], i["matched_issue"])
                           for i in data.get("issue_compare", [])],
            top_matches=[
                CaseMatch(
                    case_title=m["case_title"],
                    similarity=float(m["similarity"]),
                    summary=m.get("summary", ""),
                    winner=m.get("winner", ""),
                    detail=m.get("detail", ""),
                )
                for m in data.get("top_matches", [])
            ],
        )


@dataclass
class StrategySummary(Record):
    key_takeaway: str
    focus_points: List[str] = field(default_factory=list)


@dataclass
class Scenario(Record):
    title: str
    difficulty: str     # easy / medium / hard
    effect: str         # low / medium / high
    description: str
    next_actions: List[str] = field(default_factory=list)


@dataclass
class StrategyRecommendation(Record):
    run_id: str
    expected_win_probability: int
    summary: StrategySummary
    scenarios: List[Scenario]
    disclaimer: str

    @classmethod
    def from_dict(cls, run_id: str, data: Dict[str, Any]) -> "StrategyRecommendation":
        summary = data.get("summary") or {}
        if not isinstance(summary, dict):
            raise ValueError("summary must be an object")
        return cls(
            run_id=run_id,
            expected_win_probability=int(data["expected_win_probability"]),
            summary=StrategySummary(summary.get("key_takeaway", ""), list(summary.get("focus_points", []))),
            scenarios=[
                Scenario(
                    title=s["title"],
                    difficulty=s["difficulty"],
                    effect=s["effect"],
                    description=s.get("description", ""),
                    next_actions=list(s.get("next_actions", [])),
                )
                for s in data.get("scenarios", [])
            ],
            disclaimer=data.get("disclaimer", ""),
        )


@dataclass
class Report(Record):
    report_id: str
    case_id: str
    included_run_ids: List[str]
    report_status: str  # draft / final
    created_at: str
    pdf_url: Optional[str] = None


@dataclass
class AuditLog(Record):
    log_id: str
    user_id: str
    action: str
    target_id: str
    created_at: str
    meta_json: Optional[Dict[str, Any]] = None


@dataclass
class SchemaColumn(Record):
    name: str
    type: str
    is_primary_key: bool
    is_foreign_key: bool
    description: str
    references: Optional[str] = None


@dataclass
class TableSchema(Record):
    table_name: str
    columns: List[SchemaColumn]
