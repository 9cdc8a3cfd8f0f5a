import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from model.models import (
    AUDIT_ACTIONS,
    AnalysisRun,
    AuditLog,
    Case,
    CaseMatch,
    ClassificationScore,
    DisputeClassification,
    EmotionEscalation,
    IssueCompare,
    LegalRiskPrediction,
    Report,
    Scenario,
    SimilarCaseMatch,
    StrategyRecommendation,
    StrategySummary,
    TrendPoint,
    User,
)

REPORT_STATUSES = ("draft", "final")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(dt: datetime) -> str:
    return dt.isoformat(timespec="milliseconds")


def _ago(ms: int) -> str:
    return _iso(_now() - timedelta(milliseconds=ms))


def simple_hash(text: str) -> str:
    """32-bit rolling string hash (h * 31 + unit) as 16 zero-padded hex digits."""
    h = 0
    raw = text.encode("utf-16-le")
    for i in range(0, len(raw), 2):
        unit = raw[i] | (raw[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return format(abs(h), "x").rjust(16, "0")


def generate_id() -> str:
    return str(uuid.uuid4())


def model_name_for(analysis_type: str) -> str:
    return f"LegalRisk-{analysis_type}-v1.0"


class DBStore:
    """
    In-memory record store for the demo.

    Holds users, cases, analysis runs, the five result tables, reports and
    audit logs in plain dicts. Nothing is written to disk: `reset()` (or a
    restart) brings back the seeded sample data.
    """

    def __init__(self, user_id: str = "user-001"):
        self.current_user_id = user_id
        self.reset()

    def reset(self):
        self.users: Dict[str, User] = {}
        self.cases: Dict[str, Case] = {}
        self.analysis_runs: Dict[str, AnalysisRun] = {}
        self.dispute_classifications: Dict[str, DisputeClassification] = {}
        self.legal_risk_predictions: Dict[str, LegalRiskPrediction] = {}
        self.emotion_escalations: Dict[str, EmotionEscalation] = {}
        self.similar_case_matches: Dict[str, SimilarCaseMatch] = {}
        self.strategy_recommendations: Dict[str, StrategyRecommendation] = {}
        self.reports: Dict[str, Report] = {}
        self.audit_logs: Dict[str, AuditLog] = {}

        self.users[self.current_user_id] = User(
            user_id=self.current_user_id,
            email="demo@legalrisk.ai",
            name="Demo User",
            role="user",
            created_at=_iso(_now()),
        )
        self._seed()

    # -------------------------------------------------------------------------
    # Sample data
    # -------------------------------------------------------------------------

    def _seed(self):
        uid = self.current_user_id
        for case in (
            Case("case-001", uid, "Online store refund dispute",
                 "Withdrawal refused after buying electronics from an online store",
                 "consumer", _ago(3_600_000)),
            Case("case-002", uid, "Commercial lease renewal refusal",
                 "Landlord refuses lease renewal citing remodeling",
                 "contract", _ago(7_200_000)),
            Case("case-003", uid, "Damages claim for breach of contract",
                 "Received a damages claim for breach of Article 5 of the contract",
                 "contract", _ago(10_800_000)),
        ):
            self.cases[case.case_id] = case

        def seed_run(run_id, case_id, analysis_type, started_ms, latency, input_hash):
            run = AnalysisRun(
                run_id=run_id,
                case_id=case_id,
                analysis_type=analysis_type,
                model_name=model_name_for(analysis_type),
                status="success",
                started_at=_ago(started_ms),
                finished_at=_ago(started_ms - latency),
                latency_ms=latency,
                input_hash=input_hash,
            )
            self.analysis_runs[run_id] = run
            return run

        seed_run("run-001", "case-001", "CLASSIFY", 3_500_000, 1500, "abc123")
        self.dispute_classifications["run-001"] = DisputeClassification(
            run_id="run-001",
            top_label="Consumer",
            scores=[
                ClassificationScore("Consumer", 0.92),
                ClassificationScore("Contract", 0.06),
                ClassificationScore("Administrative", 0.02),
            ],
            keywords=["Consumer Protection Act", "refund refusal", "e-commerce",
                      "contract termination", "unfair charge"],
            explanation="Strong refund, withdrawal and advertising dispute patterns; "
                        "consumer protection is the core issue.",
        )

        seed_run("run-002", "case-003", "RISK", 3_400_000, 1500, "def456")
        self.legal_risk_predictions["run-002"] = LegalRiskPrediction(
            run_id="run-002",
            risk_score=88,
            win_probability=85,
            risk_level="high",
            risk_factors=[
                "Unilateral termination claim",
                "Specific damages amount (50M KRW)",
                "Threat of civil/criminal action",
                "Breach of a specific clause (Article 5)",
                "Stated intent to retain counsel",
            ],
            notes="This score is a reference indicator derived from the strength of legal "
                  "expressions and dispute patterns in the input text.",
        )

        seed_run("run-003", "case-003", "EMOTION", 3_300_000, 1500, "ghi789")
        self.emotion_escalations["run-003"] = EmotionEscalation(
            run_id="run-003",
            stage="Threats and pressure",
            aggression_score=88,
            escalation_speed="fast",
            trend=[TrendPoint("T-3", 62), TrendPoint("T-2", 74), TrendPoint("T-1", 83), TrendPoint("T0", 88)],
            emotion_keywords=["objection", "dismissed", "settle", "unfair", "hard line",
                              "liability", "damages", "lawsuit"],
        )

        seed_run("run-004", "case-002", "SIMILAR", 3_200_000, 1800, "jkl012")
        self.similar_case_matches["run-004"] = SimilarCaseMatch(
            run_id="run-004",
            issue_compare=[
                IssueCompare("Landlord's renewal refusal (remodeling)",
                             "Whether remodeling is a legitimate ground for refusing renewal"),
                IssueCompare("Chance to recover key money",
                             "Whether recovery of key money was obstructed"),
                IssueCompare("Dispute over end of term",
                             "Scope of the renewal right after the lease term expires"),
            ],
            top_matches=[
                CaseMatch("Supreme Court 2018Da252458", 0.95,
                          "Remodeling claims without safety or demolition grounds cannot limit "
                          "the tenant's chance to recover key money.",
                          "Tenant",
                          "[Issue] Obstruction of key money recovery when renewal is refused "
                          "for remodeling\n\n[Holding] Landlord lost"),
                CaseMatch("Seoul Central District Court 2019GaHap12345", 0.88,
                          "Remodeling to raise the building's value is a weak ground for refusal.",
                          "Tenant",
                          "[Issue] Legitimacy of remodeling due to building age\n\n[Holding] Landlord lost"),
                CaseMatch("Synthetic case: safety reconstruction", 0.75,
                          "Reconstruction after a grade-D safety inspection justifies refusal.",
                          "Landlord",
                          "[Issue] Legitimacy of refusal on safety grounds\n\n[Holding] Landlord won"),
            ],
        )

        seed_run("run-005", "case-002", "STRATEGY", 3_100_000, 1800, "mno345")
        self.strategy_recommendations["run-005"] = StrategyRecommendation(
            run_id="run-005",
            expected_win_probability=85,
            summary=StrategySummary(
                "Dragging the dispute past three months can shift the court's view and the other "
                "side's leverage, so an early response pays off.",
                ["Secure evidence first", "List weaknesses in the other side's claims",
                 "Design settlement leverage"],
            ),
            scenarios=[
                Scenario("Administrative fact check + settlement request", "easy", "medium",
                         "Confirm the evidence and basic facts first, then open negotiations.",
                         ["Catalogue evidence", "Generate request letter template", "Build a timeline"]),
                Scenario("Soft notice", "easy", "high",
                         "Take the legal position early while lowering emotional escalation.",
                         ["Tone down wording", "Reduce to three issues", "Set a deadline"]),
                Scenario("Certified letter", "medium", "high",
                         "Formalise the legal declaration so it can serve as evidence later.",
                         ["Legal expert review", "Send via post office", "Monitor response"]),
            ],
            disclaimer="This strategy recommendation is an AI analysis result for reference only.",
        )

        self.reports["report-001"] = Report(
            report_id="report-001",
            case_id="case-002",
            included_run_ids=["run-004", "run-005"],
            report_status="draft",
            created_at=_ago(1_800_000),
        )
        self.reports["report-002"] = Report(
            report_id="report-002",
            case_id="case-003",
            included_run_ids=["run-002", "run-003"],
            report_status="final",
            pdf_url="/reports/report-002.pdf",
            created_at=_ago(900_000),
        )

        seed_logs = [
            ("RUN_ANALYSIS", "run-001"),
            ("VIEW_RESULT", "run-001"),
            ("RUN_ANALYSIS", "run-002"),
            ("VIEW_RESULT", "run-002"),
            ("CREATE_REPORT", "report-001"),
        ]
        for idx, (action, target) in enumerate(seed_logs):
            log_id = f"log-00{idx + 1}"
            self.audit_logs[log_id] = AuditLog(
                log_id=log_id,
                user_id=uid,
                action=action,
                target_id=target,
                created_at=_ago((5 - idx) * 600_000),
            )

    def get_current_user(self) -> Optional[User]:
        return self.users.get(self.current_user_id)

    # -------------------------------------------------------------------------
    # Cases
    # -------------------------------------------------------------------------

    def create_case(self, title: str, raw_text: str, domain_hint: Optional[str] = None) -> Case:
        case = Case(
            case_id=generate_id(),
            user_id=self.current_user_id,
            title=title,
            raw_text=raw_text,
            domain_hint=domain_hint,
            created_at=_iso(_now()),
        )
        self.cases[case.case_id] = case
        print(f"[Store] Created case {case.case_id} ({title})")
        return case

    def get_case(self, case_id: str) -> Optional[Case]:
        return self.cases.get(case_id)

    def get_all_cases(self) -> List[Case]:
        return list(self.cases.values())

    def delete_case(self, case_id: str) -> bool:
        return self.cases.pop(case_id, None) is not None

    # -------------------------------------------------------------------------
    # Analysis runs
    # -------------------------------------------------------------------------

    def create_analysis_run(self, case_id: str, analysis_type: str, input_text: str) -> AnalysisRun:
        run = AnalysisRun(
            run_id=generate_id(),
            case_id=case_id,
            analysis_type=analysis_type,
            model_name=model_name_for(analysis_type),
            status="running",
            started_at=_iso(_now()),
            input_hash=simple_hash(input_text),
        )
        self.analysis_runs[run.run_id] = run
        print(f"[Store] Started {analysis_type} run {run.run_id}")
        return run

    def complete_analysis_run(self, run_id: str, success: bool, latency_ms: int):
        run = self.analysis_runs.get(run_id)
        if not run:
            return
        run.status = "success" if success else "fail"
        run.finished_at = _iso(_now())
        run.latency_ms = latency_ms

    def get_analysis_run(self, run_id: str) -> Optional[AnalysisRun]:
        return self.analysis_runs.get(run_id)

    def get_all_analysis_runs(self) -> List[AnalysisRun]:
        return sorted(self.analysis_runs.values(), key=lambda r: r.started_at, reverse=True)

    def get_recent_analysis_runs(self, limit: int = 10) -> List[AnalysisRun]:
        return self.get_all_analysis_runs()[:limit]

    def get_analysis_runs_by_type(self, analysis_type: str) -> List[AnalysisRun]:
        return [r for r in self.get_all_analysis_runs() if r.analysis_type == analysis_type]

    # -------------------------------------------------------------------------
    # Result tables (newest saved first)
    # -------------------------------------------------------------------------

    def save_classification_result(self, result: DisputeClassification):
        self.dispute_classifications[result.run_id] = result

    def get_classification_result(self, run_id: str) -> Optional[DisputeClassification]:
        return self.dispute_classifications.get(run_id)

    def get_all_classification_results(self) -> List[DisputeClassification]:
        return list(reversed(self.dispute_classifications.values()))

    def save_risk_prediction(self, result: LegalRiskPrediction):
        self.legal_risk_predictions[result.run_id] = result

    def get_risk_prediction(self, run_id: str) -> Optional[LegalRiskPrediction]:
        return self.legal_risk_predictions.get(run_id)

    def get_all_risk_predictions(self) -> List[LegalRiskPrediction]:
        return list(reversed(self.legal_risk_predictions.values()))

    def save_emotion_escalation(self, result: EmotionEscalation):
        self.emotion_escalations[result.run_id] = result

    def get_emotion_escalation(self, run_id: str) -> Optional[EmotionEscalation]:
        return self.emotion_escalations.get(run_id)

    def get_all_emotion_escalations(self) -> List[EmotionEscalation]:
        return list(reversed(self.emotion_escalations.values()))

    def save_similar_case_match(self, result: SimilarCaseMatch):
        self.similar_case_matches[result.run_id] = result

    def get_similar_case_match(self, run_id: str) -> Optional[SimilarCaseMatch]:
        return self.similar_case_matches.get(run_id)

    def get_all_similar_case_matches(self) -> List[SimilarCaseMatch]:
        return list(reversed(self.similar_case_matches.values()))

    def save_strategy_recommendation(self, result: StrategyRecommendation):
        self.strategy_recommendations[result.run_id] = result

    def get_strategy_recommendation(self, run_id: str) -> Optional[StrategyRecommendation]:
        return self.strategy_recommendations.get(run_id)

    def get_all_strategy_recommendations(self) -> List[StrategyRecommendation]:
        return list(reversed(self.strategy_recommendations.values()))

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def create_report(self, case_id: str, included_run_ids: List[str]) -> Report:
        report = Report(
            report_id=generate_id(),
            case_id=case_id,
            included_run_ids=list(included_run_ids),
            report_status="draft",
            created_at=_iso(_now()),
        )
        self.reports[report.report_id] = report
        print(f"[Store] Created report {report.report_id} with {len(included_run_ids)} runs")
        return report

    def get_report(self, report_id: str) -> Optional[Report]:
        return self.reports.get(report_id)

    def get_all_reports(self) -> List[Report]:
        return sorted(self.reports.values(), key=lambda r: r.created_at, reverse=True)

    def update_report_status(self, report_id: str, status: str):
        if status not in REPORT_STATUSES:
            raise ValueError(f"Unknown report status: {status}")
        report = self.reports.get(report_id)
        if report:
            report.report_status = status

    # -------------------------------------------------------------------------
    # Audit logs
    # -------------------------------------------------------------------------

    def log_action(self, action: str, target_id: str, meta: Optional[Dict[str, Any]] = None):
        if action not in AUDIT_ACTIONS:
            raise ValueError(f"Unknown audit action: {action}")
        log = AuditLog(
            log_id=generate_id(),
            user_id=self.current_user_id,
            action=action,
            target_id=target_id,
            meta_json=meta,
            created_at=_iso(_now()),
        )
        self.audit_logs[log.log_id] = log

    def get_all_audit_logs(self) -> List[AuditLog]:
        return sorted(self.audit_logs.values(), key=lambda l: l.created_at, reverse=True)

    # -------------------------------------------------------------------------
    # Display helpers
    # -------------------------------------------------------------------------

    def get_sample_records(self, table_name: str, limit: int = 5) -> List[Any]:
        getters = {
            "users": lambda: list(self.users.values()),
            "cases": self.get_all_cases,
            "analysis_runs": self.get_all_analysis_runs,
            "dispute_classifications": self.get_all_classification_results,
            "legal_risk_predictions": self.get_all_risk_predictions,
            "emotion_escalations": self.get_all_emotion_escalations,
            "similar_case_matches": self.get_all_similar_case_matches,
            "strategy_recommendations": self.get_all_strategy_recommendations,
            "reports": self.get_all_reports,
            "audit_logs": self.get_all_audit_logs,
        }
        getter = getters.get(table_name)
        if getter is None:
            return []
        return getter()[:limit]
