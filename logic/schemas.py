from typing import Dict, List, Optional, Tuple

from model.models import SchemaColumn, TableSchema


def _col(name, type_, description, pk=False, fk=False, references=None):
    return SchemaColumn(name=name, type=type_, is_primary_key=pk, is_foreign_key=fk,
                        description=description, references=references)


def _result_pk():
    return _col("run_id", "UUID", "Analysis run ID (1:1)", pk=True, fk=True,
                references="analysis_runs.run_id")


SCHEMAS: Dict[str, TableSchema] = {
    "users": TableSchema("users", [
        _col("user_id", "UUID", "User identifier", pk=True),
        _col("email", "VARCHAR(255)", "Login email address"),
        _col("name", "VARCHAR(80)", "User name"),
        _col("role", "VARCHAR(30)", "Role (admin/user)"),
        _col("created_at", "TIMESTAMPTZ", "Account created at"),
    ]),
    "cases": TableSchema("cases", [
        _col("case_id", "UUID", "Case identifier", pk=True),
        _col("user_id", "UUID", "Author ID", fk=True, references="users.user_id"),
        _col("title", "VARCHAR(200)", "Case title"),
        _col("raw_text", "TEXT", "Original input text"),
        _col("domain_hint", "VARCHAR(50)", "Domain hint (consumer/contract/admin)"),
        _col("created_at", "TIMESTAMPTZ", "Case created at"),
    ]),
    "analysis_runs": TableSchema("analysis_runs", [
        _col("run_id", "UUID", "AI run identifier", pk=True),
        _col("case_id", "UUID", "Related case ID", fk=True, references="cases.case_id"),
        _col("analysis_type", "VARCHAR(50)", "Analysis type (CLASSIFY/RISK/EMOTION/SIMILAR/STRATEGY)"),
        _col("model_name", "VARCHAR(80)", "AI model name"),
        _col("status", "VARCHAR(20)", "Run status (success/fail/running)"),
        _col("started_at", "TIMESTAMPTZ", "Run started at"),
        _col("finished_at", "TIMESTAMPTZ", "Run finished at"),
        _col("latency_ms", "INT", "Processing time (ms)"),
        _col("input_hash", "VARCHAR(64)", "Input text hash (deduplication)"),
    ]),
    "dispute_classifications": TableSchema("dispute_classifications", [
        _result_pk(),
        _col("top_label", "VARCHAR(50)", "Top classification label"),
        _col("scores_json", "JSONB", "Per-label scores (bar chart)"),
        _col("keywords_json", "JSONB", "Extracted keywords"),
        _col("explanation", "TEXT", "Explanation of the result"),
    ]),
    "legal_risk_predictions": TableSchema("legal_risk_predictions", [
        _result_pk(),
        _col("risk_score", "INT", "Legal risk score (0-100)"),
        _col("win_probability", "INT", "Win probability (0-100%)"),
        _col("risk_level", "VARCHAR(20)", "Risk level (low/medium/high)"),
        _col("risk_factors_json", "JSONB", "Key risk factors"),
        _col("notes", "TEXT", "Notes on the analysis"),
    ]),
    "emotion_escalations": TableSchema("emotion_escalations", [
        _result_pk(),
        _col("stage", "VARCHAR(30)", "Current emotional stage"),
        _col("aggression_score", "INT", "Aggression index (0-100)"),
        _col("escalation_speed", "VARCHAR(20)", "Escalation speed (slow/normal/fast)"),
        _col("trend_json", "JSONB", "Time series trend"),
        _col("emotion_keywords_json", "JSONB", "Emotion keywords"),
    ]),
    "similar_case_matches": TableSchema("similar_case_matches", [
        _result_pk(),
        _col("issue_compare_json", "JSONB", "Key issue comparison table"),
        _col("top_matches_json", "JSONB", "Top 3 similar precedents"),
    ]),
    "strategy_recommendations": TableSchema("strategy_recommendations", [
        _result_pk(),
        _col("expected_win_probability", "INT", "Expected win probability (0-100%)"),
        _col("summary_json", "JSONB", "Strategy summary"),
        _col("scenarios_json", "JSONB", "Recommended scenarios"),
        _col("disclaimer", "TEXT", "Disclaimer"),
    ]),
    "reports": TableSchema("reports", [
        _col("report_id", "UUID", "Report identifier", pk=True),
        _col("case_id", "UUID", "Related case ID", fk=True, references="cases.case_id"),
        _col("included_run_ids", "JSONB", "Included analysis run IDs"),
        _col("report_status", "VARCHAR(20)", "Report status (draft/final)"),
        _col("pdf_url", "TEXT", "PDF download URL"),
        _col("created_at", "TIMESTAMPTZ", "Report created at"),
    ]),
    "audit_logs": TableSchema("audit_logs", [
        _col("log_id", "UUID", "Log identifier", pk=True),
        _col("user_id", "UUID", "User ID", fk=True, references="users.user_id"),
        _col("action", "VARCHAR(80)", "Action performed (VIEW_RESULT/EXPORT_CSV/...)"),
        _col("target_id", "UUID", "Target entity ID (case/run/report)"),
        _col("meta_json", "JSONB", "Extra metadata"),
        _col("created_at", "TIMESTAMPTZ", "Log created at"),
    ]),
}

# analysis type -> result table
RESULT_TABLES = {
    "CLASSIFY": "dispute_classifications",
    "RISK": "legal_risk_predictions",
    "EMOTION": "emotion_escalations",
    "SIMILAR": "similar_case_matches",
    "STRATEGY": "strategy_recommendations",
}


def get_table_names() -> List[str]:
    return list(SCHEMAS)


def get_schema(table_name: str) -> Optional[TableSchema]:
    return SCHEMAS.get(table_name)


def get_schemas(table_names: List[str]) -> List[TableSchema]:
    return [SCHEMAS[name] for name in table_names if name in SCHEMAS]


def erd_relations() -> List[Tuple[str, str, str]]:
    """(table, column, referenced table.column) for every foreign key."""
    out = []
    for schema in SCHEMAS.values():
        for col in schema.columns:
            if col.is_foreign_key and col.references:
                out.append((schema.table_name, col.name, col.references))
    return out


FEATURE_DOCS = {
    "classify": {
        "title": "Dispute Classification AI",
        "subtitle": "Dispute Classification AI",
        "overview": "Classifies dispute text into Consumer, Contract, Administrative and similar types.",
        "input": "Free-form text about the dispute",
        "output": "Classification label, per-type scores, key keywords, rationale",
        "model": "LegalRisk-CLASSIFY-v1.0 (BERT based)",
        "steps": ["Text input", "Preprocessing", "Model analysis", "Store result", "Display"],
        "tables": [("cases", "Original text"), ("analysis_runs", "Run history"),
                   ("dispute_classifications", "Classification result")],
        "data_flow": ["User input", "Store in DB", "AI analysis", "Show result"],
        "erd": "cases(1) -> analysis_runs(N) -> dispute_classifications(1)",
    },
    "risk": {
        "title": "Legal Risk Prediction AI",
        "subtitle": "Legal Risk Prediction AI",
        "overview": "Scores the strength of legal expressions to estimate risk and win probability.",
        "input": "Warning letters, notices, dispute documents",
        "output": "Risk score (0-100), risk level, expected win probability, risk factors",
        "model": "LegalRisk-RISK-v1.0",
        "steps": ["Text analysis", "Threat level", "Win rate prediction", "Store result"],
        "tables": [("legal_risk_predictions", "Risk result")],
        "data_flow": ["Text input", "AI analysis", "Show result"],
        "erd": "analysis_runs(1) -> legal_risk_predictions(1)",
    },
    "emotion": {
        "title": "Emotion Escalation Analysis AI",
        "subtitle": "Emotion Escalation Analysis AI",
        "overview": "Diagnoses the emotional state and escalation stage of the parties.",
        "input": "Conversations, emails, text messages",
        "output": "Conflict stage, aggression index, escalation speed, emotion keywords",
        "model": "LegalRisk-EMOTION-v1.0",
        "steps": ["Emotion analysis", "Trend calculation", "Stage decision", "Store result"],
        "tables": [("emotion_escalations", "Emotion analysis result")],
        "data_flow": ["Text input", "AI analysis", "Show result"],
        "erd": "analysis_runs(1) -> emotion_escalations(1)",
    },
    "similar": {
        "title": "Similar Case Matching AI",
        "subtitle": "Similar Case Matching AI",
        "overview": "Extracts key issues and compares them with similar precedents.",
        "input": "Description of the dispute",
        "output": "Issue comparison table, top 3 similar precedents",
        "model": "LegalRisk-SIMILAR-v1.0",
        "steps": ["Issue extraction", "Similarity search", "Precedent matching", "Store result"],
        "tables": [("similar_case_matches", "Matching result")],
        "data_flow": ["Text input", "AI search", "Show result"],
        "erd": "analysis_runs(1) -> similar_case_matches(1)",
    },
    "strategy": {
        "title": "Early Resolution Strategy AI",
        "subtitle": "Early Resolution Strategy AI",
        "overview": "Recommends strategies and scenarios for resolving the dispute early.",
        "input": "Dispute situation, relationship, preferred direction",
        "output": "Expected win probability, strategy summary, recommended scenarios",
        "model": "LegalRisk-STRATEGY-v1.0",
        "steps": ["Situation analysis", "Path search", "Scenario generation", "Store result"],
        "tables": [("strategy_recommendations", "Strategy result")],
        "data_flow": ["Text input", "AI analysis", "Show result"],
        "erd": "analysis_runs(1) -> strategy_recommendations(1)",
    },
}


def get_feature_docs(feature_name: str) -> dict:
    return FEATURE_DOCS.get(feature_name, FEATURE_DOCS["classify"])
