import csv
import json
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from model.models import ANALYSIS_TYPES, AnalysisRun, Report
from logic.backend_mock import MockFetchError, build_result, delay_ms, load_fixture
from logic.config import Settings
from logic.store import DBStore
from logic.validation import validate_analysis_text

CASE_TITLES = {
    "CLASSIFY": "Dispute type classification",
    "RISK": "Legal risk prediction",
    "EMOTION": "Emotion escalation analysis",
    "SIMILAR": "Similar case matching",
    "STRATEGY": "Early resolution strategy",
}

RESTORED_TITLES = {
    "CLASSIFY": ("Restored dispute case", "consumer"),
    "RISK": ("Restored risk analysis", "contract"),
    "EMOTION": ("Restored emotion analysis", None),
    "SIMILAR": ("Restored precedent search", "contract"),
    "STRATEGY": ("Restored strategy", "contract"),
}


class AnalysisError(RuntimeError):
    """The mock analysis failed; the run has already been marked as `fail`."""


@dataclass
class PendingAnalysis:
    run: AnalysisRun
    started: float      # time.monotonic() at begin


def _settings(settings: Optional[Settings]) -> Settings:
    return settings or Settings.from_env()


def _check_type(analysis_type: str):
    if analysis_type not in ANALYSIS_TYPES:
        raise ValueError(f"Unknown analysis type: {analysis_type}")


def save_result(db: DBStore, analysis_type: str, result):
    savers = {
        "CLASSIFY": db.save_classification_result,
        "RISK": db.save_risk_prediction,
        "EMOTION": db.save_emotion_escalation,
        "SIMILAR": db.save_similar_case_match,
        "STRATEGY": db.save_strategy_recommendation,
    }
    savers[analysis_type](result)


def all_results(db: DBStore, analysis_type: str) -> List[Any]:
    _check_type(analysis_type)
    getters = {
        "CLASSIFY": db.get_all_classification_results,
        "RISK": db.get_all_risk_predictions,
        "EMOTION": db.get_all_emotion_escalations,
        "SIMILAR": db.get_all_similar_case_matches,
        "STRATEGY": db.get_all_strategy_recommendations,
    }
    return getters[analysis_type]()


# -----------------------------------------------------------------------------
# Analysis workflow
# -----------------------------------------------------------------------------

def validate_analysis_input(text: str, settings: Optional[Settings] = None) -> str:
    return validate_analysis_text(text, _settings(settings).min_chars)


def begin_analysis(db: DBStore, analysis_type: str, text: str,
                   settings: Optional[Settings] = None) -> PendingAnalysis:
    """Validate the input and record a case plus a running analysis run."""
    _check_type(analysis_type)
    validate_analysis_input(text, settings)
    case = db.create_case(CASE_TITLES[analysis_type], text)
    run = db.create_analysis_run(case.case_id, analysis_type, text)
    return PendingAnalysis(run=run, started=time.monotonic())


def complete_analysis(db: DBStore, pending: PendingAnalysis, settings: Optional[Settings] = None):
    """Load the mock response for a pending run and store it as the run's result."""
    run = pending.run
    latency = int((time.monotonic() - pending.started) * 1000)
    try:
        payload = load_fixture(run.analysis_type, _settings(settings).mock_dir)
        result = build_result(run.analysis_type, run.run_id, payload)
    except MockFetchError as e:
        db.complete_analysis_run(run.run_id, False, latency)
        print(f"[Backend] {run.analysis_type} run {run.run_id} failed: {e}")
        raise AnalysisError("An error occurred during the analysis.") from e

    save_result(db, run.analysis_type, result)
    db.complete_analysis_run(run.run_id, True, latency)
    db.log_action("VIEW_RESULT", run.run_id, {"analysis_type": run.analysis_type})
    print(f"[Backend] {run.analysis_type} run {run.run_id} finished in {latency} ms")
    return result


def run_analysis(db: DBStore, analysis_type: str, text: str, settings: Optional[Settings] = None):
    """Blocking variant: begin, wait out the simulated latency, complete."""
    settings = _settings(settings)
    pending = begin_analysis(db, analysis_type, text, settings)
    time.sleep(delay_ms(analysis_type, settings.delay_scale) / 1000.0)
    return complete_analysis(db, pending, settings)


def latest_result(db: DBStore, analysis_type: str, restore: bool = True,
                  settings: Optional[Settings] = None):
    """
    Newest stored result for the analysis type.

    With `restore`, an empty table is refilled from the fixture through a
    "restored" case and run, the way a page recovers after a reload.
    Returns None if nothing is stored and restoring fails.
    """
    existing = all_results(db, analysis_type)
    if existing:
        return existing[0]
    if not restore:
        return None

    title, hint = RESTORED_TITLES[analysis_type]
    try:
        payload = load_fixture(analysis_type, _settings(settings).mock_dir)
    except MockFetchError as e:
        print(f"[Backend] Failed to restore initial {analysis_type} data: {e}")
        return None
    case = db.create_case(title, "Automatically restored sample data.", hint)
    run = db.create_analysis_run(case.case_id, analysis_type, "Sample Text")
    try:
        result = build_result(analysis_type, run.run_id, payload)
    except MockFetchError as e:
        db.complete_analysis_run(run.run_id, False, 0)
        print(f"[Backend] Failed to restore initial {analysis_type} data: {e}")
        return None
    save_result(db, analysis_type, result)
    db.complete_analysis_run(run.run_id, True, 0)
    return result


# -----------------------------------------------------------------------------
# Reports
# -----------------------------------------------------------------------------

def create_summary_report(db: DBStore, limit: int = 5) -> Optional[Report]:
    """Bundle the most recent runs into a draft report for the newest run's case."""
    runs = db.get_recent_analysis_runs(limit)
    if not runs:
        return None
    case_id = runs[0].case_id
    report = db.create_report(case_id, [r.run_id for r in runs])
    db.log_action("CREATE_REPORT", case_id, {"type": "premium"})
    return report


def included_analysis_types(db: DBStore, report: Report) -> List[str]:
    types: List[str] = []
    for run_id in report.included_run_ids:
        run = db.get_analysis_run(run_id)
        if run and run.analysis_type not in types:
            types.append(run.analysis_type)
    return types


def _get_report(db: DBStore, report_id: str) -> Report:
    report = db.get_report(report_id)
    if report is None:
        raise KeyError(f"Report '{report_id}' not found.")
    return report


def finalize_report(db: DBStore, report_id: str) -> Report:
    report = _get_report(db, report_id)
    db.update_report_status(report_id, "final")
    return report


def _report_lines(db: DBStore, report: Report) -> List[str]:
    case = db.get_case(report.case_id)
    lines = [
        "Legal Risk Analysis Report",
        "",
        f"Report ID: {report.report_id}",
        f"Status: {report.report_status}",
        f"Created: {report.created_at}",
        f"Case: {case.title if case else report.case_id}",
        "",
        "Included analyses:",
    ]
    for run_id in report.included_run_ids:
        run = db.get_analysis_run(run_id)
        if run is None:
            lines.append(f"  - {run_id} (missing)")
            continue
        latency = f"{run.latency_ms} ms" if run.latency_ms is not None else "-"
        lines.append(f"  - {run.analysis_type:<9} {run.model_name}  {run.status}  {latency}")
    return lines


def export_report_pdf(db: DBStore, report_id: str, path: Optional[str] = None,
                      settings: Optional[Settings] = None) -> str:
    """Render a one-page summary of the report to PDF and remember where it went."""
    report = _get_report(db, report_id)
    if path is None:
        export_dir = _settings(settings).export_dir
        os.makedirs(export_dir, exist_ok=True)
        path = os.path.join(export_dir, f"{report.report_id}.pdf")

    page = Image.new("RGB", (1240, 1754), "white")  # A4 at 150 dpi
    draw = ImageDraw.Draw(page)
    font = ImageFont.load_default()
    y = 80
    for line in _report_lines(db, report):
        draw.text((80, y), line, fill="black", font=font)
        y += 28
    page.save(path, "PDF", resolution=150.0)

    report.pdf_url = path
    db.log_action("EXPORT_PDF", report.report_id)
    print(f"[Backend] Exported report {report.report_id} to {path}")
    return path


def _csv_value(v: Any) -> Any:
    if isinstance(v, (list, dict)):
        return json.dumps(v, ensure_ascii=False)
    return v


def export_records_csv(db: DBStore, table_name: str, path: Optional[str] = None,
                       limit: int = 1000, settings: Optional[Settings] = None) -> str:
    records = [r.to_dict() for r in db.get_sample_records(table_name, limit)]
    if path is None:
        export_dir = _settings(settings).export_dir
        os.makedirs(export_dir, exist_ok=True)
        path = os.path.join(export_dir, f"{table_name}.csv")

    fieldnames: List[str] = []
    for rec in records:
        for key in rec:
            if key not in fieldnames:
                fieldnames.append(key)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for rec in records:
            writer.writerow({k: _csv_value(v) for k, v in rec.items()})

    db.log_action("EXPORT_CSV", table_name, {"rows": len(records)})
    print(f"[Backend] Exported {len(records)} {table_name} rows to {path}")
    return path


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------

def dashboard_stats(db: DBStore) -> Dict[str, Any]:
    runs = db.get_all_analysis_runs()
    finished = [r for r in runs if r.status in ("success", "fail")]
    latencies = np.array([r.latency_ms for r in finished if r.latency_ms is not None], dtype=float)
    successes = np.array([r.status == "success" for r in finished], dtype=bool)
    return {
        "total_runs": len(runs),
        "running": sum(1 for r in runs if r.status == "running"),
        "by_type": {t: sum(1 for r in runs if r.analysis_type == t) for t in ANALYSIS_TYPES},
        "success_rate": float(successes.mean()) if successes.size else 0.0,
        "mean_latency_ms": float(latencies.mean()) if latencies.size else 0.0,
        "cases": len(db.get_all_cases()),
        "reports": len(db.get_all_reports()),
    }


def search_cases(db: DBStore, query: str):
    q = (query or "").lower().strip()
    cases = db.get_all_cases()
    if not q:
        return cases
    return [c for c in cases
            if q in c.case_id.lower() or q in c.title.lower() or q in c.raw_text.lower()]
