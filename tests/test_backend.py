import csv
import json

import pytest

from logic.backend import (
    AnalysisError,
    all_results,
    begin_analysis,
    complete_analysis,
    create_summary_report,
    dashboard_stats,
    export_records_csv,
    export_report_pdf,
    finalize_report,
    included_analysis_types,
    latest_result,
    run_analysis,
    search_cases,
)
from logic.config import Settings
from logic.validation import ValidationError


def test_short_text_is_rejected_before_anything_is_stored(db, settings):
    cases, runs = len(db.get_all_cases()), len(db.get_all_analysis_runs())
    with pytest.raises(ValidationError) as exc:
        begin_analysis(db, "CLASSIFY", "too short", settings)
    assert "30" in str(exc.value)
    assert len(db.get_all_cases()) == cases
    assert len(db.get_all_analysis_runs()) == runs


def test_whitespace_does_not_count(db, settings):
    with pytest.raises(ValidationError):
        begin_analysis(db, "RISK", " " * 40 + "abc", settings)


def test_min_chars_setting(db, tmp_path):
    settings = Settings(delay_scale=0, min_chars=5, export_dir=str(tmp_path))
    pending = begin_analysis(db, "RISK", "hello world", settings)
    assert pending.run.status == "running"


def test_unknown_analysis_type(db, settings, long_text):
    with pytest.raises(ValueError):
        begin_analysis(db, "FORECAST", long_text, settings)


def test_successful_analysis(db, settings, long_text):
    pending = begin_analysis(db, "CLASSIFY", long_text, settings)
    run = pending.run
    assert db.get_case(run.case_id).raw_text == long_text
    assert run.status == "running"

    result = complete_analysis(db, pending, settings)
    assert result.run_id == run.run_id
    assert run.status == "success"
    assert run.latency_ms is not None and run.latency_ms >= 0
    assert db.get_classification_result(run.run_id) is result
    assert all_results(db, "CLASSIFY")[0] is result

    log = db.get_all_audit_logs()[0]
    assert log.action == "VIEW_RESULT"
    assert log.target_id == run.run_id
    assert log.meta_json == {"analysis_type": "CLASSIFY"}


def test_failed_analysis_marks_run(db, tmp_path, long_text):
    broken = Settings(mock_dir=str(tmp_path / "nowhere"), delay_scale=0, export_dir=str(tmp_path))
    pending = begin_analysis(db, "EMOTION", long_text, broken)
    before = len(db.get_all_emotion_escalations())

    with pytest.raises(AnalysisError) as exc:
        complete_analysis(db, pending, broken)
    assert str(exc.value) == "An error occurred during the analysis."
    assert pending.run.status == "fail"
    assert pending.run.latency_ms is not None
    assert len(db.get_all_emotion_escalations()) == before


def test_malformed_fixture_marks_run_failed(db, tmp_path, long_text):
    (tmp_path / "strategy.json").write_text(
        json.dumps({"expected_win_probability": 80, "summary": "flat string"}), encoding="utf-8")
    broken = Settings(mock_dir=str(tmp_path), delay_scale=0, export_dir=str(tmp_path))
    running_before = dashboard_stats(db)["running"]
    pending = begin_analysis(db, "STRATEGY", long_text, broken)

    with pytest.raises(AnalysisError):
        complete_analysis(db, pending, broken)
    assert db.get_analysis_run(pending.run.run_id).status == "fail"
    assert dashboard_stats(db)["running"] == running_before
    assert not any(r.run_id == pending.run.run_id for r in all_results(db, "STRATEGY"))


def test_run_analysis_blocking(db, settings, long_text):
    result = run_analysis(db, "STRATEGY", long_text, settings)
    assert db.get_analysis_run(result.run_id).status == "success"


def test_latest_result_uses_existing(db, settings):
    assert latest_result(db, "RISK", settings=settings).run_id == "run-002"


def test_latest_result_restores_empty_table(db, settings):
    db.dispute_classifications.clear()
    runs = len(db.get_all_analysis_runs())

    result = latest_result(db, "CLASSIFY", settings=settings)
    assert result is not None
    run = db.get_analysis_run(result.run_id)
    assert run.status == "success"
    assert run.latency_ms == 0
    assert db.get_case(run.case_id).title == "Restored dispute case"
    assert len(db.get_all_analysis_runs()) == runs + 1


def test_latest_result_without_restore(db, settings):
    db.emotion_escalations.clear()
    assert latest_result(db, "EMOTION", restore=False, settings=settings) is None


def test_latest_result_restore_failure(db, tmp_path):
    db.legal_risk_predictions.clear()
    broken = Settings(mock_dir=str(tmp_path), delay_scale=0, export_dir=str(tmp_path))
    assert latest_result(db, "RISK", settings=broken) is None


def test_summary_report(db):
    report = create_summary_report(db)
    assert report.report_status == "draft"
    assert report.included_run_ids == ["run-005", "run-004", "run-003", "run-002", "run-001"]
    assert report.case_id == "case-002"
    log = db.get_all_audit_logs()[0]
    assert log.action == "CREATE_REPORT"
    assert log.meta_json == {"type": "premium"}


def test_summary_report_limit(db):
    assert len(create_summary_report(db, limit=2).included_run_ids) == 2


def test_summary_report_without_runs(db):
    db.analysis_runs.clear()
    assert create_summary_report(db) is None


def test_included_types(db):
    assert included_analysis_types(db, db.get_report("report-001")) == ["SIMILAR", "STRATEGY"]


def test_finalize_report(db):
    assert finalize_report(db, "report-001").report_status == "final"
    with pytest.raises(KeyError):
        finalize_report(db, "missing")


def test_export_pdf(db, settings):
    path = export_report_pdf(db, "report-001", settings=settings)
    with open(path, "rb") as f:
        assert f.read(5) == b"%PDF-"
    assert db.get_report("report-001").pdf_url == path
    assert db.get_all_audit_logs()[0].action == "EXPORT_PDF"


def test_export_pdf_explicit_path(db, tmp_path):
    target = tmp_path / "out.pdf"
    assert export_report_pdf(db, "report-002", path=str(target)) == str(target)
    assert target.exists()


def test_export_pdf_unknown_report(db, settings):
    with pytest.raises(KeyError):
        export_report_pdf(db, "missing", settings=settings)


def test_export_csv(db, tmp_path):
    target = tmp_path / "reports.csv"
    export_records_csv(db, "reports", path=str(target))
    with open(target, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert {r["report_id"] for r in rows} == {"report-001", "report-002"}
    assert json.loads(rows[0]["included_run_ids"])
    log = db.get_all_audit_logs()[0]
    assert log.action == "EXPORT_CSV"
    assert log.meta_json == {"rows": 2}


def test_export_csv_default_dir(db, settings):
    path = export_records_csv(db, "cases", settings=settings)
    assert path.endswith("cases.csv")
    with open(path, encoding="utf-8") as f:
        assert f.readline().startswith("case_id,")


def test_dashboard_stats(db, settings, long_text):
    stats = dashboard_stats(db)
    assert stats["total_runs"] == 5
    assert stats["running"] == 0
    assert stats["success_rate"] == pytest.approx(1.0)
    assert stats["mean_latency_ms"] == pytest.approx((1500 * 3 + 1800 * 2) / 5)
    assert stats["by_type"]["CLASSIFY"] == 1
    assert stats["cases"] == 3
    assert stats["reports"] == 2

    begin_analysis(db, "RISK", long_text, settings)
    stats = dashboard_stats(db)
    assert stats["running"] == 1
    assert stats["by_type"]["RISK"] == 2


def test_search_cases(db):
    assert len(search_cases(db, "")) == 3
    assert [c.case_id for c in search_cases(db, "LEASE")] == ["case-002"]
    assert [c.case_id for c in search_cases(db, "case-003")] == ["case-003"]
    assert search_cases(db, "nothing matches this") == []
