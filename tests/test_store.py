import pytest

from logic.store import DBStore, model_name_for, simple_hash
from model.models import LegalRiskPrediction


def test_seed_data_is_loaded(db):
    assert {c.case_id for c in db.get_all_cases()} == {"case-001", "case-002", "case-003"}
    assert len(db.get_all_analysis_runs()) == 5
    assert [r.report_id for r in db.get_all_reports()] == ["report-002", "report-001"]
    assert len(db.get_all_audit_logs()) == 5
    assert db.get_current_user().user_id == "user-001"


def test_reset_discards_new_records(db):
    db.create_case("Extra", "text")
    db.reset()
    assert len(db.get_all_cases()) == 3


def test_simple_hash_format():
    h = simple_hash("hello")
    assert len(h) == 16
    assert h == format(99162322, "x").rjust(16, "0")
    assert simple_hash("") == "0" * 16


def test_simple_hash_is_deterministic():
    assert simple_hash("same input") == simple_hash("same input")
    assert simple_hash("a") != simple_hash("b")


def test_model_name():
    assert model_name_for("RISK") == "LegalRisk-RISK-v1.0"


def test_create_case(db):
    case = db.create_case("Title", "raw", "consumer")
    assert db.get_case(case.case_id) is case
    assert case.user_id == db.current_user_id
    assert case.domain_hint == "consumer"


def test_delete_case(db):
    assert db.delete_case("case-001") is True
    assert db.get_case("case-001") is None
    assert db.delete_case("case-001") is False


def test_analysis_run_lifecycle(db):
    run = db.create_analysis_run("case-001", "CLASSIFY", "some input")
    assert run.status == "running"
    assert run.model_name == "LegalRisk-CLASSIFY-v1.0"
    assert run.input_hash == simple_hash("some input")
    assert run.finished_at is None

    db.complete_analysis_run(run.run_id, True, 1234)
    assert run.status == "success"
    assert run.latency_ms == 1234
    assert run.finished_at is not None

    db.complete_analysis_run(run.run_id, False, 10)
    assert run.status == "fail"


def test_complete_unknown_run_is_ignored(db):
    db.complete_analysis_run("missing", True, 1)
    assert db.get_analysis_run("missing") is None


def test_runs_newest_first(db):
    runs = db.get_all_analysis_runs()
    assert [r.run_id for r in runs] == ["run-005", "run-004", "run-003", "run-002", "run-001"]
    assert [r.run_id for r in db.get_recent_analysis_runs(2)] == ["run-005", "run-004"]


def test_runs_by_type(db):
    assert [r.run_id for r in db.get_analysis_runs_by_type("EMOTION")] == ["run-003"]
    assert db.get_analysis_runs_by_type("UNKNOWN") == []


def test_results_newest_saved_first(db):
    newer = LegalRiskPrediction("run-new", 10, 90, "low", [], "")
    db.save_risk_prediction(newer)
    results = db.get_all_risk_predictions()
    assert results[0] is newer
    assert db.get_risk_prediction("run-002").risk_score == 88


def test_seed_results(db):
    assert db.get_classification_result("run-001").top_label == "Consumer"
    assert db.get_emotion_escalation("run-003").stage == "Threats and pressure"
    assert len(db.get_similar_case_match("run-004").top_matches) == 3
    assert db.get_strategy_recommendation("run-005").expected_win_probability == 85


def test_reports(db):
    report = db.create_report("case-001", ["run-001"])
    assert report.report_status == "draft"
    assert db.get_all_reports()[0] is report

    db.update_report_status(report.report_id, "final")
    assert report.report_status == "final"

    with pytest.raises(ValueError):
        db.update_report_status(report.report_id, "archived")

    db.update_report_status("missing", "final")


def test_seed_final_report_has_pdf(db):
    report = db.get_report("report-002")
    assert report.report_status == "final"
    assert report.pdf_url == "/reports/report-002.pdf"


def test_log_action(db):
    db.log_action("EXPORT_CSV", "cases", {"rows": 3})
    log = db.get_all_audit_logs()[0]
    assert log.action == "EXPORT_CSV"
    assert log.meta_json == {"rows": 3}
    assert log.user_id == db.current_user_id


def test_log_action_rejects_unknown_action(db):
    before = len(db.get_all_audit_logs())
    with pytest.raises(ValueError):
        db.log_action("DROP_TABLE", "cases")
    assert len(db.get_all_audit_logs()) == before


def test_sample_records(db):
    assert len(db.get_sample_records("cases", limit=2)) == 2
    assert db.get_sample_records("analysis_runs")[0].run_id == "run-005"
    assert db.get_sample_records("nope") == []


def test_custom_user_id():
    store = DBStore(user_id="someone")
    assert store.get_current_user().user_id == "someone"
    assert all(c.user_id == "someone" for c in store.get_all_cases())
