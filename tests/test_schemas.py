from logic.schemas import (
    FEATURE_DOCS,
    RESULT_TABLES,
    erd_relations,
    get_feature_docs,
    get_schema,
    get_schemas,
    get_table_names,
)
from logic.store import DBStore
from model.models import ANALYSIS_TYPES


def test_ten_tables():
    assert len(get_table_names()) == 10
    assert "audit_logs" in get_table_names()


def test_every_result_table_has_a_schema():
    assert set(RESULT_TABLES) == set(ANALYSIS_TYPES)
    for table in RESULT_TABLES.values():
        schema = get_schema(table)
        pk = [c for c in schema.columns if c.is_primary_key]
        assert [c.name for c in pk] == ["run_id"]
        assert pk[0].references == "analysis_runs.run_id"


def test_get_schema_unknown():
    assert get_schema("nope") is None
    assert [s.table_name for s in get_schemas(["cases", "nope", "reports"])] == ["cases", "reports"]


def test_erd_relations():
    relations = erd_relations()
    assert ("cases", "user_id", "users.user_id") in relations
    assert ("reports", "case_id", "cases.case_id") in relations
    referenced = {ref.split(".")[0] for _, _, ref in relations}
    assert referenced <= set(get_table_names())


def test_feature_docs():
    assert set(FEATURE_DOCS) == {t.lower() for t in ANALYSIS_TYPES}
    assert get_feature_docs("risk")["model"] == "LegalRisk-RISK-v1.0"
    assert get_feature_docs("unknown") is FEATURE_DOCS["classify"]


def test_sample_records_cover_every_table():
    db = DBStore()
    for table in get_table_names():
        assert db.get_sample_records(table), table
