import pytest

from logic.config import MOCK_DIR, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LEGALRISK_MOCK_DIR", "LEGALRISK_DELAY_SCALE", "LEGALRISK_MIN_CHARS",
                 "LEGALRISK_TOAST_MS", "LEGALRISK_EXPORT_DIR"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = Settings.from_env()
    assert s.mock_dir == MOCK_DIR
    assert s.delay_scale == 1.0
    assert s.min_chars == 30
    assert s.toast_ms == 3000
    assert s.export_dir.endswith("exports")


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("LEGALRISK_MOCK_DIR", str(tmp_path))
    monkeypatch.setenv("LEGALRISK_DELAY_SCALE", "0.25")
    monkeypatch.setenv("LEGALRISK_MIN_CHARS", "10")
    monkeypatch.setenv("LEGALRISK_TOAST_MS", "1000")
    monkeypatch.setenv("LEGALRISK_EXPORT_DIR", str(tmp_path / "out"))
    s = Settings.from_env()
    assert s.mock_dir == str(tmp_path)
    assert s.delay_scale == 0.25
    assert s.min_chars == 10
    assert s.toast_ms == 1000
    assert s.export_dir == str(tmp_path / "out")


def test_explicit_mock_dir_wins(monkeypatch, tmp_path):
    monkeypatch.setenv("LEGALRISK_MOCK_DIR", "/elsewhere")
    assert Settings.from_env(mock_dir=str(tmp_path)).mock_dir == str(tmp_path)


def test_blank_values_use_defaults(monkeypatch):
    monkeypatch.setenv("LEGALRISK_DELAY_SCALE", "  ")
    assert Settings.from_env().delay_scale == 1.0


@pytest.mark.parametrize("name,value", [("LEGALRISK_DELAY_SCALE", "fast"),
                                        ("LEGALRISK_MIN_CHARS", "3.5"),
                                        ("LEGALRISK_DELAY_SCALE", "-1")])
def test_bad_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(RuntimeError):
        Settings.from_env()
