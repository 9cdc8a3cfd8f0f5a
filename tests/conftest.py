import pytest

from logic.config import MOCK_DIR, Settings
from logic.store import DBStore


@pytest.fixture
def db():
    return DBStore()


@pytest.fixture
def settings(tmp_path):
    return Settings(mock_dir=MOCK_DIR, delay_scale=0, export_dir=str(tmp_path / "exports"))


@pytest.fixture
def long_text():
    return "The seller refused a refund for a product returned within seven days of delivery."
