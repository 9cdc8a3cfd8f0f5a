import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

MOCK_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "mock")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from e


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from e


@dataclass
class Settings:
    mock_dir: str = MOCK_DIR
    delay_scale: float = 1.0
    min_chars: int = 30
    toast_ms: int = 3000
    export_dir: str = field(default_factory=lambda: os.path.join(os.getcwd(), "exports"))

    @classmethod
    def from_env(cls, mock_dir: Optional[str] = None) -> "Settings":
        """Read settings from the environment (and `.env`, loaded at import)."""
        delay_scale = _float_env("LEGALRISK_DELAY_SCALE", 1.0)
        if delay_scale < 0:
            raise RuntimeError("LEGALRISK_DELAY_SCALE must not be negative")
        return cls(
            mock_dir=mock_dir or os.getenv("LEGALRISK_MOCK_DIR", MOCK_DIR),
            delay_scale=delay_scale,
            min_chars=_int_env("LEGALRISK_MIN_CHARS", 30),
            toast_ms=_int_env("LEGALRISK_TOAST_MS", 3000),
            export_dir=os.getenv("LEGALRISK_EXPORT_DIR", os.path.join(os.getcwd(), "exports")),
        )
