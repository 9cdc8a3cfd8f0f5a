"""Checks for text coming out of the entry widgets.

Everything the UI collects arrives as a string. The helpers here reject input
the mock backend should never see and raise `ValidationError` with a message
that can be shown in a toast or next to the form as-is.
"""

import re
from typing import List, Tuple

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_ANALYSIS_CHARS = 30
MIN_PASSWORD_CHARS = 6


class ValidationError(ValueError):
    """Invalid user input; the message is meant for the user."""


def validate_analysis_text(text: str, min_chars: int = MIN_ANALYSIS_CHARS) -> str:
    """Return the stripped text or raise if it is shorter than `min_chars`."""
    t = (text or "").strip()
    if len(t) < min_chars:
        raise ValidationError(f"Please enter at least {min_chars} characters.")
    return t


def validate_email(email: str) -> str:
    e = (email or "").strip()
    if not EMAIL_RE.match(e):
        raise ValidationError("Enter a valid email address.")
    return e


def password_checks(password: str, confirm: str) -> List[Tuple[str, bool]]:
    """Checklist shown under the signup password fields."""
    return [
        (f"At least {MIN_PASSWORD_CHARS} characters", len(password or "") >= MIN_PASSWORD_CHARS),
        ("Passwords match", bool(password) and password == confirm),
    ]
