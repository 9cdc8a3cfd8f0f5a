import pytest

from logic.auth import Session
from logic.validation import ValidationError, password_checks, validate_analysis_text, validate_email


def test_login_admin():
    session = Session()
    acc = session.login("admin@legalrisk.ai", "admin123")
    assert acc.role == "admin"
    assert session.is_authenticated
    assert session.is_admin


def test_login_user_is_not_admin():
    session = Session()
    session.login(" user@legalrisk.ai ", "user123")
    assert session.is_authenticated
    assert not session.is_admin


@pytest.mark.parametrize("email,password", [("", "x"), ("user@legalrisk.ai", "")])
def test_login_requires_both_fields(email, password):
    with pytest.raises(ValidationError, match="Please enter your email and password."):
        Session().login(email, password)


def test_login_wrong_password():
    session = Session()
    with pytest.raises(ValidationError, match="Incorrect email or password."):
        session.login("user@legalrisk.ai", "wrong")
    assert not session.is_authenticated


def test_logout():
    session = Session()
    session.login("user@legalrisk.ai", "user123")
    session.logout()
    assert session.user is None
    assert not session.is_admin


def test_signup_signs_in():
    session = Session()
    acc = session.signup("New Person", "new@example.com", "secret1", "secret1")
    assert session.user is acc
    assert acc.role == "user"
    session.logout()
    assert session.login("new@example.com", "secret1") is acc


@pytest.mark.parametrize("args,message", [
    (("", "a@b.co", "secret1", "secret1"), "Please fill in all fields."),
    (("Name", "not-an-email", "secret1", "secret1"), "Enter a valid email address."),
    (("Name", "a@b.co", "short", "short"), "Password must be at least 6 characters."),
    (("Name", "a@b.co", "secret1", "secret2"), "Passwords do not match."),
    (("Name", "user@legalrisk.ai", "secret1", "secret1"), "This email is already registered."),
])
def test_signup_validation(args, message):
    session = Session()
    with pytest.raises(ValidationError) as exc:
        session.signup(*args)
    assert str(exc.value) == message
    assert session.user is None


def test_password_checks():
    assert password_checks("secret1", "secret1") == [
        ("At least 6 characters", True), ("Passwords match", True)]
    assert password_checks("abc", "abd") == [
        ("At least 6 characters", False), ("Passwords match", False)]
    assert password_checks("", "")[1] == ("Passwords match", False)


def test_validate_analysis_text():
    assert validate_analysis_text("  " + "x" * 30 + "  ") == "x" * 30
    with pytest.raises(ValidationError, match="at least 30 characters"):
        validate_analysis_text("x" * 29)
    with pytest.raises(ValidationError):
        validate_analysis_text(None)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        validate_email("nope")
