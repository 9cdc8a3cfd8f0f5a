from dataclasses import dataclass, field
from typing import List, Optional

from logic.validation import MIN_PASSWORD_CHARS, ValidationError, validate_email


@dataclass
class Account:
    user_id: str
    email: str
    password: str
    name: str
    role: str       # admin / user / guest


def default_accounts() -> List[Account]:
    return [
        Account("admin-001", "admin@legalrisk.ai", "admin123", "Administrator", "admin"),
        Account("user-001", "user@legalrisk.ai", "user123", "Gildong Hong", "user"),
    ]


@dataclass
class Session:
    """Who is signed in. Lives only as long as the window; nothing is saved."""
    accounts: List[Account] = field(default_factory=default_accounts)
    user: Optional[Account] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.role == "admin"

    def login(self, email: str, password: str) -> Account:
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Please enter your email and password.")
        for acc in self.accounts:
            if acc.email == email and acc.password == password:
                self.user = acc
                print(f"[Auth] {acc.email} signed in as {acc.role}")
                return acc
        raise ValidationError("Incorrect email or password.")

    def signup(self, name: str, email: str, password: str, confirm: str) -> Account:
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email or not password:
            raise ValidationError("Please fill in all fields.")
        validate_email(email)
        if len(password) < MIN_PASSWORD_CHARS:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_CHARS} characters.")
        if password != confirm:
            raise ValidationError("Passwords do not match.")
        if any(acc.email == email for acc in self.accounts):
            raise ValidationError("This email is already registered.")

        acc = Account(f"user-{len(self.accounts) + 1:03d}", email, password, name, "user")
        self.accounts.append(acc)
        self.user = acc
        print(f"[Auth] Registered {acc.email}")
        return acc

    def logout(self):
        self.user = None
