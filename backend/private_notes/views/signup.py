from __future__ import annotations

from typing import Optional

from private_notes.models.auth import MIN_PASSWORD_LENGTH
from private_notes.session.context import AuthContext

PASSWORD_MISMATCH = "Passwords do not match"
PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"


class SignupView:
    def __init__(self, auth: AuthContext):
        self.auth = auth
        self.email = ""
        self.error = ""
        self.loading = False
        self.success = False

    @property
    def redirect_to(self) -> Optional[str]:
        # already signed in, e.g. coming back from a provider
        if not self.auth.loading and self.auth.user is not None and not self.success:
            return "/dashboard"
        return None

    def validate(self, password: str, confirm_password: str) -> Optional[str]:
        if password != confirm_password:
            return PASSWORD_MISMATCH
        if len(password) < MIN_PASSWORD_LENGTH:
            return PASSWORD_TOO_SHORT
        return None

    def submit(self, email: str, password: str, confirm_password: str) -> bool:
        self.email = email.strip()
        self.error = ""
        self.success = False

        problem = self.validate(password, confirm_password)
        if problem:
            self.error = problem
            return False

        self.loading = True
        try:
            result = self.auth.sign_up(self.email, password)
        finally:
            self.loading = False

        if not result.ok:
            self.error = result.error
            return False
        self.success = True
        return True
