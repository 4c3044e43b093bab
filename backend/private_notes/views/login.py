from __future__ import annotations

from typing import Optional

from private_notes.session.context import AuthContext


class LoginView:
    def __init__(self, auth: AuthContext):
        self.auth = auth
        self.email = ""
        self.error = ""
        self.loading = False

    @property
    def redirect_to(self) -> Optional[str]:
        if not self.auth.loading and self.auth.user is not None:
            return "/dashboard"
        return None

    def submit(self, email: str, password: str) -> bool:
        self.email = email.strip()
        self.error = ""
        if not self.email or not password:
            self.error = "Email and password are required"
            return False

        self.loading = True
        try:
            result = self.auth.sign_in(self.email, password)
        finally:
            self.loading = False

        if not result.ok:
            self.error = result.error
            return False
        return True

    def provider_url(self, provider: Optional[str] = None) -> Optional[str]:
        self.error = ""
        result = self.auth.sign_in_with_provider(provider)
        if not result.ok:
            self.error = result.error
            return None
        return result.data
