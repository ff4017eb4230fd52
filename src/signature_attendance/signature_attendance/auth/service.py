from __future__ import annotations

import hmac

from ..core.exceptions import AuthenticationError


class AuthService:
    """Use case: static-credential login for the admin dashboard.

    There is no user store; the configured pair is compared and a fixed token
    handed back. Nothing downstream verifies the token.
    """

    def __init__(self, *, username: str, password: str, token: str):
        self._username = username
        self._password = password
        self._token = token

    def login(self, username: str | None, password: str | None) -> str:
        if not isinstance(username, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid credentials.")

        user_ok = hmac.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        pass_ok = hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))
        if not (user_ok and pass_ok):
            raise AuthenticationError("Invalid credentials.")
        return self._token
