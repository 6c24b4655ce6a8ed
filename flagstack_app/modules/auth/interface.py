# File: flagstack_app/modules/auth/interface.py
from typing import Optional

from .schemas import AuthenticatedUser


class AuthInterface:
    @staticmethod
    def require_current_user() -> AuthenticatedUser:
        """Resolve the request's identity once; raises AuthenticationError when absent."""
        return AuthenticatedUser.from_current_user()

    @staticmethod
    def get_user_by_external_id(external_id: str) -> Optional[AuthenticatedUser]:
        from .services.user_service import UserService
        user = UserService.get_by_external_id(external_id)
        return AuthenticatedUser(user.user_id) if user else None
