from dataclasses import dataclass

from flask_login import current_user

from flagstack_app.core.error_handlers import AuthenticationError


@dataclass(frozen=True)
class AuthenticatedUser:
    """Explicit caller identity passed into every practice and stats operation."""

    user_id: int

    @classmethod
    def from_current_user(cls) -> 'AuthenticatedUser':
        if not current_user or not current_user.is_authenticated:
            raise AuthenticationError()
        return cls(user_id=current_user.user_id)
