"""
User Service - keeps local users in sync with the identity provider.

The provider owns credentials; this service only stores the subject and
profile fields it forwards.
"""
from typing import Optional

from flask import current_app

from flagstack_app.core.error_handlers import NotFoundError, ValidationError
from flagstack_app.models import User, UserRole, db
from flagstack_app.utils.db_session import safe_commit


class UserService:
    @staticmethod
    def get_by_external_id(external_id: str) -> Optional[User]:
        return User.query.filter_by(external_id=external_id).first()

    @staticmethod
    def upsert_user(external_id: str, email: str, name: str = None, role=None) -> User:
        """Create the user for ``external_id`` or refresh its profile fields."""
        if not external_id or not email:
            raise ValidationError(
                'external_id and email are required',
                errors={'external_id': external_id, 'email': email},
            )
        try:
            parsed_role = UserRole(role) if role else None
        except ValueError:
            raise ValidationError(
                'Invalid role',
                errors={'role': role, 'allowed': [r.value for r in UserRole]},
            )

        def _work():
            user = UserService.get_by_external_id(external_id)
            if user is None:
                user = User(external_id=external_id, email=email, name=name,
                            role=parsed_role or UserRole.CADET)
                db.session.add(user)
                current_app.logger.info(f"User created from identity provider: {external_id}")
            else:
                user.email = email
                user.name = name
                if parsed_role:
                    user.role = parsed_role
            return user

        return safe_commit(db.session, _work)

    @staticmethod
    def delete_user(external_id: str) -> None:
        """Remove the user and, through the cascade, their practice sessions."""
        user = UserService.get_by_external_id(external_id)
        if user is None:
            raise NotFoundError(f"User '{external_id}' not found", resource='user')

        safe_commit(db.session, lambda: db.session.delete(user))
        current_app.logger.info(f"User deleted from identity provider: {external_id}")
