# File: flagstack_app/modules/auth/routes/api.py
import hmac

from flask import current_app, jsonify, request

from flagstack_app.core.error_handlers import AuthorizationError, success_response
from .. import auth_bp as blueprint
from ..services.user_service import UserService


def _require_sync_token():
    """Provider webhooks authenticate with the shared ``IDENTITY_SYNC_TOKEN``."""
    expected = current_app.config.get('IDENTITY_SYNC_TOKEN')
    supplied = request.headers.get('X-Identity-Sync-Token', '')
    if not expected or not hmac.compare_digest(
        expected.encode('utf-8'), supplied.encode('utf-8', 'surrogateescape')
    ):
        raise AuthorizationError('Invalid identity sync token', resource='identity_sync')


@blueprint.route('/api/users/sync', methods=['POST'])
def sync_user():
    _require_sync_token()
    data = request.get_json(silent=True) or {}
    user = UserService.upsert_user(
        external_id=data.get('external_id'),
        email=data.get('email'),
        name=data.get('name'),
        role=data.get('role'),
    )
    return jsonify(success_response(user.to_dict()))


@blueprint.route('/api/users/<string:external_id>', methods=['DELETE'])
def delete_user(external_id):
    _require_sync_token()
    UserService.delete_user(external_id)
    return jsonify(success_response(message='User deleted'))
