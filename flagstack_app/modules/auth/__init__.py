"""Identity collaborator: maps the provider's subject to a local user."""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

# Module Metadata
module_metadata = {
    'name': 'Identity',
    'icon': 'user-shield',
    'category': 'System',
    'url_prefix': '/auth',
    'enabled': True
}

from .routes import api  # noqa: E402,F401
