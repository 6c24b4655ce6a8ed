"""Practice statistics derived from a user's session history."""

from flask import Blueprint

stats_bp = Blueprint('stats', __name__)

# Module Metadata
module_metadata = {
    'name': 'Statistics',
    'icon': 'chart-line',
    'category': 'Analytics',
    'url_prefix': '/stats',
    'enabled': True
}

from .routes import api  # noqa: E402,F401
