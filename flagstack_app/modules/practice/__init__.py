"""Practice session engine: generation, answering and session lifecycle."""

from flask import Blueprint

practice_bp = Blueprint('practice', __name__)

# Module Metadata
module_metadata = {
    'name': 'Flag Practice',
    'icon': 'circle-question',
    'category': 'Learning',
    'url_prefix': '/practice',
    'enabled': True
}

from .routes import api  # noqa: E402,F401
