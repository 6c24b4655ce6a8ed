"""Reference catalog of signal flags, read-only to the practice engine."""

from flask import Blueprint

catalog_bp = Blueprint('catalog', __name__)

# Module Metadata
module_metadata = {
    'name': 'Flag Catalog',
    'icon': 'flag',
    'category': 'Reference',
    'url_prefix': '/catalog',
    'enabled': True
}

from .routes import api  # noqa: E402,F401
