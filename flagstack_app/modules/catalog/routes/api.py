# File: flagstack_app/modules/catalog/routes/api.py
from flask import jsonify, request

from flagstack_app.core.error_handlers import NotFoundError, ValidationError, success_response
from flagstack_app.models import FlagType
from .. import catalog_bp as blueprint
from ..services.catalog_service import CatalogService


@blueprint.route('/api/flags', methods=['GET'])
def list_flags():
    """List flags in canonical order, optionally filtered by category or type."""
    category = request.args.get('category')
    flag_type = request.args.get('type')

    if category:
        items = CatalogService.list_by_category(category)
    elif flag_type:
        try:
            parsed = FlagType(flag_type)
        except ValueError:
            raise ValidationError(
                'Unknown flag type',
                errors={'type': flag_type, 'allowed': [t.value for t in FlagType]},
            )
        items = CatalogService.list_by_type(parsed)
    else:
        items = CatalogService.list_flags()

    return jsonify(success_response([item.to_dict() for item in items]))


@blueprint.route('/api/flags/<string:key>', methods=['GET'])
def get_flag(key):
    item = CatalogService.get_flag(key)
    if item is None:
        raise NotFoundError(f"Flag '{key}' not found", resource='flag')
    return jsonify(success_response(item.to_dict()))
