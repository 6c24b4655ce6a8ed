"""
Error Handlers for Flagstack

Provides:
- Custom exception classes (the practice engine's error taxonomy)
- Consistent error response format
- Flask error handlers
"""

from flask import jsonify, request, current_app
from typing import Optional, Dict, Any


class FlagstackError(Exception):
    """Base exception class for Flagstack."""

    def __init__(
        self,
        message: str,
        code: str = 'UNKNOWN_ERROR',
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for JSON response."""
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details
        }


class AuthenticationError(FlagstackError):
    """No resolvable identity for the caller."""

    def __init__(self, message: str = 'Authentication required'):
        super().__init__(message=message, code='UNAUTHENTICATED', status_code=401)


class AuthorizationError(FlagstackError):
    """Caller does not own the addressed resource."""

    def __init__(self, message: str = 'Access denied', resource: str = None):
        super().__init__(
            message=message,
            code='FORBIDDEN',
            status_code=403,
            details={'resource': resource} if resource else None
        )


class NotFoundError(FlagstackError):
    """Resource not found."""

    def __init__(self, message: str = 'Resource not found', resource: str = None):
        super().__init__(
            message=message,
            code='NOT_FOUND',
            status_code=404,
            details={'resource': resource} if resource else None
        )


class ConflictError(FlagstackError):
    """An active practice session already exists."""

    def __init__(self, message: str = 'Conflicting state', session_id: int = None):
        super().__init__(
            message=message,
            code='CONFLICT',
            status_code=409,
            details={'session_id': session_id} if session_id is not None else None
        )


class SequenceError(FlagstackError):
    """Submission arrived out of order, twice, or against a closed session."""

    def __init__(self, message: str = 'Out of sequence', expected_index: int = None, received_index: int = None):
        details = {}
        if expected_index is not None:
            details['expected_index'] = expected_index
        if received_index is not None:
            details['received_index'] = received_index
        super().__init__(message=message, code='SEQUENCE_ERROR', status_code=409, details=details)


class ValidationError(FlagstackError):
    """Input validation failed."""

    def __init__(self, message: str = 'Validation failed', errors: Dict = None):
        super().__init__(
            message=message,
            code='VALIDATION_ERROR',
            status_code=400,
            details={'errors': errors} if errors else None
        )


class DataIntegrityError(FlagstackError):
    """Catalog or session data cannot support the requested operation."""

    def __init__(self, message: str = 'Data integrity violation', details: Dict = None):
        super().__init__(message=message, code='DATA_INTEGRITY_ERROR', status_code=422, details=details)


class GenerationError(FlagstackError):
    """Question generation failed for an item during session creation."""

    def __init__(self, message: str = 'Question generation failed', flag_key: str = None):
        super().__init__(
            message=message,
            code='GENERATION_ERROR',
            status_code=500,
            details={'flag_key': flag_key} if flag_key else None
        )


def error_response(
    message: str,
    code: str = 'ERROR',
    status_code: int = 400,
    details: Dict = None
) -> tuple:
    """Create a standardized error response."""
    response = {
        'success': False,
        'message': message,
        'code': code
    }
    if details:
        response['details'] = details

    return jsonify(response), status_code


def success_response(data: Any = None, message: str = None) -> dict:
    """Create a standardized success response. ``data`` is always present, null when empty."""
    response = {'success': True, 'data': data}
    if message:
        response['message'] = message
    return response


def register_error_handlers(app):
    """Register error handlers with Flask app."""

    @app.errorhandler(FlagstackError)
    def handle_flagstack_error(error):
        if error.status_code >= 500:
            current_app.logger.error(f"{error.code}: {error.message}")
        else:
            current_app.logger.info(f"{error.code}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        if request.path.startswith('/api/') or '/api/' in request.path:
            return error_response('Endpoint not found', 'NOT_FOUND', 404)
        return error

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        if '/api/' in request.path:
            return error_response('Method not allowed', 'METHOD_NOT_ALLOWED', 405)
        return error

    @app.errorhandler(500)
    def handle_internal_error(error):
        current_app.logger.exception('Internal server error')
        if '/api/' in request.path:
            return error_response('Internal server error', 'SERVER_ERROR', 500)
        return error
