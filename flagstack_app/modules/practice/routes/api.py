# File: flagstack_app/modules/practice/routes/api.py
from flask import jsonify, request
from flask_login import login_required

from flagstack_app.core.error_handlers import ValidationError, success_response
from flagstack_app.modules.auth.interface import AuthInterface
from .. import practice_bp as blueprint
from ..logics.session_params import parse_mode, parse_seed, parse_session_length
from ..services.practice_service import PracticeService
from ..services.session_generator import SessionGenerator


@blueprint.route('/api/sessions', methods=['POST'])
@login_required
def create_session():
    user = AuthInterface.require_current_user()
    data = request.get_json(silent=True) or {}

    mode = parse_mode(data.get('mode'))
    length = parse_session_length(data.get('length'))
    seed = parse_seed(data.get('seed'))

    session = SessionGenerator.create_session(user, mode, length, seed)
    return jsonify(success_response({'session_id': session.session_id})), 201


@blueprint.route('/api/sessions/incomplete', methods=['GET'])
@login_required
def get_incomplete_session():
    user = AuthInterface.require_current_user()
    session = PracticeService.get_incomplete_session(user)
    return jsonify(success_response(session.to_dict() if session else None))


@blueprint.route('/api/sessions/<int:session_id>', methods=['GET'])
@login_required
def get_session(session_id):
    user = AuthInterface.require_current_user()
    session = PracticeService.get_session(user, session_id)
    return jsonify(success_response(session.to_dict()))


@blueprint.route('/api/sessions/<int:session_id>/question', methods=['GET'])
@login_required
def get_current_question(session_id):
    user = AuthInterface.require_current_user()
    view = PracticeService.get_current_question(user, session_id)
    return jsonify(success_response(view.to_dict() if view else None))


@blueprint.route('/api/sessions/<int:session_id>/answer', methods=['POST'])
@login_required
def submit_answer(session_id):
    user = AuthInterface.require_current_user()
    data = request.get_json(silent=True) or {}

    question_index = data.get('question_index')
    option_id = data.get('option_id')
    if not isinstance(question_index, int) or isinstance(question_index, bool):
        raise ValidationError('question_index must be an integer', errors={'question_index': question_index})
    if not isinstance(option_id, str) or not option_id.strip():
        raise ValidationError('No answer selected', errors={'option_id': option_id})

    result = PracticeService.submit_answer(user, session_id, question_index, option_id)
    return jsonify(success_response(result.to_dict()))


@blueprint.route('/api/sessions/<int:session_id>/abandon', methods=['POST'])
@login_required
def abandon_session(session_id):
    user = AuthInterface.require_current_user()
    PracticeService.abandon_session(user, session_id)
    return jsonify(success_response(message='Session abandoned'))
