# File: flagstack_app/modules/stats/routes/api.py
from flask import jsonify
from flask_login import login_required

from flagstack_app.core.error_handlers import success_response
from flagstack_app.modules.auth.interface import AuthInterface
from .. import stats_bp as blueprint
from ..services.practice_stats_service import PracticeStatsService


@blueprint.route('/api/practice', methods=['GET'])
@login_required
def get_practice_stats():
    user = AuthInterface.require_current_user()
    stats = PracticeStatsService.get_user_stats(user)
    return jsonify(success_response(stats.to_dict()))
