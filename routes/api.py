from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from extensions import limiter
from models.waitlist import db
from services import waitlist_service
from services.errors import WaitlistError
from utils.request_utils import get_client_ip, get_user_agent

api_bp = Blueprint('api', __name__, url_prefix='/api')


def _api_rate_limit():
    return current_app.config['API_RATE_LIMIT']


limiter.limit(_api_rate_limit)(api_bp)


def _error(message, status):
    return jsonify({'success': False, 'error': message}), status


@api_bp.errorhandler(WaitlistError)
def handle_waitlist_error(e):
    return _error(e.message, e.status_code)


@api_bp.route('/count', methods=['GET'])
def get_count():
    """Total number of signups"""
    try:
        count = waitlist_service.get_count(db.session)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error getting count")
        return _error('Failed to get count', 500)
    return jsonify({'success': True, 'count': count})


@api_bp.route('/signup', methods=['POST'])
def signup():
    payload = request.get_json(silent=True)
    if not current_app.config['IS_PRODUCTION']:
        current_app.logger.debug(f"Request body: {payload}")

    form = waitlist_service.validate_signup(payload)

    try:
        user = waitlist_service.create_signup(
            db.session,
            form,
            ip_address=get_client_ip(),
            user_agent=get_user_agent(),
        )
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Database error during signup")
        return _error('Server error. Please try again later.', 500)

    return jsonify({
        'success': True,
        'message': 'Successfully added to waitlist!',
        'userId': user.id,
    })


@api_bp.route('/signups', methods=['GET'])
def list_signups():
    """Admin listing of recent signups; disabled in production"""
    try:
        users = waitlist_service.list_signups(
            db.session,
            is_production=current_app.config['IS_PRODUCTION'],
            limit=current_app.config['SIGNUPS_LIST_LIMIT'],
        )
        analytics = waitlist_service.get_analytics(db.session)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error fetching signups")
        return _error('Failed to fetch signups', 500)

    return jsonify({
        'success': True,
        'count': len(users),
        'data': [user.to_dict() for user in users],
        'analytics': analytics.to_dict() if analytics else None,
    })
