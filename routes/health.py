from datetime import datetime, timezone

from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from models.waitlist import db
from services.database import ping

health_bp = Blueprint('health', __name__)


@health_bp.route('/health')
def health():
    """Store connectivity probe; never touches the application tables"""
    try:
        result = ping(db)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Health check failed: {e}")
        return jsonify({'status': 'unhealthy', 'error': str(e)}), 500

    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'database': 'connected' if result == 1 else 'error',
    })
