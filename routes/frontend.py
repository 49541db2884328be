import os

from flask import Blueprint, current_app, jsonify, send_from_directory

frontend_bp = Blueprint('frontend', __name__)


@frontend_bp.route('/', defaults={'path': ''})
@frontend_bp.route('/<path:path>')
def index(path):
    """Serve the single-page front end, falling back to index.html"""
    if path == 'api' or path.startswith('api/'):
        return jsonify({'success': False, 'error': 'Not found'}), 404

    public_dir = current_app.config['PUBLIC_DIR']
    if path and os.path.isfile(os.path.join(public_dir, path)):
        return send_from_directory(public_dir, path)
    return send_from_directory(public_dir, 'index.html')
