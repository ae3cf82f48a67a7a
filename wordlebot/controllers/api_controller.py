"""
API Controller

Handles the internal HTTP endpoints: liveness and direct messages sent
through the bot's chat connection.
"""

from flask import Blueprint, request, jsonify
from ..models.errors import DirectMessageError
from ..utils.decorators import require_dm_service
from ..utils.helpers import parse_user_id, parse_user_ids, validate_message_content
from ..utils.bot_logger import bot_logger

api_bp = Blueprint('api', __name__)


@api_bp.route('/health_check', methods=['GET'])
def health_check():
    """Liveness check."""
    return "Healthy", 200, {'Content-Type': 'text/plain; charset=utf-8'}


@api_bp.route('/dm_user', methods=['POST'])
@require_dm_service
def dm_user(dm_service):
    """Send a direct message to one user."""
    data = request.get_json(silent=True) or {}

    try:
        user_id = parse_user_id(data.get('user_id'))
        message = validate_message_content(data.get('message'))
    except ValueError as e:
        return jsonify({
            'success': False,
            'error': str(e)
        }), 400

    try:
        dm_service.send_to_user(user_id, message)
    except DirectMessageError as e:
        bot_logger.log_error(e, 'dm_user', user_id)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 502
    except Exception as e:
        bot_logger.log_error(e, 'dm_user', user_id)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500

    return jsonify({
        'success': True,
        'user_id': str(user_id)
    })


@api_bp.route('/dm_group', methods=['POST'])
@require_dm_service
def dm_group(dm_service):
    """Send the same direct message to several users."""
    data = request.get_json(silent=True) or {}

    try:
        user_ids = parse_user_ids(data.get('user_ids'))
        message = validate_message_content(data.get('message'))
    except ValueError as e:
        return jsonify({
            'success': False,
            'error': str(e)
        }), 400

    try:
        result = dm_service.send_to_group(user_ids, message)
    except Exception as e:
        bot_logger.log_error(e, 'dm_group')
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500

    # Ids go out as strings; 64-bit snowflakes overflow JavaScript numbers
    response_data = {
        'success': not result['failed'],
        'delivered': [str(user_id) for user_id in result['delivered']],
        'failed': [{'user_id': str(entry['user_id']), 'error': entry['error']}
                   for entry in result['failed']]
    }

    if result['failed']:
        return jsonify(response_data), 502
    return jsonify(response_data)
