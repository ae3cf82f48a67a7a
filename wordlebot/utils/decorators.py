"""
Endpoint Decorators

Contains decorators shared by the internal HTTP endpoints.
"""

from functools import wraps
from flask import jsonify


def require_dm_service(f):
    """
    Decorator to require a running chat connection for DM endpoints.

    The service instance is passed to the view as the ``dm_service`` keyword.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.dm_service import get_dm_service

        dm_service = get_dm_service()
        if not dm_service:
            return jsonify({
                'success': False,
                'error': 'Chat connection unavailable'
            }), 503

        kwargs['dm_service'] = dm_service
        return f(*args, **kwargs)

    return decorated_function
