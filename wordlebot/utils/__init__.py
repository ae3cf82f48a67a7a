"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_dm_service
from .helpers import (
    format_account_age, format_feedback, format_leaderboard,
    parse_user_id, parse_user_ids, validate_message_content
)
from .bot_logger import bot_logger

__all__ = [
    'require_dm_service',
    'format_account_age', 'format_feedback', 'format_leaderboard',
    'parse_user_id', 'parse_user_ids', 'validate_message_content',
    'bot_logger'
]
