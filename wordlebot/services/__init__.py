"""
Services Package

Contains all business logic and service classes.
"""

from .game_service import GameSession, evaluate_guess
from .token_ledger import TokenLedger, get_token_ledger, initialize_token_ledger
from .session_orchestrator import SessionOrchestrator
from .dm_service import DirectMessageService, get_dm_service, initialize_dm_service

__all__ = [
    'GameSession', 'evaluate_guess',
    'TokenLedger', 'get_token_ledger', 'initialize_token_ledger',
    'SessionOrchestrator',
    'DirectMessageService', 'get_dm_service', 'initialize_dm_service'
]
