"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: bot and API configuration (environment-based)
- game_settings.py: game rules, rewards and the word list (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config, get_config
from .game_settings import (
    MAX_ATTEMPTS, GUESS_TIMEOUT_SECONDS, LEADERBOARD_SIZE,
    load_word_list, choose_word, calculate_reward
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config', 'get_config',
    # Game rules
    'MAX_ATTEMPTS', 'GUESS_TIMEOUT_SECONDS', 'LEADERBOARD_SIZE',
    'load_word_list', 'choose_word', 'calculate_reward'
]
