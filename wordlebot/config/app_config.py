"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv(Path(__file__).with_name('config.env'))


class Config:
    """Base configuration class with all settings."""

    # Discord Settings
    DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')
    COMMAND_PREFIX = os.getenv('COMMAND_PREFIX', '!')

    # Flask Settings
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Internal API Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 8080))
    DM_TIMEOUT_SECONDS = float(os.getenv('DM_TIMEOUT_SECONDS', 10))

    # Database Settings
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite://database.db')

    # Game Settings
    WORD_LIST_PATH = os.getenv('WORD_LIST_PATH')

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    DATABASE_URL = 'sqlite::memory:'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env_name=None):
    """Return the configuration class selected by APP_ENV."""
    env_name = env_name or os.getenv('APP_ENV', 'default')
    return config.get(env_name, config['default'])
