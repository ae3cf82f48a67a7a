"""
Wordle Token Bot Application Package

A chat bot that runs a word-guessing game, pays winners in tokens kept in a
SQLite ledger, and exposes a small internal HTTP API for direct messages.
"""

import time
from flask import Flask, g, request
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating the internal API app.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)

    # Register blueprints
    from .controllers.api_controller import api_bp

    app.register_blueprint(api_bp, url_prefix='/api/v1')

    # Request tracing
    from .utils.bot_logger import bot_logger

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_response(response):
        started = g.get('request_started', time.perf_counter())
        bot_logger.log_api_request(
            request, response.status_code, (time.perf_counter() - started) * 1000
        )
        return response

    return app
