"""
Bot Logger Module

This module provides structured logging for chat commands, internal API
requests, game sessions and token ledger changes.
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path
from ..config.app_config import Config


class BotLogger:
    """
    Centralized logging system for the bot.

    Features:
    - Chat command tracking with user/channel identification
    - Internal API request tracing with status and latency
    - Game session and ledger event logging
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        if not isinstance(self.level, int):
            self.level = logging.INFO

        # Setup main bot logger
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the main bot logger with file handler."""
        logger = logging.getLogger('wordlebot')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()

        # Create log file with date
        log_file = self.log_dir / f"bot_log_{datetime.now().strftime('%Y-%m-%d')}.log"

        # File handler for detailed logs
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console handler for only important messages (WARNING and above)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        file_handler.setFormatter(file_formatter)
        console_handler.setFormatter(console_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          user_info: Dict[str, Any],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_command(self,
                    command: str,
                    user_id: Optional[int],
                    username: Optional[str] = None,
                    channel_id: Optional[int] = None,
                    **kwargs):
        """
        Log a chat command invocation.

        Args:
            command: Command name (e.g., 'wordle', 'tokens')
            user_id: Invoking user's id
            username: Invoking user's display name
            channel_id: Channel the command was used in
            **kwargs: Additional details to log
        """
        user_info = {'user_id': user_id, 'username': username}
        details = {'channel_id': channel_id, **kwargs}

        log_message = self._create_log_entry('USER_ACTION', command, user_info, details)
        self.logger.info(log_message)

    def log_api_request(self,
                        request,
                        status_code: int,
                        latency_ms: float,
                        **kwargs):
        """
        Log an internal API request once its response is ready.

        Args:
            request: Flask request object
            status_code: HTTP status code returned
            latency_ms: Time spent handling the request
            **kwargs: Additional details to log
        """
        user_info = {'remote_addr': request.remote_addr or 'unknown'}

        details = {
            'method': request.method,
            'path': request.path,
            'endpoint': request.endpoint,
            'status': status_code,
            'latency_ms': round(latency_ms, 2),
            **kwargs
        }

        if status_code >= 500:
            log_message = self._create_log_entry('API_FAILURE', 'request', user_info, details)
            self.logger.error(log_message)
        else:
            log_message = self._create_log_entry('API_REQUEST', 'request', user_info, details)
            self.logger.info(log_message)

    def log_game_event(self,
                       session_id: str,
                       event: str,
                       user_id: int,
                       **kwargs):
        """
        Log session events (start, guesses, wins, losses, timeouts).

        Args:
            session_id: Session identifier
            event: Type of game event (e.g., 'game_won', 'game_timed_out')
            user_id: Player's id
            **kwargs: Additional game details
        """
        user_info = {'user_id': user_id}

        details = {
            'session_id': session_id,
            **kwargs
        }

        log_message = self._create_log_entry('GAME_EVENT', event, user_info, details)
        self.logger.info(log_message)

    def log_ledger_event(self,
                         action: str,
                         user_id: int,
                         **kwargs):
        """Log a token balance change or refusal."""
        user_info = {'user_id': user_id}
        log_message = self._create_log_entry('LEDGER', action, user_info, dict(kwargs))
        self.logger.info(log_message)

    def log_error(self,
                  error: Exception,
                  action: str,
                  user_id: Optional[int] = None,
                  **kwargs):
        """
        Log errors with full context.

        Args:
            error: Exception that occurred
            action: Action that was being performed
            user_id: Affected user, if any
            **kwargs: Additional details to log
        """
        user_info = {'user_id': user_id}

        details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            **kwargs
        }

        log_message = self._create_log_entry('ERROR', action, user_info, details)
        self.logger.error(log_message)


# Global logger instance
bot_logger = BotLogger(log_dir=Config.LOG_DIR, level=Config.LOG_LEVEL)
