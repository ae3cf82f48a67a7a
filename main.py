"""
Wordle Token Bot - Main Entry Point

This is the main entry point for the bot. It initializes the token ledger,
starts the internal HTTP API in a background thread and runs the Discord
client in the main thread.
"""

import threading
from wordlebot import create_app
from wordlebot.config import get_config, load_word_list
from wordlebot.chat.client import create_bot
from wordlebot.services.token_ledger import initialize_token_ledger
from wordlebot.utils.bot_logger import bot_logger


def api_server_worker(app, host, port):
    """
    Serve the internal API until the process exits.
    Runs in a daemon thread next to the chat client's event loop.
    """
    try:
        app.run(host=host, port=port, debug=False, use_reloader=False, threaded=True)
    except Exception as e:
        bot_logger.log_error(e, 'api_server')
        raise


def main():
    """Main function to initialize services and start the bot."""
    config_class = get_config()

    try:
        print("Initializing services...")

        if not config_class.DISCORD_TOKEN:
            print("✗ DISCORD_TOKEN not configured")
            raise SystemExit(1)

        ledger = initialize_token_ledger(config_class.DATABASE_URL)
        print(f"✓ Token ledger ready at {ledger.database_path}")

        words = load_word_list(config_class.WORD_LIST_PATH)
        print(f"✓ Loaded {len(words)} words")

        bot = create_bot(ledger, words, config_class)
        print("✓ Chat client created")

        app = create_app(config_class)
        api_thread = threading.Thread(
            target=api_server_worker, args=(app, config_class.HOST, config_class.PORT), daemon=True
        )
        api_thread.start()
        print(f"✓ Internal API listening on {config_class.HOST}:{config_class.PORT}")

        bot_logger.logger.info("Wordle Token Bot starting")
        print("=" * 50)

        # Logging is handled by bot_logger; keep discord.py from installing its own handler
        bot.run(config_class.DISCORD_TOKEN, log_handler=None)

    except KeyboardInterrupt:
        print("\nBot shutting down...")
        bot_logger.logger.info("Wordle Token Bot shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting bot: {e}")
        bot_logger.logger.error(f"Error starting bot: {e}")
        raise


if __name__ == '__main__':
    main()
