"""
Session Orchestrator

Drives one GameSession against a live chat channel: prompts for guesses,
waits for the player's replies with a per-wait deadline, relays feedback and
pays the reward into the token ledger on a win.
"""

import asyncio
import random
import uuid
from typing import Optional, Sequence
from ..models.channel import GameChannel, TimedOut
from ..models.errors import InvalidGuess
from ..models.game import SessionOutcome, SessionResult
from ..config.game_settings import (
    GUESS_TIMEOUT_SECONDS, MAX_ATTEMPTS, calculate_reward, choose_word
)
from ..utils.bot_logger import bot_logger
from ..utils.helpers import format_feedback
from .game_service import GameSession
from .token_ledger import TokenLedger


class SessionOrchestrator:
    """
    Runs guessing sessions to completion.

    One orchestrator serves every session; each call to play() owns its own
    GameSession, so concurrent sessions share nothing but the ledger.
    """

    def __init__(self,
                 ledger: TokenLedger,
                 words: Sequence[str],
                 timeout: float = GUESS_TIMEOUT_SECONDS,
                 max_attempts: int = MAX_ATTEMPTS,
                 rng: Optional[random.Random] = None):
        if not words:
            raise ValueError("Word list cannot be empty")
        self.ledger = ledger
        self.words = list(words)
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()

    def new_session(self) -> GameSession:
        return GameSession(choose_word(self.words, self.rng), self.max_attempts)

    async def play(self, user_id: int, channel: GameChannel,
                   session: Optional[GameSession] = None) -> SessionResult:
        """
        Play one session with a single user.

        Args:
            user_id: Player whose replies are read and who receives the reward
            channel: Channel bound to that player
            session: Pre-built session, a fresh random one is used otherwise

        Returns:
            SessionResult describing how the session ended

        Raises:
            TokenLedgerError: If crediting a won reward fails; the win notice
                has already been sent and the result stands
        """
        session = session or self.new_session()
        session_id = str(uuid.uuid4())

        bot_logger.log_game_event(
            session_id, 'game_started', user_id,
            word_length=len(session.solution), max_attempts=session.max_attempts
        )

        while not session.is_over():
            await channel.send(
                f"Input guess {session.attempts_used() + 1} of {session.max_attempts}"
            )

            reply = await channel.next_message(self.timeout)

            if isinstance(reply, TimedOut):
                await channel.send(f"Wordle game timed out!  Word was **{session.solution}**")
                bot_logger.log_game_event(
                    session_id, 'game_timed_out', user_id,
                    target_word=session.solution, attempts_used=session.attempts_used(),
                    timeout_seconds=reply.timeout
                )
                return SessionResult(
                    session_id=session_id,
                    user_id=user_id,
                    outcome=SessionOutcome.TIMED_OUT,
                    solution=session.solution,
                    attempts_used=session.attempts_used(),
                )

            try:
                marks = session.guess(reply.content)
            except InvalidGuess as e:
                await channel.send("Invalid guess!")
                bot_logger.log_game_event(
                    session_id, 'guess_rejected', user_id,
                    attempted_guess=reply.content, reason=str(e)
                )
                continue

            await channel.send(format_feedback(session.records[-1].word, marks))

        attempts_used = session.attempts_used()

        if not session.won():
            await channel.send(f"You lost!  The correct word was **{session.solution}**")
            bot_logger.log_game_event(
                session_id, 'game_lost', user_id,
                target_word=session.solution, attempts_used=attempts_used
            )
            return SessionResult(
                session_id=session_id,
                user_id=user_id,
                outcome=SessionOutcome.LOST,
                solution=session.solution,
                attempts_used=attempts_used,
            )

        reward = calculate_reward(session.attempts_remaining())
        await channel.send(f"You won on try {attempts_used}\nYou win {reward} tokens!")
        bot_logger.log_game_event(
            session_id, 'game_won', user_id,
            target_word=session.solution, attempts_used=attempts_used, reward=reward
        )

        try:
            new_balance = await asyncio.to_thread(self.ledger.credit, user_id, reward)
        except Exception as e:
            bot_logger.log_error(e, 'credit_reward', user_id, session_id=session_id, reward=reward)
            raise

        return SessionResult(
            session_id=session_id,
            user_id=user_id,
            outcome=SessionOutcome.WON,
            solution=session.solution,
            attempts_used=attempts_used,
            reward=reward,
            credited_balance=new_balance,
        )
