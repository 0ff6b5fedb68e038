"""
Game session for TicTacToe.

GameSession owns the SessionState and the MoveScheduler. Front ends call
its operations on user input and read its observers to render. Whenever a
transition leaves the computer to move, the session schedules that move.
"""

import logging
from typing import Callable, List, Optional

from logic.ai_player import choose_move
from logic.board import Board, Player, place
from logic.win_checker import Outcome

from . import state as transitions
from .config import SessionConfig
from .move_scheduler import MoveScheduler, Policy
from .state import GameMode, Screen, SessionState
from .timers import TimerHost


log = logging.getLogger("game_session")

Listener = Callable[["GameSession"], None]


class GameSession:
    """
    One player-facing game session.

    Game flow (Human vs Computer):
    1. Human (X) clicks a cell
    2. Session places X and passes the turn to O
    3. Session schedules the computer move; is_thinking becomes True
    4. After the thinking delay the AI's O is placed and X moves again
    5. Repeat until someone wins or it's a draw

    Invalid input (occupied cell, game over, computer's turn) is ignored.
    """

    def __init__(
        self,
        timer_host: TimerHost,
        config: Optional[SessionConfig] = None,
        policy: Policy = choose_move
    ):
        """
        Initialize the session on the start screen.

        Args:
            timer_host: Event-loop timers for the thinking delay.
            config: Session settings (default: SessionConfig()).
            policy: Opponent move picker, for tests.
        """
        self.config = config or SessionConfig()
        self.opponent = self.config.OPPONENT_SYMBOL
        self._state = transitions.start_state()
        self._listeners: List[Listener] = []
        self.scheduler = MoveScheduler(
            timer_host,
            board_provider=lambda: self._state.board,
            apply_move=self._apply_opponent_move,
            policy=policy,
            on_change=self._notify,
        )

    # ==================== OBSERVERS ====================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def active_player(self) -> Player:
        return self._state.active_player

    @property
    def mode(self) -> Optional[GameMode]:
        return self._state.mode

    @property
    def screen(self) -> Screen:
        return self._state.screen

    @property
    def outcome(self) -> Outcome:
        return self._state.outcome

    @property
    def is_thinking(self) -> bool:
        return self.scheduler.is_thinking

    @property
    def token(self) -> int:
        return self.scheduler.token

    @property
    def closed(self) -> bool:
        return self.scheduler.closed

    def is_opponent_turn(self) -> bool:
        return self._state.is_opponent_turn(self.opponent)

    def snapshot(self) -> dict:
        """State plus scheduler bookkeeping, as plain data."""
        data = self._state.to_dict()
        data["outcome"] = self.outcome.kind.value
        data["thinking"] = self.is_thinking
        data["token"] = self.token
        return data

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener(session) after every change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ==================== OPERATIONS ====================

    def select_mode(self, mode: GameMode) -> None:
        """Start a fresh game in mode. Ignored unless on the start screen."""
        new_state = transitions.select_mode(self._state, mode)
        if new_state is self._state:
            log.debug("select_mode(%s) ignored on %s screen", mode, self._state.screen.value)
            return
        self.scheduler.cancel()
        log.info("New game: %s", new_state.mode.label)
        self._set_state(new_state)

    def apply_human_move(self, index: int) -> None:
        """
        Place the active player's symbol at index.

        Ignored when not playing, the game is over, the cell is taken or
        out of range, or it is the computer's turn.
        """
        if self.is_opponent_turn():
            log.debug("Ignoring cell %r: computer's turn", index)
            return

        result = transitions.check_move(self._state, index)
        if not result.is_valid:
            log.debug("Ignoring cell %r: %s", index, result.error_message)
            return

        log.info("Player %s plays cell %d", self._state.active_player.value, index)
        self._set_state(transitions.apply_move(self._state, index))

    def restart(self) -> None:
        """Fresh board in the same mode, X to move. Cancels a pending computer move."""
        if self._state.screen is not Screen.PLAYING:
            log.debug("restart() ignored on start screen")
            return
        self.scheduler.cancel()
        log.info("Restarting game")
        self._set_state(transitions.restart(self._state))

    def back_to_start(self) -> None:
        """Return to mode selection. Cancels a pending computer move."""
        self.scheduler.cancel()
        if self._state.screen is Screen.START:
            return
        log.info("Back to start screen")
        self._set_state(transitions.back_to_start(self._state))

    def close(self) -> None:
        """Tear down: cancel pending work and stop scheduling. Safe to call twice."""
        if self.scheduler.closed:
            return
        self.scheduler.shutdown()
        log.debug("Session closed")

    # ==================== INTERNALS ====================

    def _apply_opponent_move(self, index: int, player: Player) -> None:
        """Commit a validated computer move and hand the turn back."""
        self._set_state(
            SessionState(
                board=place(self._state.board, index, player),
                active_player=player.opposite(),
                mode=self._state.mode,
                screen=self._state.screen,
            )
        )

    def _set_state(self, new_state: SessionState) -> None:
        self._state = new_state
        outcome = new_state.outcome
        if outcome.is_over:
            log.info("Game over: %s", outcome.describe())
        self._maybe_schedule_opponent()
        self._notify()

    def _maybe_schedule_opponent(self) -> None:
        if self.scheduler.closed or self.scheduler.is_thinking:
            return
        if self.is_opponent_turn():
            self.scheduler.schedule(self._state.board, self.opponent, self.config.thinking_delay)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
