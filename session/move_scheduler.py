"""
Move scheduler for the computer opponent.

Runs the AI after a fixed "thinking" delay, exactly once per opponent turn.
Every scheduled move carries a token; a firing only counts if its token is
still the current one and the board it was scheduled for is still the live
board. Restarts, mode switches and teardown cancel by moving the token on,
so a timer that fires late never changes the game.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from logic.ai_player import choose_move
from logic.board import Board, Cell, Player, first_empty_cell, is_in_range, validate_board
from logic.win_checker import evaluate_outcome

from .timers import TimerHost


log = logging.getLogger("move_scheduler")

# Scheduled move status values
PENDING = "pending"
DONE = "done"
CANCELLED = "cancelled"
STALE = "stale"        # fired, but the token or board no longer matched
SKIPPED = "skipped"    # fired on a board with nowhere to play


class SchedulerClosed(RuntimeError):
    """Raised when scheduling on a scheduler that was shut down."""


@dataclass
class ScheduledMove:
    """Handle for one delayed opponent move."""
    token: int
    board: Board                # Board snapshot the move was scheduled for
    player: Player
    delay: float
    timer_id: Any = None
    index: Optional[int] = None  # Cell that was played, once done
    status: str = PENDING


Policy = Callable[[Sequence[Cell], Player], Optional[int]]


class MoveScheduler:
    """
    Schedules at most one delayed opponent move at a time.

    The scheduler never mutates the board itself. On a valid firing it
    hands the chosen cell to apply_move, which belongs to the session.
    """

    def __init__(
        self,
        timer_host: TimerHost,
        board_provider: Callable[[], Board],
        apply_move: Callable[[int, Player], None],
        policy: Policy = choose_move,
        on_change: Optional[Callable[[], None]] = None
    ):
        """
        Args:
            timer_host: Runs the delayed callback (Tk, asyncio or manual clock).
            board_provider: Returns the live session board.
            apply_move: Places the opponent's move on the live session.
            policy: Picks the move; defaults to the AIPlayer heuristic.
            on_change: Called when the thinking state changes without a move.
        """
        self.timer_host = timer_host
        self.board_provider = board_provider
        self.apply_move = apply_move
        self.policy = policy
        self.on_change = on_change

        self._token = 0
        self._pending: Optional[ScheduledMove] = None
        self.closed = False

    @property
    def token(self) -> int:
        """The current token. Moves on with every schedule and cancel."""
        return self._token

    @property
    def pending(self) -> Optional[ScheduledMove]:
        return self._pending

    @property
    def is_thinking(self) -> bool:
        """True while a scheduled move is waiting to fire."""
        return self._pending is not None

    def schedule(self, board: Sequence[Cell], player: Player, delay: float) -> ScheduledMove:
        """
        Schedule the opponent's move after delay seconds.

        Any move still pending is cancelled first.

        Returns:
            The handle for the new move.

        Raises:
            SchedulerClosed: After shutdown().
            InvalidBoard: If board does not have 9 cells.
        """
        if self.closed:
            raise SchedulerClosed("Cannot schedule a move after shutdown")

        snapshot = validate_board(board)
        self._drop_pending()

        self._token += 1
        move = ScheduledMove(token=self._token, board=snapshot, player=player, delay=delay)
        self._pending = move
        move.timer_id = self.timer_host.call_later(delay, lambda: self._fire(move))

        log.debug("Scheduled %s move #%d in %.3fs", player.value, move.token, delay)
        self._changed()
        return move

    def cancel(self, handle: Optional[ScheduledMove] = None) -> bool:
        """
        Cancel a pending move. Defaults to the current one.

        Cancelling twice, cancelling a move that already fired, or cancelling
        a handle that was superseded does nothing.

        Returns:
            True if a pending move was cancelled.
        """
        target = handle if handle is not None else self._pending
        if target is None or target is not self._pending:
            return False

        self._drop_pending()
        self._token += 1
        log.debug("Cancelled move #%d", target.token)
        self._changed()
        return True

    def shutdown(self) -> None:
        """Cancel anything pending and refuse further scheduling."""
        self.cancel()
        self.closed = True

    def _drop_pending(self) -> None:
        move = self._pending
        if move is None:
            return
        self._pending = None
        move.status = CANCELLED
        self.timer_host.cancel(move.timer_id)

    def _fire(self, move: ScheduledMove) -> None:
        """Timer callback. Re-validates before anything is played."""
        if move is not self._pending or move.token != self._token:
            if move.status == PENDING:
                move.status = STALE
            log.debug("Ignoring stale move #%d (current token %d)", move.token, self._token)
            return

        self._pending = None
        live = self.board_provider()

        if tuple(live) != move.board:
            move.status = STALE
            log.debug("Board changed since move #%d was scheduled, skipping", move.token)
            self._changed()
            return

        if evaluate_outcome(live).is_over:
            move.status = STALE
            log.debug("Game already over, skipping move #%d", move.token)
            self._changed()
            return

        try:
            index = self.policy(live, move.player)
        except Exception:
            log.exception("AI failed to choose a move for #%d", move.token)
            index = None

        if not is_in_range(index) or live[index] is not Cell.EMPTY:
            fallback = first_empty_cell(live)
            log.warning("AI returned unplayable cell %r, using %r instead", index, fallback)
            index = fallback

        if index is None:
            move.status = SKIPPED
            self._changed()
            return

        move.index = index
        move.status = DONE
        log.info("Computer (%s) plays cell %d", move.player.value, index)
        self.apply_move(index, move.player)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
