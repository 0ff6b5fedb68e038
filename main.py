"""
Main entry point for TicTacToe.

This script ties together:
- Logic (board, outcome, computer opponent)
- Session (turn flow, delayed computer move)
- A front end: the Tkinter UI (default) or a console game (--no-ui)

Run this script to play TicTacToe!
"""

import asyncio
import logging
import sys
from typing import Optional

from logic.ai_player import AIPlayer
from logic.board import format_board
from session import AsyncioTimerHost, ConfigError, GameMode, GameSession, Screen, SessionConfig


log = logging.getLogger("main")

MODE_CHOICES = {"hvh": GameMode.HUMAN_VS_HUMAN, "hvc": GameMode.HUMAN_VS_COMPUTER}

HELP_TEXT = "Commands: 1-9 play a cell, r restart, b back to start, h hint, q quit"


class ConsoleGame:
    """
    Console front end for a GameSession.

    Game flow:
    1. Choose a mode (1 = Human vs Human, 2 = Human vs Computer)
    2. Type a cell number 1-9 to play
    3. In Human vs Computer mode, wait while the computer thinks
    4. Restart, go back or quit at any time
    """

    def __init__(self, session: GameSession, out=None):
        self.session = session
        self.out = out or sys.stdout
        self.hinter = AIPlayer()
        self.is_running = True

    def say(self, text: str = ""):
        print(text, file=self.out)

    def prompt(self) -> str:
        if self.session.screen is Screen.START:
            return "Mode (1 = Human vs Human, 2 = Human vs Computer, q = quit): "
        return f"Player {self.session.active_player.value}, cell (1-9): "

    def show(self):
        """Print the board and status."""
        session = self.session
        if session.screen is Screen.START:
            return

        outcome = session.outcome
        self.say()
        self.say(format_board(session.board, highlight=outcome.line or ()))
        self.say()
        if outcome.is_over:
            self.say(outcome.describe())
            self.say("Type r to play again or b to go back.")
        elif session.is_thinking:
            self.say("Computer is thinking...")

    def handle_command(self, line: str) -> bool:
        """
        Apply one line of input.

        Returns:
            False once the player quits.
        """
        command = line.strip().lower()
        session = self.session

        if command in ("q", "quit", "exit"):
            self.is_running = False
            return False

        if session.screen is Screen.START:
            if command in ("1", "hvh"):
                session.select_mode(GameMode.HUMAN_VS_HUMAN)
            elif command in ("2", "hvc"):
                session.select_mode(GameMode.HUMAN_VS_COMPUTER)
            else:
                self.say("Please choose 1 or 2.")
            return True

        if command == "r":
            session.restart()
        elif command == "b":
            session.back_to_start()
        elif command in ("h", "help", "?"):
            self.hinter.player = session.active_player
            self.say(self.hinter.describe_move(session.board))
            self.say(HELP_TEXT)
        elif command.isdigit():
            # Invalid cells are ignored by the session, same as clicking a taken square
            session.apply_human_move(int(command) - 1)
        else:
            self.say(HELP_TEXT)
        return True

    async def run(self):
        """Read commands until the player quits."""
        loop = asyncio.get_running_loop()
        self.say(HELP_TEXT)

        try:
            while self.is_running:
                # Let the computer finish its move before asking for input
                while self.session.is_thinking:
                    await asyncio.sleep(0.05)

                self.show()
                line = await loop.run_in_executor(None, input, self.prompt())
                self.handle_command(line)
        finally:
            self.session.close()


async def play_console(config: SessionConfig, mode: Optional[GameMode] = None):
    """Run a console game on the current asyncio loop."""
    session = GameSession(AsyncioTimerHost(asyncio.get_running_loop()), config)
    if mode is not None:
        session.select_mode(mode)
    await ConsoleGame(session).run()


def main(argv=None) -> int:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Tic Tac Toe")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--mode",
        choices=sorted(MODE_CHOICES),
        default=None,
        help="Skip the start screen: hvh (Human vs Human) or hvc (Human vs Computer)"
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=None,
        help="Computer thinking delay in milliseconds"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: TTT_LOG_LEVEL or INFO)"
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to a .env file with TTT_* settings"
    )

    args = parser.parse_args(argv)

    try:
        config = SessionConfig.from_env(args.env_file)
        if args.delay_ms is not None or args.log_level is not None:
            config = SessionConfig(
                thinking_delay_ms=config.thinking_delay_ms if args.delay_ms is None else args.delay_ms,
                log_level=args.log_level or config.log_level,
            )
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    log.debug("Using %r", config)

    mode = MODE_CHOICES.get(args.mode)

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        ui = TicTacToeUI(config)
        if mode is not None:
            ui.session.select_mode(mode)
        ui.run()
        return 0

    # Console mode (--no-ui)
    try:
        asyncio.run(play_console(config, mode))
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
        return 130
    finally:
        print("Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
