"""
TicTacToe UI
A graphical interface for a TicTacToe session using Tkinter.

Shows:
- Start screen with game mode selection
- Live board (winning line highlighted)
- Game status: whose turn, computer thinking, winner or draw
- Restart and back-to-start controls
"""

import logging
import sys
import tkinter as tk
from tkinter import ttk
from typing import List, Optional

from logic.board import BOARD_SIZE, Cell, row_col_to_index
from logic.win_checker import OutcomeKind
from session import ConfigError, GameMode, GameSession, Screen, SessionConfig, TkTimerHost


log = logging.getLogger("ui")

BG = '#1a1a2e'
CELL_BG = '#16213e'
WIN_BG = '#065f46'
MARK_COLORS = {Cell.X: '#00d4ff', Cell.O: '#f87171', Cell.EMPTY: 'white'}


class TicTacToeUI:
    """
    Main UI class for TicTacToe.

    All session callbacks run on the Tk main loop, including the
    computer's delayed move (scheduled with root.after).
    """

    def __init__(self, config: Optional[SessionConfig] = None):
        """Initialize the UI."""
        self.config = config or SessionConfig()

        # Create UI
        self._create_ui()

        self.session = GameSession(TkTimerHost(self.root), self.config)
        self.session.subscribe(lambda _session: self._render())
        self._render()

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("Tic Tac Toe")
        self.root.configure(bg=BG)
        self.root.minsize(360, 480)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background=BG)
        style.configure('TLabel', background=BG, foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 20, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 13), foreground='#ffd700')

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=20, pady=20)

        ttk.Label(main_frame, text="Tic Tac Toe", style='Title.TLabel').pack(pady=(0, 10))

        # Start screen - mode selection
        self.start_frame = ttk.Frame(main_frame)
        ttk.Label(self.start_frame, text="Choose a game mode").pack(pady=10)
        for mode, color in ((GameMode.HUMAN_VS_HUMAN, '#10b981'), (GameMode.HUMAN_VS_COMPUTER, '#6366f1')):
            tk.Button(
                self.start_frame,
                text=mode.label,
                font=('Segoe UI', 11, 'bold'),
                bg=color,
                fg='white',
                width=20,
                command=lambda m=mode: self.session.select_mode(m)
            ).pack(pady=5)

        # Game screen
        self.game_frame = ttk.Frame(main_frame)

        self.mode_label = ttk.Label(self.game_frame, text="")
        self.mode_label.pack()

        self.status_label = ttk.Label(self.game_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=5)

        board_frame = ttk.Frame(self.game_frame)
        board_frame.pack(pady=10)

        self.board_cells: List[tk.Button] = []
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                index = row_col_to_index(row, col)
                cell = tk.Button(
                    board_frame,
                    text="",
                    font=('Segoe UI', 24, 'bold'),
                    width=3,
                    height=1,
                    bg=CELL_BG,
                    fg='white',
                    relief='ridge',
                    borderwidth=2,
                    command=lambda i=index: self.session.apply_human_move(i)
                )
                cell.grid(row=row, column=col, padx=2, pady=2)
                self.board_cells.append(cell)

        # Control buttons
        control_frame = ttk.Frame(self.game_frame)
        control_frame.pack(pady=10)

        tk.Button(
            control_frame,
            text="🔄 Restart",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=12,
            command=lambda: self.session.restart()
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame,
            text="← Back",
            font=('Segoe UI', 11, 'bold'),
            bg='#2d3748',
            fg='white',
            width=12,
            command=lambda: self.session.back_to_start()
        ).pack(side=tk.LEFT, padx=5)

        # Bind close event
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _render(self):
        """Show the current screen and refresh board and status."""
        session = self.session

        if session.screen is Screen.START:
            self.game_frame.pack_forget()
            self.start_frame.pack(fill=tk.BOTH, expand=True)
            return

        self.start_frame.pack_forget()
        self.game_frame.pack(fill=tk.BOTH, expand=True)
        self.mode_label.configure(text=session.mode.label)

        outcome = session.outcome
        winning = set(outcome.line or ())
        board_locked = outcome.is_over or session.is_opponent_turn()

        for index, cell in enumerate(session.board):
            self.board_cells[index].configure(
                text=cell.value,
                fg=MARK_COLORS[cell],
                bg=WIN_BG if index in winning else CELL_BG,
                state='disabled' if board_locked or cell is not Cell.EMPTY else 'normal',
                disabledforeground=MARK_COLORS[cell],
            )

        self.status_label.configure(text=self._status_text())

    def _status_text(self) -> str:
        session = self.session
        outcome = session.outcome

        if outcome.kind is OutcomeKind.WIN:
            return f"🏆 {outcome.describe()}"
        if outcome.kind is OutcomeKind.DRAW:
            return f"🤝 {outcome.describe()}"
        if session.is_thinking:
            return "Computer is thinking..."
        return f"Player {session.active_player.value}'s turn"

    def _quit(self):
        """Quit the application."""
        log.info("Quitting...")
        self.session.close()
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()


def main(argv=None) -> int:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Tic Tac Toe UI")
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=None,
        help="Computer thinking delay in milliseconds"
    )

    args = parser.parse_args(argv)

    try:
        config = SessionConfig.from_env()
        if args.delay_ms is not None:
            config = SessionConfig(args.delay_ms, config.log_level)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    logging.basicConfig(level=config.log_level)

    ui = TicTacToeUI(config)
    ui.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
