"""
Tkinter application module for the Dice Round Timer.

This module contains the desktop GUI: the round timer view with one row per
team, the add-team dialog, and the results window.
"""
import logging
import tkinter as tk
from tkinter import ttk, messagebox, simpledialog
from typing import Dict, Optional, Tuple

from ..models import SessionState, Team
from ..services import (
    AnalyticsService, ServiceFactory, TeamValidationError, TkScheduler
)
from ..utils import (
    APP_TITLE,
    DEFAULT_PLAYER_COUNT,
    MAX_PLAYERS,
    MIN_PLAYERS,
    UI_REFRESH_MS,
    fmt_duration,
    fmt_seconds,
)

logger = logging.getLogger(__name__)


class DiceTimerApp(tk.Tk):
    """Main application window for the Dice Round Timer."""

    def __init__(self):
        super().__init__()
        self.title(APP_TITLE)
        self.geometry("720x520")
        self.state_model = SessionState()
        self.service_factory = ServiceFactory(TkScheduler(self))
        services = self.service_factory.create_complete_service_suite(self.state_model)
        self.session_service = services['session']
        self.stopwatch = services['stopwatch']
        self.analytics_service: AnalyticsService = services['analytics']
        self.after_timer: Optional[str] = None
        self._was_running = False

        self._build_menu()
        self.timer_view = TimerView(self, self)
        self.timer_view.pack(fill="both", expand=True)
        self.protocol("WM_DELETE_WINDOW", self.quit_app)
        self.refresh()

    # ---------- UI Scaffolding ---------- #
    def _build_menu(self):
        mbar = tk.Menu(self)
        gamem = tk.Menu(mbar, tearoff=0)
        gamem.add_command(label="Add Team…", command=self.add_team)
        gamem.add_command(label="Results…", command=self.show_results)
        gamem.add_separator()
        gamem.add_command(label="Quit", command=self.quit_app)
        mbar.add_cascade(label="Game", menu=gamem)

        resetm = tk.Menu(mbar, tearoff=0)
        resetm.add_command(label="Reset Current Round", command=self.reset_current_round)
        resetm.add_command(label="Reset All Rounds", command=self.reset_all_rounds)
        resetm.add_command(label="Reset Everything", command=self.reset_everything)
        mbar.add_cascade(label="Reset", menu=resetm)

        self.config(menu=mbar)

    # ---------- Actions ---------- #
    def add_team(self):
        dialog = AddTeamDialog(self)
        if dialog.result is None:
            return
        name, player_count = dialog.result
        try:
            self.session_service.add_team(name, player_count)
        except TeamValidationError as e:
            messagebox.showerror(APP_TITLE, str(e))
            return
        self.refresh()

    def remove_team(self, team_id: str):
        self.session_service.remove_team(team_id)
        self.refresh()

    def record_first(self, team_id: str):
        self.session_service.record_first_dice(team_id)
        self.refresh()

    def record_last(self, team_id: str):
        self.session_service.record_last_dice(team_id)
        self.refresh()
        if self.session_service.all_teams_finished:
            self.on_round_complete()

    def toggle_timer(self):
        self.session_service.toggle_timer()
        self.refresh()

    def next_round(self):
        self.session_service.next_round()
        self.refresh()

    def reset_current_round(self):
        self.session_service.reset_current_round()
        self.refresh()

    def reset_all_rounds(self):
        if messagebox.askyesno(APP_TITLE, "Reset all rounds? Recorded times will be lost."):
            self.session_service.reset_all_rounds()
            self.refresh()

    def reset_everything(self):
        if messagebox.askyesno(APP_TITLE, "Remove all teams and start over?"):
            self.session_service.reset_everything()
            self.refresh()

    def on_round_complete(self):
        self.timer_view.flash_status(f"Round {self.session_service.current_round} complete!")
        self.show_results()

    def show_results(self):
        if not self.session_service.teams:
            messagebox.showinfo(APP_TITLE, "Add a team to see results.")
            return
        ResultsWindow(self, self.analytics_service)

    def quit_app(self):
        logger.info("Closing desktop app")
        self.stopwatch.stop()
        if self.after_timer:
            self.after_cancel(self.after_timer)
            self.after_timer = None
        self.destroy()

    # ---------- UI Updates ---------- #
    def refresh(self):
        """Rebuild the team rows and controls."""
        self.timer_view.refresh()
        self._was_running = self.stopwatch.is_running
        if self._was_running:
            self.start_auto_refresh()

    def start_auto_refresh(self):
        """Start the elapsed-time display refresh."""
        if self.after_timer:
            self.after_cancel(self.after_timer)
        self.after_timer = self.after(UI_REFRESH_MS, self._auto_refresh_tick)

    def _auto_refresh_tick(self):
        self.after_timer = None
        self.timer_view.update_clock()
        if self.stopwatch.is_running:
            self.start_auto_refresh()
        elif self._was_running:
            # stopped elsewhere (e.g. last team finished)
            self.refresh()


class AddTeamDialog(simpledialog.Dialog):
    """Dialog asking for a team name and player count."""

    def __init__(self, parent: tk.Tk):
        self.result: Optional[Tuple[str, int]] = None
        super().__init__(parent, title="Add Team")

    def body(self, master):  # type: ignore[override]
        ttk.Label(master, text="Team Name").grid(row=0, column=0, sticky="w", pady=2)
        self.name_var = tk.StringVar()
        name_entry = ttk.Entry(master, textvariable=self.name_var, width=28)
        name_entry.grid(row=0, column=1, pady=2)

        ttk.Label(master, text="Number of Players").grid(row=1, column=0, sticky="w", pady=2)
        self.count_var = tk.IntVar(value=DEFAULT_PLAYER_COUNT)
        ttk.Spinbox(
            master,
            from_=MIN_PLAYERS,
            to=MAX_PLAYERS,
            textvariable=self.count_var,
            width=6,
            state="readonly",
        ).grid(row=1, column=1, sticky="w", pady=2)
        return name_entry

    def validate(self) -> bool:
        if not self.name_var.get().strip():
            messagebox.showerror("Add Team", "Team name is required", parent=self)
            return False
        return True

    def apply(self) -> None:  # type: ignore[override]
        self.result = (self.name_var.get().strip(), int(self.count_var.get()))


class TimerView(ttk.Frame):
    """Round header, stopwatch display and one row per team."""

    def __init__(self, parent, controller: DiceTimerApp):
        super().__init__(parent)
        self.controller = controller
        self._status_override: Optional[str] = None
        self._build_ui()

    def _build_ui(self):
        header_frame = ttk.Frame(self)
        header_frame.pack(fill="x", padx=10, pady=5)

        self.round_label = ttk.Label(header_frame, text="Round 1", font=("Arial", 16, "bold"))
        self.round_label.pack(side="left")
        self.status_label = ttk.Label(header_frame, text="", foreground="gray")
        self.status_label.pack(side="left", padx=8)
        self.progress_label = ttk.Label(header_frame, text="")
        self.progress_label.pack(side="right")

        self.clock_label = ttk.Label(self, text="0.00", font=("Courier", 40, "bold"))
        self.clock_label.pack(pady=5)

        controls_frame = ttk.Frame(self)
        controls_frame.pack(fill="x", padx=10, pady=5)
        self.toggle_button = ttk.Button(controls_frame, text="Start", command=self.controller.toggle_timer)
        self.toggle_button.pack(side="left", padx=2)
        self.next_button = ttk.Button(controls_frame, text="Next Round", command=self.controller.next_round)
        self.next_button.pack(side="left", padx=2)
        ttk.Button(controls_frame, text="Add Team", command=self.controller.add_team).pack(side="right", padx=2)
        ttk.Button(controls_frame, text="Results", command=self.controller.show_results).pack(side="right", padx=2)

        self.teams_frame = ttk.LabelFrame(self, text="Teams", padding=5)
        self.teams_frame.pack(fill="both", expand=True, padx=10, pady=5)
        self.team_rows: Dict[str, ttk.Frame] = {}

    def update_clock(self):
        self.clock_label.config(text=fmt_seconds(self.controller.stopwatch.elapsed_seconds))

    def flash_status(self, text: str, duration_ms: int = 2000):
        self._status_override = text
        self.status_label.config(text=text, foreground="green")
        self.after(duration_ms, self._clear_status)

    def _clear_status(self):
        self._status_override = None
        self.refresh()

    def refresh(self):
        session = self.controller.session_service
        running = session.stopwatch.is_running

        self.round_label.config(text=f"Round {session.current_round}")
        if self._status_override is None:
            if running:
                self.status_label.config(text="• In Progress", foreground="red")
            elif session.all_teams_finished:
                self.status_label.config(text="• Complete", foreground="green")
            else:
                self.status_label.config(text="", foreground="gray")

        if running:
            self.progress_label.config(
                text=f"Teams Completed {session.completed_count}/{len(session.teams)}"
            )
        else:
            self.progress_label.config(text="")

        self.update_clock()
        self.toggle_button.config(text="Pause" if running else "Start")
        can_toggle = running or session.can_start_timer
        self.toggle_button.state(["!disabled"] if can_toggle else ["disabled"])
        self.next_button.state(["!disabled"] if session.can_advance_round else ["disabled"])

        for row in self.team_rows.values():
            row.destroy()
        self.team_rows = {}
        for team in session.teams:
            self.team_rows[team.id] = self._build_team_row(team, running, session.current_round)

    def _build_team_row(self, team: Team, running: bool, round_number: int) -> ttk.Frame:
        row = ttk.Frame(self.teams_frame)
        row.pack(fill="x", pady=2)

        ttk.Label(row, text=team.name, font=("Arial", 11, "bold"), width=18).pack(side="left")
        ttk.Label(row, text=f"{team.player_count} players", foreground="gray").pack(side="left", padx=4)

        timing = team.round_timing(round_number)
        parts = []
        if timing is not None:
            if timing.first_dice_time is not None:
                parts.append(f"1st {fmt_duration(timing.first_dice_time)}")
            if timing.last_dice_time is not None:
                parts.append(f"last {fmt_duration(timing.last_dice_time)}")
            if timing.duration is not None:
                parts.append(f"= {fmt_duration(timing.duration)}")
        ttk.Label(row, text="  ".join(parts)).pack(side="left", padx=8)

        ttk.Button(row, text="Remove", command=lambda: self.controller.remove_team(team.id)).pack(side="right")
        if running:
            has_first = timing is not None and timing.first_dice_time is not None
            has_last = timing is not None and timing.last_dice_time is not None
            last_button = ttk.Button(row, text="Last Dice", command=lambda: self.controller.record_last(team.id))
            last_button.pack(side="right", padx=2)
            if not has_first or has_last:
                last_button.state(["disabled"])
            ttk.Button(row, text="First Dice", command=lambda: self.controller.record_first(team.id)).pack(side="right", padx=2)
        return row


class ResultsWindow(tk.Toplevel):
    """Team and round statistics."""

    def __init__(self, parent: tk.Tk, analytics_service: AnalyticsService):
        super().__init__(parent)
        self.title("Results")
        self.geometry("640x480")
        self.transient(parent)
        self.analytics_service = analytics_service
        self._build_ui()

    def _build_ui(self):
        report = self.analytics_service.generate_session_report()

        notebook = ttk.Notebook(self)
        notebook.pack(fill="both", expand=True, padx=10, pady=10)

        team_tree = ttk.Treeview(
            notebook,
            columns=("Players", "Rounds", "Average", "Per Player", "Std Dev", "Fastest"),
            show="tree headings",
        )
        team_tree.heading("#0", text="Team")
        for name in ("Players", "Rounds", "Average", "Per Player", "Std Dev", "Fastest"):
            team_tree.heading(name, text=name)
            team_tree.column(name, width=80, anchor="center")
        for summary in report.teams:
            fastest = ""
            if summary.fastest_round is not None:
                fastest = f"R{summary.fastest_round} {fmt_duration(summary.fastest_duration)}"
            parent_id = team_tree.insert(
                "",
                "end",
                text=summary.name,
                values=(
                    summary.player_count,
                    summary.completed_rounds,
                    fmt_duration(summary.average_duration),
                    fmt_duration(summary.average_duration_per_player),
                    fmt_duration(summary.standard_deviation),
                    fastest,
                ),
            )
            for row in summary.rounds:
                team_tree.insert(
                    parent_id,
                    "end",
                    text=f"Round {row.round}",
                    values=("", "", fmt_duration(row.duration), "", "", ""),
                )
        notebook.add(team_tree, text="Team Statistics")

        round_tree = ttk.Treeview(notebook, columns=("Time",), show="tree headings")
        round_tree.heading("#0", text="Round / Team")
        round_tree.heading("Time", text="Time")
        for round_summary in report.rounds:
            label = (
                f"Round {round_summary.round}  avg {fmt_duration(round_summary.average_duration)}"
                f"  sd {fmt_duration(round_summary.standard_deviation)}"
            )
            parent_id = round_tree.insert("", "end", text=label, open=True)
            for result in round_summary.results:
                round_tree.insert(parent_id, "end", text=result.team_name, values=(fmt_duration(result.duration),))
        notebook.add(round_tree, text="Round Statistics")

        ttk.Button(self, text="Close", command=self.destroy).pack(pady=(0, 10))


def create_tkinter_app() -> DiceTimerApp:
    """
    Create and return the main Tkinter application.

    Returns:
        Configured DiceTimerApp instance
    """
    return DiceTimerApp()


def run_tkinter_app() -> None:
    """Run the Tkinter application."""
    app = create_tkinter_app()
    app.mainloop()


if __name__ == "__main__":
    run_tkinter_app()
