"""
Web application module for the Dice Round Timer.

This module contains the Flask web server that serves the HTML interface
and provides JSON API endpoints for timing rounds and reading results.
"""
import logging
import os
from dataclasses import asdict
from typing import Optional

from flask import Flask, Response, jsonify, request, send_from_directory
from werkzeug.exceptions import HTTPException

from ..models import SessionState
from ..services import (
    ServiceFactory, Scheduler, TeamNotFoundError, TeamValidationError
)
from ..utils import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_PLAYER_COUNT, RESET_SCOPES

logger = logging.getLogger(__name__)

STATE_EXTENSION = "dice_timer"


class WebAppState:
    """
    State holder for one web application instance.

    Owns the session state and the services built around it.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None):
        self.session_state = SessionState()
        self.service_factory = ServiceFactory(scheduler)

        services = self.service_factory.create_complete_service_suite(self.session_state)
        self.session_service = services['session']
        self.stopwatch = services['stopwatch']
        self.analytics_service = services['analytics']

    def shutdown(self) -> None:
        """Cancel any pending stopwatch ticks."""
        self.stopwatch.stop()


def get_app_state(app: Flask) -> WebAppState:
    """Return the :class:`WebAppState` attached to ``app``."""
    return app.extensions[STATE_EXTENSION]


def create_app(static_folder: Optional[str] = None, scheduler: Optional[Scheduler] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        static_folder: Directory to serve ``index.html`` from; defaults to the
            bundled ``static`` directory
        scheduler: Scheduler driving the stopwatch ticks

    Returns:
        Configured Flask application instance
    """
    if static_folder is None:
        static_folder = os.path.join(os.path.dirname(__file__), "static")

    app = Flask(__name__, static_folder=static_folder, static_url_path="")
    app_state = WebAppState(scheduler)
    app.extensions[STATE_EXTENSION] = app_state
    session = app_state.session_service

    @app.route("/")
    def index():
        """Serve the main HTML interface."""
        response = send_from_directory(static_folder, "index.html")
        response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
        return response

    # ==================== Error handlers ==================== #

    @app.errorhandler(TeamValidationError)
    def handle_validation_error(error):
        return jsonify({"success": False, "error": str(error)}), 400

    @app.errorhandler(TeamNotFoundError)
    def handle_team_not_found(error):
        team_id = error.args[0] if error.args else ""
        return jsonify({"success": False, "error": f"Team not found: {team_id}"}), 404

    def _json_object():
        """Return the JSON request body as a dict, or None if it is not an object."""
        data = request.get_json(silent=True)
        if data is None:
            return {}
        return data if isinstance(data, dict) else None

    def _body_not_object():
        return jsonify({"success": False, "error": "Request body must be a JSON object"}), 400

    def _state_response(message: Optional[str] = None, status: int = 200):
        payload = {"success": True, **session.snapshot()}
        if message:
            payload["message"] = message
        return jsonify(payload), status

    # ==================== State ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Get timer, round and team data."""
        return _state_response()

    # ==================== Teams ==================== #

    @app.route("/api/teams", methods=["POST"])
    def add_team():
        """Add a team to the session."""
        data = _json_object()
        if data is None:
            return _body_not_object()
        team = session.add_team(
            data.get("name", ""),
            data.get("player_count", DEFAULT_PLAYER_COUNT),
        )
        return jsonify({"success": True, "team": team.to_json()}), 201

    @app.route("/api/teams/<team_id>", methods=["DELETE"])
    def remove_team(team_id: str):
        team = session.remove_team(team_id)
        return _state_response(f"Removed {team.name}")

    @app.route("/api/teams/<team_id>/first-dice", methods=["POST"])
    def record_first_dice(team_id: str):
        """Record the current stopwatch time as the team's first dice."""
        if not session.record_first_dice(team_id):
            return jsonify({"success": False, "error": "Timer is not running"}), 409
        return _state_response()

    @app.route("/api/teams/<team_id>/last-dice", methods=["POST"])
    def record_last_dice(team_id: str):
        """Record the current stopwatch time as the team's last dice."""
        if not session.record_last_dice(team_id):
            return jsonify({"success": False, "error": "Timer is not running"}), 409
        return _state_response()

    # ==================== Timer ==================== #

    @app.route("/api/timer/start", methods=["POST"])
    def start_timer():
        if not session.start_timer():
            return jsonify({
                "success": False,
                "error": "Add a team, or move to the next round, before starting the timer",
            }), 409
        return _state_response("Timer started")

    @app.route("/api/timer/stop", methods=["POST"])
    def stop_timer():
        session.stop_timer()
        return _state_response("Timer stopped")

    @app.route("/api/timer/toggle", methods=["POST"])
    def toggle_timer():
        running = session.toggle_timer()
        return _state_response("Timer running" if running else "Timer paused")

    @app.route("/api/timer/pause", methods=["POST"])
    def pause_timer():
        session.stopwatch.pause()
        return _state_response("Timer paused")

    @app.route("/api/timer/resume", methods=["POST"])
    def resume_timer():
        if not session.can_start_timer:
            return jsonify({"success": False, "error": "Round is already complete"}), 409
        session.stopwatch.resume()
        return _state_response("Timer resumed")

    @app.route("/api/timer/reset", methods=["POST"])
    def reset_timer():
        session.reset_current_round()
        return _state_response("Timer reset")

    # ==================== Rounds ==================== #

    @app.route("/api/round/next", methods=["POST"])
    def next_round():
        if not session.next_round():
            return jsonify({
                "success": False,
                "error": "Every team must finish the round and the timer must be stopped",
            }), 409
        return _state_response(f"Round {session.current_round}")

    @app.route("/api/reset", methods=["POST"])
    def reset():
        """Reset the current round, all rounds, or the whole session."""
        data = _json_object()
        if data is None:
            return _body_not_object()
        scope = data.get("scope", "current_round")
        if scope not in RESET_SCOPES:
            return jsonify({
                "success": False,
                "error": f"scope must be one of: {', '.join(RESET_SCOPES)}",
            }), 400
        session.reset(scope)
        return _state_response("Reset complete")

    # ==================== Results ==================== #

    @app.route("/api/results", methods=["GET"])
    def get_results():
        """Team and round statistics."""
        report = app_state.analytics_service.generate_session_report()
        return jsonify({"success": True, "report": asdict(report)})

    @app.route("/api/results/export", methods=["GET"])
    def export_results():
        """Export the results report as CSV."""
        report = app_state.analytics_service.generate_session_report()
        try:
            csv_content = app_state.analytics_service.generate_report_csv(report)
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400

        return Response(
            csv_content,
            mimetype="text/csv",
            headers={
                "Content-Disposition": f"attachment; filename=dice_results_{int(report.generated_ts)}.csv"
            }
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        # Let Flask render routing errors such as 404/405 itself
        if isinstance(error, HTTPException):
            return error
        logger.exception("Unhandled error serving %s", request.path)
        return jsonify({"success": False, "error": str(error)}), 500

    return app


def run_web_app(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, static_folder: Optional[str] = None) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        static_folder: Directory containing ``index.html``
    """
    app = create_app(static_folder)
    logger.info("Serving dice timer on http://%s:%d", host, port)
    try:
        app.run(host=host, port=port, debug=False)
    finally:
        get_app_state(app).shutdown()


if __name__ == "__main__":
    run_web_app()
