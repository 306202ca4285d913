"""
UI package for the Dice Round Timer.

This package contains user interface implementations including
the Flask web server and the Tkinter desktop app.
"""
from .web_app import create_app, run_web_app


def run_tkinter_app() -> None:
    """Run the desktop app; tkinter is only imported when needed."""
    from .tkinter_app import run_tkinter_app as _run
    _run()


__all__ = ["create_app", "run_web_app", "run_tkinter_app"]
