#!/usr/bin/env python3
"""
Main entry point for the Dice Round Timer web application.

This script launches the Flask-based web server.
"""
import logging

from dice_timer.ui.web_app import run_web_app
from dice_timer.utils import LOG_FORMAT

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    run_web_app()
