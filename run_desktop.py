#!/usr/bin/env python3
"""
Main entry point for the Dice Round Timer desktop application.

This script launches the Tkinter-based desktop interface.
"""
import logging

from dice_timer.ui import run_tkinter_app
from dice_timer.utils import LOG_FORMAT

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    run_tkinter_app()
