"""Module: sleeptracker.config

Author: Michael Economou
Date: 2026-10-12

Configuration package for the sleeptracker application.

All settings are re-exported from this module:
    from sleeptracker.config import DATABASE_NAME, DATABASE_VERSION
"""

from sleeptracker.config.app import *  # noqa: F401, F403
