"""Utility helpers: paths and logging.

Author: Michael Economou
Date: 2026-10-12
"""
