"""Module: __init__.py

Author: Michael Economou
Date: 2026-10-12

Core package: execution contexts handed to storage components.
"""

from sleeptracker.core.application_context import (
    ApplicationContext,
    ComponentContext,
    is_valid_context,
)

__all__ = [
    "ApplicationContext",
    "ComponentContext",
    "is_valid_context",
]
