"""sleeptracker - local storage layer of the sleep-tracking application.

Author: Michael Economou
Date: 2026-10-12
"""

__version__ = "1.0.0"
