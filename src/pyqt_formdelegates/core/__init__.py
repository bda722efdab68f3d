"""
Core utilities.

Helpers with no delegate-specific logic.
"""

from .performance_monitor import timer, timed

__all__ = [
    "timer",
    "timed",
]
