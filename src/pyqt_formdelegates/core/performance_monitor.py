"""Performance monitoring utilities for pyqt-formdelegates.

Provides a decorator and a context manager for timing form construction
and logging the result.
"""

import time
import functools
import logging
from contextlib import contextmanager
from typing import Optional, Callable

from pyqt_formdelegates.protocols import get_form_config


def _perf_logger() -> logging.Logger:
    return logging.getLogger(get_form_config().performance_logger_name)


@contextmanager
def timer(operation_name: str, threshold_ms: Optional[float] = None, log_args: bool = False, **kwargs):
    """Context manager for timing operations.

    Args:
        operation_name: Name of the operation being timed
        threshold_ms: Only log if operation takes longer than this (in milliseconds).
            Defaults to the configured performance_threshold_ms.
        log_args: Whether to log kwargs in the message
        **kwargs: Additional context to include in log message

    Example:
        with timer("Building form", field_count=12, log_args=True):
            view.build()
    """
    if threshold_ms is None:
        threshold_ms = get_form_config().performance_threshold_ms
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000

        if elapsed_ms >= threshold_ms:
            msg = f"{operation_name}: {elapsed_ms:.2f}ms"
            if log_args and kwargs:
                args_str = ", ".join(f"{k}={v}" for k, v in kwargs.items())
                msg += f" ({args_str})"

            _perf_logger().debug(msg)


def timed(operation_name: Optional[str] = None, threshold_ms: Optional[float] = None):
    """Decorator for timing function calls.

    Args:
        operation_name: Name for the operation (defaults to function name)
        threshold_ms: Only log if operation takes longer than this (in milliseconds)
    """
    def decorator(func: Callable) -> Callable:
        name = operation_name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with timer(name, threshold_ms=threshold_ms):
                return func(*args, **kwargs)

        return wrapper
    return decorator
