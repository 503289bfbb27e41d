"""Shared logging and retry utilities."""

from .logging_config import setup_logging
from .rate_limiter import AsyncRateLimiter, retry_with_backoff

__all__ = [
    "setup_logging",
    "AsyncRateLimiter",
    "retry_with_backoff",
]
