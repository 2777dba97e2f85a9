"""Database utilities."""

from .retry import async_db_retry, db_retry, is_retryable_error

__all__ = [
    "db_retry",
    "async_db_retry",
    "is_retryable_error",
]
