"""Metrics for normalized driver errors."""

import time
from contextlib import contextmanager
from typing import Any, Optional

from datadog import DogStatsd

from .config import get_diagnostics_config
from .exceptions import is_normalized

# Global metrics client
_metrics_client: Optional["DatabaseMetrics"] = None


class DatabaseMetrics:
    """Driver error metrics collection with Datadog."""

    def __init__(self, statsd_client: DogStatsd | None = None):
        """Initialize database metrics."""
        self.config = get_diagnostics_config()
        self.enabled = self.config.metrics_enabled
        self._base_tags = [
            f"service:{self.config.service_name}",
            f"environment:{self.config.environment}",
        ]
        self.statsd = statsd_client or DogStatsd(
            host=self.config.statsd_host,
            port=self.config.statsd_port,
            namespace=self.config.metrics_namespace,
            constant_tags=list(self._base_tags),
        )

    def _get_tags(
        self,
        table: str | None = None,
        operation: str | None = None,
        status: str | None = None,
        additional_tags: list[str] | None = None,
    ) -> list[str]:
        """Build tags for metrics."""
        tags = self._base_tags.copy()

        if table:
            tags.append(f"table:{table}")
        if operation:
            tags.append(f"operation:{operation}")
        if status:
            tags.append(f"status:{status}")
        if additional_tags:
            tags.extend(additional_tags)

        return tags

    @staticmethod
    def _error_tags(error: BaseException) -> list[str]:
        tags = [f"error_type:{type(error).__name__}"]
        if is_normalized(error):
            tags.append(f"kind:{error.kind}")
            tags.append(f"retryable:{str(error.retryable).lower()}")
        return tags

    def record_exception(self, error: BaseException, driver: Any = None):
        """Record a raw driver error turned into a normalized exception."""
        if not self.enabled:
            return

        tags = self._get_tags(
            table=getattr(error, "table", None),
            operation=getattr(error, "operation", None),
        )
        tags.extend(self._error_tags(error))
        if driver is not None:
            tags.append(f"driver:{type(driver).__name__}")

        self.statsd.increment("db.exception.normalized", tags=tags)

    @contextmanager
    def record_query(
        self,
        table: str | None,
        operation: str | None,
        additional_tags: list[str] | None = None,
    ):
        """Context manager to record statement metrics."""
        if not self.enabled:
            yield
            return

        start_time = time.time()
        status = "success"

        try:
            yield
        except Exception as e:
            status = "error"
            tags = self._get_tags(table, operation, status, additional_tags)
            tags.extend(self._error_tags(e))

            # Record error
            self.statsd.increment("db.query.error", tags=tags)
            raise
        finally:
            # Record duration
            duration = (time.time() - start_time) * 1000  # Convert to ms
            tags = self._get_tags(table, operation, status, additional_tags)

            self.statsd.histogram("db.query.duration", duration, tags=tags)
            self.statsd.increment("db.query.count", tags=tags)

    def record_retry(self, attempt: int, error: BaseException | None):
        """Record a retry attempt for a retryable driver error."""
        if not self.enabled:
            return

        tags = self._get_tags(additional_tags=[f"attempt:{attempt}"])
        if error is not None:
            tags.extend(self._error_tags(error))
        self.statsd.increment("db.retry.attempt", tags=tags)

    def record_retry_exhausted(self, error: BaseException):
        """Record a retryable driver error that outlived every attempt."""
        if not self.enabled:
            return

        tags = self._get_tags()
        tags.extend(self._error_tags(error))
        self.statsd.increment("db.retry.exhausted", tags=tags)


def get_db_metrics() -> DatabaseMetrics:
    """Get or create database metrics instance."""
    global _metrics_client
    if _metrics_client is None:
        _metrics_client = DatabaseMetrics()
    return _metrics_client
