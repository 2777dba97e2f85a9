"""Tests for driver error metrics."""

from unittest.mock import MagicMock

import pytest

from dbcommon.database import (
    DatabaseMetrics,
    DeadlockException,
    DriverError,
    GenericDriverException,
    get_db_metrics,
)


class TestDatabaseMetrics:
    """Test metric emission."""

    def test_record_exception_tags(self):
        """Normalized exceptions are tagged with their kind."""
        client = MagicMock()
        metrics = DatabaseMetrics(client)
        error = DeadlockException("m", DriverError("raw"), table="orders", operation="update")

        metrics.record_exception(error)

        client.increment.assert_called_once()
        assert client.increment.call_args.args[0] == "db.exception.normalized"
        tags = client.increment.call_args.kwargs["tags"]
        assert "service:test-service" in tags
        assert "environment:test" in tags
        assert "table:orders" in tags
        assert "operation:update" in tags
        assert "kind:deadlock" in tags
        assert "retryable:true" in tags
        assert "error_type:DeadlockException" in tags

    def test_record_query_error(self):
        """Failed statements record error, duration and count."""
        client = MagicMock()
        metrics = DatabaseMetrics(client)

        with pytest.raises(GenericDriverException):
            with metrics.record_query("users", "select"):
                raise GenericDriverException("m", DriverError("raw"))

        error_call = client.increment.call_args_list[0]
        assert error_call.args[0] == "db.query.error"
        assert "kind:generic" in error_call.kwargs["tags"]
        assert client.histogram.call_args.args[0] == "db.query.duration"
        assert client.increment.call_args_list[-1].args[0] == "db.query.count"

    def test_record_query_success(self):
        """Successful statements record duration and count only."""
        client = MagicMock()
        metrics = DatabaseMetrics(client)

        with metrics.record_query("users", "select"):
            pass

        names = [call.args[0] for call in client.increment.call_args_list]
        assert names == ["db.query.count"]
        assert "status:success" in client.histogram.call_args.kwargs["tags"]

    def test_record_retry(self):
        """Retry attempts carry the attempt number."""
        client = MagicMock()
        metrics = DatabaseMetrics(client)

        metrics.record_retry(2, DeadlockException("m", DriverError("raw")))

        assert client.increment.call_args.args[0] == "db.retry.attempt"
        assert "attempt:2" in client.increment.call_args.kwargs["tags"]

    def test_disabled_metrics(self, monkeypatch):
        """Disabled metrics never reach the client."""
        monkeypatch.setenv("DBCOMMON_METRICS_ENABLED", "false")
        client = MagicMock()
        metrics = DatabaseMetrics(client)
        error = DeadlockException("m", DriverError("raw"))

        metrics.record_exception(error)
        metrics.record_retry(1, error)
        metrics.record_retry_exhausted(error)
        with metrics.record_query("users", "select"):
            pass

        assert client.method_calls == []


def test_global_metrics_singleton():
    """Test global metrics instance is reused."""
    assert get_db_metrics() is get_db_metrics()
