"""Tests for the logging and metrics helpers."""
import time

from complaintportal.utils.logger import ServiceLogger
from complaintportal.utils.metrics import MetricsCollector


def test_recent_logs_limit(tmp_path):
    logger = ServiceLogger("portal-utils-tests", log_dir=tmp_path)
    for i in range(3):
        logger.info(f"entry {i}")
    assert [e["message"] for e in logger.get_recent_logs(limit=2)] == ["entry 1", "entry 2"]
    assert logger.get_recent_logs(limit=0) == []
    assert logger.get_recent_logs(limit=-1) == []


def test_metrics_default_period():
    metrics = MetricsCollector("portal")
    metrics.increment("logins")
    assert len(metrics.get_all_metrics()["time_series"]["logins"]) == 1


def test_metrics_zero_period_is_not_the_default():
    metrics = MetricsCollector("portal")
    metrics.increment("logins")
    metrics.metrics["logins"][0]["timestamp"] = time.time() - 30
    assert metrics.get_all_metrics(time_period_minutes=0)["time_series"]["logins"] == []
    assert len(metrics.get_all_metrics(time_period_minutes=None)["time_series"]["logins"]) == 1
