"""Time-series metrics collection for the portal services."""
import time
from collections import defaultdict
from typing import Any, Dict, List, Optional


class MetricsCollector:
    """Collects counters, gauges and request timings per service."""

    def __init__(self, service_name: str, max_datapoints: int = 1000):
        self.service_name = service_name
        self.metrics: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.counters: Dict[str, int] = defaultdict(int)
        self.gauges: Dict[str, float] = defaultdict(float)
        self.max_datapoints = max_datapoints

    def increment(self, metric_name: str, value: int = 1, tags: Dict[str, str] = None):
        """Increment a counter metric."""
        self.counters[metric_name] += value
        self._add_datapoint(metric_name, value, "counter", tags)

    def gauge(self, metric_name: str, value: float, tags: Dict[str, str] = None):
        """Set a gauge metric (current value)."""
        self.gauges[metric_name] = value
        self._add_datapoint(metric_name, value, "gauge", tags)

    def timing(self, metric_name: str, duration_ms: float, tags: Dict[str, str] = None):
        """Record a timing metric in milliseconds."""
        self._add_datapoint(metric_name, duration_ms, "timing", tags)

    def _add_datapoint(self, metric_name: str, value: float, metric_type: str, tags: Dict[str, str] = None):
        datapoint = {
            "timestamp": time.time(),
            "value": value,
            "type": metric_type,
            "tags": tags or {}
        }
        series = self.metrics[metric_name]
        series.append(datapoint)
        if len(series) > self.max_datapoints:
            self.metrics[metric_name] = series[-self.max_datapoints:]

    def get_metric_data(self, metric_name: str, time_period_minutes: int = 60) -> List[Dict[str, Any]]:
        """Get datapoints recorded within the last `time_period_minutes`."""
        if metric_name not in self.metrics:
            return []

        cutoff_time = time.time() - (time_period_minutes * 60)
        return [dp for dp in self.metrics[metric_name] if dp["timestamp"] >= cutoff_time]

    def get_all_metrics(self, time_period_minutes: Optional[int] = None) -> Dict[str, Any]:
        period = 60 if time_period_minutes is None else time_period_minutes
        return {
            "service": self.service_name,
            "timestamp": time.time(),
            "counters": dict(self.counters),
            "gauges": dict(self.gauges),
            "time_series": {name: self.get_metric_data(name, period) for name in self.metrics},
        }
