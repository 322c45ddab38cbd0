from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional
import threading


@dataclass
class Metric:
    name: str
    value: float
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    labels: Dict[str, str] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "timestamp": self.timestamp.isoformat(),
            "labels": self.labels,
        }


class MetricsCollector:
    """Keeps the most recent ``max_samples`` values of each metric"""

    def __init__(self, max_samples: int = 1000):
        if max_samples < 1:
            raise ValueError("max_samples must be at least 1")
        self.max_samples = max_samples
        self._metrics: Dict[str, Deque[Metric]] = {}
        self._lock = threading.Lock()

    def record(
        self,
        name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ) -> None:
        """Record a metric value, dropping the oldest once the series is full"""
        with self._lock:
            series = self._metrics.get(name)
            if series is None:
                series = self._metrics[name] = deque(maxlen=self.max_samples)
            series.append(Metric(name=name, value=value, labels=dict(labels or {})))

    def get_metrics(self, name: Optional[str] = None) -> Dict[str, List[Metric]]:
        """Get recorded metrics"""
        with self._lock:
            if name:
                return {name: list(self._metrics.get(name, []))}
            return {key: list(values) for key, values in self._metrics.items()}

    def count(self, name: str) -> int:
        with self._lock:
            return len(self._metrics.get(name, []))

    def clear_metrics(self, name: Optional[str] = None) -> None:
        """Clear recorded metrics"""
        with self._lock:
            if name:
                self._metrics.pop(name, None)
            else:
                self._metrics.clear()
