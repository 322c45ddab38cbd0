from .collectors import MetricsCollector, Metric
from .exporters import MetricsExporter, JSONFileExporter

__all__ = [
    'MetricsCollector',
    'Metric',
    'MetricsExporter',
    'JSONFileExporter'
]
