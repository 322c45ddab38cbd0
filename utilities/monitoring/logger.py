import os
import logging
from typing import Optional, Dict, Union

from .logging import setup_logger, redirect_file_handler
from .metrics import MetricsCollector, JSONFileExporter


class MonitoringService:
    def __init__(
        self,
        app_name: str,
        log_dir: str = "logs",
        metrics_dir: str = "metrics",
        level: int = logging.INFO,
        max_samples: int = 1000
    ):
        # Logger names keep the namespace they were first created under
        self.namespace = app_name
        self.app_name = app_name
        self.log_dir = log_dir
        self.metrics_dir = metrics_dir
        self.level = level
        self.metrics_enabled = True
        self.loggers: Dict[str, logging.Logger] = {}
        self.metrics_collector = MetricsCollector(max_samples)
        self.metrics_exporter = JSONFileExporter(metrics_dir, prefix=f"{app_name}_metrics")

    def _log_file(self, name: str) -> str:
        return os.path.join(self.log_dir, f"{name}.log")

    def get_logger(self, name: str) -> logging.Logger:
        """Get or create a logger for the specified name"""
        if name not in self.loggers:
            self.loggers[name] = setup_logger(
                f"{self.namespace}.{name}",
                self._log_file(name),
                level=self.level,
                app_name=self.app_name
            )
        return self.loggers[name]

    def set_level(self, level: Union[int, str]) -> None:
        """Apply a log level to every logger handed out so far"""
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
        self.level = level
        for logger in self.loggers.values():
            logger.setLevel(level)

    def configure(
        self,
        app_name: Optional[str] = None,
        log_dir: Optional[str] = None,
        metrics_dir: Optional[str] = None,
        level: Optional[Union[int, str]] = None,
        metrics_enabled: Optional[bool] = None
    ) -> None:
        """
        Apply monitoring settings, including to loggers that already exist.

        Existing loggers start writing to ``log_dir`` and tag their records
        with ``app_name``; later exports go to ``metrics_dir``.
        """
        if app_name is not None:
            self.app_name = app_name
        if metrics_enabled is not None:
            self.metrics_enabled = metrics_enabled
        if level is not None:
            self.set_level(level)

        if log_dir is not None:
            self.log_dir = log_dir
        if app_name is not None or log_dir is not None:
            for name, logger in self.loggers.items():
                redirect_file_handler(logger, self._log_file(name), app_name=self.app_name)

        if metrics_dir is not None:
            self.metrics_dir = metrics_dir
        self.metrics_exporter = JSONFileExporter(self.metrics_dir, prefix=f"{self.app_name}_metrics")

    def record_metric(
        self,
        name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ) -> None:
        """Record a metric value"""
        self.metrics_collector.record(name, value, labels)

    def export_metrics(self, clear: bool = True) -> str:
        """Write collected metrics to the metrics directory"""
        output_file = self.metrics_exporter.export(self.metrics_collector.get_metrics())
        if clear:
            self.metrics_collector.clear_metrics()
        return output_file
