from typing import Optional
from .logger import MonitoringService


class MonitoringFactory:
    _instance: Optional[MonitoringService] = None

    @classmethod
    def get_monitoring_service(
        cls,
        app_name: str = "treestore",
        log_dir: str = "logs",
        metrics_dir: str = "metrics"
    ) -> MonitoringService:
        if not cls._instance:
            cls._instance = MonitoringService(app_name, log_dir, metrics_dir)
        return cls._instance

    @classmethod
    def get_logger(cls, module_name: str, app_name: str = "treestore", log_dir: str = "logs"):
        monitoring_service = cls.get_monitoring_service(app_name, log_dir)
        return monitoring_service.get_logger(module_name)

    @classmethod
    def record_metric(cls, name: str, value: float, **labels: str) -> None:
        monitoring_service = cls.get_monitoring_service()
        if monitoring_service.metrics_enabled:
            monitoring_service.record_metric(name, value, labels)
