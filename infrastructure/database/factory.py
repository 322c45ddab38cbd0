from typing import Optional

from core.interfaces import ChangeNotifier, DocumentGateway
from core.services import Database
from infrastructure.notifier import PollingNotifier
from utilities.config import get_config
from utilities.monitoring import MonitoringFactory
from utilities.validators.config_validator import AppConfig

from .rest import RestDocumentGateway


class DatabaseFactory:
    @staticmethod
    def create_gateway(
        type: str = "rest",
        base_url: Optional[str] = None,
        api_prefix: str = "/api",
        auth_token: Optional[str] = None,
        timeout: float = 10.0,
        pool_size: int = 10
    ) -> DocumentGateway:
        if type == "rest":
            if not base_url:
                raise ValueError("Base URL is required for REST gateway")
            return RestDocumentGateway(
                base_url,
                api_prefix=api_prefix,
                auth_token=auth_token,
                timeout=timeout,
                pool_size=pool_size
            )
        raise ValueError(f"Unknown gateway type: {type}")

    @staticmethod
    def create_notifier(type: str = "polling", interval: float = 5.0) -> ChangeNotifier:
        if type == "polling":
            return PollingNotifier(interval)
        raise ValueError(f"Unknown notifier type: {type}")

    @staticmethod
    def create_database(config: Optional[AppConfig] = None) -> Database:
        """Wire gateway, notifier and monitoring from configuration"""
        config = config or get_config()

        MonitoringFactory.get_monitoring_service().configure(
            app_name=config.APP_NAME,
            log_dir=config.MONITORING.LOG_DIR,
            metrics_dir=config.MONITORING.METRICS_DIR,
            level="DEBUG" if config.DEBUG else config.MONITORING.LOG_LEVEL,
            metrics_enabled=config.MONITORING.ENABLE_METRICS
        )

        gateway = DatabaseFactory.create_gateway(
            type="rest",
            base_url=config.DATABASE.BASE_URL,
            api_prefix=config.DATABASE.API_PREFIX,
            auth_token=config.DATABASE.AUTH_TOKEN,
            timeout=config.DATABASE.REQUEST_TIMEOUT,
            pool_size=config.DATABASE.POOL_SIZE
        )
        notifier = DatabaseFactory.create_notifier(
            type=config.LISTENER.NOTIFIER_TYPE,
            interval=config.LISTENER.POLL_INTERVAL
        )
        return Database(gateway, notifier, id_field=config.DATABASE.ID_FIELD)
