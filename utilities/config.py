import dotenv
from functools import lru_cache
from pathlib import Path

from .validators.config_validator import AppConfig, DatabaseConfig, ListenerConfig, MonitoringConfig
from .monitoring.factory import MonitoringFactory

logger = MonitoringFactory.get_logger("config")


@lru_cache()
def get_config() -> AppConfig:
    """Get adapter configuration with environment variable overrides"""
    try:
        env_file = Path(".env")
        if dotenv.find_dotenv(filename=str(env_file), usecwd=True) != "":
            dotenv.load_dotenv(dotenv_path=env_file)
            logger.info("Configuration loaded from .env file")
        else:
            logger.info("Configuration loaded from environment variables")

        config = AppConfig()

        logger.info(f"Environment: {config.ENV}")
        logger.info(f"Document store: {config.DATABASE.BASE_URL}{config.DATABASE.API_PREFIX}")
        logger.info(f"Poll interval: {config.LISTENER.POLL_INTERVAL}s")

        return config

    except Exception as e:
        logger.error(f"Error loading configuration: {e}")
        logger.warning("Using default configuration")
        return AppConfig.model_construct(
            DATABASE=DatabaseConfig.model_construct(),
            LISTENER=ListenerConfig.model_construct(),
            MONITORING=MonitoringConfig.model_construct()
        )

