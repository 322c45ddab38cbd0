from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SETTINGS = dict(
    extra="ignore",
    env_file=".env",
    env_file_encoding="utf-8",
    case_sensitive=True,
    env_prefix="TREESTORE_",
    env_nested_delimiter="__"
)


class DatabaseConfig(BaseSettings):
    """Document store connection settings"""
    model_config = SettingsConfigDict(**_SETTINGS)

    BASE_URL: str = Field(
        default="http://localhost:5000",
        description="Base URL of the REST document store"
    )
    API_PREFIX: str = Field(
        default="/api",
        description="Path prefix in front of every collection"
    )
    ID_FIELD: str = Field(
        default="_id",
        description="Field carrying each document's identifier"
    )
    AUTH_TOKEN: Optional[str] = Field(
        default=None,
        description="Bearer token sent with every request"
    )
    REQUEST_TIMEOUT: float = Field(
        default=10.0,
        description="Total timeout per request in seconds"
    )
    POOL_SIZE: int = Field(
        default=10,
        description="Maximum number of pooled connections"
    )

    @field_validator('BASE_URL')
    def validate_base_url(cls, v):
        if not v.startswith(("http://", "https://")):
            raise ValueError('BASE_URL must start with http:// or https://')
        return v.rstrip("/")

    @field_validator('API_PREFIX')
    def validate_api_prefix(cls, v):
        if v and not v.startswith("/"):
            raise ValueError('API_PREFIX must start with "/"')
        return v.rstrip("/")

    @field_validator('REQUEST_TIMEOUT')
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError('REQUEST_TIMEOUT must be positive')
        return v

    @field_validator('POOL_SIZE')
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError('POOL_SIZE must be at least 1')
        return v


class ListenerConfig(BaseSettings):
    """Subscription settings"""
    model_config = SettingsConfigDict(**_SETTINGS)

    POLL_INTERVAL: float = Field(
        default=5.0,
        description="Seconds between polling reads of a subscribed path"
    )
    NOTIFIER_TYPE: str = Field(
        default="polling",
        description="Change notification strategy"
    )

    @field_validator('POLL_INTERVAL')
    def validate_poll_interval(cls, v):
        if v <= 0:
            raise ValueError('POLL_INTERVAL must be positive')
        return v

    @field_validator('NOTIFIER_TYPE')
    def validate_notifier_type(cls, v):
        if v not in ['polling']:
            raise ValueError('NOTIFIER_TYPE must be "polling"')
        return v


class MonitoringConfig(BaseSettings):
    """Monitoring configuration with defaults"""
    model_config = SettingsConfigDict(**_SETTINGS)

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    LOG_DIR: str = Field(
        default="logs",
        description="Directory for log files"
    )
    METRICS_DIR: str = Field(
        default="metrics",
        description="Directory for metrics files"
    )
    ENABLE_METRICS: bool = Field(
        default=True,
        description="Enable metrics collection"
    )

    @field_validator('LOG_LEVEL')
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']:
            raise ValueError('LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL')
        return v


class AppConfig(BaseSettings):
    """Application configuration with defaults and environment variable support"""
    model_config = SettingsConfigDict(**_SETTINGS)

    APP_NAME: str = Field(
        default="treestore",
        description="Application name"
    )
    ENV: str = Field(
        default="development",
        description="Environment (development, testing, production)"
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode"
    )

    DATABASE: DatabaseConfig = Field(
        default_factory=DatabaseConfig,
        description="Document store configuration"
    )
    LISTENER: ListenerConfig = Field(
        default_factory=ListenerConfig,
        description="Subscription configuration"
    )
    MONITORING: MonitoringConfig = Field(
        default_factory=MonitoringConfig,
        description="Monitoring configuration"
    )

    @field_validator('ENV')
    def validate_env(cls, v):
        if v not in ['development', 'testing', 'production']:
            raise ValueError('ENV must be one of: development, testing, production')
        return v
