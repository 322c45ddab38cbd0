"""
Utilities Layer
- Provides cross-cutting functionality
- Manages configuration and validation
- Logging and metrics
"""

from .validators.config_validator import AppConfig, DatabaseConfig, ListenerConfig, MonitoringConfig

__all__ = [
    'AppConfig',
    'DatabaseConfig',
    'ListenerConfig',
    'MonitoringConfig',
]
