"""
Config
- Manages adapter configuration
- Handles environment-specific settings
- Provides configuration loading and validation
"""

from utilities.validators.config_validator import AppConfig, DatabaseConfig, ListenerConfig, MonitoringConfig

__all__ = [
    'AppConfig',
    'DatabaseConfig',
    'ListenerConfig',
    'MonitoringConfig'
]
