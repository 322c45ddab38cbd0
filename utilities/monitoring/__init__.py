"""
Monitoring
- Per-module loggers writing JSON log files and console output
- In-process metrics for gateway requests and listener polling
"""

from .factory import MonitoringFactory

__all__ = ["MonitoringFactory"]
