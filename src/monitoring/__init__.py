# src/monitoring/__init__.py
from .logging_config import LogConfig
from .metrics import MetricsCollector, metrics

__all__ = ['LogConfig', 'MetricsCollector', 'metrics']
