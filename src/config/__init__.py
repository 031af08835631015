# src/config/__init__.py
from .explorer_config import ExplorerConfig, default_config

__all__ = ['ExplorerConfig', 'default_config']
