"""
Utility modules for the procurement API
"""
from .app_config_loader import AppConfig, load_app_config

__all__ = [
    'AppConfig',
    'load_app_config',
]
