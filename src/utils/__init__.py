"""
Utils module - Logging, paths, and runtime configuration.

Contents:
- message.py: Log class for application logging
- paths.py: Platform-specific path utilities
- config.py: Environment-derived runtime configuration
"""
from src.utils.message import Log
from src.utils.paths import (
    get_user_data_dir,
    get_logs_dir,
    get_database_path,
    get_app_install_dir,
)
from src.utils.config import RuntimeConfig, load_env_files

__all__ = [
    'Log',
    'get_user_data_dir',
    'get_logs_dir',
    'get_database_path',
    'get_app_install_dir',
    'RuntimeConfig',
    'load_env_files',
]
