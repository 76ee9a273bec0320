"""
Path management for DayGrid

Handles platform-specific user data directories following standard conventions:
- macOS: ~/Library/Application Support/DayGrid/
- Linux: ~/.local/share/daygrid/
- Windows: %APPDATA%/DayGrid/

Application code should be separate from user data.
"""
import os
import sys
from pathlib import Path
from typing import Optional


APP_NAME = "DayGrid"

# Overrides the data directory (tests, portable installs)
DATA_DIR_ENV = "DAYGRID_DATA_DIR"


def get_user_data_dir() -> Path:
    """
    Get platform-specific user data directory.

    Returns:
        Path to user data directory where preferences and logs are stored.
    """
    override = os.getenv(DATA_DIR_ENV)
    if override:
        user_data_dir = Path(override)
    elif sys.platform == "darwin":
        user_data_dir = Path.home() / "Library" / "Application Support" / APP_NAME
    elif sys.platform == "win32":
        base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
        user_data_dir = base / APP_NAME
    else:
        user_data_dir = Path.home() / ".local" / "share" / APP_NAME.lower()

    user_data_dir.mkdir(parents=True, exist_ok=True)
    return user_data_dir


def get_logs_dir() -> Path:
    """
    Get directory for application logs.

    Returns:
        Path to logs directory (stored in user data directory).
    """
    logs_dir = get_user_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def get_database_path(db_name: str = "daygrid") -> Path:
    """
    Get path to SQLite database file.

    Args:
        db_name: Name of database file (without extension)

    Returns:
        Path to database file in user data directory.
    """
    return get_user_data_dir() / f"{db_name}.db"


def get_app_install_dir() -> Optional[Path]:
    """
    Get the application installation directory.

    Returns:
        Bundle root when frozen, otherwise the project root.
    """
    if getattr(sys, 'frozen', False):
        bundle_dir = getattr(sys, '_MEIPASS', None)
        if bundle_dir:
            return Path(bundle_dir)
        return Path(sys.executable).parent

    # .../src/utils/paths.py -> project root
    return Path(__file__).resolve().parent.parent.parent
