"""
DayGrid Qt GUI Entry Point

Launches the day grid window.
"""
import argparse
import sys
from pathlib import Path

# Add project root to path so src is importable when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent))

from src.utils.config import RuntimeConfig, load_env_files
from src.utils.paths import get_app_install_dir, get_user_data_dir

# Priority: app-local .env -> user-data .env (highest)
load_env_files(get_app_install_dir(), get_user_data_dir())

from src.features.day_grid.application.renderer import RenderContextError
from src.utils.message import LEVELS, Log
from ui.qt_gui.qt_application import QtDayGridApp


def _parse_args(argv):
    parser = argparse.ArgumentParser(prog="daygrid", description="Day grid: one cell per second of the day")
    parser.add_argument("--log-level", choices=sorted(LEVELS), type=str.upper,
                        help="Override DAYGRID_LOG_LEVEL")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point for the Qt GUI"""
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    config = RuntimeConfig.from_env()
    Log.configure(level=args.log_level or config.log_level, file_logging=config.file_logging)

    Log.info("=" * 60)
    Log.info("DayGrid Qt GUI")
    Log.info("=" * 60)

    qt_app = QtDayGridApp(config)
    try:
        qt_app.initialize()
    except RenderContextError as e:
        Log.error(f"Rendering context unavailable: {e}")
        qt_app.shutdown()
        return 1

    exit_code = qt_app.run()

    Log.info("Shutting down...")
    qt_app.shutdown()
    Log.info("DayGrid exited")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
