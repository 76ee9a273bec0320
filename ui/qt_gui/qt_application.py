"""
Qt Application Entry Point

Creates the QApplication, the persisted settings and the main window.
"""
import sys
from typing import Optional

from PyQt6.QtWidgets import QApplication

from src.application.settings.base_settings import STORAGE_ERRORS
from src.application.settings.day_grid_settings import DayGridSettingsManager
from src.infrastructure.persistence.sqlite.database import Database
from src.infrastructure.persistence.sqlite.preferences_repository_impl import PreferencesRepository
from src.utils.config import RuntimeConfig
from src.utils.message import Log
from src.utils.paths import get_database_path


class QtDayGridApp:
    """Qt implementation of the DayGrid UI."""

    def __init__(self, config: Optional[RuntimeConfig] = None):
        self.config = config or RuntimeConfig.from_env()
        self.app: Optional[QApplication] = None
        self.main_window = None
        self.database: Optional[Database] = None
        self.settings_manager: Optional[DayGridSettingsManager] = None

    def initialize(self, db_path=None) -> None:
        """
        Create the Qt application, settings and main window.

        Args:
            db_path: Preferences database path (defaults to the user data dir)

        Raises:
            RenderContextError: If the drawing surface cannot be created
        """
        Log.info("Initializing Qt GUI")

        self.app = QApplication.instance() or QApplication(sys.argv)
        self.app.setApplicationName("DayGrid")
        self.app.setOrganizationName("DayGrid")
        self.app.setStyle("Fusion")
        self._setup_dark_theme()

        self.settings_manager = DayGridSettingsManager(self._open_preferences(db_path))

        # Lazy import: the window pulls in the whole widget stack
        from ui.qt_gui.main_window import MainWindow
        self.main_window = MainWindow(self.settings_manager, config=self.config)

        Log.info("Qt GUI initialized successfully")

    def _open_preferences(self, db_path) -> Optional[PreferencesRepository]:
        """Open the preferences store; None keeps settings in memory only."""
        try:
            self.database = Database(db_path or get_database_path())
        except STORAGE_ERRORS as e:
            Log.warning(f"Preferences unavailable, settings will not persist: {e}")
            return None
        return PreferencesRepository(self.database)

    def run(self) -> int:
        """
        Start the Qt event loop.

        Returns:
            Exit code
        """
        if not self.app or not self.main_window:
            Log.error("Qt application not initialized. Call initialize() first.")
            return 1

        self.main_window.show()
        self.main_window.raise_()
        self.main_window.activateWindow()

        Log.info("Starting Qt event loop")
        return self.app.exec()

    def shutdown(self) -> None:
        """Clean shutdown"""
        Log.info("Shutting down Qt GUI")
        if self.settings_manager:
            self.settings_manager.force_save()
        if self.database:
            self.database.close()
            self.database = None

    def _setup_dark_theme(self):
        """Application palette matching the design system colors."""
        from PyQt6.QtGui import QPalette
        from ui.qt_gui.design_system import Colors

        palette = QPalette()
        palette.setColor(QPalette.ColorRole.Window, Colors.BG_DARK)
        palette.setColor(QPalette.ColorRole.WindowText, Colors.TEXT_PRIMARY)
        palette.setColor(QPalette.ColorRole.Base, Colors.BG_MEDIUM)
        palette.setColor(QPalette.ColorRole.Text, Colors.TEXT_PRIMARY)
        palette.setColor(QPalette.ColorRole.Button, Colors.BG_MEDIUM)
        palette.setColor(QPalette.ColorRole.ButtonText, Colors.TEXT_PRIMARY)
        palette.setColor(QPalette.ColorRole.Highlight, Colors.ACCENT_BLUE)
        palette.setColor(QPalette.ColorRole.HighlightedText, Colors.TEXT_PRIMARY)
        palette.setColor(QPalette.ColorRole.ToolTipBase, Colors.BG_LIGHT)
        palette.setColor(QPalette.ColorRole.ToolTipText, Colors.TEXT_PRIMARY)
        self.app.setPalette(palette)
