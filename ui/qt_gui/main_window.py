"""
Main Window

Day grid canvas with a control bar above it:
clock, colors, grid lines, start policy, layout/grid mode, pause and reset.
"""
from PyQt6.QtCore import Qt, QEvent
from PyQt6.QtGui import QColor, QShowEvent
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QFrame, QLabel,
    QPushButton, QCheckBox, QComboBox, QSpinBox, QColorDialog, QStatusBar,
    QApplication,
)

from src.application.settings.day_grid_settings import DayGridSettingsManager
from src.features.day_grid.domain.time_slots import SLOTS_PER_DAY
from src.utils.config import RuntimeConfig
from src.utils.message import Log
from ui.qt_gui.day_grid.canvas_widget import DayGridCanvasWidget
from ui.qt_gui.day_grid.day_grid_controller import DayGridController
from ui.qt_gui.design_system import Sizes, Spacing, Typography, get_stylesheet


LAYOUT_CHOICES = [("Fit", "fit"), ("Fill", "fill"), ("Stretch", "stretch"), ("Auto", "auto")]
GRID_CHOICES = [("Auto grid", "auto"), ("Custom grid", "custom")]


class MainWindow(QMainWindow):
    """
    Single-view window for the day grid.

    Layout:
    - Control bar (clock, colors, toggles, layout and grid mode, pause/reset)
    - Canvas filling the rest of the window
    - Status bar for validation feedback
    """

    def __init__(self, settings_manager: DayGridSettingsManager, config: RuntimeConfig = None,
                 tick_timer=None, frame_timer=None):
        super().__init__()
        self.settings_manager = settings_manager
        self._started = False

        self.setWindowTitle("DayGrid")
        self.setMinimumSize(Sizes.MIN_WINDOW_WIDTH, Sizes.MIN_WINDOW_HEIGHT)
        self.resize(Sizes.DEFAULT_WINDOW_WIDTH, Sizes.DEFAULT_WINDOW_HEIGHT)
        self.setStyleSheet(get_stylesheet())

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.canvas_widget = DayGridCanvasWidget(central)
        self.controller = DayGridController(
            self.canvas_widget, settings_manager, config=config,
            tick_timer=tick_timer, frame_timer=frame_timer, parent=self,
        )

        layout.addWidget(self._create_control_bar())
        layout.addWidget(self.canvas_widget, 1)
        self.setCentralWidget(central)

        self.setStatusBar(QStatusBar(self))

        self.controller.clock_changed.connect(self.clock_label.setText)
        self.controller.paused_changed.connect(self._on_paused_changed)
        self.settings_manager.validation_failed.connect(self._on_validation_failed)
        self.settings_manager.settings_save_failed.connect(self._on_save_failed)

        app = QApplication.instance()
        if app is not None:
            app.applicationStateChanged.connect(self._on_application_state_changed)

        self._sync_controls()

    # ==================== Control bar ====================

    def _create_control_bar(self) -> QFrame:
        bar = QFrame(self)
        bar.setObjectName("controlBar")
        bar.setFixedHeight(Sizes.CONTROL_BAR_HEIGHT)
        row = QHBoxLayout(bar)
        row.setContentsMargins(Spacing.SM, Spacing.XS, Spacing.SM, Spacing.XS)
        row.setSpacing(Spacing.SM)

        self.clock_label = QLabel("--:--:--", bar)
        self.clock_label.setObjectName("clockLabel")
        self.clock_label.setFont(Typography.clock_font())
        row.addWidget(self.clock_label)
        row.addSpacing(Spacing.MD)

        self.fill_color_button = self._create_color_button("Fill", "fill_color", bar)
        self.empty_color_button = self._create_color_button("Empty", "empty_color", bar)
        row.addWidget(self.fill_color_button)
        row.addWidget(self.empty_color_button)

        self.show_grid_check = QCheckBox("Grid lines", bar)
        self.show_grid_check.toggled.connect(lambda checked: self.settings_manager.update(show_grid=checked))
        row.addWidget(self.show_grid_check)

        self.start_from_now_check = QCheckBox("Start from now", bar)
        self.start_from_now_check.toggled.connect(
            lambda checked: self.settings_manager.update(start_from_now=checked)
        )
        row.addWidget(self.start_from_now_check)

        self.layout_combo = QComboBox(bar)
        for label, value in LAYOUT_CHOICES:
            self.layout_combo.addItem(label, value)
        self.layout_combo.currentIndexChanged.connect(self._on_layout_mode_selected)
        row.addWidget(self.layout_combo)

        self.grid_mode_combo = QComboBox(bar)
        for label, value in GRID_CHOICES:
            self.grid_mode_combo.addItem(label, value)
        self.grid_mode_combo.currentIndexChanged.connect(self._on_grid_mode_selected)
        row.addWidget(self.grid_mode_combo)

        self.cols_spin = self._create_dimension_spin(bar)
        self.rows_spin = self._create_dimension_spin(bar)
        row.addWidget(self.cols_spin)
        row.addWidget(QLabel("x", bar))
        row.addWidget(self.rows_spin)

        self.apply_grid_button = QPushButton("Apply", bar)
        self.apply_grid_button.clicked.connect(self._on_apply_custom_grid)
        row.addWidget(self.apply_grid_button)

        self.grid_error_label = QLabel("", bar)
        self.grid_error_label.setObjectName("gridError")
        row.addWidget(self.grid_error_label)

        row.addStretch(1)

        self.pause_button = QPushButton("Pause", bar)
        self.pause_button.setCheckable(True)
        self.pause_button.clicked.connect(self.controller.toggle_pause)
        row.addWidget(self.pause_button)

        self.reset_button = QPushButton("Reset", bar)
        self.reset_button.clicked.connect(self.controller.reset)
        row.addWidget(self.reset_button)

        return bar

    def _create_color_button(self, text: str, setting: str, parent: QWidget) -> QPushButton:
        button = QPushButton(text, parent)
        button.clicked.connect(lambda: self._choose_color(setting))
        return button

    def _create_dimension_spin(self, parent: QWidget) -> QSpinBox:
        spin = QSpinBox(parent)
        spin.setRange(1, SLOTS_PER_DAY)
        spin.setFixedWidth(Sizes.GRID_SPINBOX_WIDTH)
        return spin

    def _sync_controls(self):
        """Mirror current settings into the controls without feeding changes back."""
        settings = self.settings_manager.settings
        controls = [self.show_grid_check, self.start_from_now_check, self.layout_combo,
                    self.grid_mode_combo, self.cols_spin, self.rows_spin]
        for control in controls:
            control.blockSignals(True)

        self.show_grid_check.setChecked(settings.show_grid)
        self.start_from_now_check.setChecked(settings.start_from_now)
        self.layout_combo.setCurrentIndex(max(0, self.layout_combo.findData(settings.layout_mode)))
        self.grid_mode_combo.setCurrentIndex(max(0, self.grid_mode_combo.findData(settings.grid_mode)))
        self.cols_spin.setValue(settings.custom_cols)
        self.rows_spin.setValue(settings.custom_rows)

        for control in controls:
            control.blockSignals(False)

        self._update_color_swatch(self.fill_color_button, settings.fill_color)
        self._update_color_swatch(self.empty_color_button, settings.empty_color)
        self._update_custom_grid_enabled()

    def _update_color_swatch(self, button: QPushButton, color: str):
        button.setStyleSheet(f"QPushButton {{ border-left: {Sizes.COLOR_SWATCH_WIDTH // 2}px solid {color}; }}")

    def _update_custom_grid_enabled(self):
        custom = self.grid_mode_combo.currentData() == "custom"
        self.cols_spin.setEnabled(custom)
        self.rows_spin.setEnabled(custom)
        self.apply_grid_button.setEnabled(custom)

    # ==================== Control handlers ====================

    def _choose_color(self, setting: str):
        current = QColor(self.settings_manager.get(setting))
        color = QColorDialog.getColor(current, self, "Choose color")
        if not color.isValid():
            return
        result = self.settings_manager.update(**{setting: color.name()})
        if result.valid:
            self._sync_controls()

    def _on_layout_mode_selected(self, index: int):
        self.settings_manager.update(layout_mode=self.layout_combo.itemData(index))

    def _on_grid_mode_selected(self, index: int):
        self.grid_error_label.setText("")
        self._update_custom_grid_enabled()
        if self.grid_mode_combo.itemData(index) == "auto":
            self.settings_manager.update(grid_mode="auto")
        else:
            self._on_apply_custom_grid()

    def _on_apply_custom_grid(self):
        result = self.controller.apply_custom_grid(self.cols_spin.value(), self.rows_spin.value())
        if result.success:
            self.grid_error_label.setText("")
            self.statusBar().showMessage(result.message, 3000)
        else:
            self.grid_error_label.setText("; ".join(result.errors) or result.message)

    def _on_paused_changed(self, paused: bool):
        self.pause_button.setChecked(paused)
        self.pause_button.setText("Resume" if paused else "Pause")

    def _on_validation_failed(self, result):
        self.statusBar().showMessage("; ".join(result.errors), 5000)
        self._sync_controls()

    def _on_save_failed(self, message: str):
        self.statusBar().showMessage(f"Settings not saved: {message}", 5000)

    def _on_application_state_changed(self, state):
        self.controller.on_visibility_changed(state == Qt.ApplicationState.ApplicationActive)

    # ==================== Window events ====================

    def showEvent(self, event: QShowEvent):
        super().showEvent(event)
        if not self._started:
            self._started = True
            self.controller.start()
        else:
            self.controller.on_visibility_changed(True)

    def changeEvent(self, event):
        if event.type() == QEvent.Type.WindowStateChange:
            self.controller.on_visibility_changed(not self.isMinimized())
        super().changeEvent(event)

    def closeEvent(self, event):
        Log.info("Closing main window...")
        self.controller.stop()
        self.settings_manager.force_save()
        super().closeEvent(event)
