"""
Design System

Centralized design tokens for the DayGrid window chrome.
Colors, spacing, typography, and the global stylesheet.
"""
from PyQt6.QtGui import QColor, QFont


def border_radius(px: int = 4) -> str:
    return f"{px}px"


class Colors:
    """Color palette for the application"""

    # Background colors
    BG_DARK = QColor(18, 20, 26)
    BG_MEDIUM = QColor(32, 35, 44)
    BG_LIGHT = QColor(48, 52, 64)

    # UI element colors
    BORDER = QColor(62, 66, 80)
    HOVER = QColor(58, 62, 76)
    SELECTED = QColor(78, 82, 98)

    # Text colors
    TEXT_PRIMARY = QColor(236, 238, 245)
    TEXT_SECONDARY = QColor(170, 176, 190)
    TEXT_DISABLED = QColor(110, 114, 126)

    # Accent colors
    ACCENT_BLUE = QColor(45, 125, 255)

    STATUS_ERROR = QColor(220, 80, 80)


class Spacing:
    """Spacing constants"""
    XS = 4
    SM = 8
    MD = 16


class Typography:
    """Font definitions"""

    @staticmethod
    def default_font() -> QFont:
        font = QFont()
        font.setFamily("SF Pro Text, Segoe UI, -apple-system, system-ui")
        font.setPixelSize(13)
        return font

    @staticmethod
    def mono_font() -> QFont:
        font = QFont()
        font.setFamily("SF Mono, Consolas, Monaco, monospace")
        font.setPixelSize(12)
        return font

    @staticmethod
    def clock_font() -> QFont:
        font = Typography.mono_font()
        font.setPixelSize(18)
        font.setWeight(QFont.Weight.DemiBold)
        return font


class Sizes:
    """Size constants for UI elements"""
    CONTROL_BAR_HEIGHT = 40
    COLOR_SWATCH_WIDTH = 28
    GRID_SPINBOX_WIDTH = 90
    MIN_WINDOW_WIDTH = 480
    MIN_WINDOW_HEIGHT = 320
    DEFAULT_WINDOW_WIDTH = 1280
    DEFAULT_WINDOW_HEIGHT = 800


def get_stylesheet() -> str:
    """Global stylesheet for the application."""
    br = border_radius

    return f"""
    /* === Base === */
    QMainWindow, QWidget {{
        background-color: {Colors.BG_DARK.name()};
        color: {Colors.TEXT_PRIMARY.name()};
        font-family: -apple-system, system-ui, "Segoe UI", sans-serif;
        font-size: 13px;
    }}

    /* === Control bar === */
    QFrame#controlBar {{
        background-color: {Colors.BG_MEDIUM.name()};
        border-bottom: 1px solid {Colors.BORDER.name()};
    }}
    QLabel#clockLabel {{
        background: transparent;
        color: {Colors.TEXT_PRIMARY.name()};
    }}
    QLabel#gridError {{
        background: transparent;
        color: {Colors.STATUS_ERROR.name()};
    }}

    /* === Buttons === */
    QPushButton {{
        background-color: {Colors.BG_MEDIUM.name()};
        border: 1px solid {Colors.BORDER.name()};
        border-radius: {br(4)};
        padding: 4px 12px;
        color: {Colors.TEXT_PRIMARY.name()};
        min-width: 48px;
    }}
    QPushButton:hover {{
        background-color: {Colors.HOVER.name()};
    }}
    QPushButton:pressed, QPushButton:checked {{
        background-color: {Colors.SELECTED.name()};
    }}
    QPushButton:disabled {{
        color: {Colors.TEXT_DISABLED.name()};
        background-color: {Colors.BG_DARK.name()};
        border-color: {Colors.BG_LIGHT.name()};
    }}

    /* === Input Widgets === */
    QSpinBox, QComboBox {{
        background-color: {Colors.BG_DARK.name()};
        border: 1px solid {Colors.BORDER.name()};
        border-radius: {br(4)};
        padding: 2px 6px;
        color: {Colors.TEXT_PRIMARY.name()};
        selection-background-color: {Colors.ACCENT_BLUE.name()};
    }}
    QSpinBox:disabled, QComboBox:disabled {{
        color: {Colors.TEXT_DISABLED.name()};
    }}
    QCheckBox {{
        background: transparent;
        spacing: 6px;
    }}

    /* === Tooltips === */
    QToolTip {{
        background-color: {Colors.BG_LIGHT.name()};
        color: {Colors.TEXT_PRIMARY.name()};
        border: 1px solid {Colors.BORDER.name()};
        padding: 4px;
    }}

    /* === Status bar === */
    QStatusBar {{
        background-color: {Colors.BG_MEDIUM.name()};
        color: {Colors.TEXT_SECONDARY.name()};
    }}
    """
