"""
Styling constants and theme configuration for the LED circuit window.
"""

# =============================================================================
# Color Palette
# =============================================================================

# Dark theme colors
BG_COLOR = "#111111"          # Main background
BG_COLOR_LIGHT = "#181818"    # Top bar
TEXT_COLOR = "#EEEEEE"        # Main text
TEXT_COLOR_DARK = "#888888"   # Placeholder timestamp
BORDER_COLOR = "#555555"      # Borders

# Canvas behind the LEDs
CANVAS_BG = "#202020"

# Buttons
ACCENT_GREEN = "#6BCB77"      # START
ACCENT_RED = "#FF6B6B"        # STOP

# =============================================================================
# PyQt5 Stylesheet
# =============================================================================

DARK_STYLESHEET = f"""
    QMainWindow {{
        background-color: {BG_COLOR};
        color: {TEXT_COLOR};
    }}
    QFrame#topBar {{
        background-color: {BG_COLOR_LIGHT};
        border-bottom: 1px solid {BORDER_COLOR};
    }}
    QLabel {{
        color: {TEXT_COLOR};
        font-size: 10pt;
    }}
    QLabel#timestampLabel {{
        font-family: monospace;
        font-size: 12pt;
        font-weight: bold;
    }}
    QPushButton {{
        color: #FFFFFF;
        border: none;
        border-radius: 4px;
        padding: 6px 12px;
        font-weight: bold;
    }}
    QPushButton#startButton {{
        background-color: {ACCENT_GREEN};
    }}
    QPushButton#stopButton {{
        background-color: {ACCENT_RED};
    }}
    QPushButton:pressed {{
        background-color: #4A88DF;
    }}
"""

TIMESTAMP_PLACEHOLDER = "--:--:--.---"
