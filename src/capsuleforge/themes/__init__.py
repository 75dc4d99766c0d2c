"""
CapsuleForge Theme System.

Usage:
    from capsuleforge.themes import get_theme_preset, theme_to_css, theme_to_swift

    theme = get_theme_preset("midnight")
    css = theme_to_css(theme)
    swift = theme_to_swift(theme)
"""

from .presets import DEFAULT_THEME, MIDNIGHT_THEME, get_theme_preset, list_theme_presets
from .translator import (
    DEFAULT_COLORS,
    NEUTRAL_COLOR,
    kotlin_color_literal,
    resolve_color_tokens,
    swift_color_literal,
    theme_metrics_kotlin,
    theme_metrics_swift,
    theme_to_css,
    theme_to_kotlin,
    theme_to_swift,
)

__all__ = [
    # Presets
    "DEFAULT_THEME",
    "MIDNIGHT_THEME",
    "get_theme_preset",
    "list_theme_presets",
    # Translation
    "DEFAULT_COLORS",
    "NEUTRAL_COLOR",
    "resolve_color_tokens",
    "theme_to_css",
    "theme_to_swift",
    "theme_metrics_swift",
    "theme_to_kotlin",
    "theme_metrics_kotlin",
    "swift_color_literal",
    "kotlin_color_literal",
]
