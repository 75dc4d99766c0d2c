"""
Theme presets for CapsuleForge.

Predefined themes that a composition can reference by name (the CLI's
``--theme`` option) instead of spelling out every token.
"""

from __future__ import annotations

from ..core.ir import TextColors, ThemeColors, ThemeConfig, Typography

# =============================================================================
# Default Theme
# =============================================================================

DEFAULT_THEME = ThemeConfig(
    name="default",
    colors=ThemeColors(
        primary="#3b82f6",
        secondary="#8b5cf6",
        accent="#06b6d4",
        background="#ffffff",
        surface="#f8fafc",
        error="#ef4444",
        success="#22c55e",
        warning="#f59e0b",
        text=TextColors(primary="#0f172a", secondary="#64748b", disabled="#94a3b8"),
    ),
    typography=Typography(font_family="Inter", scale="normal"),
    spacing="normal",
    border_radius="md",
    shadows=True,
)

# =============================================================================
# Midnight Theme (dark surfaces, flat)
# =============================================================================

MIDNIGHT_THEME = ThemeConfig(
    name="midnight",
    colors=ThemeColors(
        primary="#818cf8",
        secondary="#c084fc",
        accent="#22d3ee",
        background="#0b1120",
        surface="#111827",
        error="#f87171",
        success="#4ade80",
        warning="#fbbf24",
        text=TextColors(primary="#f1f5f9", secondary="#94a3b8", disabled="#475569"),
    ),
    typography=Typography(font_family="Inter", heading_font="Space Grotesk", scale="normal"),
    spacing="relaxed",
    border_radius="lg",
    shadows=False,
)

_THEME_PRESETS: dict[str, ThemeConfig] = {
    "default": DEFAULT_THEME,
    "midnight": MIDNIGHT_THEME,
}


def get_theme_preset(name: str) -> ThemeConfig | None:
    """
    Get a theme preset by name.

    Args:
        name: Theme preset name ("default", "midnight")

    Returns:
        ThemeConfig if found, None otherwise
    """
    return _THEME_PRESETS.get(name)


def list_theme_presets() -> list[str]:
    """
    List available theme preset names.

    Returns:
        List of preset names
    """
    return list(_THEME_PRESETS.keys())
