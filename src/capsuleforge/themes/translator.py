"""
Theme translator.

Converts a ThemeConfig's semantic tokens into target-specific style
source:

- CSS custom properties (web, desktop)
- SwiftUI color extension and metrics (iOS)
- Jetpack Compose color object and dimensions (Android)

Every semantic color token is emitted for every target, in one canonical
order. Absent tokens take the defaults below; values that cannot be parsed
take NEUTRAL_COLOR so the emitted source always compiles.
"""

from __future__ import annotations

import re

from ..core.ir import ThemeConfig
from ..core.strings import RGB, hex_to_rgb, rgb_to_hex, split_words, to_camel_case, to_pascal_case

NEUTRAL_COLOR = "#808080"
_NEUTRAL_RGB = RGB(128, 128, 128)

# Canonical token order and defaults
DEFAULT_COLORS: dict[str, str] = {
    "primary": "#3b82f6",
    "secondary": "#8b5cf6",
    "accent": "#06b6d4",
    "background": "#ffffff",
    "surface": "#f8fafc",
    "error": "#ef4444",
    "success": "#22c55e",
    "warning": "#f59e0b",
    "text.primary": "#0f172a",
    "text.secondary": "#64748b",
    "text.disabled": "#94a3b8",
}

DEFAULT_FONT_FAMILY = "Inter"
DEFAULT_MONO_FONT = "ui-monospace"

# Spacing presets -> multiplier
_SPACING_SCALE: dict[str, float] = {
    "compact": 0.875,
    "normal": 1.0,
    "relaxed": 1.25,
}

# Radius presets -> pixels (points/dp on native)
_RADII: dict[str, int] = {
    "none": 0,
    "sm": 4,
    "md": 8,
    "lg": 12,
    "full": 9999,
}
DEFAULT_RADIUS = "md"

_SHADOW_ON = "0 1px 3px rgba(0, 0, 0, 0.12)"
_SHADOW_OFF = "none"

# Color text safe to place in a CSS declaration: hex, named colors, rgb()/hsl()/oklch()
_CSS_COLOR = re.compile(r"#[0-9a-fA-F]{3,8}|[a-zA-Z]+|[a-zA-Z]+\([0-9a-zA-Z.,%/\s-]*\)")

# Unquoted font-family list: names, spaces, commas, dots, hyphens
_CSS_FONT = re.compile(r"[A-Za-z0-9][A-Za-z0-9 ,._-]*")


# =============================================================================
# Token resolution
# =============================================================================


def resolve_color_tokens(theme: ThemeConfig) -> list[tuple[str, str]]:
    """
    Resolve all semantic color tokens in canonical order.

    Args:
        theme: Theme configuration (tokens may be absent)

    Returns:
        List of (token, raw value) with defaults substituted for absent tokens
    """
    colors = theme.colors
    provided: dict[str, str | None] = {
        "primary": colors.primary,
        "secondary": colors.secondary,
        "accent": colors.accent,
        "background": colors.background,
        "surface": colors.surface,
        "error": colors.error,
        "success": colors.success,
        "warning": colors.warning,
        "text.primary": colors.text.primary,
        "text.secondary": colors.text.secondary,
        "text.disabled": colors.text.disabled,
    }
    return [(token, provided[token] or default) for token, default in DEFAULT_COLORS.items()]


def parse_color(value: str) -> RGB:
    """Parse a hex color, falling back to NEUTRAL_COLOR."""
    return hex_to_rgb(value) or _NEUTRAL_RGB


def spacing_scale(theme: ThemeConfig) -> float:
    return _SPACING_SCALE.get(theme.spacing or "normal", 1.0)


def radius_px(theme: ThemeConfig) -> int:
    return _RADII.get(theme.border_radius or DEFAULT_RADIUS, _RADII[DEFAULT_RADIUS])


def token_constant_name(token: str, pascal: bool = False) -> str:
    """
    Name for a token constant: "text.primary" -> "textPrimary" / "TextPrimary".
    """
    return to_pascal_case(token) if pascal else to_camel_case(token)


# =============================================================================
# CSS
# =============================================================================


def _css_color(value: str) -> str:
    rgb = hex_to_rgb(value)
    if rgb is not None:
        return rgb_to_hex(rgb)
    if _CSS_COLOR.fullmatch(value.strip()):
        return value.strip()
    return NEUTRAL_COLOR


def _css_font(value: str | None, default: str) -> str:
    if value and _CSS_FONT.fullmatch(value.strip()):
        return value.strip()
    return default


def theme_to_css(theme: ThemeConfig) -> str:
    """
    Convert a theme to a CSS :root block.

    Args:
        theme: Theme configuration

    Returns:
        CSS string with custom properties in canonical order
    """
    typography = theme.typography
    font_family = _css_font(typography.font_family, DEFAULT_FONT_FAMILY)
    heading_font = _css_font(typography.heading_font, font_family)
    mono_font = _css_font(typography.mono_font, DEFAULT_MONO_FONT)

    lines = [":root {"]
    for token, value in resolve_color_tokens(theme):
        name = "-".join(w.lower() for w in split_words(token))
        lines.append(f"  --color-{name}: {_css_color(value)};")
    lines.append(f"  --font-family: {font_family}, system-ui, sans-serif;")
    lines.append(f"  --font-heading: {heading_font}, system-ui, sans-serif;")
    lines.append(f"  --font-mono: {mono_font}, monospace;")
    lines.append(f"  --spacing-scale: {spacing_scale(theme)};")
    lines.append(f"  --radius-base: {radius_px(theme)}px;")
    lines.append(f"  --shadow-base: {_SHADOW_ON if theme.shadows else _SHADOW_OFF};")
    lines.append("}")
    return "\n".join(lines)


# =============================================================================
# SwiftUI
# =============================================================================


def swift_color_literal(value: str) -> str:
    """Fractional 0..1 triplet: Color(red: 0.231, green: 0.510, blue: 0.965)."""
    rgb = parse_color(value)
    return (
        f"Color(red: {rgb.r / 255:.3f}, green: {rgb.g / 255:.3f}, blue: {rgb.b / 255:.3f})"
    )


def theme_to_swift(theme: ThemeConfig, prefix: str = "app") -> str:
    """
    Convert a theme to a SwiftUI Color extension.

    Args:
        theme: Theme configuration
        prefix: Constant name prefix (appPrimary, appTextPrimary, ...)

    Returns:
        Swift source text
    """
    lines = ["import SwiftUI", "", "extension Color {"]
    for token, value in resolve_color_tokens(theme):
        name = prefix + token_constant_name(token, pascal=True)
        lines.append(f"    static let {name} = {swift_color_literal(value)}")
    lines.append("}")
    return "\n".join(lines) + "\n"


def theme_metrics_swift(theme: ThemeConfig) -> str:
    """Radius, spacing scale and shadow flag as a Swift enum."""
    shadows = "true" if theme.shadows else "false"
    return (
        "import SwiftUI\n"
        "\n"
        "enum AppMetrics {\n"
        f"    static let cornerRadius: CGFloat = {radius_px(theme)}\n"
        f"    static let spacingScale: CGFloat = {spacing_scale(theme)}\n"
        f"    static let shadowsEnabled = {shadows}\n"
        "}\n"
    )


# =============================================================================
# Jetpack Compose
# =============================================================================


def kotlin_color_literal(value: str) -> str:
    """Packed ARGB integer: Color(0xFF3B82F6)."""
    rgb = parse_color(value)
    return f"Color(0xFF{rgb.r:02X}{rgb.g:02X}{rgb.b:02X})"


def theme_to_kotlin(theme: ThemeConfig, package: str) -> str:
    """
    Convert a theme to a Compose color object.

    Args:
        theme: Theme configuration
        package: Kotlin package for the generated file

    Returns:
        Kotlin source text
    """
    lines = [
        f"package {package}",
        "",
        "import androidx.compose.ui.graphics.Color",
        "",
        "object AppColors {",
    ]
    for token, value in resolve_color_tokens(theme):
        lines.append(f"    val {token_constant_name(token, pascal=True)} = {kotlin_color_literal(value)}")
    lines.append("}")
    return "\n".join(lines) + "\n"


def theme_metrics_kotlin(theme: ThemeConfig, package: str) -> str:
    """Radius, spacing scale and shadow flag as a Kotlin object."""
    shadows = "true" if theme.shadows else "false"
    return (
        f"package {package}\n"
        "\n"
        "import androidx.compose.ui.unit.dp\n"
        "\n"
        "object AppDimens {\n"
        f"    val CornerRadius = {radius_px(theme)}.dp\n"
        f"    const val SpacingScale = {spacing_scale(theme)}f\n"
        f"    const val ShadowsEnabled = {shadows}\n"
        "}\n"
    )
