"""
Theme configuration types.

Every token is optional. Consumers substitute documented defaults for
absent tokens (see capsuleforge.themes.translator) and never fail on them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SpacingPreset(StrEnum):
    """Spacing scale presets."""

    COMPACT = "compact"
    NORMAL = "normal"
    RELAXED = "relaxed"


class RadiusPreset(StrEnum):
    """Border radius presets."""

    NONE = "none"
    SM = "sm"
    MD = "md"
    LG = "lg"
    FULL = "full"


class TextColors(BaseModel):
    """Text color tokens."""

    model_config = ConfigDict(frozen=True)

    primary: str | None = None
    secondary: str | None = None
    disabled: str | None = None


class ThemeColors(BaseModel):
    """
    Semantic color tokens.

    Example:
        ThemeColors(primary="#3b82f6", text=TextColors(primary="#0f172a"))
    """

    model_config = ConfigDict(frozen=True)

    primary: str | None = None
    secondary: str | None = None
    accent: str | None = None
    background: str | None = None
    surface: str | None = None
    error: str | None = None
    success: str | None = None
    warning: str | None = None
    text: TextColors = Field(default_factory=TextColors)


class Typography(BaseModel):
    """Font families and type scale."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    font_family: str | None = Field(default=None, description="Body font family")
    heading_font: str | None = Field(default=None, description="Heading font family")
    mono_font: str | None = Field(default=None, description="Monospace font family")
    scale: str | None = Field(default=None, description="compact | normal | large")


class ThemeConfig(BaseModel):
    """
    Theme for a composition.

    Example:
        ThemeConfig(
            name="Ocean",
            colors=ThemeColors(primary="#0077b6", secondary="#00b4d8"),
            spacing=SpacingPreset.RELAXED,
            border_radius=RadiusPreset.LG,
        )
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str = Field(default="default", description="Theme name")
    colors: ThemeColors = Field(default_factory=ThemeColors)
    typography: Typography = Field(default_factory=Typography)
    spacing: str | None = Field(default=None, description="compact | normal | relaxed")
    border_radius: str | None = Field(default=None, description="none | sm | md | lg | full")
    shadows: bool = Field(default=True, description="Emit elevation shadows")
