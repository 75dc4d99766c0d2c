"""
Per-platform app configuration.

Each platform compiler validates ``AppComposition.platform_config[platform]``
against one of these models. Unset fields keep their defaults.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Reverse-domain identifiers: at least two dot-separated segments
KOTLIN_PACKAGE_PATTERN = r"^[A-Za-z][A-Za-z0-9_]*(\.[A-Za-z][A-Za-z0-9_]*)+$"
BUNDLE_ID_PATTERN = r"^[A-Za-z][A-Za-z0-9-]*(\.[A-Za-z][A-Za-z0-9-]*)+$"


class WebAppConfig(BaseModel):
    """Web (React + Vite) project options."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    framework: str = Field(default="react")
    typescript: bool = Field(default=True)
    styling: str = Field(default="tailwind", description="tailwind | css-modules")
    bundler: str = Field(default="vite")


class IOSAppConfig(BaseModel):
    """iOS (SwiftUI) project options."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    framework: str = Field(default="swiftui")
    bundle_id: str = Field(default="com.capsuleforge.app", pattern=BUNDLE_ID_PATTERN)
    min_version: str = Field(default="16.0")
    team_id: str | None = Field(default=None, pattern=r"^[A-Z0-9]{10}$")


class AndroidAppConfig(BaseModel):
    """Android (Jetpack Compose) project options."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    framework: str = Field(default="compose")
    package_name: str = Field(default="com.capsuleforge.app", pattern=KOTLIN_PACKAGE_PATTERN)
    min_sdk: int = Field(default=24)
    target_sdk: int = Field(default=34)
    compile_sdk: int = Field(default=34)


class DesktopAppConfig(BaseModel):
    """Desktop (Tauri) project options."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    framework: str = Field(default="tauri")
    app_id: str = Field(default="com.capsuleforge.app", pattern=BUNDLE_ID_PATTERN)
    width: int = Field(default=1200)
    height: int = Field(default=800)
    min_width: int = Field(default=800)
    min_height: int = Field(default=600)
    resizable: bool = Field(default=True)
