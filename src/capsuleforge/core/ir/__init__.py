"""
CapsuleForge intermediate representation types.

All types are re-exported from this package.
"""

from .capsule import CapsuleDefinition, CapsuleProp, PlatformTemplate
from .composition import AppComposition, CapsuleInstance
from .platforms import AndroidAppConfig, DesktopAppConfig, IOSAppConfig, WebAppConfig
from .results import CompilationResult, CompilationStats, Diagnostic, GeneratedFile
from .theme import RadiusPreset, SpacingPreset, TextColors, ThemeColors, ThemeConfig, Typography

__all__ = [
    # Capsules
    "CapsuleDefinition",
    "CapsuleProp",
    "PlatformTemplate",
    # Composition
    "AppComposition",
    "CapsuleInstance",
    # Platform config
    "AndroidAppConfig",
    "DesktopAppConfig",
    "IOSAppConfig",
    "WebAppConfig",
    # Results
    "CompilationResult",
    "CompilationStats",
    "Diagnostic",
    "GeneratedFile",
    # Theme
    "RadiusPreset",
    "SpacingPreset",
    "TextColors",
    "ThemeColors",
    "ThemeConfig",
    "Typography",
]
