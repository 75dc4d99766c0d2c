"""
CapsuleForge core: IR types, naming utilities, the capsule registry,
configuration and input loading.
"""

from .errors import CapsuleForgeError, CompositionLoadError, ConfigError, RegistryError
from .registry import CapsuleTemplateRegistry, default_registry

__all__ = [
    "CapsuleForgeError",
    "CompositionLoadError",
    "ConfigError",
    "RegistryError",
    "CapsuleTemplateRegistry",
    "default_registry",
]
