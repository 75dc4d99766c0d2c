"""
Built-in capsule definitions.

A small sample set covering every platform. Real projects register their
own capsules from JSON/YAML files (see ``capsuleforge.core.loader``).
"""

from .builtin import BUTTON, CARD, IMAGE, TEXT, VIDEO, get_builtin_capsules

__all__ = [
    "BUTTON",
    "CARD",
    "IMAGE",
    "TEXT",
    "VIDEO",
    "get_builtin_capsules",
]
