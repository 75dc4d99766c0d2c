"""
CapsuleForge - multi-target UI code generation.

Compiles one capsule composition into web (React + Vite), iOS (SwiftUI),
Android (Jetpack Compose) and desktop (Tauri) source trees.
"""

__version__ = "0.3.0"
