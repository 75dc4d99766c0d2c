"""Shared pytest fixtures for CapsuleForge tests."""

from __future__ import annotations

import pytest

from capsuleforge.core.ir import (
    AppComposition,
    CapsuleDefinition,
    CapsuleInstance,
    CapsuleProp,
    PlatformTemplate,
)
from capsuleforge.core.registry import CapsuleTemplateRegistry, default_registry


@pytest.fixture
def registry() -> CapsuleTemplateRegistry:
    """Registry holding the built-in capsules."""
    return default_registry()


@pytest.fixture
def web_only_capsule() -> CapsuleDefinition:
    """A capsule with a web template and nothing else."""
    return CapsuleDefinition(
        id="chart",
        name="Chart",
        props=[CapsuleProp(name="series", type="array", required=True)],
        platforms={
            "web": PlatformTemplate(
                framework="react",
                code="export function {{componentName}}() { return null }",
                dependencies=["recharts:^2.10.0"],
            )
        },
    )


@pytest.fixture
def simple_composition() -> AppComposition:
    """Card with a button child, a text in its footer slot, and a sibling image."""
    return AppComposition(
        name="Demo App",
        description="A demo",
        targets=["web", "ios", "android", "desktop"],
        root=CapsuleInstance(
            id="page",
            capsule_id="card",
            props={"title": "Welcome"},
            children=[
                CapsuleInstance(id="cta", capsule_id="button", props={"text": "Go", "variant": "primary"}),
                CapsuleInstance(id="hero-image", capsule_id="image", props={"src": "https://example.com/a.png"}),
            ],
            slots={
                "footer": [CapsuleInstance(id="note", capsule_id="text", props={"content": "Fine print"})],
            },
        ),
    )


@pytest.fixture
def flat_composition() -> AppComposition:
    """Flat capsule list, wire format with the ``type`` key."""
    return AppComposition.model_validate(
        {
            "name": "Flat App",
            "targets": ["web"],
            "capsules": [
                {"id": "title", "type": "text", "props": {"content": "Hello"}},
                {"id": "go", "type": "button", "props": {"text": "Start"}},
            ],
        }
    )
