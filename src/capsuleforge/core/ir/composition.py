"""
Composition types: capsule instance trees and the app composition.

An AppComposition is the unit of compilation and is immutable for the
duration of a compile call.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .theme import ThemeConfig


class CapsuleInstance(BaseModel):
    """
    One placed capsule in a composition tree.

    ``id`` is unique across the whole tree; diagnostics are attributed by it.
    The capsule type is read from ``capsuleId`` or, for flat capsule lists,
    from ``type``.

    Example:
        CapsuleInstance(
            id="hero",
            capsule_id="card",
            props={"title": "Welcome"},
            children=[CapsuleInstance(id="cta", capsule_id="button", props={"text": "Go"})],
            slots={"footer": [CapsuleInstance(id="note", capsule_id="text")]},
        )
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Instance id, unique within its tree")
    capsule_id: str = Field(description="Capsule definition id")
    name: str | None = Field(default=None, description="Optional display name")
    props: dict[str, Any] = Field(default_factory=dict, description="Prop values")
    children: list[CapsuleInstance] = Field(default_factory=list, description="Nested capsules")
    slots: dict[str, list[CapsuleInstance]] = Field(
        default_factory=dict, description="Slot name -> nested capsules"
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_type_key(cls, data: Any) -> Any:
        if isinstance(data, dict) and "type" in data:
            if "capsuleId" not in data and "capsule_id" not in data:
                data = dict(data)
                data["capsuleId"] = data.pop("type")
        return data

    @property
    def type(self) -> str:
        """Alias for capsule_id, matching flat capsule list wording."""
        return self.capsule_id


class AppComposition(BaseModel):
    """
    The app to compile, with its instance tree, theme and target platforms.

    Either ``root`` (a tree) or ``capsules`` (a flat list) or both may be set.
    ``platform_config`` holds per-platform overlays, validated by each
    platform compiler against its own config model.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str = Field(description="App name")
    description: str = Field(default="", description="App description")
    version: str = Field(default="1.0.0", description="App version")
    targets: list[str] = Field(default_factory=list, description="Target platforms")
    root: CapsuleInstance | None = Field(default=None, description="Root of the capsule tree")
    capsules: list[CapsuleInstance] = Field(default_factory=list, description="Flat capsule list")
    theme: ThemeConfig = Field(default_factory=ThemeConfig)
    platform_config: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Platform -> config overlay"
    )

    def top_level_instances(self) -> list[CapsuleInstance]:
        """Instances to render at the top of a page: the root, else the flat list."""
        if self.root is not None:
            return [self.root]
        return list(self.capsules)
