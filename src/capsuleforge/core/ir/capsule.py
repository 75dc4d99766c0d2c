"""
Capsule definition types.

A capsule is a reusable UI component definition carrying one source
template per supported platform. Presence of a platform key in
``CapsuleDefinition.platforms`` is what declares support for that platform.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Named substitution points inside template source: {{ componentName }}
_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


class CapsuleProp(BaseModel):
    """
    Capsule prop schema entry.

    Example:
        CapsuleProp(name="text", type="string", required=True)
        CapsuleProp(name="variant", type="select", options=["primary", "outline"])
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str = Field(description="Prop name")
    type: str = Field(default="string", description="Prop type (string, number, action, ...)")
    required: bool = Field(default=False, description="Is this prop required?")
    default: Any | None = Field(default=None, description="Default value")
    options: list[str] = Field(default_factory=list, description="Allowed values for select props")
    description: str | None = Field(default=None, description="Prop description")


class PlatformTemplate(BaseModel):
    """
    Source template for one platform.

    ``code`` is opaque source text. The only structure the compiler relies
    on is ``{{name}}`` placeholders, filled by :meth:`render`.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    framework: str = Field(description="Target framework (react, swiftui, compose, tauri)")
    code: str = Field(default="", description="Source text with {{name}} placeholders")
    dependencies: list[str] = Field(
        default_factory=list, description="Package dependencies (npm, SwiftPM, Gradle)"
    )
    imports: list[str] = Field(default_factory=list, description="Import lines the code needs")
    min_version: str | None = Field(default=None, description="Minimum OS version (iOS)")
    min_sdk: int | None = Field(default=None, description="Minimum SDK level (Android)")

    def render(self, **values: Any) -> str:
        """
        Substitute ``{{name}}`` placeholders.

        Placeholders with no matching value are left intact.
        """

        def _replace(match: re.Match[str]) -> str:
            key = match.group(1)
            if key in values:
                return str(values[key])
            return match.group(0)

        return _PLACEHOLDER.sub(_replace, self.code)


class CapsuleDefinition(BaseModel):
    """
    Capsule definition.

    Example:
        CapsuleDefinition(
            id="button",
            name="Button",
            category="ui",
            props=[CapsuleProp(name="text", required=True)],
            platforms={
                "web": PlatformTemplate(framework="react", code="export function {{componentName}}() {}"),
            },
        )
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(min_length=1, description="Unique capsule id")
    name: str = Field(description="Display name, used to derive component names")
    description: str = Field(default="", description="Capsule description")
    category: str = Field(default="ui", description="Category (ui, layout, data, ...)")
    tags: list[str] = Field(default_factory=list, description="Search tags")
    version: str = Field(default="1.0.0", description="Definition version")
    props: list[CapsuleProp] = Field(default_factory=list, description="Prop schema")
    platforms: dict[str, PlatformTemplate] = Field(
        default_factory=dict, description="Platform -> template"
    )
    accepts_children: bool = Field(default=False, description="Accepts nested capsules")
    slots: list[str] = Field(default_factory=list, description="Named slots")

    def get_prop(self, name: str) -> CapsuleProp | None:
        """Get prop schema entry by name."""
        for prop in self.props:
            if prop.name == name:
                return prop
        return None

    @property
    def required_props(self) -> list[CapsuleProp]:
        return [p for p in self.props if p.required]
