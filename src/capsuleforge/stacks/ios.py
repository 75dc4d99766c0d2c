"""
iOS Compiler - SwiftUI Swift Package.

Output Structure:
    Package.swift
    Sources/<App>/
        <App>App.swift
        ContentView.swift
        Theme/
            Colors.swift
            Metrics.swift
        Components/
            Button.swift
            ...
    Info.plist
    README.md
"""

from __future__ import annotations

import json
from typing import Any
from xml.sax.saxutils import escape

from ..core.ir import AppComposition, CapsuleInstance, IOSAppConfig
from ..core.strings import escape_string
from ..themes import theme_metrics_swift, theme_to_swift
from . import CompileContext, PlatformCompiler

_INDENT = "    "
_SWIFT_TOOLS_VERSION = "5.9"


def swift_literal(value: Any, prop_type: str | None = None) -> str:
    """Format a prop value as a Swift argument expression."""
    if prop_type == "action":
        return "{}"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return f'"{escape_string(value)}"'
    return f'"{escape_string(json.dumps(value, sort_keys=True))}"'


def parse_version(version: str) -> tuple[int, ...]:
    """"16.4" -> (16, 4); non-numeric parts count as 0."""
    parts = []
    for part in version.split("."):
        parts.append(int(part) if part.isdigit() else 0)
    return tuple(parts)


def parse_swift_package(dep: str) -> tuple[str, str]:
    """
    Split "url@version" into (url, version).

    Without a version the package is pinned "from: 1.0.0".
    """
    start = dep.find("://") + 3 if "://" in dep else 0
    at = dep.rfind("@")
    if at > start:
        return dep[:at], dep[at + 1 :] or "1.0.0"
    return dep, "1.0.0"


class IOSCompiler(PlatformCompiler):
    """SwiftUI compiler producing a Swift package app target."""

    platform = "ios"
    name = "iOS SwiftUI Compiler"
    config_model = IOSAppConfig

    def emit(self, ctx: CompileContext) -> None:
        composition = ctx.composition
        app = self.app_type_name(composition)
        sources = f"Sources/{app}"

        ctx.add_file("Package.swift", self._package_swift(ctx, app), "swift")
        ctx.add_file(f"{sources}/{app}App.swift", self._app_entry(app), "swift")
        ctx.add_file(f"{sources}/ContentView.swift", self._content_view(composition), "swift")
        ctx.add_file(f"{sources}/Theme/Colors.swift", theme_to_swift(composition.theme), "swift")
        ctx.add_file(f"{sources}/Theme/Metrics.swift", theme_metrics_swift(composition.theme), "swift")

        for definition in self.used_definitions(composition):
            template = self.get_template(definition.id)
            if template is None:
                continue
            component = self.component_name(definition)
            imports = template.imports or ["import SwiftUI"]
            body = template.render(componentName=component, capsuleId=definition.id)
            content = (
                f"// {component} - capsule {definition.id} v{definition.version}\n\n"
                + "\n".join(imports)
                + "\n\n"
                + body.strip()
                + "\n"
            )
            ctx.add_file(f"{sources}/Components/{component}.swift", content, "swift")

        ctx.add_file("Info.plist", self._info_plist(ctx), "xml")
        ctx.add_file("README.md", self._readme(ctx, app), "markdown")

    # =========================================================================
    # Project files
    # =========================================================================

    def deployment_target(self, ctx: CompileContext) -> str:
        """Highest of the configured minimum and every used template's minimum."""
        config: IOSAppConfig = ctx.config
        target = config.min_version
        for definition in self.used_definitions(ctx.composition):
            template = self.get_template(definition.id)
            if template and template.min_version:
                if parse_version(template.min_version) > parse_version(target):
                    target = template.min_version
        return target

    def _package_swift(self, ctx: CompileContext, app: str) -> str:
        major = self.deployment_target(ctx).split(".")[0] or "16"
        packages = [parse_swift_package(dep) for dep in self.collect_dependencies(ctx.composition)]

        lines = [
            f"// swift-tools-version:{_SWIFT_TOOLS_VERSION}",
            "import PackageDescription",
            "",
            "let package = Package(",
            f'    name: "{app}",',
            f"    platforms: [.iOS(.v{major})],",
            f'    products: [.executable(name: "{app}", targets: ["{app}"])],',
        ]
        if packages:
            lines.append("    dependencies: [")
            for url, version in packages:
                lines.append(f'        .package(url: "{escape_string(url)}", from: "{escape_string(version)}"),')
            lines.append("    ],")
        lines.extend(
            [
                "    targets: [",
                f'        .executableTarget(name: "{app}", path: "Sources/{app}"),',
                "    ]",
                ")",
            ]
        )
        return "\n".join(lines) + "\n"

    def _app_entry(self, app: str) -> str:
        return f"""import SwiftUI

@main
struct {app}App: App {{
    var body: some Scene {{
        WindowGroup {{
            ContentView()
        }}
    }}
}}
"""

    def _info_plist(self, ctx: CompileContext) -> str:
        config: IOSAppConfig = ctx.config
        composition = ctx.composition
        team = ""
        if config.team_id:
            team = f"    <key>DevelopmentTeam</key>\n    <string>{escape(config.team_id)}</string>\n"
        return f"""<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
    <key>CFBundleIdentifier</key>
    <string>{escape(config.bundle_id)}</string>
    <key>CFBundleName</key>
    <string>{escape(composition.name)}</string>
    <key>CFBundleShortVersionString</key>
    <string>{escape(composition.version)}</string>
    <key>MinimumOSVersion</key>
    <string>{escape(self.deployment_target(ctx))}</string>
{team}</dict>
</plist>
"""

    def _readme(self, ctx: CompileContext, app: str) -> str:
        return f"""# {ctx.composition.name}

{ctx.composition.description}

Generated SwiftUI app (iOS {self.deployment_target(ctx)}+).

## Build

```bash
open Package.swift
swift build
```

The app target lives in `Sources/{app}`.
"""

    # =========================================================================
    # View tree
    # =========================================================================

    def _content_view(self, composition: AppComposition) -> str:
        views = []
        for instance in composition.top_level_instances():
            views.extend(self.render_view(instance, 3))
        body = "\n".join(views) if views else f"{_INDENT * 3}EmptyView()"
        title = escape_string(composition.name)
        return f"""import SwiftUI

struct ContentView: View {{
    var body: some View {{
        ScrollView {{
            VStack(alignment: .leading, spacing: 16 * AppMetrics.spacingScale) {{
{body}
            }}
            .padding()
        }}
        .background(Color.appBackground)
        .navigationTitle("{title}")
    }}
}}
"""

    def render_view(self, instance: CapsuleInstance, depth: int) -> list[str]:
        """
        Render an instance as a SwiftUI view expression.

        Children become the trailing view-builder closure, slots become
        labeled closure arguments.
        """
        pad = _INDENT * depth
        definition = self.get_capsule(instance.capsule_id)
        if definition is None:
            lines = [f"{pad}// unsupported capsule: {instance.id}"]
            for child in instance.children:
                lines.extend(self.render_view(child, depth))
            for slot_children in instance.slots.values():
                for child in slot_children:
                    lines.extend(self.render_view(child, depth))
            return lines

        component = self.component_name(definition)
        args = []
        for key, value in self.valid_props(instance):
            prop = definition.get_prop(key)
            args.append(f"{key}: {swift_literal(value, prop.type if prop else None)}")

        lines = []
        if instance.slots:
            # One argument per line; Swift rejects a trailing comma
            arguments = [[f"{pad}{_INDENT}{arg}"] for arg in args]
            for slot, slot_children in instance.slots.items():
                slot_lines = []
                for child in slot_children:
                    slot_lines.extend(self.render_view(child, depth + 2))
                arguments.append(
                    [f"{pad}{_INDENT}{slot}: {{"]
                    + (slot_lines or [f"{pad}{_INDENT * 2}EmptyView()"])
                    + [f"{pad}{_INDENT}}}"]
                )
            lines.append(f"{pad}{component}(")
            for i, argument in enumerate(arguments):
                if i < len(arguments) - 1:
                    argument[-1] += ","
                lines.extend(argument)
            lines.append(f"{pad})" + (" {" if instance.children else ""))
        else:
            call = f"{pad}{component}({', '.join(args)})"
            lines.append(call + (" {" if instance.children else ""))

        if instance.children:
            for child in instance.children:
                lines.extend(self.render_view(child, depth + 1))
            lines.append(f"{pad}}}")
        return lines
