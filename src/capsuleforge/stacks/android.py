"""
Android Compiler - Jetpack Compose Gradle project.

Output Structure:
    settings.gradle.kts
    build.gradle.kts
    app/
        build.gradle.kts
        src/main/
            AndroidManifest.xml
            java/<package path>/
                MainActivity.kt
                ui/
                    HomeScreen.kt
                    theme/
                        Color.kt
                        Dimens.kt
                    components/
                        Button.kt
                        ...
    README.md
"""

from __future__ import annotations

import json
from typing import Any
from xml.sax.saxutils import escape

from ..core.ir import AndroidAppConfig, AppComposition, CapsuleInstance
from ..core.strings import escape_string
from ..themes import theme_metrics_kotlin, theme_to_kotlin
from . import CompileContext, PlatformCompiler

_INDENT = "    "

_BASE_DEPENDENCIES = [
    "androidx.core:core-ktx:1.12.0",
    "androidx.activity:activity-compose:1.8.2",
    "androidx.compose.ui:ui:1.5.4",
    "androidx.compose.material3:material3:1.1.2",
]


def kotlin_string(text: str) -> str:
    """Double-quoted Kotlin literal; ``$`` is escaped to block templating."""
    return '"' + escape_string(text).replace("$", "\\$") + '"'


def kotlin_literal(value: Any, prop_type: str | None = None) -> str:
    """Format a prop value as a Kotlin argument expression."""
    if prop_type == "action":
        return "{}"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value}f"
    if isinstance(value, str):
        return kotlin_string(value)
    return kotlin_string(json.dumps(value, sort_keys=True))


class AndroidCompiler(PlatformCompiler):
    """Jetpack Compose compiler producing a single-module Gradle project."""

    platform = "android"
    name = "Android Jetpack Compose Compiler"
    config_model = AndroidAppConfig

    def emit(self, ctx: CompileContext) -> None:
        config: AndroidAppConfig = ctx.config
        composition = ctx.composition
        package = config.package_name
        source_root = "app/src/main/java/" + package.replace(".", "/")

        ctx.add_file("settings.gradle.kts", self._settings_gradle(composition), "kotlin")
        ctx.add_file("build.gradle.kts", self._root_gradle(), "kotlin")
        ctx.add_file("app/build.gradle.kts", self._app_gradle(ctx), "kotlin")
        ctx.add_file("app/src/main/AndroidManifest.xml", self._manifest(composition), "xml")
        ctx.add_file(f"{source_root}/MainActivity.kt", self._main_activity(package), "kotlin")
        ctx.add_file(f"{source_root}/ui/HomeScreen.kt", self._home_screen(ctx), "kotlin")
        ctx.add_file(
            f"{source_root}/ui/theme/Color.kt",
            theme_to_kotlin(composition.theme, f"{package}.ui.theme"),
            "kotlin",
        )
        ctx.add_file(
            f"{source_root}/ui/theme/Dimens.kt",
            theme_metrics_kotlin(composition.theme, f"{package}.ui.theme"),
            "kotlin",
        )

        for definition in self.used_definitions(composition):
            template = self.get_template(definition.id)
            if template is None:
                continue
            component = self.component_name(definition)
            body = template.render(componentName=component, capsuleId=definition.id)
            imports = list(template.imports) or [
                "import androidx.compose.runtime.Composable",
                "import androidx.compose.ui.Modifier",
            ]
            imports.append(f"import {package}.ui.theme.AppColors")
            imports.append(f"import {package}.ui.theme.AppDimens")
            content = (
                f"// {component} - capsule {definition.id} v{definition.version}\n"
                f"package {package}.ui.components\n\n"
                + "\n".join(imports)
                + "\n\n"
                + body.strip()
                + "\n"
            )
            ctx.add_file(f"{source_root}/ui/components/{component}.kt", content, "kotlin")

        ctx.add_file("README.md", self._readme(ctx), "markdown")

    # =========================================================================
    # Gradle
    # =========================================================================

    def min_sdk(self, ctx: CompileContext) -> int:
        """Highest of the configured minimum and every used template's minimum."""
        config: AndroidAppConfig = ctx.config
        levels = [config.min_sdk]
        for definition in self.used_definitions(ctx.composition):
            template = self.get_template(definition.id)
            if template and template.min_sdk:
                levels.append(template.min_sdk)
        return max(levels)

    def _settings_gradle(self, composition: AppComposition) -> str:
        return f"""pluginManagement {{
    repositories {{
        google()
        mavenCentral()
        gradlePluginPortal()
    }}
}}

dependencyResolutionManagement {{
    repositories {{
        google()
        mavenCentral()
    }}
}}

rootProject.name = {kotlin_string(composition.name)}
include(":app")
"""

    def _root_gradle(self) -> str:
        return """plugins {
    id("com.android.application") version "8.2.0" apply false
    id("org.jetbrains.kotlin.android") version "1.9.21" apply false
}
"""

    def _app_gradle(self, ctx: CompileContext) -> str:
        config: AndroidAppConfig = ctx.config
        deps: dict[str, None] = dict.fromkeys(_BASE_DEPENDENCIES)
        for dep in self.collect_dependencies(ctx.composition):
            deps.setdefault(dep, None)
        dep_lines = "\n".join(f"    implementation({kotlin_string(dep)})" for dep in deps)
        return f"""plugins {{
    id("com.android.application")
    id("org.jetbrains.kotlin.android")
}}

android {{
    namespace = {kotlin_string(config.package_name)}
    compileSdk = {config.compile_sdk}

    defaultConfig {{
        applicationId = {kotlin_string(config.package_name)}
        minSdk = {self.min_sdk(ctx)}
        targetSdk = {config.target_sdk}
        versionCode = 1
        versionName = {kotlin_string(ctx.composition.version)}
    }}

    buildFeatures {{
        compose = true
    }}

    composeOptions {{
        kotlinCompilerExtensionVersion = "1.5.7"
    }}
}}

dependencies {{
{dep_lines}
}}
"""

    def _manifest(self, composition: AppComposition) -> str:
        label = escape(composition.name, {'"': "&quot;"})
        return f"""<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android">
    <application
        android:label="{label}"
        android:theme="@android:style/Theme.Material.Light.NoActionBar">
        <activity
            android:name=".MainActivity"
            android:exported="true">
            <intent-filter>
                <action android:name="android.intent.action.MAIN" />
                <category android:name="android.intent.category.LAUNCHER" />
            </intent-filter>
        </activity>
    </application>
</manifest>
"""

    def _main_activity(self, package: str) -> str:
        return f"""package {package}

import android.os.Bundle
import androidx.activity.ComponentActivity
import androidx.activity.compose.setContent
import {package}.ui.HomeScreen

class MainActivity : ComponentActivity() {{
    override fun onCreate(savedInstanceState: Bundle?) {{
        super.onCreate(savedInstanceState)
        setContent {{
            HomeScreen()
        }}
    }}
}}
"""

    # =========================================================================
    # Composable tree
    # =========================================================================

    def _home_screen(self, ctx: CompileContext) -> str:
        config: AndroidAppConfig = ctx.config
        package = config.package_name
        composition = ctx.composition

        views = []
        for instance in composition.top_level_instances():
            views.extend(self.render_composable(instance, 2))
        body = "\n".join(views)

        imports = [
            "import androidx.compose.foundation.background",
            "import androidx.compose.foundation.layout.Arrangement",
            "import androidx.compose.foundation.layout.Column",
            "import androidx.compose.foundation.layout.fillMaxSize",
            "import androidx.compose.foundation.layout.padding",
            "import androidx.compose.runtime.Composable",
            "import androidx.compose.ui.Modifier",
            "import androidx.compose.ui.unit.dp",
            f"import {package}.ui.theme.AppColors",
            f"import {package}.ui.theme.AppDimens",
        ]
        imports.extend(
            f"import {package}.ui.components.{self.component_name(d)}"
            for d in self.used_definitions(composition)
        )
        return (
            f"package {package}.ui\n\n"
            + "\n".join(imports)
            + "\n\n"
            + "@Composable\n"
            + "fun HomeScreen() {\n"
            + "    Column(\n"
            + "        modifier = Modifier.fillMaxSize().background(AppColors.Background).padding(16.dp),\n"
            + "        verticalArrangement = Arrangement.spacedBy((16 * AppDimens.SpacingScale).dp),\n"
            + "    ) {\n"
            + (body + "\n" if body else "")
            + "    }\n"
            + "}\n"
        )

    def render_composable(self, instance: CapsuleInstance, depth: int) -> list[str]:
        """
        Render an instance as a composable call.

        Children become the trailing content lambda, slots become named
        lambda arguments.
        """
        pad = _INDENT * depth
        definition = self.get_capsule(instance.capsule_id)
        if definition is None:
            lines = [f"{pad}// unsupported capsule: {instance.id}"]
            for child in instance.children:
                lines.extend(self.render_composable(child, depth))
            for slot_children in instance.slots.values():
                for child in slot_children:
                    lines.extend(self.render_composable(child, depth))
            return lines

        component = self.component_name(definition)
        args = []
        for key, value in self.valid_props(instance):
            prop = definition.get_prop(key)
            args.append(f"{key} = {kotlin_literal(value, prop.type if prop else None)}")

        lines = []
        if instance.slots:
            lines.append(f"{pad}{component}(")
            for arg in args:
                lines.append(f"{pad}{_INDENT}{arg},")
            for slot, slot_children in instance.slots.items():
                lines.append(f"{pad}{_INDENT}{slot} = {{")
                for child in slot_children:
                    lines.extend(self.render_composable(child, depth + 2))
                lines.append(f"{pad}{_INDENT}}},")
            lines.append(f"{pad})" + (" {" if instance.children else ""))
        else:
            lines.append(f"{pad}{component}({', '.join(args)})" + (" {" if instance.children else ""))

        if instance.children:
            for child in instance.children:
                lines.extend(self.render_composable(child, depth + 1))
            lines.append(f"{pad}}}")
        return lines

    def _readme(self, ctx: CompileContext) -> str:
        return f"""# {ctx.composition.name}

{ctx.composition.description}

Generated Jetpack Compose app (minSdk {self.min_sdk(ctx)}).

## Build

```bash
./gradlew assembleDebug
```
"""
