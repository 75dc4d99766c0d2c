"""Tests for the SwiftUI and Jetpack Compose compilers."""

from __future__ import annotations

import pytest

from capsuleforge.core.ir import AppComposition, CapsuleInstance
from capsuleforge.core.registry import CapsuleTemplateRegistry
from capsuleforge.stacks import INVALID_PLATFORM_CONFIG, UNSUPPORTED_CAPSULE
from capsuleforge.stacks.android import AndroidCompiler, kotlin_literal, kotlin_string
from capsuleforge.stacks.ios import IOSCompiler, parse_swift_package, parse_version, swift_literal


@pytest.fixture
def video_composition() -> AppComposition:
    """A web-only capsule between two supported siblings."""
    return AppComposition(
        name="Media",
        capsules=[
            CapsuleInstance(id="intro", capsule_id="text", props={"content": "Watch"}),
            CapsuleInstance(id="clip", capsule_id="video", props={"src": "a.mp4"}),
            CapsuleInstance(id="next", capsule_id="button", props={"text": "Next"}),
        ],
    )


class TestSwiftHelpers:
    def test_literals(self) -> None:
        assert swift_literal("a\"b") == '"a\\"b"'
        assert swift_literal(True) == "true"
        assert swift_literal(2.5) == "2.5"
        assert swift_literal("ignored", "action") == "{}"

    def test_parse_version(self) -> None:
        assert parse_version("16.4") > parse_version("16")
        assert parse_version("15.0") < parse_version("16.0")

    def test_parse_swift_package(self) -> None:
        assert parse_swift_package("https://github.com/a/b.git@2.1.0") == ("https://github.com/a/b.git", "2.1.0")
        assert parse_swift_package("https://github.com/a/b.git") == ("https://github.com/a/b.git", "1.0.0")


class TestIOSCompiler:
    @pytest.mark.asyncio
    async def test_generates_package(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await IOSCompiler(registry).compile(simple_composition)

        assert result.success is True
        paths = [f.path for f in result.files]
        for path in (
            "Package.swift",
            "Sources/DemoApp/DemoAppApp.swift",
            "Sources/DemoApp/ContentView.swift",
            "Sources/DemoApp/Theme/Colors.swift",
            "Sources/DemoApp/Theme/Metrics.swift",
            "Sources/DemoApp/Components/Card.swift",
            "Sources/DemoApp/Components/Button.swift",
            "Info.plist",
            "README.md",
        ):
            assert path in paths

    @pytest.mark.asyncio
    async def test_content_view_tree(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await IOSCompiler(registry).compile(simple_composition)
        view = result.get_file("Sources/DemoApp/ContentView.swift").content
        assert "Card(\n" in view
        assert 'title: "Welcome",' in view
        assert "footer: {" in view
        assert 'Text(content: "Fine print")' in view
        assert 'Button(text: "Go", variant: "primary")' in view
        assert ") {" in view

    @pytest.mark.asyncio
    async def test_theme_files(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await IOSCompiler(registry).compile(simple_composition)
        colors = result.get_file("Sources/DemoApp/Theme/Colors.swift").content
        assert "static let appPrimary = Color(red: 0.231, green: 0.510, blue: 0.965)" in colors

    @pytest.mark.asyncio
    async def test_bundle_id_and_platform(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        composition = simple_composition.model_copy(
            update={"platform_config": {"ios": {"bundleId": "dev.example.demo", "minVersion": "17.0"}}}
        )
        result = await IOSCompiler(registry).compile(composition)
        assert "<string>dev.example.demo</string>" in result.get_file("Info.plist").content
        assert "platforms: [.iOS(.v17)]" in result.get_file("Package.swift").content

    @pytest.mark.asyncio
    async def test_info_plist_escapes_name(self, registry: CapsuleTemplateRegistry) -> None:
        result = await IOSCompiler(registry).compile(AppComposition(name="Salt & <Pepper>"))
        assert "<string>Salt &amp; &lt;Pepper&gt;</string>" in result.get_file("Info.plist").content

    @pytest.mark.asyncio
    async def test_unsupported_capsule(self, registry: CapsuleTemplateRegistry, video_composition: AppComposition) -> None:
        result = await IOSCompiler(registry).compile(video_composition)
        assert result.success is False
        assert [(e.code, e.capsule_id) for e in result.errors] == [(UNSUPPORTED_CAPSULE, "clip")]
        view = result.get_file("Sources/Media/ContentView.swift").content
        assert 'Text(content: "Watch")' in view
        assert 'Button(text: "Next")' in view
        assert result.get_file("Sources/Media/Components/Video.swift") is None


class TestKotlinHelpers:
    def test_dollar_is_escaped(self) -> None:
        assert kotlin_string("costs $5") == '"costs \\$5"'

    def test_literals(self) -> None:
        assert kotlin_literal(False) == "false"
        assert kotlin_literal(1.5) == "1.5f"
        assert kotlin_literal(3) == "3"
        assert kotlin_literal("x", "action") == "{}"


class TestAndroidCompiler:
    @pytest.mark.asyncio
    async def test_generates_project(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await AndroidCompiler(registry).compile(simple_composition)

        assert result.success is True
        paths = [f.path for f in result.files]
        base = "app/src/main/java/com/capsuleforge/app"
        for path in (
            "settings.gradle.kts",
            "build.gradle.kts",
            "app/build.gradle.kts",
            "app/src/main/AndroidManifest.xml",
            f"{base}/MainActivity.kt",
            f"{base}/ui/HomeScreen.kt",
            f"{base}/ui/theme/Color.kt",
            f"{base}/ui/theme/Dimens.kt",
            f"{base}/ui/components/Card.kt",
            "README.md",
        ):
            assert path in paths

    @pytest.mark.asyncio
    async def test_home_screen_tree(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await AndroidCompiler(registry).compile(simple_composition)
        screen = result.get_file("app/src/main/java/com/capsuleforge/app/ui/HomeScreen.kt").content
        assert "package com.capsuleforge.app.ui" in screen
        assert "import com.capsuleforge.app.ui.components.Card" in screen
        assert 'title = "Welcome",' in screen
        assert "footer = {" in screen
        assert 'Button(text = "Go", variant = "primary")' in screen

    @pytest.mark.asyncio
    async def test_gradle_uses_config_and_dependencies(
        self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition
    ) -> None:
        composition = simple_composition.model_copy(
            update={"platform_config": {"android": {"packageName": "dev.example.demo", "minSdk": 26}}}
        )
        result = await AndroidCompiler(registry).compile(composition)
        gradle = result.get_file("app/build.gradle.kts").content
        assert 'applicationId = "dev.example.demo"' in gradle
        assert "minSdk = 26" in gradle
        assert 'implementation("io.coil-kt:coil-compose:2.5.0")' in gradle
        assert result.get_file("app/src/main/java/dev/example/demo/MainActivity.kt") is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("package_name", ["my app", "../x", "single", "com.9lives.app"])
    async def test_invalid_package_name_falls_back(
        self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition, package_name: str
    ) -> None:
        composition = simple_composition.model_copy(
            update={"platform_config": {"android": {"packageName": package_name}}}
        )
        result = await AndroidCompiler(registry).compile(composition)
        assert result.success is True
        assert [w.code for w in result.warnings] == [INVALID_PLATFORM_CONFIG]
        assert result.get_file("app/src/main/java/com/capsuleforge/app/MainActivity.kt") is not None
        assert all(".." not in f.path for f in result.files)

    @pytest.mark.asyncio
    async def test_manifest_label_escaped(self, registry: CapsuleTemplateRegistry) -> None:
        result = await AndroidCompiler(registry).compile(AppComposition(name='Tom & "Jerry"'))
        manifest = result.get_file("app/src/main/AndroidManifest.xml").content
        assert 'android:label="Tom &amp; &quot;Jerry&quot;"' in manifest

    @pytest.mark.asyncio
    async def test_string_props_escape_dollar(self, registry: CapsuleTemplateRegistry) -> None:
        composition = AppComposition(
            name="Prices",
            root=CapsuleInstance(id="p", capsule_id="text", props={"content": "Only $9"}),
        )
        result = await AndroidCompiler(registry).compile(composition)
        screen = result.get_file("app/src/main/java/com/capsuleforge/app/ui/HomeScreen.kt").content
        assert 'Text(content = "Only \\$9")' in screen

    @pytest.mark.asyncio
    async def test_unsupported_capsule(self, registry: CapsuleTemplateRegistry, video_composition: AppComposition) -> None:
        result = await AndroidCompiler(registry).compile(video_composition)
        assert result.success is False
        assert len(result.errors) == 1
        assert result.errors[0].capsule_id == "clip"
        screen = result.get_file("app/src/main/java/com/capsuleforge/app/ui/HomeScreen.kt").content
        assert "// unsupported capsule: clip" in screen
        assert 'Button(text = "Next")' in screen
