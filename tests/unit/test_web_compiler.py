"""Tests for the React/Vite web compiler and the Tauri desktop compiler."""

from __future__ import annotations

import json

import pytest

from capsuleforge.core.ir import AppComposition, CapsuleDefinition, CapsuleInstance
from capsuleforge.core.registry import CapsuleTemplateRegistry
from capsuleforge.stacks import INVALID_PLATFORM_CONFIG, UNSUPPORTED_CAPSULE
from capsuleforge.stacks.desktop import DesktopCompiler
from capsuleforge.stacks.web import WebCompiler, jsx_prop_value, parse_npm_dependency

WEB_PROJECT_FILES = [
    "package.json",
    "tsconfig.json",
    "tsconfig.node.json",
    ".eslintrc.cjs",
    "tailwind.config.js",
    "postcss.config.js",
    "vite.config.ts",
    "index.html",
    "src/main.tsx",
    "src/App.tsx",
    "src/styles/globals.css",
    "src/theme/ThemeProvider.tsx",
    "src/components/index.ts",
    "src/pages/HomePage.tsx",
    "README.md",
    ".gitignore",
]


class TestHelpers:
    @pytest.mark.parametrize(
        ("dep", "expected"),
        [
            ("recharts:^2.10.0", ("recharts", "^2.10.0")),
            ("lodash@4.17.21", ("lodash", "4.17.21")),
            ("@scope/pkg@1.0.0", ("@scope/pkg", "1.0.0")),
            ("@scope/pkg", ("@scope/pkg", "latest")),
            ("clsx", ("clsx", "latest")),
        ],
    )
    def test_parse_npm_dependency(self, dep: str, expected: tuple[str, str]) -> None:
        assert parse_npm_dependency(dep) == expected

    def test_jsx_prop_values(self) -> None:
        assert jsx_prop_value("Go") == '"Go"'
        assert jsx_prop_value('say "hi"') == '{"say \\"hi\\""}'
        assert jsx_prop_value("a\nb") == '{"a\\nb"}'
        assert jsx_prop_value("R&D") == '{"R&D"}'
        assert jsx_prop_value("{braces} ok") == '"{braces} ok"'
        assert jsx_prop_value(True) is None
        assert jsx_prop_value(False) == "{false}"
        assert jsx_prop_value(3) == "{3}"
        assert jsx_prop_value([1, 2]) == "{[1, 2]}"
        assert jsx_prop_value("navigate:home", "action") == "{() => {}}"


class TestWebCompiler:
    @pytest.mark.asyncio
    async def test_generates_project(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await WebCompiler(registry).compile(simple_composition)

        assert result.success is True
        assert result.platform == "web"
        paths = [f.path for f in result.files]
        for path in WEB_PROJECT_FILES:
            assert path in paths
        for component in ("Card", "Button", "Image", "Text"):
            assert f"src/components/{component}.tsx" in paths
        assert result.stats.file_count == len(result.files)
        assert result.stats.total_size == sum(len(f.content) for f in result.files)

    @pytest.mark.asyncio
    async def test_component_template_rendered(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await WebCompiler(registry).compile(simple_composition)
        button = result.get_file("src/components/Button.tsx").content
        assert "export function Button(" in button
        assert "{{componentName}}" not in button
        index = result.get_file("src/components/index.ts").content
        assert "export { Card } from './Card'" in index

    @pytest.mark.asyncio
    async def test_home_page_tree(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await WebCompiler(registry).compile(simple_composition)
        page = result.get_file("src/pages/HomePage.tsx").content
        assert "import { Card, Button, Image, Text } from '../components'" in page
        assert '<Card title="Welcome" footer={<>' in page
        assert '<Text content="Fine print" />' in page
        assert '<Button text="Go" variant="primary" />' in page
        assert "</Card>" in page
        assert page.index("<Button") < page.index("<Image")

    @pytest.mark.asyncio
    async def test_globals_css_has_theme(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await WebCompiler(registry).compile(simple_composition)
        css = result.get_file("src/styles/globals.css").content
        assert css.startswith("@tailwind base;")
        assert "--color-primary: #3b82f6;" in css

    @pytest.mark.asyncio
    async def test_package_json_dependencies(
        self, registry: CapsuleTemplateRegistry, web_only_capsule: CapsuleDefinition
    ) -> None:
        registry.register([web_only_capsule])
        composition = AppComposition(
            name="Charts",
            capsules=[
                CapsuleInstance(id="c", capsule_id="chart", props={"series": [1, 2]}),
                CapsuleInstance(id="v", capsule_id="video", props={"src": "a.mp4"}),
            ],
        )
        result = await WebCompiler(registry).compile(composition)
        package = json.loads(result.get_file("package.json").content)
        assert package["name"] == "charts"
        assert package["dependencies"]["recharts"] == "^2.10.0"
        assert package["dependencies"]["react-player"] == "^2.13.0"
        assert package["dependencies"]["react"] == "^18.2.0"
        assert "tailwindcss" in package["devDependencies"]

    @pytest.mark.asyncio
    async def test_javascript_without_tailwind(self, registry: CapsuleTemplateRegistry, flat_composition: AppComposition) -> None:
        composition = flat_composition.model_copy(
            update={"platform_config": {"web": {"typescript": False, "styling": "css-modules"}}}
        )
        result = await WebCompiler(registry).compile(composition)
        paths = [f.path for f in result.files]
        assert "src/main.jsx" in paths
        assert "src/components/index.js" in paths
        assert "tsconfig.json" not in paths
        assert "tailwind.config.js" not in paths
        package = json.loads(result.get_file("package.json").content)
        assert "typescript" not in package["devDependencies"]
        assert package["scripts"]["build"] == "vite build"

    @pytest.mark.asyncio
    async def test_invalid_config_warns_and_uses_defaults(
        self, registry: CapsuleTemplateRegistry, flat_composition: AppComposition
    ) -> None:
        composition = flat_composition.model_copy(update={"platform_config": {"web": {"typescript": "maybe"}}})
        result = await WebCompiler(registry).compile(composition)
        assert result.success is True
        assert [w.code for w in result.warnings] == [INVALID_PLATFORM_CONFIG]
        assert result.get_file("tsconfig.json") is not None

    @pytest.mark.asyncio
    async def test_flat_list_renders_in_order(self, registry: CapsuleTemplateRegistry, flat_composition: AppComposition) -> None:
        result = await WebCompiler(registry).compile(flat_composition)
        page = result.get_file("src/pages/HomePage.tsx").content
        assert page.index('<Text content="Hello" />') < page.index('<Button text="Start" />')

    @pytest.mark.asyncio
    async def test_unknown_capsule_renders_children(self, registry: CapsuleTemplateRegistry) -> None:
        composition = AppComposition(
            name="T",
            root=CapsuleInstance(
                id="wrapper",
                capsule_id="carousel",
                children=[CapsuleInstance(id="t", capsule_id="text", props={"content": "Inside"})],
            ),
        )
        result = await WebCompiler(registry).compile(composition)
        assert result.success is False
        assert [(e.code, e.capsule_id) for e in result.errors] == [(UNSUPPORTED_CAPSULE, "wrapper")]
        page = result.get_file("src/pages/HomePage.tsx").content
        assert "unsupported capsule: wrapper" in page
        assert '<Text content="Inside" />' in page
        assert result.get_file("src/components/Text.tsx") is not None

    @pytest.mark.asyncio
    async def test_quoted_and_multiline_props_use_string_literals(self, registry: CapsuleTemplateRegistry) -> None:
        composition = AppComposition(
            name="Quotes",
            capsules=[CapsuleInstance(id="b", capsule_id="button", props={"text": 'Say "hi"\nnow'})],
        )
        result = await WebCompiler(registry).compile(composition)
        page = result.get_file("src/pages/HomePage.tsx").content
        assert '<Button text={"Say \\"hi\\"\\nnow"} />' in page
        assert 'text="Say' not in page

    @pytest.mark.asyncio
    async def test_index_html_escapes_name(self, registry: CapsuleTemplateRegistry) -> None:
        result = await WebCompiler(registry).compile(AppComposition(name='R&D "Lab" <1>'))
        index = result.get_file("index.html").content
        assert "<title>R&amp;D &quot;Lab&quot; &lt;1&gt;</title>" in index

    @pytest.mark.asyncio
    async def test_theme_provider_wraps_app(self, registry: CapsuleTemplateRegistry, flat_composition: AppComposition) -> None:
        result = await WebCompiler(registry).compile(flat_composition)
        provider = result.get_file("src/theme/ThemeProvider.tsx").content
        assert "export function ThemeProvider(" in provider
        assert "export function useTheme()" in provider
        assert "type Theme = 'light' | 'dark' | 'system'" in provider
        assert "prefers-color-scheme: dark" in provider
        app = result.get_file("src/App.tsx").content
        assert "import { ThemeProvider } from './theme/ThemeProvider'" in app
        assert app.index("<ThemeProvider>") < app.index("<HomePage />") < app.index("</ThemeProvider>")
        assert "darkMode: 'class'" in result.get_file("tailwind.config.js").content

    @pytest.mark.asyncio
    async def test_tooling_configs(self, registry: CapsuleTemplateRegistry, flat_composition: AppComposition) -> None:
        result = await WebCompiler(registry).compile(flat_composition)
        tsconfig = json.loads(result.get_file("tsconfig.json").content)
        assert tsconfig["references"] == [{"path": "./tsconfig.node.json"}]
        node_config = json.loads(result.get_file("tsconfig.node.json").content)
        assert node_config["include"] == ["vite.config.ts"]
        eslint = result.get_file(".eslintrc.cjs").content
        assert "parser: '@typescript-eslint/parser'" in eslint
        package = json.loads(result.get_file("package.json").content)
        assert package["scripts"]["lint"].startswith("eslint . --ext ts,tsx")
        assert "@typescript-eslint/parser" in package["devDependencies"]

    @pytest.mark.asyncio
    async def test_javascript_theme_provider_and_lint(
        self, registry: CapsuleTemplateRegistry, flat_composition: AppComposition
    ) -> None:
        composition = flat_composition.model_copy(update={"platform_config": {"web": {"typescript": False}}})
        result = await WebCompiler(registry).compile(composition)
        provider = result.get_file("src/theme/ThemeProvider.jsx").content
        assert "interface" not in provider
        assert "useState<" not in provider
        assert result.get_file("tsconfig.node.json") is None
        eslint = result.get_file(".eslintrc.cjs").content
        assert "@typescript-eslint" not in eslint
        package = json.loads(result.get_file("package.json").content)
        assert "@typescript-eslint/parser" not in package["devDependencies"]


class TestDesktopCompiler:
    @pytest.mark.asyncio
    async def test_generates_web_and_tauri_files(
        self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition
    ) -> None:
        result = await DesktopCompiler(registry).compile(simple_composition)
        assert result.success is True
        assert result.platform == "desktop"
        paths = [f.path for f in result.files]
        for path in (
            "package.json",
            "src/pages/HomePage.tsx",
            "src-tauri/Cargo.toml",
            "src-tauri/tauri.conf.json",
            "src-tauri/src/main.rs",
            "src-tauri/build.rs",
        ):
            assert path in paths
        assert paths.count("README.md") == 1

    @pytest.mark.asyncio
    async def test_tauri_conf_uses_window_config(
        self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition
    ) -> None:
        composition = simple_composition.model_copy(
            update={"platform_config": {"desktop": {"appId": "dev.example.demo", "width": 900}}}
        )
        result = await DesktopCompiler(registry).compile(composition)
        conf = json.loads(result.get_file("src-tauri/tauri.conf.json").content)
        assert conf["identifier"] == "dev.example.demo"
        window = conf["app"]["windows"][0]
        assert window["width"] == 900
        assert window["height"] == 800
        assert window["title"] == "Demo App"

    @pytest.mark.asyncio
    async def test_crate_name(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await DesktopCompiler(registry).compile(simple_composition)
        assert 'name = "demo_app"' in result.get_file("src-tauri/Cargo.toml").content
        assert "demo_app_lib::run()" in result.get_file("src-tauri/src/main.rs").content

    @pytest.mark.asyncio
    async def test_package_json_has_tauri(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await DesktopCompiler(registry).compile(simple_composition)
        package = json.loads(result.get_file("package.json").content)
        assert "@tauri-apps/api" in package["dependencies"]
        assert package["scripts"]["tauri:dev"] == "tauri dev"

    @pytest.mark.asyncio
    async def test_window_hooks(self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition) -> None:
        result = await DesktopCompiler(registry).compile(simple_composition)
        hooks = result.get_file("src/hooks/useTauri.ts").content
        assert "export function useTauriWindow()" in hooks
        assert "from '@tauri-apps/api/window'" in hooks
        capabilities = json.loads(result.get_file("src-tauri/capabilities/default.json").content)
        assert "core:window:allow-toggle-maximize" in capabilities["permissions"]
        assert result.get_file("src/theme/ThemeProvider.tsx") is not None

    @pytest.mark.asyncio
    async def test_invalid_app_id_falls_back(
        self, registry: CapsuleTemplateRegistry, simple_composition: AppComposition
    ) -> None:
        composition = simple_composition.model_copy(update={"platform_config": {"desktop": {"appId": "my app"}}})
        result = await DesktopCompiler(registry).compile(composition)
        assert result.success is True
        assert [w.code for w in result.warnings] == [INVALID_PLATFORM_CONFIG]
        conf = json.loads(result.get_file("src-tauri/tauri.conf.json").content)
        assert conf["identifier"] == "com.capsuleforge.app"
