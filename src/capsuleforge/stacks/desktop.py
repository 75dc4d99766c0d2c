"""
Desktop Compiler - Tauri 2 + React.

The front end is the web project driven by each capsule's ``desktop``
template; the native shell is a Tauri crate under ``src-tauri/``.

Output Structure:
    (web project files: package.json, vite.config.ts, src/..., ...)
    src/hooks/useTauri.ts
    src-tauri/
        Cargo.toml
        tauri.conf.json
        build.rs
        capabilities/default.json
        src/
            main.rs
            lib.rs
    README.md
"""

from __future__ import annotations

import json
from typing import Any

from ..core.ir import DesktopAppConfig, WebAppConfig
from ..core.strings import escape_string, to_snake_case
from . import CompileContext
from .web import WebCompiler

_DEV_PORT = 1420

_TAURI_DEPENDENCIES = {
    "@tauri-apps/api": "^2.0.0",
    "@tauri-apps/plugin-shell": "^2.0.0",
}


class DesktopCompiler(WebCompiler):
    """Tauri desktop compiler (macOS, Windows, Linux)."""

    platform = "desktop"
    name = "Desktop Tauri Compiler"
    config_model = DesktopAppConfig

    def web_options(self, ctx: CompileContext) -> WebAppConfig:
        return WebAppConfig()

    def emit(self, ctx: CompileContext) -> None:
        super().emit(ctx)

        ctx.add_file("src/hooks/useTauri.ts", self._tauri_hooks(), "typescript")
        ctx.add_file("src-tauri/Cargo.toml", self._cargo_toml(ctx), "toml")
        ctx.add_file("src-tauri/tauri.conf.json", self._tauri_conf(ctx), "json")
        ctx.add_file("src-tauri/build.rs", "fn main() {\n    tauri_build::build()\n}\n", "rust")
        ctx.add_file("src-tauri/capabilities/default.json", self._capabilities(), "json")
        ctx.add_file("src-tauri/src/main.rs", self._main_rs(ctx), "rust")
        ctx.add_file("src-tauri/src/lib.rs", self._lib_rs(), "rust")

    def crate_name(self, ctx: CompileContext) -> str:
        crate = to_snake_case(ctx.composition.name) or "app"
        return f"app_{crate}" if crate[0].isdigit() else crate

    # =========================================================================
    # Front end overrides
    # =========================================================================

    def _package_json(self, ctx: CompileContext) -> dict[str, Any]:
        package = super()._package_json(ctx)
        package["scripts"].update(
            {
                "tauri": "tauri",
                "tauri:dev": "tauri dev",
                "tauri:build": "tauri build",
            }
        )
        package["dependencies"] = dict(sorted({**package["dependencies"], **_TAURI_DEPENDENCIES}.items()))
        package["devDependencies"]["@tauri-apps/cli"] = "^2.0.0"
        return package

    def _generate_vite_config(self, ctx: CompileContext) -> None:
        content = f"""import {{ defineConfig }} from 'vite'
import react from '@vitejs/plugin-react'
import path from 'path'

export default defineConfig({{
  plugins: [react()],
  clearScreen: false,
  server: {{
    port: {_DEV_PORT},
    strictPort: true,
    watch: {{
      ignored: ['**/src-tauri/**'],
    }},
  }},
  resolve: {{
    alias: {{
      '@': path.resolve(__dirname, './src'),
    }},
  }},
  build: {{
    outDir: 'dist',
    target: process.env.TAURI_ENV_PLATFORM === 'windows' ? 'chrome105' : 'safari13',
  }},
}})
"""
        ctx.add_file("vite.config.ts", content, "typescript")

    def _tauri_hooks(self) -> str:
        return """import { useCallback, useEffect, useState } from 'react'
import { getCurrentWindow } from '@tauri-apps/api/window'

export function useTauriWindow() {
  const [isMaximized, setIsMaximized] = useState(false)

  useEffect(() => {
    const appWindow = getCurrentWindow()
    const refresh = () => {
      appWindow.isMaximized().then(setIsMaximized).catch(console.error)
    }

    refresh()
    const unlisten = appWindow.onResized(refresh)
    return () => {
      unlisten.then((stop) => stop())
    }
  }, [])

  const minimize = useCallback(() => getCurrentWindow().minimize(), [])
  const toggleMaximize = useCallback(() => getCurrentWindow().toggleMaximize(), [])
  const close = useCallback(() => getCurrentWindow().close(), [])
  const setTitle = useCallback((title: string) => getCurrentWindow().setTitle(title), [])

  return { isMaximized, minimize, toggleMaximize, close, setTitle }
}
"""

    def _generate_readme(self, ctx: CompileContext) -> None:
        composition = ctx.composition
        content = f"""# {composition.name}

{composition.description}

Generated desktop app (Tauri 2 + React).

## Requirements

- Node.js 18+
- Rust 1.70+

## Getting Started

```bash
npm install
npm run tauri:dev
```

## Build

```bash
npm run tauri:build
```
"""
        ctx.add_file("README.md", content, "markdown")

    # =========================================================================
    # Tauri shell
    # =========================================================================

    def _cargo_toml(self, ctx: CompileContext) -> str:
        composition = ctx.composition
        crate = self.crate_name(ctx)
        description = escape_string(composition.description or composition.name)
        return f"""[package]
name = "{crate}"
version = "{escape_string(composition.version)}"
description = "{description}"
edition = "2021"

[lib]
name = "{crate}_lib"
crate-type = ["lib", "cdylib", "staticlib"]

[build-dependencies]
tauri-build = {{ version = "2", features = [] }}

[dependencies]
tauri = {{ version = "2", features = [] }}
tauri-plugin-shell = "2"
serde = {{ version = "1", features = ["derive"] }}
serde_json = "1"

[profile.release]
codegen-units = 1
lto = true
opt-level = "s"
strip = true
"""

    def _tauri_conf(self, ctx: CompileContext) -> str:
        config: DesktopAppConfig = ctx.config
        composition = ctx.composition
        conf = {
            "$schema": "https://schema.tauri.app/config/2",
            "productName": composition.name,
            "version": composition.version,
            "identifier": config.app_id,
            "build": {
                "beforeDevCommand": "npm run dev",
                "devUrl": f"http://localhost:{_DEV_PORT}",
                "beforeBuildCommand": "npm run build",
                "frontendDist": "../dist",
            },
            "app": {
                "windows": [
                    {
                        "title": composition.name,
                        "width": config.width,
                        "height": config.height,
                        "minWidth": config.min_width,
                        "minHeight": config.min_height,
                        "resizable": config.resizable,
                        "center": True,
                    }
                ],
                "security": {"csp": None},
            },
            "bundle": {
                "active": True,
                "targets": "all",
            },
        }
        return json.dumps(conf, indent=2) + "\n"

    def _capabilities(self) -> str:
        capabilities = {
            "$schema": "https://schema.tauri.app/capabilities/2",
            "identifier": "default",
            "description": "Default capabilities for the main window",
            "windows": ["main"],
            "permissions": [
                "core:default",
                "core:window:allow-minimize",
                "core:window:allow-toggle-maximize",
                "core:window:allow-close",
                "core:window:allow-set-title",
                "shell:allow-open",
            ],
        }
        return json.dumps(capabilities, indent=2) + "\n"

    def _main_rs(self, ctx: CompileContext) -> str:
        return f"""// Prevents an extra console window on Windows in release
#![cfg_attr(
    all(not(debug_assertions), target_os = "windows"),
    windows_subsystem = "windows"
)]

fn main() {{
    {self.crate_name(ctx)}_lib::run()
}}
"""

    def _lib_rs(self) -> str:
        return """#[cfg_attr(mobile, tauri::mobile_entry_point)]
pub fn run() {
    tauri::Builder::default()
        .plugin(tauri_plugin_shell::init())
        .run(tauri::generate_context!())
        .expect("error while running tauri application");
}
"""
