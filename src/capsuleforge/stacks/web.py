"""
Web Compiler - React + Vite + Tailwind.

Generates a complete Vite project from a composition:
- React components from each used capsule's web template
- A home page rendering the capsule tree as JSX
- Tailwind wired to the theme's CSS custom properties
- A ThemeProvider context for light, dark and system color schemes

Output Structure:
    package.json
    tsconfig.json
    tsconfig.node.json
    .eslintrc.cjs
    tailwind.config.js
    postcss.config.js
    vite.config.ts
    index.html
    src/
        main.tsx
        App.tsx
        styles/
            globals.css
        theme/
            ThemeProvider.tsx
        components/
            index.ts
            Button.tsx
            ...
        pages/
            HomePage.tsx
    README.md
    .gitignore
"""

from __future__ import annotations

import html
import json
import re
from typing import Any

from ..core.ir import AppComposition, CapsuleDefinition, CapsuleInstance, WebAppConfig
from ..core.strings import escape_string
from ..themes import resolve_color_tokens, theme_to_css
from . import CompileContext, PlatformCompiler

_REACT_DEPENDENCIES = {
    "react": "^18.2.0",
    "react-dom": "^18.2.0",
}

_DEV_DEPENDENCIES = {
    "@types/react": "^18.2.0",
    "@types/react-dom": "^18.2.0",
    "@vitejs/plugin-react": "^4.2.0",
    "autoprefixer": "^10.4.16",
    "postcss": "^8.4.32",
    "tailwindcss": "^3.3.6",
    "typescript": "^5.3.0",
    "vite": "^5.0.0",
}

_ESLINT_DEPENDENCIES = {
    "eslint": "^8.55.0",
    "eslint-plugin-react-hooks": "^4.6.0",
    "eslint-plugin-react-refresh": "^0.4.5",
}

_TS_ESLINT_DEPENDENCIES = {
    "@typescript-eslint/eslint-plugin": "^6.0.0",
    "@typescript-eslint/parser": "^6.0.0",
}

_INDENT = "  "

# Attribute strings have no escapes and decode HTML entities; anything else
# goes through a JS string literal.
_PLAIN_ATTRIBUTE = re.compile(r'[^"\\&\n\r\t]*')


def parse_npm_dependency(dep: str) -> tuple[str, str]:
    """
    Split "name:version" / "name@version" into (name, version).

    Scoped packages keep their leading "@": "@scope/pkg@1.0" -> ("@scope/pkg", "1.0").
    Without a version the result is "latest".
    """
    if ":" in dep:
        name, version = dep.split(":", 1)
        return name, version or "latest"
    at = dep.rfind("@")
    if at > 0:
        return dep[:at], dep[at + 1 :] or "latest"
    return dep, "latest"


def jsx_prop_value(value: Any, prop_type: str | None = None) -> str | None:
    """
    Format one prop as the right-hand side of a JSX attribute.

    Returns None for boolean True, which is written as a bare attribute.
    """
    if prop_type == "action":
        return "{() => {}}"
    if isinstance(value, bool):
        return None if value else "{false}"
    if isinstance(value, (int, float)):
        return f"{{{value}}}"
    if isinstance(value, str):
        if _PLAIN_ATTRIBUTE.fullmatch(value):
            return f'"{value}"'
        return f'{{"{escape_string(value)}"}}'
    return f"{{{json.dumps(value, sort_keys=True)}}}"


class WebCompiler(PlatformCompiler):
    """
    React + Vite web compiler.

    Perfect for:
    - Browser deployment (Vercel, Netlify, static hosting)
    - Previewing a composition before native builds
    """

    platform = "web"
    name = "Web React/Vite Compiler"
    config_model = WebAppConfig

    def emit(self, ctx: CompileContext) -> None:
        """Generate the Vite project."""
        config = self.web_options(ctx)
        composition = ctx.composition
        ext = "tsx" if config.typescript else "jsx"

        self._generate_package_json(ctx)
        if config.typescript:
            self._generate_tsconfig(ctx)
        self._generate_eslint_config(ctx, config)
        if config.styling == "tailwind":
            self._generate_tailwind_config(ctx)
        self._generate_vite_config(ctx)
        self._generate_index_html(ctx, ext)
        self._generate_main_entry(ctx, ext)
        self._generate_theme_provider(ctx, ext)
        self._generate_app_component(ctx, ext)
        ctx.add_file("src/styles/globals.css", self._global_styles(composition, config), "css")
        self._generate_components(ctx, ext)
        self._generate_home_page(ctx, ext)
        self._generate_readme(ctx)
        ctx.add_file(".gitignore", "node_modules\ndist\n*.local\n.env\n.DS_Store\n")

    def web_options(self, ctx: CompileContext) -> WebAppConfig:
        """Front-end options for this call."""
        return ctx.config

    # =========================================================================
    # Project files
    # =========================================================================

    def package_dependencies(self, composition: AppComposition) -> dict[str, str]:
        deps = dict(_REACT_DEPENDENCIES)
        for dep in self.collect_dependencies(composition):
            name, version = parse_npm_dependency(dep)
            deps.setdefault(name, version)
        return dict(sorted(deps.items()))

    def _package_json(self, ctx: CompileContext) -> dict[str, Any]:
        composition = ctx.composition
        config = self.web_options(ctx)
        dev_deps = dict(_DEV_DEPENDENCIES)
        if config.styling != "tailwind":
            for key in ("autoprefixer", "postcss", "tailwindcss"):
                dev_deps.pop(key)
        if not config.typescript:
            for key in ("@types/react", "@types/react-dom", "typescript"):
                dev_deps.pop(key)
        dev_deps.update(_ESLINT_DEPENDENCIES)
        if config.typescript:
            dev_deps.update(_TS_ESLINT_DEPENDENCIES)
        lint_exts = "ts,tsx" if config.typescript else "js,jsx"
        return {
            "name": self.app_slug(composition),
            "version": composition.version,
            "private": True,
            "type": "module",
            "scripts": {
                "dev": "vite",
                "build": "tsc && vite build" if config.typescript else "vite build",
                "lint": f"eslint . --ext {lint_exts} --report-unused-disable-directives --max-warnings 0",
                "preview": "vite preview",
            },
            "dependencies": self.package_dependencies(composition),
            "devDependencies": dict(sorted(dev_deps.items())),
        }

    def _generate_package_json(self, ctx: CompileContext) -> None:
        content = json.dumps(self._package_json(ctx), indent=2) + "\n"
        ctx.add_file("package.json", content, "json")

    def _generate_tsconfig(self, ctx: CompileContext) -> None:
        tsconfig = {
            "compilerOptions": {
                "target": "ES2020",
                "lib": ["ES2020", "DOM", "DOM.Iterable"],
                "module": "ESNext",
                "moduleResolution": "bundler",
                "jsx": "react-jsx",
                "strict": True,
                "skipLibCheck": True,
                "noEmit": True,
                "baseUrl": ".",
                "paths": {"@/*": ["src/*"]},
            },
            "include": ["src"],
            "references": [{"path": "./tsconfig.node.json"}],
        }
        ctx.add_file("tsconfig.json", json.dumps(tsconfig, indent=2) + "\n", "json")

        # Build tooling (vite.config.ts) is type-checked separately
        node_config = {
            "compilerOptions": {
                "composite": True,
                "skipLibCheck": True,
                "module": "ESNext",
                "moduleResolution": "bundler",
                "allowSyntheticDefaultImports": True,
                "strict": True,
            },
            "include": ["vite.config.ts"],
        }
        ctx.add_file("tsconfig.node.json", json.dumps(node_config, indent=2) + "\n", "json")

    def _generate_eslint_config(self, ctx: CompileContext, config: WebAppConfig) -> None:
        extends = ["eslint:recommended"]
        if config.typescript:
            extends.append("plugin:@typescript-eslint/recommended")
        extends.append("plugin:react-hooks/recommended")
        extends_lines = "\n".join(f"    '{name}'," for name in extends)
        parser = "  parser: '@typescript-eslint/parser',\n" if config.typescript else ""
        parser_options = "" if config.typescript else (
            "  parserOptions: { ecmaVersion: 'latest', sourceType: 'module', ecmaFeatures: { jsx: true } },\n"
        )
        content = f"""module.exports = {{
  root: true,
  env: {{ browser: true, es2020: true }},
  extends: [
{extends_lines}
  ],
  ignorePatterns: ['dist', '.eslintrc.cjs'],
{parser}{parser_options}  plugins: ['react-refresh'],
  rules: {{
    'react-refresh/only-export-components': ['warn', {{ allowConstantExport: true }}],
  }},
}}
"""
        ctx.add_file(".eslintrc.cjs", content, "javascript")

    def _generate_tailwind_config(self, ctx: CompileContext) -> None:
        color_lines = []
        for token, _value in resolve_color_tokens(ctx.composition.theme):
            css_name = token.replace(".", "-")
            color_lines.append(f"        '{css_name}': 'var(--color-{css_name})',")
        colors = "\n".join(color_lines)
        content = f"""/** @type {{import('tailwindcss').Config}} */
export default {{
  content: ['./index.html', './src/**/*.{{js,ts,jsx,tsx}}'],
  darkMode: 'class',
  theme: {{
    extend: {{
      colors: {{
{colors}
      }},
      fontFamily: {{
        sans: ['var(--font-family)'],
        heading: ['var(--font-heading)'],
        mono: ['var(--font-mono)'],
      }},
      borderRadius: {{
        DEFAULT: 'var(--radius-base)',
      }},
      boxShadow: {{
        DEFAULT: 'var(--shadow-base)',
      }},
    }},
  }},
  plugins: [],
}}
"""
        ctx.add_file("tailwind.config.js", content, "javascript")
        ctx.add_file(
            "postcss.config.js",
            "export default {\n  plugins: {\n    tailwindcss: {},\n    autoprefixer: {},\n  },\n}\n",
            "javascript",
        )

    def _generate_vite_config(self, ctx: CompileContext) -> None:
        content = """import { defineConfig } from 'vite'
import react from '@vitejs/plugin-react'
import path from 'path'

export default defineConfig({
  plugins: [react()],
  resolve: {
    alias: {
      '@': path.resolve(__dirname, './src'),
    },
  },
  build: {
    outDir: 'dist',
    sourcemap: true,
  },
})
"""
        ctx.add_file("vite.config.ts", content, "typescript")

    def _generate_index_html(self, ctx: CompileContext, ext: str) -> None:
        composition = ctx.composition
        title = html.escape(composition.name)
        description = html.escape(composition.description or composition.name)
        theme_color = dict(resolve_color_tokens(composition.theme))["primary"]
        content = f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0, viewport-fit=cover" />
    <meta name="theme-color" content="{html.escape(theme_color)}" />
    <meta name="description" content="{description}" />
    <title>{title}</title>
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/src/main.{ext}"></script>
  </body>
</html>
"""
        ctx.add_file("index.html", content, "html")

    def _generate_main_entry(self, ctx: CompileContext, ext: str) -> None:
        root_lookup = "document.getElementById('root')!" if ext == "tsx" else "document.getElementById('root')"
        content = f"""import React from 'react'
import ReactDOM from 'react-dom/client'
import App from './App'
import './styles/globals.css'

ReactDOM.createRoot({root_lookup}).render(
  <React.StrictMode>
    <App />
  </React.StrictMode>,
)
"""
        ctx.add_file(f"src/main.{ext}", content, "typescript" if ext == "tsx" else "javascript")

    def _generate_theme_provider(self, ctx: CompileContext, ext: str) -> None:
        """
        Light/dark/system color-scheme context.

        The chosen scheme is stored in localStorage and applied as a
        ``light`` or ``dark`` class on the document root (Tailwind's
        ``darkMode: 'class'``).
        """
        typed = ext == "tsx"
        if typed:
            header = """import React, { createContext, useContext, useEffect, useState } from 'react'

type Theme = 'light' | 'dark' | 'system'
type ResolvedTheme = 'light' | 'dark'

interface ThemeContextValue {
  theme: Theme
  setTheme: (theme: Theme) => void
  resolvedTheme: ResolvedTheme
}

interface ThemeProviderProps {
  children: React.ReactNode
  defaultTheme?: Theme
}

const ThemeContext = createContext<ThemeContextValue | null>(null)
"""
            props = "{ children, defaultTheme = 'system' }: ThemeProviderProps"
            stored = "(localStorage.getItem('theme') as Theme | null)"
            theme_state = "useState<Theme>"
            resolved_state = "useState<ResolvedTheme>"
            resolved_decl = "const resolved: ResolvedTheme"
        else:
            header = """import { createContext, useContext, useEffect, useState } from 'react'

const ThemeContext = createContext(null)
"""
            props = "{ children, defaultTheme = 'system' }"
            stored = "localStorage.getItem('theme')"
            theme_state = "useState"
            resolved_state = "useState"
            resolved_decl = "const resolved"

        content = f"""{header}
export function useTheme() {{
  const context = useContext(ThemeContext)
  if (!context) {{
    throw new Error('useTheme must be used within a ThemeProvider')
  }}
  return context
}}

export function ThemeProvider({props}) {{
  const [theme, setTheme] = {theme_state}(() => {{
    if (typeof window === 'undefined') return defaultTheme
    return {stored} || defaultTheme
  }})
  const [resolvedTheme, setResolvedTheme] = {resolved_state}('light')

  useEffect(() => {{
    const root = window.document.documentElement
    const mediaQuery = window.matchMedia('(prefers-color-scheme: dark)')

    const apply = () => {{
      {resolved_decl} = theme === 'system' ? (mediaQuery.matches ? 'dark' : 'light') : theme
      setResolvedTheme(resolved)
      root.classList.remove('light', 'dark')
      root.classList.add(resolved)
      localStorage.setItem('theme', theme)
    }}

    apply()
    mediaQuery.addEventListener('change', apply)
    return () => mediaQuery.removeEventListener('change', apply)
  }}, [theme])

  return (
    <ThemeContext.Provider value={{{{ theme, setTheme, resolvedTheme }}}}>
      {{children}}
    </ThemeContext.Provider>
  )
}}
"""
        ctx.add_file(f"src/theme/ThemeProvider.{ext}", content, "typescript" if typed else "javascript")

    def _generate_app_component(self, ctx: CompileContext, ext: str) -> None:
        content = """import HomePage from './pages/HomePage'
import { ThemeProvider } from './theme/ThemeProvider'

export default function App() {
  return (
    <ThemeProvider>
      <div className="min-h-screen bg-background text-text-primary font-sans">
        <HomePage />
      </div>
    </ThemeProvider>
  )
}
"""
        ctx.add_file(f"src/App.{ext}", content, "typescript" if ext == "tsx" else "javascript")

    def _global_styles(self, composition: AppComposition, config: WebAppConfig) -> str:
        header = ""
        if config.styling == "tailwind":
            header = "@tailwind base;\n@tailwind components;\n@tailwind utilities;\n\n"
        return (
            header
            + theme_to_css(composition.theme)
            + "\n\nbody {\n"
            + "  background: var(--color-background);\n"
            + "  color: var(--color-text-primary);\n"
            + "  font-family: var(--font-family);\n"
            + "}\n"
        )

    # =========================================================================
    # Components
    # =========================================================================

    def _generate_components(self, ctx: CompileContext, ext: str) -> None:
        exports = []
        for definition in self.used_definitions(ctx.composition):
            template = self.get_template(definition.id)
            if template is None:
                continue
            component = self.component_name(definition)
            body = template.render(componentName=component, capsuleId=definition.id)
            imports = "\n".join(template.imports)
            parts = [f"// {component} - capsule {definition.id} v{definition.version}"]
            if imports:
                parts.append(imports)
            parts.append(body.strip())
            ctx.add_file(
                f"src/components/{component}.{ext}",
                "\n\n".join(parts) + "\n",
                "typescript" if ext == "tsx" else "javascript",
            )
            exports.append(f"export {{ {component} }} from './{component}'")

        index_ext = "ts" if ext == "tsx" else "js"
        ctx.add_file(
            f"src/components/index.{index_ext}",
            "\n".join(exports) + "\n" if exports else "export {}\n",
            "typescript" if ext == "tsx" else "javascript",
        )

    def _generate_home_page(self, ctx: CompileContext, ext: str) -> None:
        composition = ctx.composition
        names = [self.component_name(d) for d in self.used_definitions(composition)]
        import_line = f"import {{ {', '.join(names)} }} from '../components'\n\n" if names else ""

        views = []
        for instance in composition.top_level_instances():
            views.extend(self.render_jsx(instance, 4))
        body = "\n".join(views) if views else "        {/* empty */}"

        content = f"""{import_line}export default function HomePage() {{
  return (
    <main className="min-h-screen">
      <header className="bg-primary text-white py-4 px-6">
        <h1 className="text-xl font-semibold font-heading">{_jsx_text(composition.name)}</h1>
      </header>
      <div className="container mx-auto px-4 py-8 space-y-6">
{body}
      </div>
    </main>
  )
}}
"""
        ctx.add_file(f"src/pages/HomePage.{ext}", content, "typescript" if ext == "tsx" else "javascript")

    def render_jsx(self, instance: CapsuleInstance, depth: int) -> list[str]:
        """
        Render an instance and its subtree as JSX lines.

        Unsupported instances render only their children and slot contents.
        """
        definition = self.get_capsule(instance.capsule_id)
        if definition is None:
            lines = [f"{_INDENT * depth}{{/* unsupported capsule: {_comment(instance.id)} */}}"]
            for child in instance.children:
                lines.extend(self.render_jsx(child, depth))
            for slot_children in instance.slots.values():
                for child in slot_children:
                    lines.extend(self.render_jsx(child, depth))
            return lines

        pad = _INDENT * depth
        component = self.component_name(definition)
        attrs = self._jsx_attributes(instance, definition)
        for slot, slot_children in instance.slots.items():
            slot_lines = []
            for child in slot_children:
                slot_lines.extend(self.render_jsx(child, depth + 2))
            inner = "\n".join(slot_lines)
            attrs.append(f"{slot}={{<>\n{inner}\n{pad}{_INDENT}</>}}")

        open_tag = f"{pad}<{component}"
        if attrs:
            open_tag += " " + " ".join(attrs)

        if not instance.children:
            return [open_tag + " />"]

        lines = [open_tag + ">"]
        for child in instance.children:
            lines.extend(self.render_jsx(child, depth + 1))
        lines.append(f"{pad}</{component}>")
        return lines

    def _jsx_attributes(self, instance: CapsuleInstance, definition: CapsuleDefinition) -> list[str]:
        attrs = []
        for key, value in self.valid_props(instance):
            prop = definition.get_prop(key)
            rendered = jsx_prop_value(value, prop.type if prop else None)
            attrs.append(key if rendered is None else f"{key}={rendered}")
        return attrs

    def _generate_readme(self, ctx: CompileContext) -> None:
        composition = ctx.composition
        content = f"""# {composition.name}

{composition.description}

Generated web project (React + Vite).

## Getting Started

```bash
npm install
npm run dev
```

## Build

```bash
npm run build
npm run preview
```
"""
        ctx.add_file("README.md", content, "markdown")


def _jsx_text(text: str) -> str:
    """Text node content: braces, angle brackets and entities go through a JS string."""
    if any(ch in text for ch in "{}<>&"):
        return f'{{"{escape_string(text)}"}}'
    return text


def _comment(text: str) -> str:
    return text.replace("*/", "* /")
