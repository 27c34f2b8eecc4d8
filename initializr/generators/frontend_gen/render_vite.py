"""Compiled-in templates for React, Vue and Svelte projects built with Vite."""
from initializr.generators.layout import component_ext
from initializr.generators.utils import to_title
from initializr.schemas.project import ProjectConfig


def _framework(config: ProjectConfig) -> str:
    return config.frontend.framework.id


def _ts(config: ProjectConfig) -> bool:
    return config.frontend.is_typescript


def render_index_html(config: ProjectConfig) -> str:
    """Generate index.html content."""
    framework = _framework(config)
    if framework == "react":
        entry = f"/src/main.{component_ext(config)}"
    else:
        entry = f"/src/main.{'ts' if _ts(config) else 'js'}"
    mount = "root" if framework == "react" else "app"
    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{to_title(config.project_name)}</title>
  </head>
  <body>
    <div id="{mount}"></div>
    <script type="module" src="{entry}"></script>
  </body>
</html>
"""


def render_vite_config(config: ProjectConfig) -> str:
    """Generate vite.config.(ts|js) content."""
    framework = _framework(config)
    plugin_import, plugin_call = {
        "react": ("import react from '@vitejs/plugin-react'", "react()"),
        "vue": ("import vue from '@vitejs/plugin-vue'", "vue()"),
        "svelte": ("import { svelte } from '@sveltejs/vite-plugin-svelte'", "svelte()"),
    }[framework]

    test_block = ""
    header = "import { defineConfig } from 'vite'"
    if config.frontend.has_feature("vitest"):
        if _ts(config):
            header = "/// <reference types=\"vitest\" />\n" + header
        test_block = """
  test: {
    environment: 'jsdom',
    globals: true,
  },"""

    return f"""{header}
{plugin_import}

export default defineConfig({{
  plugins: [{plugin_call}],
  resolve: {{
    alias: {{
      '@': '/src',
    }},
  }},
  server: {{
    port: 5173,
  }},{test_block}
}})
"""


def render_tsconfig(config: ProjectConfig) -> str:
    """Generate tsconfig.json for a Vite project."""
    framework = _framework(config)
    if framework == "svelte":
        return """{
  "extends": "@tsconfig/svelte/tsconfig.json",
  "compilerOptions": {
    "target": "ES2020",
    "useDefineForClassFields": true,
    "module": "ESNext",
    "resolveJsonModule": true,
    "allowJs": true,
    "checkJs": true,
    "isolatedModules": true,
    "moduleDetection": "force",
    "strict": true
  },
  "include": ["src/**/*.ts", "src/**/*.js", "src/**/*.svelte"],
  "references": [{ "path": "./tsconfig.node.json" }]
}
"""
    jsx = '\n    "jsx": "react-jsx",' if framework == "react" else '\n    "jsx": "preserve",'
    include = '"src/**/*.ts", "src/**/*.tsx"' if framework == "react" else '"src/**/*.ts", "src/**/*.tsx", "src/**/*.vue"'
    return f"""{{
  "compilerOptions": {{
    "target": "ES2020",
    "useDefineForClassFields": true,
    "lib": ["ES2020", "DOM", "DOM.Iterable"],
    "module": "ESNext",
    "skipLibCheck": true,
    "moduleResolution": "bundler",
    "allowImportingTsExtensions": true,
    "resolveJsonModule": true,
    "isolatedModules": true,
    "noEmit": true,{jsx}
    "strict": true,
    "noUnusedLocals": true,
    "noUnusedParameters": true,
    "noFallthroughCasesInSwitch": true,
    "baseUrl": ".",
    "paths": {{
      "@/*": ["src/*"]
    }}
  }},
  "include": [{include}],
  "references": [{{ "path": "./tsconfig.node.json" }}]
}}
"""


def render_tsconfig_node() -> str:
    return """{
  "compilerOptions": {
    "composite": true,
    "skipLibCheck": true,
    "module": "ESNext",
    "moduleResolution": "bundler",
    "allowSyntheticDefaultImports": true,
    "strict": true
  },
  "include": ["vite.config.ts"]
}
"""


def render_vite_env(config: ProjectConfig) -> str:
    framework = _framework(config)
    lines = ['/// <reference types="vite/client" />']
    if framework == "svelte":
        lines.append('/// <reference types="svelte" />')
    if framework == "vue":
        lines += [
            "",
            "declare module '*.vue' {",
            "  import type { DefineComponent } from 'vue'",
            "  const component: DefineComponent<object, object, unknown>",
            "  export default component",
            "}",
        ]
    return "\n".join(lines) + "\n"


def render_main(config: ProjectConfig) -> str:
    """Generate the application entry point."""
    framework = _framework(config)
    fe = config.frontend
    if framework == "react":
        ext = component_ext(config)
        root = "document.getElementById('root')!" if _ts(config) else "document.getElementById('root')"
        imports = [
            "import React from 'react'",
            "import ReactDOM from 'react-dom/client'",
        ]
        if fe.has_feature("react-query"):
            imports.append("import { QueryClient, QueryClientProvider } from '@tanstack/react-query'")
        if fe.has_feature("react-router"):
            imports.append("import { RouterProvider } from 'react-router-dom'")
            imports.append(f"import {{ router }} from './router/index.{ext}'")
            app = "<RouterProvider router={router} />"
        else:
            imports.append(f"import App from './App.{ext}'")
            app = "<App />"
        imports.append("import './styles/index.css'")
        body = f"    {app}"
        setup = ""
        if fe.has_feature("react-query"):
            setup = "\nconst queryClient = new QueryClient()\n"
            body = f"    <QueryClientProvider client={{queryClient}}>\n      {app}\n    </QueryClientProvider>"
        return "\n".join(imports) + f"""
{setup}
ReactDOM.createRoot({root}).render(
  <React.StrictMode>
{body}
  </React.StrictMode>,
)
"""

    if framework == "vue":
        ext = "ts" if _ts(config) else "js"
        imports = ["import { createApp } from 'vue'"]
        uses = []
        if fe.has_feature("pinia"):
            imports.append("import { createPinia } from 'pinia'")
            uses.append("app.use(createPinia())")
        imports.append("import App from './App.vue'")
        if fe.has_feature("vue-router"):
            imports.append(f"import router from './router/index.{ext}'")
            uses.append("app.use(router)")
        imports.append("import './styles/index.css'")
        lines = imports + ["", "const app = createApp(App)"] + uses + ["app.mount('#app')"]
        return "\n".join(lines) + "\n"

    target = "document.getElementById('app')!" if _ts(config) else "document.getElementById('app')"
    return f"""import App from './App.svelte'
import './styles/index.css'

const app = new App({{
  target: {target},
}})

export default app
"""


def render_app(config: ProjectConfig) -> str:
    """Generate the root component."""
    framework = _framework(config)
    title = to_title(config.project_name)
    if framework == "react":
        ext = component_ext(config)
        return f"""import HelloWorld from './components/HelloWorld.{ext}'

function App() {{
  return (
    <main className="app">
      <HelloWorld title="{title}" />
    </main>
  )
}}

export default App
"""
    if framework == "vue":
        lang = ' lang="ts"' if _ts(config) else ""
        view = "<RouterView />" if config.frontend.has_feature("vue-router") else f'<HelloWorld title="{title}" />'
        script_import = "" if config.frontend.has_feature("vue-router") else "import HelloWorld from './components/HelloWorld.vue'\n"
        return f"""<script setup{lang}>
{script_import}</script>

<template>
  <main class="app">
    {view}
  </main>
</template>
"""
    lang = ' lang="ts"' if _ts(config) else ""
    return f"""<script{lang}>
  import HelloWorld from './components/HelloWorld.svelte'
</script>

<main class="app">
  <HelloWorld title="{title}" />
</main>
"""


def render_hello_world(config: ProjectConfig) -> str:
    """Generate the example component."""
    framework = _framework(config)
    ts = _ts(config)
    if framework == "react":
        if ts:
            signature = "type HelloWorldProps = {\n  title: string\n}\n\nfunction HelloWorld({ title }: HelloWorldProps) {"
        else:
            signature = "function HelloWorld({ title }) {"
        return f"""import {{ useState }} from 'react'

{signature}
  const [count, setCount] = useState(0)

  return (
    <section className="hello">
      <h1>{{title}}</h1>
      <button type="button" onClick={{() => setCount((value) => value + 1)}}>
        count is {{count}}
      </button>
    </section>
  )
}}

export default HelloWorld
"""
    if framework == "vue":
        if ts:
            script = """<script setup lang="ts">
import { ref } from 'vue'

defineProps<{ title: string }>()

const count = ref(0)
</script>"""
        else:
            script = """<script setup>
import { ref } from 'vue'

defineProps({ title: String })

const count = ref(0)
</script>"""
        return script + """

<template>
  <section class="hello">
    <h1>{{ title }}</h1>
    <button type="button" @click="count++">count is {{ count }}</button>
  </section>
</template>
"""
    prop = "  export let title: string" if ts else "  export let title"
    lang = ' lang="ts"' if ts else ""
    return f"""<script{lang}>
{prop}
  let count = 0
</script>

<section class="hello">
  <h1>{{title}}</h1>
  <button type="button" on:click={{() => (count += 1)}}>count is {{count}}</button>
</section>
"""


def render_hello_world_test(config: ProjectConfig) -> str:
    """Generate a Vitest suite for the example component."""
    framework = _framework(config)
    if framework == "react":
        return """import { afterEach, describe, expect, it } from 'vitest'
import { cleanup, fireEvent, render, screen } from '@testing-library/react'
import HelloWorld from './HelloWorld'

afterEach(cleanup)

describe('HelloWorld', () => {
  it('renders the title', () => {
    render(<HelloWorld title="Hello" />)
    expect(screen.getByRole('heading').textContent).toBe('Hello')
  })

  it('counts clicks', () => {
    render(<HelloWorld title="Hello" />)
    fireEvent.click(screen.getByRole('button'))
    expect(screen.getByRole('button').textContent).toContain('count is 1')
  })
})
"""
    if framework == "vue":
        return """import { describe, expect, it } from 'vitest'
import { mount } from '@vue/test-utils'
import HelloWorld from './HelloWorld.vue'

describe('HelloWorld', () => {
  it('renders the title', () => {
    const wrapper = mount(HelloWorld, { props: { title: 'Hello' } })
    expect(wrapper.get('h1').text()).toBe('Hello')
  })

  it('counts clicks', async () => {
    const wrapper = mount(HelloWorld, { props: { title: 'Hello' } })
    await wrapper.get('button').trigger('click')
    expect(wrapper.get('button').text()).toContain('count is 1')
  })
})
"""
    return """import { afterEach, describe, expect, it } from 'vitest'
import { cleanup, fireEvent, render, screen } from '@testing-library/svelte'
import HelloWorld from './HelloWorld.svelte'

afterEach(cleanup)

describe('HelloWorld', () => {
  it('renders the title', () => {
    render(HelloWorld, { title: 'Hello' })
    expect(screen.getByRole('heading').textContent).toBe('Hello')
  })

  it('counts clicks', async () => {
    render(HelloWorld, { title: 'Hello' })
    await fireEvent.click(screen.getByRole('button'))
    expect(screen.getByRole('button').textContent).toContain('count is 1')
  })
})
"""


def render_lib_hooks(config: ProjectConfig) -> str:
    framework = _framework(config)
    ts = _ts(config)
    if framework == "react":
        generic = "<T>" if ts else ""
        param = "(key: string, initial: T)" if ts else "(key, initial)"
        state_type = "<T>" if ts else ""
        as_const = " as const" if ts else ""
        return f"""import {{ useEffect, useState }} from 'react'

export function useLocalStorage{generic}{param} {{
  const [value, setValue] = useState{state_type}(() => {{
    const stored = window.localStorage.getItem(key)
    return stored ? JSON.parse(stored) : initial
  }})

  useEffect(() => {{
    window.localStorage.setItem(key, JSON.stringify(value))
  }}, [key, value])

  return [value, setValue]{as_const}
}}
"""
    if framework == "vue":
        param = "(initial = 0)"
        return f"""import {{ ref }} from 'vue'

export function useCounter{param} {{
  const count = ref(initial)
  const increment = () => {{
    count.value++
  }}
  return {{ count, increment }}
}}
"""
    return """import { writable } from 'svelte/store'

export function createCounter(initial = 0) {
  const { subscribe, update, set } = writable(initial)
  return {
    subscribe,
    increment: () => update((value) => value + 1),
    reset: () => set(initial),
  }
}
"""


def render_lib_types(config: ProjectConfig) -> str:
    if _ts(config):
        return """export interface User {
  id: number
  name: string
  email: string
}

export interface ApiError {
  message: string
}
"""
    return """/**
 * @typedef {Object} User
 * @property {number} id
 * @property {string} name
 * @property {string} email
 */

export {}
"""


def render_lib_validations(config: ProjectConfig) -> str:
    if _ts(config):
        return """export function isEmail(value: string): boolean {
  return /^[^\\s@]+@[^\\s@]+\\.[^\\s@]+$/.test(value)
}

export function isRequired(value: string): boolean {
  return value.trim().length > 0
}
"""
    return """export function isEmail(value) {
  return /^[^\\s@]+@[^\\s@]+\\.[^\\s@]+$/.test(value)
}

export function isRequired(value) {
  return value.trim().length > 0
}
"""


def render_store(config: ProjectConfig) -> str:
    framework = _framework(config)
    ts = _ts(config)
    if framework == "vue" and config.frontend.has_feature("pinia"):
        return """import { defineStore } from 'pinia'

export const useAppStore = defineStore('app', {
  state: () => ({
    count: 0,
  }),
  actions: {
    increment() {
      this.count++
    },
  },
})
"""
    if framework == "svelte":
        return """import { writable } from 'svelte/store'

export const count = writable(0)
"""
    if framework == "vue":
        return """import { reactive } from 'vue'

export const store = reactive({
  count: 0,
  increment() {
    this.count++
  },
})
"""
    listener = "(() => void)" if ts else ""
    listeners = f"new Set<{listener}>()" if ts else "new Set()"
    subscribe_param = "listener: () => void" if ts else "listener"
    return f"""let count = 0
const listeners = {listeners}

export const store = {{
  getCount: () => count,
  increment() {{
    count++
    listeners.forEach((listener) => listener())
  }},
  subscribe({subscribe_param}) {{
    listeners.add(listener)
    return () => listeners.delete(listener)
  }},
}}
"""


def render_styles(config: ProjectConfig) -> str:
    head = ""
    if config.frontend.has_feature("tailwind"):
        head = "@tailwind base;\n@tailwind components;\n@tailwind utilities;\n\n"
    return head + """:root {
  font-family: Inter, system-ui, Avenir, Helvetica, Arial, sans-serif;
  line-height: 1.5;
  color-scheme: light dark;
}

body {
  margin: 0;
  min-height: 100vh;
}

.app {
  max-width: 960px;
  margin: 0 auto;
  padding: 2rem;
  text-align: center;
}
"""


def render_router(config: ProjectConfig) -> str:
    """Generate src/router/index for React Router or Vue Router."""
    if _framework(config) == "react":
        ext = component_ext(config)
        return f"""import {{ createBrowserRouter }} from 'react-router-dom'
import App from '../App.{ext}'

export const router = createBrowserRouter([
  {{
    path: '/',
    element: <App />,
  }},
])
"""
    return """import { createRouter, createWebHistory } from 'vue-router'
import HelloWorld from '../components/HelloWorld.vue'

const router = createRouter({
  history: createWebHistory(),
  routes: [
    { path: '/', component: HelloWorld, props: { title: 'Home' } },
  ],
})

export default router
"""


def render_svelte_config() -> str:
    return """import { vitePreprocess } from '@sveltejs/vite-plugin-svelte'

export default {
  preprocess: vitePreprocess(),
}
"""


def render_eslint(config: ProjectConfig) -> str:
    framework = _framework(config)
    ts = _ts(config)
    extends = ["'eslint:recommended'"]
    plugins = []
    parser = ""
    if framework == "react":
        extends += ["'plugin:react/recommended'", "'plugin:react/jsx-runtime'", "'plugin:react-hooks/recommended'"]
        plugins.append("'react-refresh'")
    elif framework == "vue":
        extends.append("'plugin:vue/vue3-recommended'")
    else:
        extends.append("'plugin:svelte/recommended'")
    if ts:
        extends.append("'plugin:@typescript-eslint/recommended'")
        if framework == "react":
            parser = "\n  parser: '@typescript-eslint/parser',"
        else:
            parser = "\n  parserOptions: { parser: '@typescript-eslint/parser', extraFileExtensions: ['." + framework + "'] },"
    plugin_line = f"\n  plugins: [{', '.join(plugins)}]," if plugins else ""
    settings = "\n  settings: { react: { version: '18.3' } }," if framework == "react" else ""
    return f"""module.exports = {{
  root: true,
  env: {{ browser: true, es2020: true }},
  extends: [
    {(',' + chr(10) + '    ').join(extends)},
  ],
  ignorePatterns: ['dist', '.eslintrc.cjs'],{parser}{plugin_line}{settings}
}}
"""


def render_prettierrc(config: ProjectConfig) -> str:
    lines = ['  "semi": false,', '  "singleQuote": true,', '  "trailingComma": "all",', '  "printWidth": 100']
    if _framework(config) == "svelte":
        lines[-1] += ","
        lines.append('  "plugins": ["prettier-plugin-svelte"]')
    return "{\n" + "\n".join(lines) + "\n}\n"


def render_prettierignore() -> str:
    return "dist\nnode_modules\ncoverage\n"


def render_tailwind_config(config: ProjectConfig) -> str:
    content = {
        "react": "'./index.html', './src/**/*.{js,ts,jsx,tsx}'",
        "vue": "'./index.html', './src/**/*.{vue,js,ts}'",
        "svelte": "'./index.html', './src/**/*.{svelte,js,ts}'",
    }[_framework(config)]
    return f"""/** @type {{import('tailwindcss').Config}} */
export default {{
  content: [{content}],
  theme: {{
    extend: {{}},
  }},
  plugins: [],
}}
"""


def render_postcss_config() -> str:
    return """export default {
  plugins: {
    tailwindcss: {},
    autoprefixer: {},
  },
}
"""


def render_frontend_gitignore() -> str:
    return """# Dependencies
node_modules/

# Build output
dist/
.angular/
coverage/

# Local env files
.env
.env.local
*.local

# Editors
.vscode/*
!.vscode/extensions.json
.idea/
.DS_Store
"""
