"""Compiled-in templates for Angular standalone-component projects."""
import json

from initializr.generators.utils import to_title
from initializr.schemas.project import ProjectConfig


def render_angular_json(config: ProjectConfig) -> str:
    """Generate angular.json for a single application project."""
    name = config.project_name
    styles = ["src/styles.css"]
    build_options = {
        "outputPath": f"dist/{name}",
        "index": "src/index.html",
        "browser": "src/main.ts",
        "polyfills": ["zone.js"],
        "tsConfig": "tsconfig.app.json",
        "assets": [],
        "styles": styles,
        "scripts": [],
    }
    document = {
        "$schema": "./node_modules/@angular/cli/lib/config/schema.json",
        "version": 1,
        "newProjectRoot": "projects",
        "projects": {
            name: {
                "projectType": "application",
                "root": "",
                "sourceRoot": "src",
                "prefix": "app",
                "architect": {
                    "build": {
                        "builder": "@angular-devkit/build-angular:application",
                        "options": build_options,
                        "configurations": {
                            "production": {"outputHashing": "all"},
                            "development": {"optimization": False, "extractLicenses": False, "sourceMap": True},
                        },
                        "defaultConfiguration": "production",
                    },
                    "serve": {
                        "builder": "@angular-devkit/build-angular:dev-server",
                        "configurations": {
                            "production": {"buildTarget": f"{name}:build:production"},
                            "development": {"buildTarget": f"{name}:build:development"},
                        },
                        "defaultConfiguration": "development",
                    },
                },
            }
        },
    }
    return json.dumps(document, indent=2) + "\n"


def render_tsconfig() -> str:
    return """{
  "compileOnSave": false,
  "compilerOptions": {
    "outDir": "./dist/out-tsc",
    "strict": true,
    "noImplicitOverride": true,
    "noPropertyAccessFromIndexSignature": true,
    "noImplicitReturns": true,
    "noFallthroughCasesInSwitch": true,
    "skipLibCheck": true,
    "esModuleInterop": true,
    "sourceMap": true,
    "declaration": false,
    "experimentalDecorators": true,
    "moduleResolution": "bundler",
    "importHelpers": true,
    "target": "ES2022",
    "module": "ES2022",
    "lib": ["ES2022", "dom"]
  },
  "angularCompilerOptions": {
    "strictInjectionParameters": true,
    "strictInputAccessModifiers": true,
    "strictTemplates": true
  }
}
"""


def render_tsconfig_app() -> str:
    return """{
  "extends": "./tsconfig.json",
  "compilerOptions": {
    "outDir": "./out-tsc/app",
    "types": []
  },
  "files": ["src/main.ts"],
  "include": ["src/**/*.d.ts"]
}
"""


def render_index_html(config: ProjectConfig) -> str:
    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{to_title(config.project_name)}</title>
    <base href="/" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
  </head>
  <body>
    <app-root></app-root>
  </body>
</html>
"""


def render_main() -> str:
    return """import { bootstrapApplication } from '@angular/platform-browser';
import { appConfig } from './app/app.config';
import { AppComponent } from './app/app.component';

bootstrapApplication(AppComponent, appConfig).catch((err) => console.error(err));
"""


def render_styles(config: ProjectConfig) -> str:
    head = ""
    if config.frontend.has_feature("tailwind"):
        head = "@tailwind base;\n@tailwind components;\n@tailwind utilities;\n\n"
    return head + """html,
body {
  margin: 0;
  font-family: Roboto, 'Helvetica Neue', sans-serif;
}
"""


def render_app_component(config: ProjectConfig) -> str:
    return f"""import {{ Component }} from '@angular/core';
import {{ RouterOutlet }} from '@angular/router';
import {{ HelloWorldComponent }} from './components/hello-world/hello-world.component';

@Component({{
  selector: 'app-root',
  standalone: true,
  imports: [RouterOutlet, HelloWorldComponent],
  templateUrl: './app.component.html',
  styleUrl: './app.component.css',
}})
export class AppComponent {{
  title = '{to_title(config.project_name)}';
}}
"""


def render_app_template() -> str:
    return """<main class="app">
  <app-hello-world [title]="title"></app-hello-world>
  <router-outlet />
</main>
"""


def render_app_styles() -> str:
    return """.app {
  max-width: 960px;
  margin: 0 auto;
  padding: 2rem;
  text-align: center;
}
"""


def render_app_config() -> str:
    return """import { ApplicationConfig, provideZoneChangeDetection } from '@angular/core';
import { provideRouter } from '@angular/router';

import { routes } from './app.routes';

export const appConfig: ApplicationConfig = {
  providers: [provideZoneChangeDetection({ eventCoalescing: true }), provideRouter(routes)],
};
"""


def render_app_routes() -> str:
    return """import { Routes } from '@angular/router';

export const routes: Routes = [];
"""


def render_hello_world() -> str:
    return """import { Component, Input } from '@angular/core';

@Component({
  selector: 'app-hello-world',
  standalone: true,
  template: `
    <section class="hello">
      <h1>{{ title }}</h1>
      <button type="button" (click)="count = count + 1">count is {{ count }}</button>
    </section>
  `,
})
export class HelloWorldComponent {
  @Input() title = '';
  count = 0;
}
"""


def render_eslint() -> str:
    document = {
        "root": True,
        "ignorePatterns": ["dist/**", "node_modules/**"],
        "overrides": [
            {
                "files": ["*.ts"],
                "parser": "@typescript-eslint/parser",
                "plugins": ["@typescript-eslint", "@angular-eslint"],
                "extends": ["eslint:recommended", "plugin:@typescript-eslint/recommended"],
                "rules": {
                    "@angular-eslint/component-selector": [
                        "error",
                        {"type": "element", "prefix": "app", "style": "kebab-case"},
                    ],
                },
            },
            {
                "files": ["*.html"],
                "parser": "@angular-eslint/template-parser",
                "rules": {},
            },
        ],
    }
    return json.dumps(document, indent=2) + "\n"


def render_prettierrc() -> str:
    return """{
  "singleQuote": true,
  "printWidth": 100,
  "overrides": [
    {
      "files": "*.html",
      "options": { "parser": "angular" }
    }
  ]
}
"""


def render_tailwind_config() -> str:
    return """/** @type {import('tailwindcss').Config} */
module.exports = {
  content: ['./src/**/*.{html,ts}'],
  theme: {
    extend: {},
  },
  plugins: [],
};
"""
