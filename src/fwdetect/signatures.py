"""Built-in framework signatures.

Order matters: it is the final tie-breaker when two results share the same
confidence and priority. Meta-frameworks carry a higher priority than the
libraries they build on, and bare runtimes the lowest.
"""

from __future__ import annotations

from .model import Category, FrameworkSignature


CATALOG_VERSION = 1

PACKAGE_JSON = ("package.json",)
PY_MANIFESTS = ("requirements.txt", "pyproject.toml")


BUILTIN_SIGNATURES: tuple[FrameworkSignature, ...] = (
    # Frontend
    FrameworkSignature(
        name="Next.js",
        category=Category.FRONTEND,
        marker_files=("next.config.js", "next.config.mjs", "next.config.ts"),
        content_files=PACKAGE_JSON,
        content_patterns=('"next":',),
        priority=90,
    ),
    FrameworkSignature(
        name="Nuxt",
        category=Category.FRONTEND,
        marker_files=("nuxt.config.ts", "nuxt.config.js"),
        content_files=PACKAGE_JSON,
        content_patterns=('"nuxt":',),
        priority=90,
    ),
    FrameworkSignature(
        name="Angular",
        category=Category.FRONTEND,
        marker_files=("angular.json",),
        content_files=PACKAGE_JSON,
        content_patterns=('"@angular/core"',),
        priority=85,
    ),
    FrameworkSignature(
        name="SvelteKit",
        category=Category.FRONTEND,
        marker_files=("svelte.config.js", "svelte.config.ts"),
        content_files=PACKAGE_JSON,
        content_patterns=('"@sveltejs/kit"',),
        priority=85,
    ),
    FrameworkSignature(
        name="Astro",
        category=Category.FRONTEND,
        marker_files=("astro.config.mjs", "astro.config.ts"),
        content_files=PACKAGE_JSON,
        content_patterns=('"astro":',),
        priority=85,
    ),
    FrameworkSignature(
        name="Remix",
        category=Category.FRONTEND,
        marker_files=("remix.config.js",),
        content_files=PACKAGE_JSON,
        content_patterns=('"@remix-run/',),
        priority=85,
    ),
    FrameworkSignature(
        name="Gatsby",
        category=Category.FRONTEND,
        marker_files=("gatsby-config.js", "gatsby-config.ts"),
        content_files=PACKAGE_JSON,
        content_patterns=('"gatsby":',),
        priority=85,
    ),
    FrameworkSignature(
        name="Vue",
        category=Category.FRONTEND,
        marker_files=("vue.config.js",),
        content_files=PACKAGE_JSON,
        content_patterns=('"vue":',),
        priority=70,
    ),
    FrameworkSignature(
        name="Svelte",
        category=Category.FRONTEND,
        content_files=PACKAGE_JSON,
        content_patterns=('"svelte":',),
        priority=60,
    ),
    FrameworkSignature(
        name="React",
        category=Category.FRONTEND,
        marker_files=("src/App.jsx", "src/App.tsx"),
        content_files=PACKAGE_JSON,
        content_patterns=('"react":',),
        priority=60,
    ),
    FrameworkSignature(
        name="SolidJS",
        category=Category.FRONTEND,
        content_files=PACKAGE_JSON,
        content_patterns=('"solid-js":',),
        priority=60,
    ),
    FrameworkSignature(
        name="Qwik",
        category=Category.FRONTEND,
        content_files=PACKAGE_JSON,
        content_patterns=('"@builder.io/qwik"',),
        priority=60,
    ),
    # Backend
    FrameworkSignature(
        name="NestJS",
        category=Category.BACKEND,
        marker_files=("nest-cli.json",),
        content_files=PACKAGE_JSON,
        content_patterns=('"@nestjs/core"',),
        priority=80,
    ),
    FrameworkSignature(
        name="Express",
        category=Category.BACKEND,
        content_files=PACKAGE_JSON,
        content_patterns=('"express":',),
        priority=50,
    ),
    FrameworkSignature(
        name="Fastify",
        category=Category.BACKEND,
        content_files=PACKAGE_JSON,
        content_patterns=('"fastify":',),
        priority=50,
    ),
    FrameworkSignature(
        name="Django",
        category=Category.BACKEND,
        marker_files=("manage.py",),
        content_files=PY_MANIFESTS,
        content_patterns=("django", "DJANGO_SETTINGS_MODULE"),
        priority=80,
    ),
    FrameworkSignature(
        name="Flask",
        category=Category.BACKEND,
        content_files=PY_MANIFESTS,
        content_patterns=("from flask import", "Flask(__name__)", "flask"),
        priority=60,
    ),
    FrameworkSignature(
        name="FastAPI",
        category=Category.BACKEND,
        content_files=PY_MANIFESTS,
        content_patterns=("from fastapi import", "FastAPI(", "fastapi"),
        priority=60,
    ),
    FrameworkSignature(
        name="Ruby on Rails",
        category=Category.BACKEND,
        marker_files=("config/application.rb", "bin/rails"),
        content_files=("Gemfile",),
        content_patterns=("gem 'rails'", 'gem "rails"', "Rails::Application"),
        priority=80,
    ),
    FrameworkSignature(
        name="Laravel",
        category=Category.BACKEND,
        marker_files=("artisan",),
        content_files=("composer.json",),
        content_patterns=('"laravel/framework"',),
        priority=80,
    ),
    FrameworkSignature(
        name="Spring Boot",
        category=Category.BACKEND,
        marker_files=("pom.xml", "build.gradle", "build.gradle.kts"),
        content_patterns=("spring-boot", "@SpringBootApplication"),
        priority=70,
    ),
    FrameworkSignature(
        name="ASP.NET Core",
        category=Category.BACKEND,
        marker_files=("*.csproj",),
        content_patterns=("Microsoft.NET.Sdk.Web", "Microsoft.AspNetCore"),
        priority=70,
    ),
    FrameworkSignature(
        name="Gin",
        category=Category.BACKEND,
        content_files=("go.mod",),
        content_patterns=("github.com/gin-gonic/gin",),
        priority=60,
    ),
    FrameworkSignature(
        name="Actix Web",
        category=Category.BACKEND,
        content_files=("Cargo.toml",),
        content_patterns=("actix-web",),
        priority=60,
    ),
    # Mobile
    FrameworkSignature(
        name="React Native",
        category=Category.MOBILE,
        marker_files=("metro.config.js", "react-native.config.js"),
        content_files=PACKAGE_JSON,
        content_patterns=('"react-native":',),
        priority=85,
    ),
    FrameworkSignature(
        name="Flutter",
        category=Category.MOBILE,
        marker_files=("pubspec.yaml",),
        content_patterns=("flutter:", "cupertino_icons:"),
        priority=80,
    ),
    FrameworkSignature(
        name="Ionic",
        category=Category.MOBILE,
        marker_files=("ionic.config.json", "capacitor.config.ts", "capacitor.config.json"),
        content_files=PACKAGE_JSON,
        content_patterns=('"@ionic/', '"@capacitor/core"'),
        priority=75,
    ),
    # Desktop
    FrameworkSignature(
        name="Electron",
        category=Category.DESKTOP,
        marker_files=("electron-builder.yml", "electron-builder.json"),
        content_files=PACKAGE_JSON,
        content_patterns=('"electron":',),
        priority=75,
    ),
    FrameworkSignature(
        name="Tauri",
        category=Category.DESKTOP,
        marker_files=("src-tauri/tauri.conf.json", "src-tauri/Cargo.toml"),
        content_files=PACKAGE_JSON,
        content_patterns=('"@tauri-apps/api"', "tauri"),
        priority=80,
    ),
    # Game
    FrameworkSignature(
        name="Unity",
        category=Category.GAME,
        marker_files=("ProjectSettings/ProjectVersion.txt", "Packages/manifest.json"),
        content_patterns=("m_EditorVersion", '"com.unity.'),
        priority=80,
    ),
    FrameworkSignature(
        name="Godot",
        category=Category.GAME,
        marker_files=("project.godot",),
        content_patterns=("config_version", "[application]"),
        priority=80,
    ),
    # Build tools
    FrameworkSignature(
        name="Vite",
        category=Category.BUILD_TOOL,
        marker_files=("vite.config.ts", "vite.config.js", "vite.config.mjs"),
        content_files=PACKAGE_JSON,
        content_patterns=('"vite":',),
        priority=40,
    ),
    FrameworkSignature(
        name="Webpack",
        category=Category.BUILD_TOOL,
        marker_files=("webpack.config.js", "webpack.config.ts"),
        content_files=PACKAGE_JSON,
        content_patterns=('"webpack":',),
        priority=40,
    ),
    FrameworkSignature(
        name="TypeScript",
        category=Category.BUILD_TOOL,
        marker_files=("tsconfig.json",),
        content_patterns=('"compilerOptions"',),
        priority=20,
    ),
    # Runtimes
    FrameworkSignature(
        name="Node.js",
        category=Category.RUNTIME,
        marker_files=("package.json",),
        content_patterns=('"engines"',),
        priority=10,
    ),
    FrameworkSignature(
        name="Deno",
        category=Category.RUNTIME,
        marker_files=("deno.json", "deno.jsonc"),
        content_patterns=('"imports"', '"tasks"'),
        priority=15,
    ),
    FrameworkSignature(
        name="Bun",
        category=Category.RUNTIME,
        marker_files=("bun.lockb", "bun.lock", "bunfig.toml"),
        priority=15,
    ),
    FrameworkSignature(
        name="Python",
        category=Category.RUNTIME,
        marker_files=("pyproject.toml", "requirements.txt", "setup.py", "Pipfile"),
        content_patterns=("requires-python", "python_requires"),
        priority=10,
    ),
    FrameworkSignature(
        name="Go",
        category=Category.RUNTIME,
        marker_files=("go.mod",),
        content_patterns=("module ",),
        priority=10,
    ),
    FrameworkSignature(
        name="Rust",
        category=Category.RUNTIME,
        marker_files=("Cargo.toml",),
        content_patterns=("[package]",),
        priority=10,
    ),
    # Testing
    FrameworkSignature(
        name="Jest",
        category=Category.TESTING,
        marker_files=("jest.config.js", "jest.config.ts"),
        content_files=PACKAGE_JSON,
        content_patterns=('"jest":',),
        priority=30,
    ),
    FrameworkSignature(
        name="Vitest",
        category=Category.TESTING,
        marker_files=("vitest.config.ts", "vitest.config.js"),
        content_files=PACKAGE_JSON,
        content_patterns=('"vitest":',),
        priority=30,
    ),
    FrameworkSignature(
        name="Playwright",
        category=Category.TESTING,
        marker_files=("playwright.config.ts", "playwright.config.js"),
        content_files=PACKAGE_JSON,
        content_patterns=('"@playwright/test"',),
        priority=30,
    ),
    FrameworkSignature(
        name="Cypress",
        category=Category.TESTING,
        marker_files=("cypress.config.ts", "cypress.config.js", "cypress.json"),
        content_files=PACKAGE_JSON,
        content_patterns=('"cypress":',),
        priority=30,
    ),
    FrameworkSignature(
        name="pytest",
        category=Category.TESTING,
        marker_files=("pytest.ini", "conftest.py"),
        content_files=("pyproject.toml",),
        content_patterns=("[tool.pytest", "import pytest"),
        priority=30,
    ),
    # AI/ML
    FrameworkSignature(
        name="PyTorch",
        category=Category.AIML,
        content_files=PY_MANIFESTS,
        content_patterns=("import torch", "torch=="),
        priority=50,
    ),
    FrameworkSignature(
        name="TensorFlow",
        category=Category.AIML,
        content_files=PY_MANIFESTS,
        content_patterns=("import tensorflow", "tensorflow=="),
        priority=50,
    ),
    FrameworkSignature(
        name="LangChain",
        category=Category.AIML,
        content_files=PY_MANIFESTS + PACKAGE_JSON,
        content_patterns=("from langchain", '"langchain"', "langchain=="),
        priority=50,
    ),
    # Web3
    FrameworkSignature(
        name="Hardhat",
        category=Category.WEB3,
        marker_files=("hardhat.config.js", "hardhat.config.ts"),
        content_files=PACKAGE_JSON,
        content_patterns=('"hardhat":',),
        priority=70,
    ),
    FrameworkSignature(
        name="Foundry",
        category=Category.WEB3,
        marker_files=("foundry.toml",),
        content_patterns=("[profile.default]",),
        priority=70,
    ),
)
