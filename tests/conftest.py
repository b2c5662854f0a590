"""Shared pytest fixtures for the feature scaffolder test suite.

Provides reusable fixtures for:
- Locale table and router file contents in the application's conventions
- A temporary Vue project tree containing those patch targets
- A ``ScaffoldConfig`` pointing at that tree
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from feature_scaffolder.config import ScaffoldConfig


# ---------------------------------------------------------------------------
# Patch target contents
# ---------------------------------------------------------------------------

LOCALE_TEMPLATE = textwrap.dedent("""\
    import example from "@/features/example/languages/example.{lang}"
    import utils from "@/shared/languages/utils.{lang}"

    export default {{
      features: {{
        example,
      }},
      utils,
    }}
    """)

ROUTER_CONTENT = textwrap.dedent("""\
    import { createRouter, createWebHistory } from "vue-router"

    import exampleRoutes from "@/features/example/routes"
    import utilRoutes from "@/shared/routes"

    const listRoutes = [...exampleRoutes, ...utilRoutes]

    const router = createRouter({
      history: createWebHistory(import.meta.env.BASE_URL),
      routes: listRoutes,
    })

    export default router
    """)


@pytest.fixture
def locale_content() -> str:
    """English locale table with one registered feature."""
    return LOCALE_TEMPLATE.format(lang="en")


@pytest.fixture
def router_content() -> str:
    """Router file registering the example and util routes inline."""
    return ROUTER_CONTENT


# ---------------------------------------------------------------------------
# Project tree
# ---------------------------------------------------------------------------

@pytest.fixture
def vue_project(tmp_path: Path) -> Path:
    """Temporary Vue project with both locale tables and the router."""
    root = tmp_path / "web"
    locales = root / "src" / "plugins" / "language" / "locales"
    locales.mkdir(parents=True)
    for lang in ("en", "id"):
        (locales / f"{lang}.ts").write_text(LOCALE_TEMPLATE.format(lang=lang), encoding="utf-8")

    router_dir = root / "src" / "router"
    router_dir.mkdir(parents=True)
    (router_dir / "index.ts").write_text(ROUTER_CONTENT, encoding="utf-8")

    (root / "src" / "features" / "example").mkdir(parents=True)
    yield root


@pytest.fixture
def scaffold_config(vue_project: Path) -> ScaffoldConfig:
    """Default configuration rooted at the temporary project."""
    return ScaffoldConfig(project_root=vue_project)


def snapshot_tree(root: Path) -> dict[str, bytes]:
    """Map every file under *root* (relative POSIX path) to its bytes."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def snapshot():
    """Expose ``snapshot_tree`` to tests."""
    return snapshot_tree
