"""Feature scaffolder configuration.

Typed configuration for a scaffolding run. All settings use Pydantic v2
models so they are validated at construction time and can be loaded from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


class ScaffoldConfig(BaseModel):
    """Where the scaffolder writes features and which shared files it patches.

    Every relative directory is resolved against ``project_root``. The
    defaults match the layout of the Vue application template: features under
    ``src/features``, one locale table per language under
    ``src/plugins/language/locales`` and the central router at
    ``src/router/index.ts``.
    """

    project_root: Path = Field(default=Path("."))
    features_dir: str = Field(default="src/features")
    locales_dir: str = Field(default="src/plugins/language/locales")
    router_file: str = Field(default="src/router/index.ts")
    languages: list[str] = Field(
        default_factory=lambda: ["en", "id"],
        description="Language codes that get a locale file and a locale table patch",
    )
    script_ext: str = Field(default="ts", description="Extension of generated script files")
    component_ext: str = Field(default="vue", description="Extension of generated SFC files")

    @field_validator("languages")
    @classmethod
    def _check_languages(cls, value: list[str]) -> list[str]:
        codes = [code.strip() for code in value]
        if not codes:
            raise ValueError("at least one language code is required")
        if any(not code for code in codes):
            raise ValueError("language codes must not be blank")
        if len(set(codes)) != len(codes):
            raise ValueError(f"duplicate language codes: {codes}")
        return codes

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def features_path(self) -> Path:
        """Directory holding one subdirectory per feature."""
        return self.project_root / self.features_dir

    def feature_path(self, feature: str) -> Path:
        """Root directory of a single feature."""
        return self.features_path / feature

    def locale_path(self, language: str) -> Path:
        """Locale table for *language* (e.g. ``locales/en.ts``)."""
        return self.project_root / self.locales_dir / f"{language}.{self.script_ext}"

    @property
    def router_path(self) -> Path:
        """The central router file."""
        return self.project_root / self.router_file

    def display_path(self, path: Path) -> str:
        """Render *path* relative to the project root for user messages."""
        try:
            return path.relative_to(self.project_root).as_posix()
        except ValueError:
            return str(path)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a configuration from a JSON file.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``ScaffoldConfig`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLD_PROJECT_ROOT, SCAFFOLD_FEATURES_DIR, SCAFFOLD_LOCALES_DIR,
            SCAFFOLD_ROUTER_FILE, SCAFFOLD_LANGUAGES (comma-separated).
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_PROJECT_ROOT"):
            kwargs["project_root"] = Path(os.environ["SCAFFOLD_PROJECT_ROOT"])
        if os.environ.get("SCAFFOLD_FEATURES_DIR"):
            kwargs["features_dir"] = os.environ["SCAFFOLD_FEATURES_DIR"]
        if os.environ.get("SCAFFOLD_LOCALES_DIR"):
            kwargs["locales_dir"] = os.environ["SCAFFOLD_LOCALES_DIR"]
        if os.environ.get("SCAFFOLD_ROUTER_FILE"):
            kwargs["router_file"] = os.environ["SCAFFOLD_ROUTER_FILE"]
        if os.environ.get("SCAFFOLD_LANGUAGES"):
            kwargs["languages"] = parse_languages(os.environ["SCAFFOLD_LANGUAGES"])

        return cls(**kwargs)


def parse_languages(value: str) -> list[str]:
    """Split a comma-separated language list, dropping empty items."""
    return [code.strip() for code in value.split(",") if code.strip()]
