"""Feature tree rendering and writing.

``FeatureGenerator`` turns a set of ``FeatureNames`` into an in-memory
``FeatureTree`` (subfolder -> file name -> content) and materialises that tree
under the features root.  Rendering is pure; ``write_tree`` is the only
function here that touches the filesystem.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from pydantic import BaseModel, Field

from feature_scaffolder.errors import FeatureExistsError, TreeWriteError

from .naming import FeatureNames
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

FEATURE_FOLDERS: tuple[str, ...] = (
    "components",
    "languages",
    "models",
    "routes",
    "services",
    "stores",
    "views",
)

# (folder, file name template, template path).  The language file is listed
# separately because it is rendered once per configured language.
_FEATURE_FILES: tuple[tuple[str, str, str], ...] = (
    ("components", "{{ pascal }}Component.{{ component_ext }}", "feature/component.vue.j2"),
    ("models", "index.{{ script_ext }}", "feature/model.ts.j2"),
    ("routes", "index.{{ script_ext }}", "feature/route.ts.j2"),
    ("services", "api.{{ script_ext }}", "feature/service.ts.j2"),
    ("views", "{{ pascal }}View.{{ component_ext }}", "feature/view.vue.j2"),
)

_LANGUAGE_FILE = "{{ feature }}.{{ language }}.{{ script_ext }}"
_LANGUAGE_TEMPLATE = "feature/language.ts.j2"


# ---------------------------------------------------------------------------
# Feature tree
# ---------------------------------------------------------------------------


class FeatureFile(BaseModel):
    """One rendered file, addressed relative to the feature root."""

    folder: str
    name: str
    content: str

    @property
    def relative_path(self) -> Path:
        return Path(self.folder) / self.name


class FeatureTree(BaseModel):
    """Ordered mapping of subfolder -> {file name -> content}.

    Every folder in ``FEATURE_FOLDERS`` is present, even when it holds no
    files (``stores``).
    """

    feature: str
    folders: dict[str, dict[str, str]] = Field(
        default_factory=lambda: {folder: {} for folder in FEATURE_FOLDERS}
    )

    def add(self, folder: str, name: str, content: str) -> None:
        self.folders.setdefault(folder, {})[name] = content

    def files(self) -> Iterator[FeatureFile]:
        """Yield every file in folder order, then insertion order."""
        for folder, entries in self.folders.items():
            for name, content in entries.items():
                yield FeatureFile(folder=folder, name=name, content=content)

    def file_count(self) -> int:
        return sum(len(entries) for entries in self.folders.values())


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class FeatureGenerator:
    """Renders the file set of one feature.

    Args:
        languages: Language codes; one locale file is rendered per code.
        script_ext: Extension for script files (``ts``).
        component_ext: Extension for single-file components (``vue``).
        renderer: Optional ``TemplateRenderer``; the packaged templates are
            used by default.
    """

    def __init__(
        self,
        languages: list[str],
        script_ext: str = "ts",
        component_ext: str = "vue",
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.languages = list(languages)
        self.script_ext = script_ext
        self.component_ext = component_ext
        self.renderer = renderer or TemplateRenderer()

    def _context(self, names: FeatureNames) -> dict[str, str]:
        return {
            **names.template_context(),
            "script_ext": self.script_ext,
            "component_ext": self.component_ext,
        }

    def render(self, names: FeatureNames) -> FeatureTree:
        """Render every template of the feature into a ``FeatureTree``."""
        ctx = self._context(names)
        tree = FeatureTree(feature=names.feature)

        for folder, name_template, template_path in _FEATURE_FILES:
            file_name = self.renderer.render_string(name_template, ctx)
            tree.add(folder, file_name, self.renderer.render(template_path, ctx))

        # Same content for every language; each file is translated by hand later.
        language_content = self.renderer.render(_LANGUAGE_TEMPLATE, ctx)
        for language in self.languages:
            file_name = self.renderer.render_string(_LANGUAGE_FILE, {**ctx, "language": language})
            tree.add("languages", file_name, language_content)

        return tree


# ---------------------------------------------------------------------------
# Tree writer
# ---------------------------------------------------------------------------


def write_tree(root: Path, tree: FeatureTree) -> list[Path]:
    """Create *root* and write every folder and file of *tree* under it.

    Raises:
        FeatureExistsError: If *root* already exists; nothing is written.
        TreeWriteError: If an I/O error occurs part-way.  Files written before
            the failure are left in place.

    Returns:
        The written file paths, in tree order.
    """
    if root.exists():
        raise FeatureExistsError(tree.feature, root)

    written: list[Path] = []
    current = root
    try:
        root.mkdir(parents=True)
        for folder, entries in tree.folders.items():
            current = root / folder
            current.mkdir(parents=True, exist_ok=True)
            for name, content in entries.items():
                current = root / folder / name
                current.write_text(content, encoding="utf-8")
                written.append(current)
    except OSError as exc:
        raise TreeWriteError(current, exc) from exc

    return written
