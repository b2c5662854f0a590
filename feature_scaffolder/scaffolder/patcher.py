"""Idempotent text surgery on shared source files.

The locale tables and the central router are hand-authored files that follow a
narrow convention: a run of ``import`` lines at the top and one named
collection literal acting as a registry (``features: { ... }`` in a locale
table, ``const listRoutes = [ ... ]`` in the router).  Registering a feature
means adding one import line and one collection entry.

Nothing here parses the host language.  The import block is found line by
line and the collection by a non-greedy regex, so a collection containing a
nested ``{}``/``[]`` before its last entry is mis-matched.  Applying the same
patch twice always yields the content of a single application.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from feature_scaffolder.config import ScaffoldConfig

from .naming import FeatureNames


IMPORT_LINE_RE = re.compile(r"^import.*$", re.MULTILINE)

_INDENT_RE = re.compile(r"[ \t]*")


# ---------------------------------------------------------------------------
# Patch descriptions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CollectionSpec:
    """A named collection literal located by *pattern*.

    Group 1 of the pattern must capture the body between the delimiters.
    """

    name: str
    pattern: re.Pattern[str]
    indent: str = "  "


LOCALE_FEATURES = CollectionSpec(
    name="features",
    pattern=re.compile(r"\bfeatures:\s*\{([\s\S]*?)\}"),
)

ROUTER_LIST_ROUTES = CollectionSpec(
    name="listRoutes",
    pattern=re.compile(r"const\s+listRoutes\s*=\s*\[(.*?)\]", re.DOTALL),
)


@dataclass(frozen=True)
class PatchTarget:
    """One shared file and the two edits to apply to it."""

    label: str
    path: Path
    import_line: str
    entry: str
    collection: CollectionSpec


@dataclass(frozen=True)
class PatchOutcome:
    """Result of patching an in-memory buffer."""

    content: str
    import_added: bool
    entry_added: bool
    collection_found: bool


class PatchStatus(str, Enum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    MISSING = "missing"
    FAILED = "failed"


class PatchResult(BaseModel):
    """What a patch run did to one target file."""

    label: str
    path: Path
    status: PatchStatus
    import_added: bool = False
    entry_added: bool = False
    collection_found: bool = False
    warnings: list[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.status is PatchStatus.UPDATED


# ---------------------------------------------------------------------------
# Buffer edits
# ---------------------------------------------------------------------------


def insert_import(content: str, import_line: str) -> tuple[str, bool]:
    """Insert *import_line* after the last import line of *content*.

    Returns the new content and whether it changed.  An import already present
    anywhere in the file is left alone; a file without imports gets the line
    prepended.
    """
    if import_line in content:
        return content, False

    matches = list(IMPORT_LINE_RE.finditer(content))
    if not matches:
        return f"{import_line}\n{content}", True

    end = matches[-1].end()
    return f"{content[:end]}\n{import_line}{content[end:]}", True


def contains_entry(body: str, entry: str) -> bool:
    """True when *entry* occurs in *body* as a whole identifier.

    ``user`` is not considered present in ``userProfile,``.
    """
    return re.search(rf"(?<![\w$]){re.escape(entry)}(?![\w$])", body) is not None


def _line_indent(content: str, position: int) -> str:
    line_start = content.rfind("\n", 0, position) + 1
    return _INDENT_RE.match(content, line_start).group(0)


def _append_to_body(body: str, entry: str, line_indent: str, step: str) -> str:
    existing = body.rstrip()
    trailing = body[len(existing):]

    if "\n" in body:
        closing_indent = trailing.rsplit("\n", 1)[-1] if "\n" in trailing else line_indent
        entry_lines = [line for line in existing.split("\n")[1:] if line.strip()]
        if entry_lines:
            entry_indent = _INDENT_RE.match(entry_lines[-1]).group(0)
        else:
            entry_indent = closing_indent + step
    else:
        closing_indent = line_indent
        entry_indent = line_indent + step

    if not existing.strip():
        existing = ""
    elif not existing.endswith(","):
        existing += ","

    return f"{existing}\n{entry_indent}{entry},\n{closing_indent}"


def insert_entry(
    content: str, entry: str, collection: CollectionSpec
) -> tuple[str, bool, bool]:
    """Append *entry* to the body of *collection* inside *content*.

    Returns ``(content, added, found)``.  When the collection is not found the
    content is returned untouched with ``found=False``.
    """
    match = collection.pattern.search(content)
    if match is None:
        return content, False, False

    body = match.group(1)
    if contains_entry(body, entry):
        return content, False, True

    opener = content[match.start():match.start(1)]
    closer = content[match.end(1):match.end()]
    new_body = _append_to_body(
        body, entry, _line_indent(content, match.start()), collection.indent
    )
    patched = content[:match.start()] + opener + new_body + closer + content[match.end():]
    return patched, True, True


def apply_patch(content: str, target: PatchTarget) -> PatchOutcome:
    """Apply both edits of *target* to *content* without touching disk."""
    content, import_added = insert_import(content, target.import_line)
    content, entry_added, found = insert_entry(content, target.entry, target.collection)
    return PatchOutcome(
        content=content,
        import_added=import_added,
        entry_added=entry_added,
        collection_found=found,
    )


# ---------------------------------------------------------------------------
# File edits
# ---------------------------------------------------------------------------


def _failed(target: PatchTarget, warning: str) -> PatchResult:
    return PatchResult(
        label=target.label,
        path=target.path,
        status=PatchStatus.FAILED,
        warnings=[warning],
    )


def patch_file(target: PatchTarget, *, display: str | None = None, dry_run: bool = False) -> PatchResult:
    """Patch the file of *target* in place.

    A missing file, a missing collection or a file that cannot be read or
    written is reported as a warning on the result; none of them raises.
    The file is rewritten only when its content changed, and never when
    *dry_run* is set.
    """
    shown = display or str(target.path)

    if not target.path.is_file():
        return PatchResult(
            label=target.label,
            path=target.path,
            status=PatchStatus.MISSING,
            warnings=[f"{shown} not found, skipping {target.label} registration."],
        )

    try:
        original = target.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return _failed(target, f"Could not read {shown}: {exc}")

    outcome = apply_patch(original, target)

    warnings: list[str] = []
    if not outcome.collection_found:
        warnings.append(f"Could not find '{target.collection.name}' in {shown}.")

    changed = outcome.content != original
    if changed and not dry_run:
        try:
            target.path.write_text(outcome.content, encoding="utf-8")
        except OSError as exc:
            return _failed(target, f"Could not write {shown}: {exc}")

    return PatchResult(
        label=target.label,
        path=target.path,
        status=PatchStatus.UPDATED if changed else PatchStatus.UNCHANGED,
        import_added=outcome.import_added,
        entry_added=outcome.entry_added,
        collection_found=outcome.collection_found,
        warnings=warnings,
    )


# ---------------------------------------------------------------------------
# Target builders
# ---------------------------------------------------------------------------


def locale_targets(config: ScaffoldConfig, names: FeatureNames) -> list[PatchTarget]:
    """One target per configured language, registering the feature's locale file."""
    return [
        PatchTarget(
            label=f"locale {language}",
            path=config.locale_path(language),
            import_line=(
                f'import {names.camel} from '
                f'"@/features/{names.feature}/languages/{names.feature}.{language}"'
            ),
            entry=names.camel,
            collection=LOCALE_FEATURES,
        )
        for language in config.languages
    ]


def router_target(config: ScaffoldConfig, names: FeatureNames) -> PatchTarget:
    """Target registering the feature's routes in the central router."""
    return PatchTarget(
        label="router",
        path=config.router_path,
        import_line=f"import {names.camel}Routes from '@/features/{names.feature}/routes'",
        entry=f"...{names.camel}Routes",
        collection=ROUTER_LIST_ROUTES,
    )


def build_patch_targets(config: ScaffoldConfig, names: FeatureNames) -> list[PatchTarget]:
    """Locale tables first, then the router."""
    return [*locale_targets(config, names), router_target(config, names)]
