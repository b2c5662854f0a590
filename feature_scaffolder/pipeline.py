"""Feature scaffolding pipeline.

Runs the linear scaffolding flow for one feature slug:

1. NORMALIZE -- derive PascalCase / camelCase identifiers from the slug.
2. RENDER    -- render the feature's templates into an in-memory tree.
3. WRITE     -- materialise the tree under the features root.
4. PATCH     -- register the feature in each locale table, then the router.

Usage::

    python -m feature_scaffolder user-profile
    python -m feature_scaffolder user-profile --root ./web --dry-run
"""

from __future__ import annotations

import sys
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from feature_scaffolder.config import ScaffoldConfig, parse_languages
from feature_scaffolder.errors import FeatureExistsError, ScaffoldError
from feature_scaffolder.scaffolder.generator import FeatureGenerator, FeatureTree, write_tree
from feature_scaffolder.scaffolder.naming import (
    FeatureNames,
    InvalidFeatureNameError,
    normalize,
)
from feature_scaffolder.scaffolder.patcher import (
    PatchResult,
    PatchStatus,
    build_patch_targets,
    patch_file,
)
from feature_scaffolder.utils import (
    console,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
    sanitize_name,
)


class ScaffoldResult(BaseModel):
    """Everything one scaffolding run produced."""

    names: FeatureNames
    feature_path: Path
    dry_run: bool = False
    files: list[Path] = Field(default_factory=list)
    patches: list[PatchResult] = Field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return [warning for patch in self.patches for warning in patch.warnings]


# ---------------------------------------------------------------------------
# Pipeline stages
# ---------------------------------------------------------------------------


def render_feature(names: FeatureNames, config: ScaffoldConfig) -> FeatureTree:
    """Render the feature tree for *names* using the configured languages."""
    generator = FeatureGenerator(
        languages=config.languages,
        script_ext=config.script_ext,
        component_ext=config.component_ext,
    )
    return generator.render(names)


def register_feature(
    names: FeatureNames, config: ScaffoldConfig, *, dry_run: bool = False
) -> list[PatchResult]:
    """Patch every locale table and the router for *names*.

    Each target is patched independently; a missing or unreadable target
    never stops the remaining ones.
    """
    results: list[PatchResult] = []
    for target in build_patch_targets(config, names):
        shown = config.display_path(target.path)
        result = patch_file(target, display=shown, dry_run=dry_run)
        for warning in result.warnings:
            print_warning(f"Warning: {warning}")

        if result.changed:
            verb = "Would update" if dry_run else "Updated"
            print_success(f"{verb} {shown} ({target.label}: {target.entry})")
        elif result.status is PatchStatus.UNCHANGED and result.collection_found:
            print_info(f"{shown} already registers {target.entry}, nothing to do.")
        results.append(result)
    return results


def scaffold_feature(
    feature: str, config: ScaffoldConfig, *, dry_run: bool = False
) -> ScaffoldResult:
    """Scaffold *feature* and register it in the shared files.

    Raises:
        InvalidFeatureNameError: If the slug has no usable segment.
        FeatureExistsError: If the feature directory already exists.  Raised
            before anything is written.
        TreeWriteError: If writing the feature tree fails part-way.
    """
    names = normalize(feature)
    feature_path = config.feature_path(feature)
    if feature_path.exists():
        raise FeatureExistsError(feature, feature_path)

    if sanitize_name(feature) != feature:
        print_warning(
            f'Warning: "{feature}" is not a lowercase hyphenated slug; '
            "it is used verbatim as directory name and URL path."
        )

    tree = render_feature(names, config)
    shown_root = config.display_path(feature_path)

    if dry_run:
        files = [feature_path / f.relative_path for f in tree.files()]
        print_info(f"Would create {tree.file_count()} files under {shown_root}")
    else:
        files = write_tree(feature_path, tree)
        print_success(f'Feature "{feature}" created successfully at {shown_root}')

    patches = register_feature(names, config, dry_run=dry_run)
    return ScaffoldResult(
        names=names,
        feature_path=feature_path,
        dry_run=dry_run,
        files=files,
        patches=patches,
    )


def print_result(result: ScaffoldResult, config: ScaffoldConfig) -> None:
    """Print the end-of-run audit table."""
    data: dict[str, str] = {
        "Feature": result.names.feature,
        "PascalName": result.names.pascal,
        "CamelName": result.names.camel,
    }
    for path in result.files:
        data[config.display_path(path)] = "would create" if result.dry_run else "created"
    for patch in result.patches:
        data[config.display_path(patch.path)] = patch.status.value
    title = "Scaffold plan (dry run)" if result.dry_run else "Scaffold summary"
    print_summary_table(data, title=title)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``feature-scaffold`` / ``python -m feature_scaffolder``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="feature-scaffold",
        description="Scaffold a new feature folder and register it in the router and locales",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  feature-scaffold user-profile\n"
            "  feature-scaffold user-profile --root ./web --languages en,id,fr\n"
            "  feature-scaffold user-profile --dry-run\n"
            "  feature-scaffold --root ./web -- -legacy-\n"
        ),
    )

    parser.add_argument(
        "feature",
        nargs="?",
        help="Hyphenated feature name, e.g. user-profile; put names starting with a hyphen after --",
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Project root containing src/ (default: current directory or $SCAFFOLD_PROJECT_ROOT)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (overrides environment variables)",
    )
    parser.add_argument(
        "--languages",
        default=None,
        help="Comma-separated language codes (default: en,id)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be created and patched without writing anything",
    )

    def usage_error(message: str) -> None:
        print_error(f"Error: {message}")
        sys.exit(1)

    parser.error = usage_error  # type: ignore[method-assign]

    args = parser.parse_args(argv)

    if not args.feature:
        print_error(
            "Error: Please provide a feature name. Example: feature-scaffold feature-a"
        )
        sys.exit(1)

    try:
        config = ScaffoldConfig.load(Path(args.config)) if args.config else ScaffoldConfig.from_env()
        overrides: dict[str, object] = {}
        if args.root:
            overrides["project_root"] = Path(args.root)
        if args.languages is not None:
            overrides["languages"] = parse_languages(args.languages)
        if overrides:
            config = ScaffoldConfig.model_validate({**config.model_dump(), **overrides})
    except (OSError, ValidationError) as exc:
        print_error(f"Error: Invalid configuration: {exc}")
        sys.exit(1)

    try:
        result = scaffold_feature(args.feature, config, dry_run=args.dry_run)
    except InvalidFeatureNameError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except FeatureExistsError as exc:
        print_error(f'Error: Feature "{exc.feature}" already exists.')
        sys.exit(1)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        print_error("Files written before the failure were kept; remove them by hand.")
        sys.exit(1)

    console.print()
    print_result(result, config)


if __name__ == "__main__":
    main()
