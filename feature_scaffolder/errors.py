"""Exceptions raised by the feature scaffolder.

Only fatal conditions are exceptions.  A missing patch target or a missing
collection literal is reported as a warning on the ``PatchResult`` instead.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for fatal scaffolding failures."""


class FeatureExistsError(ScaffoldError):
    """Raised when the feature directory already exists."""

    def __init__(self, feature: str, path: Path) -> None:
        self.feature = feature
        self.path = path
        super().__init__(f'Feature "{feature}" already exists at {path}')


class TreeWriteError(ScaffoldError):
    """Raised when writing the feature tree fails part-way.

    Files written before the failure are not rolled back and must be cleaned
    up by hand.
    """

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")
