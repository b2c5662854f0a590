"""Feature scaffolder for the Vue application template.

Generates a feature folder (component, view, locale files, model, route and
service) from a hyphenated slug and registers the feature in the locale
tables and the central router.

Quick usage::

    from feature_scaffolder import ScaffoldConfig, scaffold_feature

    result = scaffold_feature("user-profile", ScaffoldConfig(project_root=Path("./web")))
"""

from feature_scaffolder.config import ScaffoldConfig
from feature_scaffolder.errors import FeatureExistsError, ScaffoldError, TreeWriteError
from feature_scaffolder.pipeline import ScaffoldResult, scaffold_feature

__all__ = [
    "FeatureExistsError",
    "ScaffoldConfig",
    "ScaffoldError",
    "ScaffoldResult",
    "TreeWriteError",
    "scaffold_feature",
]
