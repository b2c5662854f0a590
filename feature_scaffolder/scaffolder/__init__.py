"""Feature scaffolding building blocks.

Naming, template rendering, tree writing and source patching.  Each piece is
usable on its own; ``feature_scaffolder.pipeline`` chains them.
"""

from feature_scaffolder.scaffolder.generator import FeatureGenerator, FeatureTree, write_tree
from feature_scaffolder.scaffolder.naming import FeatureNames, InvalidFeatureNameError, normalize
from feature_scaffolder.scaffolder.patcher import PatchResult, PatchTarget, apply_patch, patch_file
from feature_scaffolder.scaffolder.templates import TemplateRenderer

__all__ = [
    "FeatureGenerator",
    "FeatureNames",
    "FeatureTree",
    "InvalidFeatureNameError",
    "PatchResult",
    "PatchTarget",
    "TemplateRenderer",
    "apply_patch",
    "normalize",
    "patch_file",
    "write_tree",
]
