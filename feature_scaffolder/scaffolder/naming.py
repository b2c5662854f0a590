"""Identifier derivation for feature slugs.

A feature slug such as ``user-profile`` is the only user input; every type,
component and value name in the generated files is derived from it here.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class InvalidFeatureNameError(ValueError):
    """Raised when a slug has no usable segment to derive identifiers from."""


class FeatureNames(BaseModel):
    """Immutable set of names derived from one feature slug."""

    model_config = ConfigDict(frozen=True)

    feature: str
    pascal: str
    camel: str

    @property
    def constant(self) -> str:
        """Upper-cased PascalName, used as the enum member name."""
        return self.pascal.upper()

    def template_context(self) -> dict[str, str]:
        return {
            "feature": self.feature,
            "pascal": self.pascal,
            "camel": self.camel,
            "constant": self.constant,
        }


def _upper_first(segment: str) -> str:
    return segment[:1].upper() + segment[1:]


def normalize(slug: str) -> FeatureNames:
    """Derive PascalCase and camelCase identifiers from a hyphenated slug.

    Only the first character of each segment is changed. Empty segments from
    consecutive, leading or trailing hyphens are skipped::

        normalize("user-profile") -> pascal="UserProfile", camel="userProfile"
        normalize("a--b")         -> pascal="AB", camel="aB"

    Raises:
        InvalidFeatureNameError: If *slug* is empty or only hyphens.
    """
    segments = [segment for segment in slug.split("-") if segment]
    if not segments:
        raise InvalidFeatureNameError(f"Invalid feature name: {slug!r}")

    pascal = "".join(_upper_first(segment) for segment in segments)
    camel = segments[0].lower() + "".join(_upper_first(segment) for segment in segments[1:])
    return FeatureNames(feature=slug, pascal=pascal, camel=camel)
