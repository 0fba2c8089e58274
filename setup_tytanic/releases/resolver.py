"""
Version resolution over the release catalog.

Specifiers follow npm range syntax ('^0.2.0', '~0.1', '>=0.1.0 <0.3.0',
'0.2.x', '0.1.0 - 0.2.0', 'a || b'); the token 'latest' matches anything.
Precedence is plain semantic versioning: major.minor.patch, then
prerelease identifiers.
"""

import logging
from typing import Iterable, List

import semantic_version
from semantic_version.base import AllOf, AnyOf, Range

from setup_tytanic.core.exceptions import UnresolvableVersionError
from setup_tytanic.releases.catalog import Release

logger = logging.getLogger(__name__)

LATEST = "latest"
WILDCARD_RANGE = "*"


def is_exact_version(specifier: str) -> bool:
    """Whether the specifier is a single, complete semantic version."""
    return semantic_version.validate(specifier.strip())


def candidate_versions(releases: Iterable[Release]) -> List[semantic_version.Version]:
    """
    Derive comparable versions from release tags.

    Tags that are not valid semantic versions are skipped.
    """
    candidates = []
    for release in releases:
        if semantic_version.validate(release.version):
            candidates.append(semantic_version.Version(release.version))
        else:
            logger.debug(f"Ignoring release tag '{release.tag_name}'")
    return candidates


def _compile_range(specifier: str, allow_prerelease: bool) -> semantic_version.NpmSpec:
    expression = WILDCARD_RANGE if specifier == LATEST else specifier
    try:
        return semantic_version.NpmSpec(expression)
    except ValueError as e:
        raise UnresolvableVersionError(
            specifier, allow_prerelease, f"invalid version range: {e}"
        ) from e


def _with_prereleases(clause):
    """
    Copy of an NpmSpec clause tree that compares prereleases by precedence.

    NpmSpec only lets a prerelease through a comparator whose own target has
    the same major.minor.patch. With the natural policy every comparator
    applies plain semver ordering, except that '<X' still excludes X's own
    prereleases.
    """
    if isinstance(clause, Range):
        return Range(
            clause.operator,
            clause.target,
            prerelease_policy=Range.PRERELEASE_NATURAL,
            build_policy=clause.build_policy,
        )
    if isinstance(clause, (AllOf, AnyOf)):
        return type(clause)(*(_with_prereleases(c) for c in clause.clauses))
    return clause


def _satisfies(spec, prerelease_clause, version) -> bool:
    if not version.prerelease:
        return spec.match(version)

    # Prereleases are only eligible when allowed
    if prerelease_clause is None:
        return False

    return prerelease_clause.match(version)


def resolve_version(
    releases: Iterable[Release],
    specifier: str,
    allow_prerelease: bool = False,
) -> str:
    """
    Pick the highest released version satisfying a specifier.

    Args:
        releases: Release catalog
        specifier: 'latest', an exact version or an npm-style range
        allow_prerelease: Whether prerelease versions are eligible at all

    Returns:
        The resolved version string (without 'v' prefix)

    Raises:
        UnresolvableVersionError: If no release satisfies the specifier

    Example:
        >>> releases = [Release('v1.0.0'), Release('v1.2.0'), Release('v2.0.0')]
        >>> resolve_version(releases, '^1.0.0')
        '1.2.0'
    """
    specifier = specifier.strip()
    policy = "with" if allow_prerelease else "without"
    logger.debug(f"Resolving version '{specifier}' {policy} pre-releases")

    spec = _compile_range(specifier, allow_prerelease)
    prerelease_clause = _with_prereleases(spec.clause) if allow_prerelease else None
    matching = [
        version
        for version in candidate_versions(releases)
        if _satisfies(spec, prerelease_clause, version)
    ]

    if not matching:
        raise UnresolvableVersionError(specifier, allow_prerelease)

    resolved = str(max(matching))
    logger.debug(
        f"Resolved version '{resolved}' from '{specifier}' {policy} pre-releases"
    )
    return resolved
