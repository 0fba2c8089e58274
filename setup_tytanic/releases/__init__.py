"""
Upstream release listing and version resolution.
"""

from .catalog import Release, fetch_releases, releases_url
from .resolver import LATEST, is_exact_version, resolve_version

__all__ = [
    "Release",
    "fetch_releases",
    "releases_url",
    "LATEST",
    "is_exact_version",
    "resolve_version",
]
