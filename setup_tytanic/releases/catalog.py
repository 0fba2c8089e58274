"""
Release catalog for the upstream tytanic repository.

Lists published GitHub releases either through the authenticated, paginated
REST endpoint or through a single anonymous request. Anonymous requests are
subject to a low rate limit; when it is exceeded the API answers with an
error object instead of a release array.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import requests
from requests.exceptions import RequestException

from setup_tytanic.core.exceptions import CatalogFetchError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
REPOSITORY_OWNER = "typst-community"
REPOSITORY_NAME = "tytanic"
PAGE_SIZE = 100
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class Release:
    """A published upstream release."""

    tag_name: str
    prerelease: bool = False
    html_url: Optional[str] = None

    @property
    def version(self) -> str:
        """Tag with the leading 'v' stripped (e.g., 'v0.2.1' -> '0.2.1')."""
        if self.tag_name.startswith("v"):
            return self.tag_name[1:]
        return self.tag_name


def releases_url(api_url: str = GITHUB_API_URL) -> str:
    """REST endpoint listing the upstream releases."""
    return f"{api_url.rstrip('/')}/repos/{REPOSITORY_OWNER}/{REPOSITORY_NAME}/releases"


def fetch_releases(
    token: Optional[str] = None,
    *,
    session: Optional[requests.Session] = None,
    api_url: str = GITHUB_API_URL,
    timeout: int = DEFAULT_TIMEOUT,
) -> List[Release]:
    """
    Fetch all published tytanic releases.

    Args:
        token: GitHub API token; enables the authenticated, paginated listing
        session: Optional requests session
        api_url: GitHub API base URL
        timeout: Request timeout in seconds

    Returns:
        Releases in the order returned by the API

    Raises:
        CatalogFetchError: If the listing cannot be retrieved or parsed
    """
    session = session or requests.Session()
    url = releases_url(api_url)

    logger.debug(
        f"Fetching releases list for repository '{REPOSITORY_OWNER}/{REPOSITORY_NAME}'"
    )

    if token:
        logger.debug("Fetching releases with authentication")
        records = _fetch_paginated(session, url, token, timeout)
    else:
        logger.debug(f"Fetching releases list from '{url}' without authentication")
        records = _fetch_anonymous(session, url, timeout)

    releases = [_parse_release(url, record) for record in records]
    logger.debug(f"Fetched {len(releases)} releases from {url}")
    return releases


def _fetch_paginated(
    session: requests.Session, url: str, token: str, timeout: int
) -> List[Any]:
    """Collect every page of the authenticated listing."""
    headers = {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
    }
    params: Optional[dict] = {"per_page": PAGE_SIZE}
    records: List[Any] = []
    next_url: Optional[str] = url
    pages = 0

    while next_url:
        try:
            response = session.get(
                next_url, headers=headers, params=params, timeout=timeout
            )
            response.raise_for_status()
            page = response.json()
        except RequestException as e:
            raise CatalogFetchError(next_url, str(e)) from e
        except ValueError as e:
            raise CatalogFetchError(next_url, f"invalid JSON: {e}") from e

        if not isinstance(page, list):
            raise CatalogFetchError(next_url, "expected a JSON array of releases")

        records.extend(page)
        pages += 1

        # The next link already carries the query string
        next_url = response.links.get("next", {}).get("url")
        params = None

    logger.debug(f"Fetched {pages} page(s) of releases")
    return records


def _fetch_anonymous(session: requests.Session, url: str, timeout: int) -> List[Any]:
    """Single unauthenticated request for the first page of releases."""
    try:
        response = session.get(
            url, headers={"Accept": "application/vnd.github+json"}, timeout=timeout
        )
        response.raise_for_status()
        logger.debug(f"Downloaded releases from {url}.")
        records = response.json()
    except RequestException as e:
        raise CatalogFetchError(
            url, f"{e}. This may be caused by API rate limit exceeded."
        ) from e
    except ValueError as e:
        raise CatalogFetchError(
            url, f"{e}. This may be caused by API rate limit exceeded."
        ) from e

    if not isinstance(records, list):
        raise CatalogFetchError(
            url,
            "response is not a list of releases. "
            "This may be caused by API rate limit exceeded.",
        )

    return records


def _parse_release(url: str, record: Any) -> Release:
    """Build a Release from one API record."""
    if not isinstance(record, dict) or not isinstance(record.get("tag_name"), str):
        raise CatalogFetchError(url, f"malformed release record: {record!r}")

    return Release(
        tag_name=record["tag_name"],
        prerelease=bool(record.get("prerelease", False)),
        html_url=record.get("html_url"),
    )
