"""
Directory Lister - scrapes an HTML directory listing for study data files.

File names follow <prefix>_<study>_v<version>_<suffix>.(csv|json), where the
prefix is an optional run of digits, underscores and dashes (usually a date).
"""
import logging
import re
from typing import Iterable, List

import httpx

from ..errors import FetchError, MatchError
from ..protocols import IHTTPClient

logger = logging.getLogger(__name__)

DICTIONARY_SUFFIX_PATTERN = re.compile(r"v[0-9]+-[0-9]+-[0-9]+_([^_]+\.csv)")


def file_link_pattern(filter_token: str) -> "re.Pattern[str]":
    return re.compile(
        r'href="([0-9_\-]*' + re.escape(filter_token) + r'_[^"]+\.(?:csv|json))"'
    )


def extract_file_links(body: str, filter_token: str) -> List[str]:
    """Return href values naming files for filter_token, in document order."""
    return [m.group(1) for m in file_link_pattern(filter_token).finditer(body)]


class DirectoryLister:
    """Lists matching data files on a remote directory-listing page."""

    def __init__(self, api_client: IHTTPClient):
        self._api = api_client

    async def list_matching_files(self, listing_url: str, filter_token: str) -> List[str]:
        """
        Fetch listing_url and extract file names containing filter_token.

        Raises:
            FetchError: the request itself failed (network, DNS, timeout).
        """
        try:
            response = await self._api.get(listing_url)
        except httpx.HTTPError as exc:
            raise FetchError(f"Unable to fetch {listing_url}: {exc}") from exc

        if response.status_code >= 400:
            logger.warning(f"Listing {listing_url} returned {response.status_code}; no files found")
            return []

        files = extract_file_links(response.text, filter_token)
        logger.debug(f"{listing_url}: {len(files)} file(s) matching {filter_token}")
        return files

    @staticmethod
    def dictionary_names_for(csv_file_names: Iterable[str]) -> List[str]:
        """
        Derive data dictionary names (dictionary_<suffix>.csv) for csv files.

        Raises:
            MatchError: a name lacks the v#-#-#_<suffix>.csv shape.
        """
        dicts = []
        for name in csv_file_names:
            match = DICTIONARY_SUFFIX_PATTERN.search(name)
            if not match:
                raise MatchError(f"Cannot derive a data dictionary name from {name}")
            dicts.append(f"dictionary_{match.group(1)}")
        return dicts
