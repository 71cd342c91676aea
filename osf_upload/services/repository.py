"""OSF storage repository - raw folder lookup and file uploads."""
import logging
from typing import Union

import httpx

from ..errors import NotFoundError, RepositoryConnectionError
from ..models import UploadConfig
from ..protocols import IHTTPClient

logger = logging.getLogger(__name__)

RAW_FOLDER_NAME = "raw"


class OSFRepository:
    """Wraps the osfstorage provider of a single OSF files API."""

    def __init__(self, api_client: IHTTPClient, config: UploadConfig):
        self._api = api_client
        self._config = config

    def storage_url(self, repo_id: str, path: str = "/") -> str:
        base = self._config.files_api_url.rstrip("/")
        return f"{base}/{repo_id}/providers/osfstorage{path}"

    async def resolve_raw_path(self, repo_id: str) -> str:
        """
        Find the storage path of the repository's raw/ folder.

        The path is an opaque provider token (e.g. "/5f1c.../") appended
        to storage_url for uploads into that folder.
        """
        url = self.storage_url(repo_id)
        try:
            response = await self._api.get(url)
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise RepositoryConnectionError(f"Unable to connect to {url}") from exc

        if not isinstance(body, dict) or not isinstance(body.get("data"), list):
            raise RepositoryConnectionError(f"Unable to connect to {url}")

        for entry in body["data"]:
            attributes = entry.get("attributes") if isinstance(entry, dict) else None
            if not isinstance(attributes, dict):
                continue
            if attributes.get("name") == RAW_FOLDER_NAME:
                path = attributes.get("path")
                if not isinstance(path, str):
                    raise RepositoryConnectionError(f"OSF returned no path for raw/ in {repo_id}")
                logger.debug(f"raw folder for {repo_id}: {path}")
                return path

        raise NotFoundError(f"Unable to find raw/ directory in OSF: {repo_id}.")

    async def upload_file(self, target_url: str, name: str, content: Union[bytes, str]) -> httpx.Response:
        """PUT content as a new file called name under target_url."""
        return await self._api.put(
            target_url,
            content=content,
            params={"kind": "file", "name": name},
            headers=self._config.auth_headers,
        )
