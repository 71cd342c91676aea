"""
Protocols (Interfaces) for Dependency Inversion.

The orchestrator depends on these rather than on concrete services, so the
HTML scraping lister can be replaced by a structured listing API.
"""
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class IHTTPClient(Protocol):
    """Interface for HTTP operations."""

    async def get(self, url: str) -> Any:
        """GET request."""
        ...

    async def put(
        self,
        url: str,
        content: Any,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """PUT request."""
        ...


@runtime_checkable
class IDirectoryLister(Protocol):
    """Interface for discovering study files at a source location."""

    async def list_matching_files(self, listing_url: str, filter_token: str) -> List[str]:
        """List file names at listing_url containing filter_token."""
        ...

    def dictionary_names_for(self, csv_file_names: Iterable[str]) -> List[str]:
        """Derive data dictionary names for csv files."""
        ...


@runtime_checkable
class IRepository(Protocol):
    """Interface for the destination storage repository."""

    def storage_url(self, repo_id: str, path: str = "/") -> str:
        ...

    async def resolve_raw_path(self, repo_id: str) -> str:
        ...

    async def upload_file(self, target_url: str, name: str, content: Union[bytes, str]) -> Any:
        ...
