
"""Services for osf_upload."""
from .api_client import HTTPAPIClient
from .lister import DirectoryLister, extract_file_links
from .repository import OSFRepository

__all__ = [
    "HTTPAPIClient",
    "DirectoryLister",
    "OSFRepository",
    "extract_file_links",
]
