"""
osf_upload - migrate study data files from a web directory listing to OSF.

Usage:
    from osf_upload import UploadOrchestrator, TransferRequest, UploadConfig

    request = TransferRequest(
        source_dir="https://example.org/data/public/",
        study="coolStudy",
        version="1-0-0",
        repo_id="abc12",
    )
    async with UploadOrchestrator(UploadConfig.from_env()) as orchestrator:
        preview = await orchestrator.preview(request)
        report = await orchestrator.execute(request)
"""
__version__ = "0.1.0"

from .errors import (
    FetchError,
    MatchError,
    NotFoundError,
    OSFUploadError,
    QuitRequested,
    RepositoryConnectionError,
    UploadError,
)
from .models import TransferRequest, UploadConfig, UploadResult, UploadStatus
from .orchestrator import PreviewReport, UploadOrchestrator, UploadReport
from .services import DirectoryLister, HTTPAPIClient, OSFRepository

__all__ = [
    # Main
    "UploadOrchestrator",
    "PreviewReport",
    "UploadReport",
    # Models
    "TransferRequest",
    "UploadConfig",
    "UploadResult",
    "UploadStatus",
    # Services
    "DirectoryLister",
    "HTTPAPIClient",
    "OSFRepository",
    # Errors
    "OSFUploadError",
    "FetchError",
    "MatchError",
    "RepositoryConnectionError",
    "NotFoundError",
    "UploadError",
    "QuitRequested",
]
