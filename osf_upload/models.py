"""
Models for osf_upload.

Immutable dataclasses; one run of the tool builds a TransferRequest from
user input and collects UploadResults while transferring.
"""
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


DEFAULT_FILES_API_URL = "http://files.osf.io/v1/resources"


class UploadStatus(Enum):
    """Upload outcome for a single file."""
    SUCCESS = "success"
    SKIPPED = "skipped"  # already present on OSF (409)
    FAILED = "failed"


@dataclass(frozen=True)
class TransferRequest:
    """Immutable description of one migration run."""
    source_dir: str
    study: str
    version: str
    repo_id: str

    @property
    def filter_token(self) -> str:
        return f"{self.study}_v{self.version}"

    @property
    def source_root(self) -> str:
        """Source directory URL with a single trailing slash."""
        return self.source_dir.rstrip("/") + "/"

    @property
    def raw_dir(self) -> str:
        return self.source_root + "raw/"


@dataclass(frozen=True)
class UploadResult:
    """Immutable result of a single file transfer."""
    filename: str
    destination: str = "main"
    status: UploadStatus = UploadStatus.SUCCESS
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == UploadStatus.SUCCESS

    @classmethod
    def ok(cls, filename: str, destination: str = "main"):
        return cls(filename=filename, destination=destination)

    @classmethod
    def skipped(cls, filename: str, destination: str = "main"):
        return cls(
            filename=filename,
            destination=destination,
            status=UploadStatus.SKIPPED,
        )

    @classmethod
    def fail(cls, filename: str, error: str, destination: str = "main"):
        return cls(
            filename=filename,
            destination=destination,
            status=UploadStatus.FAILED,
            error=error,
        )


@dataclass(frozen=True)
class UploadConfig:
    """Immutable configuration for OSF transfers and prompt defaults."""
    files_api_url: str = DEFAULT_FILES_API_URL
    token: Optional[str] = None
    timeout: float = 60
    max_retries: int = 3
    retry_delay: float = 0.5
    # Prompt defaults
    default_dir: str = "https://acclab.psy.ox.ac.uk/~mj221/ESM/data/public/"
    default_study: str = "coolStudy"
    default_version: str = "M-m-r"
    default_repo_id: str = ""

    @property
    def auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}

    @classmethod
    def from_env(cls, **overrides) -> "UploadConfig":
        """Build config from OSF_PAT / OSF_FILES_API_URL / OSF_UPLOAD_TIMEOUT."""
        values = {
            "token": os.getenv("OSF_PAT"),
            "files_api_url": os.getenv("OSF_FILES_API_URL") or DEFAULT_FILES_API_URL,
        }
        timeout = os.getenv("OSF_UPLOAD_TIMEOUT")
        if timeout:
            values["timeout"] = float(timeout)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
