"""Orchestrator data models."""
from dataclasses import dataclass, field
from typing import List

from ..models import UploadResult, UploadStatus


@dataclass
class PreviewReport:
    """What an upload would transfer, gathered without writing anything."""
    repo_id: str
    files: List[str]
    dictionaries: List[str]
    raw_files: List[str]
    raw_path: str

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def dictionary_count(self) -> int:
        return len(self.dictionaries)

    @property
    def raw_file_count(self) -> int:
        return len(self.raw_files)

    @property
    def raw_location(self) -> str:
        return f"{self.repo_id}/providers/osfstorage{self.raw_path}"


@dataclass
class UploadReport:
    """Per-file outcomes of an upload pass, in processing order."""
    results: List[UploadResult] = field(default_factory=list)

    def add(self, result: UploadResult) -> None:
        self.results.append(result)

    def _names(self, status: UploadStatus) -> List[str]:
        return [r.filename for r in self.results if r.status == status]

    @property
    def succeeded(self) -> List[str]:
        return self._names(UploadStatus.SUCCESS)

    @property
    def skipped(self) -> List[str]:
        return self._names(UploadStatus.SKIPPED)

    @property
    def failed(self) -> List[str]:
        return self._names(UploadStatus.FAILED)

    @property
    def total_files(self) -> int:
        return len(self.results)

    @property
    def all_success(self) -> bool:
        return not self.failed
