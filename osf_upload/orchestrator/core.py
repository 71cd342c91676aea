"""Core orchestrator - previews and performs the two-phase OSF transfer."""
import logging
from typing import List, Optional, Tuple

import httpx

from ..errors import FetchError, OSFUploadError, UploadError
from ..models import TransferRequest, UploadConfig, UploadResult
from ..protocols import IDirectoryLister, IRepository
from ..services.api_client import HTTPAPIClient
from ..services.lister import DirectoryLister
from ..services.repository import OSFRepository
from ..utils.events import EventEmitter
from .models import PreviewReport, UploadReport

logger = logging.getLogger(__name__)

MAIN_DESTINATION = "main"
RAW_DESTINATION = "raw"


class UploadOrchestrator:
    """
    Moves study files from a directory listing into an OSF repository.

    Usage:
        async with UploadOrchestrator(config) as orchestrator:
            report = await orchestrator.preview(request)
            result = await orchestrator.execute(request)

    preview() and execute() each list the source afresh; nothing is cached
    between them.
    """

    def __init__(
        self,
        config: Optional[UploadConfig] = None,
        api_client: Optional[HTTPAPIClient] = None,
        lister: Optional[IDirectoryLister] = None,
        repository: Optional[IRepository] = None,
    ):
        self._config = config or UploadConfig()
        self._external_client = api_client
        self._api_client = None
        self._lister = lister
        self._repository = repository
        self.events = EventEmitter()

    async def __aenter__(self):
        """Open the HTTP client and build services."""
        if self._external_client is not None:
            self._api_client = self._external_client
        else:
            self._api_client = HTTPAPIClient(
                timeout=self._config.timeout,
                max_retries=self._config.max_retries,
                retry_delay=self._config.retry_delay,
            )
        await self._api_client.__aenter__()

        if self._lister is None:
            self._lister = DirectoryLister(self._api_client)
        if self._repository is None:
            self._repository = OSFRepository(self._api_client, self._config)
        return self

    async def __aexit__(self, *args):
        if self._api_client:
            await self._api_client.__aexit__(*args)

    async def _collect_files(self, request: TransferRequest) -> Tuple[List[str], List[str], List[str]]:
        assert self._lister is not None
        token = request.filter_token
        files = await self._lister.list_matching_files(request.source_root, token)
        dictionaries = self._lister.dictionary_names_for(files)
        raw_files = await self._lister.list_matching_files(request.raw_dir, token)
        return files, dictionaries, raw_files

    async def preview(self, request: TransferRequest) -> PreviewReport:
        """
        List what would be uploaded and check the OSF raw folder exists.

        Errors propagate unchanged; there is no partial report.
        """
        assert self._repository is not None
        files, dictionaries, raw_files = await self._collect_files(request)
        raw_path = await self._repository.resolve_raw_path(request.repo_id)
        return PreviewReport(
            repo_id=request.repo_id,
            files=files,
            dictionaries=dictionaries,
            raw_files=raw_files,
            raw_path=raw_path,
        )

    async def execute(self, request: TransferRequest) -> UploadReport:
        """
        Upload main files and dictionaries to the storage root, then raw files
        to the raw folder.

        Per-file failures are recorded in the report and never stop the loop.
        Listing and raw folder lookup errors propagate.
        """
        assert self._repository is not None
        files, dictionaries, raw_files = await self._collect_files(request)
        report = UploadReport()

        main_target = self._repository.storage_url(request.repo_id, "/")
        await self._upload_phase(
            files + dictionaries, request.source_root, main_target, MAIN_DESTINATION, report
        )

        raw_path = await self._repository.resolve_raw_path(request.repo_id)
        raw_target = self._repository.storage_url(request.repo_id, raw_path)
        await self._upload_phase(
            raw_files, request.raw_dir, raw_target, RAW_DESTINATION, report
        )

        logger.info(
            f"Upload complete: {len(report.succeeded)} uploaded, "
            f"{len(report.skipped)} skipped, {len(report.failed)} failed"
        )
        return report

    async def _upload_phase(
        self,
        names: List[str],
        root: str,
        target: str,
        destination: str,
        report: UploadReport,
    ) -> None:
        for name in names:
            await self.events.emit("file_start", name, destination)
            result = await self._upload_one(name, root, target, destination)
            report.add(result)
            await self.events.emit("file_complete", result)

    async def _upload_one(self, name: str, root: str, target: str, destination: str) -> UploadResult:
        assert self._api_client is not None and self._repository is not None
        source_url = root + name
        try:
            response = await self._api_client.get(source_url)
            if response.status_code >= 400:
                raise FetchError(f"{response.status_code}: {response.reason_phrase} ({source_url})")

            upload = await self._repository.upload_file(target, name, response.content)
            if upload.status_code == 201:
                return UploadResult.ok(name, destination)
            if upload.status_code == 409:
                logger.debug(f"{name} already exists in {target}")
                return UploadResult.skipped(name, destination)
            raise UploadError(upload.status_code, upload.reason_phrase)
        except (httpx.HTTPError, OSFUploadError) as e:
            logger.error(f"Upload of {name} failed: {e}")
            return UploadResult.fail(name, str(e) or repr(e), destination)
