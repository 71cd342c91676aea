"""
Interactive session - the prompt loop as an explicit state machine.

COLLECTING_INPUT -> PREVIEWING -> CONFIRMING_WRITE -> UPLOADING -> DONE,
with QUIT reachable from every prompt. Recoverable errors and a declined
write go back to COLLECTING_INPUT, keeping the last answers as defaults.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

import httpx

from . import cli_progress
from .errors import OSFUploadError, QuitRequested
from .models import TransferRequest, UploadConfig
from .orchestrator.models import PreviewReport, UploadReport

logger = logging.getLogger(__name__)

QUIT_WORDS = {"quit", "exit"}
CONFIRM_DEFAULT = "no|yes"
QUIT_MESSAGE = "Quitting on request. Thanks for using osf-upload!"


class SessionState(Enum):
    COLLECTING_INPUT = "collecting_input"
    PREVIEWING = "previewing"
    CONFIRMING_WRITE = "confirming_write"
    UPLOADING = "uploading"
    DONE = "done"
    QUIT = "quit"


def ask(question: str, default: str = "", input_func: Optional[Callable[[str], str]] = None) -> str:
    """
    Ask a question on the console.

    Returns the answer, or default when the answer is empty.

    Raises:
        QuitRequested: the answer was "quit" or "exit".
    """
    reader = input_func or cli_progress.read_line
    prompt = f"{question} ({default}): " if default else f"{question}: "
    answer = reader(prompt).strip()
    if answer in QUIT_WORDS:
        raise QuitRequested(answer)
    return answer or default


class InteractiveSession:
    """Drives one orchestrator through the prompt loop."""

    def __init__(
        self,
        orchestrator,
        config: Optional[UploadConfig] = None,
        input_func: Optional[Callable[[str], str]] = None,
    ):
        self._orchestrator = orchestrator
        self._config = config or UploadConfig()
        self._input = input_func
        self.state = SessionState.COLLECTING_INPUT
        self.request = TransferRequest(
            source_dir=self._config.default_dir,
            study=self._config.default_study,
            version=self._config.default_version,
            repo_id=self._config.default_repo_id,
        )
        self.preview_report: Optional[PreviewReport] = None
        self.upload_report: Optional[UploadReport] = None

    def _ask(self, question: str, default: str = "") -> str:
        return ask(question, default, self._input)

    async def run(self) -> SessionState:
        """Step through states until DONE or QUIT."""
        while self.state not in (SessionState.DONE, SessionState.QUIT):
            try:
                await self._step()
            except QuitRequested:
                logger.debug(f"quit requested in state {self.state.value}")
                cli_progress.render_notice(QUIT_MESSAGE)
                self.state = SessionState.QUIT
            except (OSFUploadError, httpx.HTTPError) as exc:
                logger.debug(f"{self.state.value} failed", exc_info=True)
                cli_progress.render_error(str(exc) or repr(exc))
                self.state = SessionState.COLLECTING_INPUT
        return self.state

    async def _step(self) -> None:
        if self.state is SessionState.COLLECTING_INPUT:
            self.request = self._collect_input()
            self.state = SessionState.PREVIEWING
        elif self.state is SessionState.PREVIEWING:
            self.preview_report = await self._orchestrator.preview(self.request)
            cli_progress.render_preview(self.preview_report)
            self.state = SessionState.CONFIRMING_WRITE
        elif self.state is SessionState.CONFIRMING_WRITE:
            answer = self._ask("Write files?", CONFIRM_DEFAULT)
            if answer.lower().startswith("y"):
                self.state = SessionState.UPLOADING
            else:
                self.state = SessionState.COLLECTING_INPUT
        elif self.state is SessionState.UPLOADING:
            self.upload_report = await self._orchestrator.execute(self.request)
            cli_progress.render_upload_summary(self.upload_report)
            self.state = SessionState.DONE

    def _collect_input(self) -> TransferRequest:
        current = self.request
        return TransferRequest(
            source_dir=self._ask("Data file directory", current.source_dir),
            study=self._ask("Study name", current.study),
            version=self._ask("Study version", current.version),
            repo_id=self._ask("OSF repository id", current.repo_id),
        )
