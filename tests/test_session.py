"""Tests for the interactive prompt state machine."""
from unittest.mock import AsyncMock

import httpx
import pytest

from osf_upload.errors import FetchError, QuitRequested
from osf_upload.models import TransferRequest, UploadConfig, UploadResult
from osf_upload.orchestrator import UploadOrchestrator
from osf_upload.orchestrator.models import PreviewReport, UploadReport
from osf_upload.services.api_client import HTTPAPIClient
from osf_upload.session import InteractiveSession, SessionState, ask

CONFIG = UploadConfig(
    default_dir="https://data.example/public/",
    default_study="coolStudy",
    default_version="1-0-0",
)


def _answers(*values):
    prompts = []
    pending = list(values)

    def reader(prompt):
        prompts.append(prompt)
        return pending.pop(0)

    reader.prompts = prompts
    return reader


def _orchestrator():
    orchestrator = AsyncMock()
    orchestrator.preview.return_value = PreviewReport(
        repo_id="abc12", files=["a.csv"], dictionaries=["dictionary_a.csv"], raw_files=[], raw_path="/r/"
    )
    orchestrator.execute.return_value = UploadReport([UploadResult.ok("a.csv")])
    return orchestrator


def test_ask_returns_default_on_empty_answer():
    reader = _answers("")
    assert ask("Study name", "coolStudy", reader) == "coolStudy"
    assert reader.prompts == ["Study name (coolStudy): "]


def test_ask_without_default():
    reader = _answers("  abc12 ")
    assert ask("OSF repository id", "", reader) == "abc12"
    assert reader.prompts == ["OSF repository id: "]


@pytest.mark.parametrize("word", ["quit", "exit"])
def test_ask_raises_on_quit_words(word):
    with pytest.raises(QuitRequested):
        ask("Study name", "coolStudy", _answers(word))


@pytest.mark.asyncio
@pytest.mark.parametrize("position", [0, 1, 2, 3])
async def test_quit_at_input_prompt_makes_no_calls(position):
    orchestrator = _orchestrator()
    answers = [""] * position + ["quit"]
    session = InteractiveSession(orchestrator, CONFIG, input_func=_answers(*answers))

    assert await session.run() is SessionState.QUIT
    orchestrator.preview.assert_not_awaited()
    orchestrator.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_quit_at_write_confirmation():
    orchestrator = _orchestrator()
    session = InteractiveSession(orchestrator, CONFIG, input_func=_answers("", "", "", "abc12", "exit"))

    assert await session.run() is SessionState.QUIT
    orchestrator.preview.assert_awaited_once()
    orchestrator.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_confirmed_write_runs_upload():
    orchestrator = _orchestrator()
    reader = _answers("", "", "2-0-0", "abc12", "Yes")
    session = InteractiveSession(orchestrator, CONFIG, input_func=reader)

    assert await session.run() is SessionState.DONE
    expected = TransferRequest("https://data.example/public/", "coolStudy", "2-0-0", "abc12")
    orchestrator.preview.assert_awaited_once_with(expected)
    orchestrator.execute.assert_awaited_once_with(expected)
    assert session.upload_report.succeeded == ["a.csv"]
    assert reader.prompts[-1] == "Write files? (no|yes): "


@pytest.mark.asyncio
async def test_declined_write_prompts_again_with_previous_answers():
    orchestrator = _orchestrator()
    reader = _answers("", "otherStudy", "", "abc12", "", "quit")
    session = InteractiveSession(orchestrator, CONFIG, input_func=reader)

    assert await session.run() is SessionState.QUIT
    orchestrator.execute.assert_not_awaited()
    assert reader.prompts[5] == "Data file directory (https://data.example/public/): "
    assert session.request.study == "otherStudy"


@pytest.mark.asyncio
async def test_preview_error_returns_to_input():
    orchestrator = _orchestrator()
    orchestrator.preview.side_effect = [FetchError("Unable to fetch listing"), orchestrator.preview.return_value]
    reader = _answers("", "", "", "abc12", "", "", "", "", "y")
    session = InteractiveSession(orchestrator, CONFIG, input_func=reader)

    assert await session.run() is SessionState.DONE
    assert orchestrator.preview.await_count == 2
    orchestrator.execute.assert_awaited_once()
    assert reader.prompts[4] == "Data file directory (https://data.example/public/): "


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"data": ["folder"]},
        {"data": [{"attributes": None}, {"attributes": {"name": "raw"}}]},
    ],
)
async def test_malformed_osf_listing_returns_to_input(body):
    def handler(request):
        if request.url.host == "files.osf.test":
            return httpx.Response(200, json=body)
        return httpx.Response(200, text="<html></html>")

    client = HTTPAPIClient(retry_delay=0, transport=httpx.MockTransport(handler))
    config = UploadConfig(files_api_url="http://files.osf.test/v1/resources", retry_delay=0)
    reader = _answers("https://data.example/public/", "s", "1-0-0", "abc12", "quit")

    async with UploadOrchestrator(config, api_client=client) as orchestrator:
        session = InteractiveSession(orchestrator, config, input_func=reader)
        assert await session.run() is SessionState.QUIT

    assert session.preview_report is None
    assert reader.prompts[4] == "Data file directory (https://data.example/public/): "
