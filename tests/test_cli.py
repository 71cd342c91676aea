"""Tests for osf_upload CLI helpers."""
import logging
import os
from unittest.mock import AsyncMock

import pytest

from osf_upload import cli
from osf_upload.cli import CLIError, _build_parser, _load_env_file, _setup_logging, run_cli
from osf_upload.services.api_client import HTTPAPIClient


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    logging.disable(logging.NOTSET)


def test_load_env_file(tmp_path, monkeypatch):
    env_path = tmp_path / ".env"
    env_path.write_text(
        "\n".join(
            [
                "# OSF credentials",
                "OSF_PAT='abc-token'",
                "export OSF_FILES_API_URL=http://localhost:7777/v1/resources",
                "not a pair",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.delenv("OSF_PAT", raising=False)
    monkeypatch.delenv("OSF_FILES_API_URL", raising=False)

    _load_env_file(env_path)

    assert os.environ["OSF_PAT"] == "abc-token"
    assert os.environ["OSF_FILES_API_URL"] == "http://localhost:7777/v1/resources"


def test_load_env_file_keeps_existing_values(tmp_path, monkeypatch):
    env_path = tmp_path / ".env"
    env_path.write_text("OSF_PAT=from-file\n", encoding="utf-8")
    monkeypatch.setenv("OSF_PAT", "from-shell")

    _load_env_file(env_path)
    assert os.environ["OSF_PAT"] == "from-shell"

    _load_env_file(env_path, override=True)
    assert os.environ["OSF_PAT"] == "from-file"


def test_load_env_file_missing(tmp_path):
    with pytest.raises(CLIError, match="not found"):
        _load_env_file(tmp_path / "nope.env")


def test_setup_logging_defaults_to_silent():
    mode = _setup_logging(debug=False, silent=False, log_level=None)
    assert mode == "silent"
    assert logging.getLogger().isEnabledFor(logging.ERROR) is False


def test_setup_logging_debug_mode():
    mode = _setup_logging(debug=True, silent=False, log_level=None)
    assert mode == "DEBUG"
    assert logging.getLogger().isEnabledFor(logging.DEBUG) is True


def test_setup_logging_explicit_level():
    mode = _setup_logging(debug=False, silent=False, log_level="warning")
    assert mode == "WARNING"
    assert logging.getLogger().isEnabledFor(logging.INFO) is False


def test_parser_defaults():
    args = _build_parser().parse_args(["--study", "coolStudy", "--osf-id", "abc12"])
    assert args.study == "coolStudy"
    assert args.osf_id == "abc12"
    assert args.study_version is None


def test_run_cli_quit_makes_no_http_calls(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    get = AsyncMock()
    put = AsyncMock()
    monkeypatch.setattr(HTTPAPIClient, "get", get)
    monkeypatch.setattr(HTTPAPIClient, "put", put)

    code = run_cli([], input_func=lambda prompt: "quit")

    assert code == 0
    get.assert_not_awaited()
    put.assert_not_awaited()


def test_run_cli_bad_env_file(tmp_path):
    assert run_cli(["--env-file", str(tmp_path / "missing.env")]) == 1


def test_run_cli_exit_code_follows_upload_report(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    class FakeSession:
        def __init__(self, orchestrator, config, input_func=None):
            self.upload_report = AsyncMock(all_success=False)

        async def run(self):
            return cli.SessionState.DONE

    monkeypatch.setattr(cli, "InteractiveSession", FakeSession)
    assert run_cli(["--silent"]) == 1
