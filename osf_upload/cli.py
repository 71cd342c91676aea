"""Command line interface for osf_upload."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from . import __version__
from .cli_progress import (
    render_configuration_summary,
    render_file_result,
    render_file_start,
)
from .models import UploadConfig
from .orchestrator import UploadOrchestrator
from .session import InteractiveSession, SessionState

logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    """Raised when CLI validation/execution fails."""


def _setup_logging(debug: bool, silent: bool, log_level: Optional[str]) -> str:
    """
    Configure logging.

    Default behavior is silent unless --debug or --log-level is provided.
    Returns a string describing effective mode.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    logging.disable(logging.NOTSET)

    if silent or (not debug and not log_level):
        logging.disable(logging.CRITICAL)
        root_logger.setLevel(logging.CRITICAL + 1)
        return "silent"

    if debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, log_level.upper(), None)
        if not isinstance(level, int):
            env_level = os.getenv("LOG_LEVEL")
            level = getattr(logging, (env_level or "INFO").upper(), logging.INFO)

    from rich.logging import RichHandler

    handler = RichHandler(
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    return logging.getLevelName(level)


def _strip_optional_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _load_env_file(path: Path, override: bool = False) -> None:
    if not path.exists():
        raise CLIError(f"env file not found: {path}")
    if not path.is_file():
        raise CLIError(f"env path is not a file: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"could not read env file {path}: {exc}") from exc

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        value = _strip_optional_quotes(value.strip())
        if override or key not in os.environ:
            os.environ[key] = value


def _resolve_default_env_file() -> Optional[Path]:
    default_env = Path(".env")
    return default_env if default_env.exists() and default_env.is_file() else None


def _build_config(args: argparse.Namespace) -> UploadConfig:
    try:
        return UploadConfig.from_env(
            default_dir=args.dir,
            default_study=args.study,
            default_version=args.study_version,
            default_repo_id=args.osf_id,
        )
    except ValueError as exc:
        raise CLIError(f"invalid configuration: {exc}") from exc


async def _run_session(
    config: UploadConfig,
    input_func: Optional[Callable[[str], str]] = None,
) -> int:
    async with UploadOrchestrator(config) as orchestrator:
        orchestrator.events.on("file_start", render_file_start)
        orchestrator.events.on("file_complete", render_file_result)

        session = InteractiveSession(orchestrator, config, input_func=input_func)
        state = await session.run()

    if state is SessionState.DONE and session.upload_report is not None:
        return 0 if session.upload_report.all_success else 1
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="osf-upload",
        description=(
            "Copy study data files from a web directory listing into an OSF "
            "repository. Prompts for the source directory, study, version and "
            "repository id; type 'quit' at any prompt to stop."
        ),
    )
    parser.add_argument("--dir", default=None, help="Default data file directory URL")
    parser.add_argument("--study", default=None, help="Default study name")
    parser.add_argument("--study-version", default=None, help="Default study version (e.g. 1-0-0)")
    parser.add_argument("--osf-id", default=None, help="Default OSF repository id")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Load environment variables (OSF_PAT, ...) from this .env file",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logs")
    parser.add_argument("--silent", action="store_true", help="Only print errors")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Explicit log level (DEBUG/INFO/WARNING/ERROR)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"osf-upload {__version__}",
    )
    return parser


def run_cli(
    argv: Optional[Sequence[str]] = None,
    input_func: Optional[Callable[[str], str]] = None,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    used_env_file = args.env_file or _resolve_default_env_file()
    if used_env_file is not None:
        try:
            _load_env_file(Path(used_env_file))
        except CLIError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    effective_log_mode = _setup_logging(
        debug=args.debug,
        silent=args.silent,
        log_level=args.log_level,
    )

    try:
        config = _build_config(args)
    except CLIError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if not config.token:
        print("WARNING: OSF_PAT is not set; uploads will be rejected by OSF.", file=sys.stderr)

    render_configuration_summary(
        {
            "Files API": config.files_api_url,
            "Token": "set" if config.token else "(missing)",
            "Timeout": f"{config.timeout:g}s",
            "Env File": str(used_env_file) if used_env_file else "-",
            "Logging": effective_log_mode,
        }
    )

    try:
        return asyncio.run(_run_session(config, input_func=input_func))
    except (KeyboardInterrupt, EOFError):
        print("Cancelled.", file=sys.stderr)
        return 130


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
