from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from scratch_run import __version__
from scratch_run.adapters.factory import build_engine, build_logger
from scratch_run.adapters.input_source import StreamInputSource
from scratch_run.adapters.output_sink import StreamOutputSink
from scratch_run.app.runtime import check_project, run_project
from scratch_run.config.loader import ConfigError, load_config
from scratch_run.domain.errors import MissingArgument, ScratchRunError, UnreadableFile
from scratch_run.observability.logging import Logger
from scratch_run.ports.engine import ExecutionEngine
from scratch_run.usecases.config_models import AppConfig

# Diagnostic prefixes per mode; unreadable files are reported verbatim.
CHECK_PREFIX = "Not a valid Scratch file: "
RUN_PREFIX = "Engine encountered an error: "
NO_FILE_MESSAGE = "ERROR: No file argument"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scratch-run",
        description="Run a Scratch project headless with stdin/stdout as ask/say",
    )
    parser.add_argument("file", nargs="?", help="Project file (.sb3 archive or project.json)")
    parser.add_argument("--check", action="store_true", help="Only validate the project structure")
    parser.add_argument("--version", action="store_true", help="Print the version and exit")
    parser.add_argument("--config", help="Path to YAML config")
    parser.add_argument(
        "--delivery",
        choices=["eager", "incremental"],
        help="Override input.delivery",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="Override logging.level",
    )
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    # CLI overrides take precedence over config.
    if args.delivery is not None:
        config.input.delivery = args.delivery
    if args.log_level is not None:
        config.logging.level = args.log_level


def run(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    engine: ExecutionEngine | None = None,
) -> int:
    # Only place where failures become exit codes; everything below raises.
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr
    args = parse_args(argv)

    if args.version:
        stdout.write(__version__ + "\n")
        return 0

    prefix = CHECK_PREFIX if args.check else RUN_PREFIX
    logger: Logger | None = None
    try:
        if args.file is None:
            raise MissingArgument(NO_FILE_MESSAGE)
        config = load_config(Path(args.config) if args.config else None)
        apply_overrides(config, args)
        logger = build_logger(config.logging)
        path = Path(args.file)
        if args.check:
            if engine is None and config.engine.factory is not None:
                engine = build_engine(config.engine)
            asyncio.run(check_project(path, engine=engine))
            return 0
        if engine is None:
            engine = build_engine(config.engine)
        asyncio.run(
            run_project(
                path,
                config=config,
                engine=engine,
                input_source=StreamInputSource(
                    stdin if stdin is not None else sys.stdin,
                    encoding=config.input.encoding,
                ),
                output_sink=StreamOutputSink(stdout),
                logger=logger,
            )
        )
        return 0
    except MissingArgument as exc:
        stdout.write(f"{exc}\n")
        return 1
    except UnreadableFile as exc:
        stderr.write(f"{exc}\n")
        return 1
    except ConfigError as exc:
        stderr.write(f"ERROR: {exc}\n")
        return 1
    except ScratchRunError as exc:
        if logger is not None:
            logger.error("run failed", kind=type(exc).__name__)
        stderr.write(f"{prefix}{exc}\n")
        return 1
    finally:
        if logger is not None:
            logger.close()
