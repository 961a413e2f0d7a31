# src/main.py — v1
"""CLI entry point: restore and save phases of one cached run.

Usage:
    actcache restore --key <key> --path <path> [--restore-keys <prefix>] [options]
    actcache save --path <path> [options]

Inputs not given on the command line fall back to INPUT_<NAME> environment
variables, as set by the runner.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from pydantic import ValidationError

from actcache.backend.base_cache_backend import BaseCacheBackend
from actcache.config.settings import ConfigurationError, Settings, load_settings
from actcache.constants import Inputs, Outputs
from actcache.core.background_errors import background_error_sink, handle_loop_exception
from actcache.core.models import CacheInputs
from actcache.core.run_gate import RunGate
from actcache.host.inputs import build_inputs, get_input_is_true
from actcache.host.outputs import publish_outputs
from actcache.logging.context import set_run_context
from actcache.logging.logger import setup_logging
from actcache.state.base_state_store import BaseStateStore
from actcache.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except (ConfigurationError, ValidationError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )

    try:
        with background_error_sink():
            return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="actcache",
        description=f"actcache v{__version__} - restore/save a keyed build cache",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- restore ---
    p_restore = subparsers.add_parser(
        "restore", help="Restore the best matching cache entry",
    )
    p_restore.add_argument(
        "--key", default=None,
        help="Primary cache key",
    )
    _add_common_inputs(p_restore)
    p_restore.add_argument(
        "--restore-keys", dest="restore_keys", action="append", default=None,
        help="Fallback key prefix, most preferred first (repeatable)",
    )
    p_restore.set_defaults(func=_cmd_restore)

    # --- save ---
    p_save = subparsers.add_parser(
        "save", help="Save the cache entry recorded by the restore phase",
    )
    _add_common_inputs(p_save)
    p_save.add_argument(
        "--upload-chunk-size", dest="upload_chunk_size", default=None,
        help="Upload chunk size in bytes (default: backend setting)",
    )
    p_save.set_defaults(func=_cmd_save)

    return parser


def _add_common_inputs(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--path", dest="paths", action="append", default=None,
        help="File, directory or glob to cache (repeatable, newline-separated)",
    )
    parser.add_argument(
        "--force-save", dest="force_save", action="store_const", const="true",
        default=None,
        help="Always upload on save, even after an exact cache hit",
    )


def _env_input(name: Inputs) -> str | None:
    """Read an input the way the runner exports it (INPUT_<NAME>)."""
    return os.environ.get(f"INPUT_{name.value.replace(' ', '_').upper()}")


def _inputs_from_args(args: argparse.Namespace, save_phase: bool = False) -> CacheInputs:
    force_save = args.force_save or _env_input(Inputs.FORCE_SAVE)
    if save_phase:
        # The save phase only honours the literal "true".
        force_save = get_input_is_true(force_save)
    return build_inputs(
        key=getattr(args, "key", None) or _env_input(Inputs.KEY),
        paths=args.paths or _env_input(Inputs.PATH),
        restore_keys=getattr(args, "restore_keys", None)
        or _env_input(Inputs.RESTORE_KEYS),
        upload_chunk_size=getattr(args, "upload_chunk_size", None)
        or _env_input(Inputs.UPLOAD_CHUNK_SIZE),
        force_save=force_save,
    )


def _build_collaborators(
    settings: Settings,
) -> tuple[BaseCacheBackend, BaseStateStore]:
    from actcache.backend.backend_factory import create_backend
    from actcache.state.state_factory import create_state_store

    return create_backend(settings), create_state_store(settings)


async def _cmd_restore(args: argparse.Namespace, settings: Settings) -> int:
    """Execute the restore phase and publish cache-hit/success."""
    from actcache.core.restore import RestoreOrchestrator

    asyncio.get_running_loop().set_exception_handler(handle_loop_exception)
    set_run_context(settings.github_run_id, "restore")

    gate = RunGate(settings)
    decision = gate.check()
    if not decision.allowed:
        logger.warning("%s", decision.reason)
        publish_outputs(
            {Outputs.CACHE_HIT: False, Outputs.SUCCESS: decision.environment_supported},
            settings.github_output,
        )
        return 0

    try:
        inputs = _inputs_from_args(args)
    except ValueError as exc:
        logger.error("%s", exc)
        publish_outputs(
            {Outputs.CACHE_HIT: False, Outputs.SUCCESS: False},
            settings.github_output,
        )
        return 1

    try:
        backend, state = _build_collaborators(settings)
    except Exception as exc:
        logger.warning("Cache unavailable, continuing without it: %s", exc)
        publish_outputs(
            {Outputs.CACHE_HIT: False, Outputs.SUCCESS: False},
            settings.github_output,
        )
        return 0

    outcome = await RestoreOrchestrator(settings, backend, state, gate=gate).run(inputs)
    publish_outputs(
        {Outputs.CACHE_HIT: outcome.hit, Outputs.SUCCESS: outcome.success},
        settings.github_output,
    )
    return 1 if outcome.fatal_error else 0


async def _cmd_save(args: argparse.Namespace, settings: Settings) -> int:
    """Execute the save phase. Only validation errors fail it."""
    from actcache.core.save import SaveOrchestrator

    asyncio.get_running_loop().set_exception_handler(handle_loop_exception)
    set_run_context(settings.github_run_id, "save")

    gate = RunGate(settings)
    decision = gate.check()
    if not decision.allowed:
        logger.warning("%s", decision.reason)
        return 0

    try:
        inputs = _inputs_from_args(args, save_phase=True)
        backend, state = _build_collaborators(settings)
    except Exception as exc:
        logger.warning("Not saving cache: %s", exc)
        return 0

    outcome = await SaveOrchestrator(settings, backend, state, gate=gate).run(inputs)
    return 0 if outcome.success else 1


if __name__ == "__main__":
    sys.exit(main())
