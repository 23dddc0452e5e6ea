#------------------------------------------------------------
#                        controller.py
#        Builds the sync pipeline from the environment and
#              exposes the command-line entry points.

import argparse
import logging
import os
import signal
import sys
from typing import List, Mapping, Optional
from .config import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SYNC_INTERVAL_DAYS,
    ENV_CONFIG_DIR,
    ENV_GITHUB_TOKEN,
    ENV_LOG_LEVEL,
    ENV_SYNC_INTERVAL_DAYS,
    LOG_FORMAT,
    NO_GITHUB_TOKEN_MESSAGE,
)
from .errors import PortfolioSyncError
from .models import SyncSettings
from .scheduler import SyncScheduler
from .services.config_store import ConfigStore
from .services.github_service import GitHubService
from .services.sync_service import SyncService
from .views.markdown_view import render_project_list

logger = logging.getLogger(__name__)

# This function does parse the sync interval from the environment.
# It falls back to the default when the value is missing or invalid.
def _parse_interval_days(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_SYNC_INTERVAL_DAYS
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning(
            "Invalid %s=%r; using default of %d days",
            ENV_SYNC_INTERVAL_DAYS, raw, DEFAULT_SYNC_INTERVAL_DAYS,
        )
        return DEFAULT_SYNC_INTERVAL_DAYS
    if value <= 0:
        logger.warning(
            "%s must be positive (got %d); using default of %d days",
            ENV_SYNC_INTERVAL_DAYS, value, DEFAULT_SYNC_INTERVAL_DAYS,
        )
        return DEFAULT_SYNC_INTERVAL_DAYS
    return value

# This function does build runtime settings from environment variables.
# It accepts an explicit mapping so callers can avoid os.environ.
def load_settings(environ: Optional[Mapping[str, str]] = None) -> SyncSettings:
    env = os.environ if environ is None else environ
    return SyncSettings(
        github_token=(env.get(ENV_GITHUB_TOKEN) or "").strip(),
        sync_interval_days=_parse_interval_days(env.get(ENV_SYNC_INTERVAL_DAYS)),
        config_dir=env.get(ENV_CONFIG_DIR) or DEFAULT_CONFIG_DIR,
        log_level=(env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
    )

def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)

def build_sync_service(settings: SyncSettings) -> SyncService:
    if not settings.github_token:
        logger.info(NO_GITHUB_TOKEN_MESSAGE)
    return SyncService(GitHubService(settings.github_token), ConfigStore(settings.config_dir))

# This function does execute one sync cycle end-to-end.
# It returns a process exit code instead of raising.
def run_sync(settings: SyncSettings) -> int:
    service = build_sync_service(settings)
    try:
        report = service.sync()
    except Exception as error:
        print(f"Sync failed: {error}", file=sys.stderr)
        return 1
    print(
        f"Synced {report.total} projects "
        f"({report.professional} professional, {report.personal} personal; "
        f"{report.skipped} skipped, {report.failed} failed)"
    )
    return 0

# This function does run the scheduler until the process is signalled.
# The scheduler is stopped on SIGINT or SIGTERM before returning.
def serve(settings: SyncSettings) -> int:
    scheduler = SyncScheduler(build_sync_service(settings), settings.sync_interval_days)

    def _handle_signal(signum, _frame):
        logger.info("Received signal %s, stopping scheduler", signum)
        scheduler.stop()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    scheduler.start()
    while scheduler.is_active:
        scheduler.wait(timeout=1.0)
    return 0

def list_projects(settings: SyncSettings) -> int:
    store = ConfigStore(settings.config_dir)
    print(render_project_list(store.read_projects()))
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portfolio-sync",
        description="Sync portfolio projects from a GitHub account into projects.json.",
    )
    parser.add_argument("--config-dir", help=f"directory holding portfolio.json and projects.json (env {ENV_CONFIG_DIR})")
    parser.add_argument("--log-level", help=f"logging level (env {ENV_LOG_LEVEL})")
    parser.add_argument("--interval-days", type=int, help=f"days between scheduled syncs (env {ENV_SYNC_INTERVAL_DAYS})")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("sync", help="run one sync cycle and exit")
    subparsers.add_parser("serve", help="sync now and then on every interval until stopped")
    subparsers.add_parser("list", help="print the persisted projects as markdown")
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    if args.config_dir:
        settings.config_dir = args.config_dir
    if args.log_level:
        settings.log_level = args.log_level.upper()
    if args.interval_days is not None:
        settings.sync_interval_days = args.interval_days

    configure_logging(settings.log_level)

    command = args.command or "sync"
    try:
        if command == "serve":
            return serve(settings)
        if command == "list":
            return list_projects(settings)
        return run_sync(settings)
    except (PortfolioSyncError, ValueError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
