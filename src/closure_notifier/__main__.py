from __future__ import annotations

import argparse
import asyncio
import sys

import structlog

from closure_notifier.config import Settings, load_settings
from closure_notifier.logging_config import configure_logging
from closure_notifier.sources import JsonInstalledPackages, JsonUpdateStatus
from closure_notifier.state import open_app_state

log = structlog.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="closure-notifier",
        description="Track installed plugins that were closed in the plugin registry",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to closure-notifier.yaml (default: search cwd, then the user config dir)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    subparsers.add_parser("refresh", help="Re-check every candidate plugin now")
    subparsers.add_parser("check", help="Re-check only if the cached status is stale")

    status_parser = subparsers.add_parser("status", help="Print the cached closed-plugin record")
    status_parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete the cached record so the next check refreshes",
    )

    return parser


async def _run(args: argparse.Namespace, settings: Settings) -> None:
    installed = JsonInstalledPackages(settings.sources.installed_path)
    updates = JsonUpdateStatus(settings.sources.update_status_path)

    async with open_app_state(settings, installed, updates) as state:
        if args.command == "refresh":
            await state.scheduler.refresh()
        elif args.command == "check":
            ran = await state.scheduler.maybe_refresh()
            if not ran:
                log.info("refresh_not_due")
        elif args.command == "status" and args.clear:
            await state.cache.delete()
            log.info("status_cleared", key=state.cache.key)
            return

        record = await state.cache.read()
        sys.stdout.write(record.model_dump_json(indent=2) + "\n")


def main() -> None:
    args = _build_parser().parse_args()
    settings = load_settings(args.config)
    configure_logging(settings.logging)
    try:
        asyncio.run(_run(args, settings))
    except KeyboardInterrupt:
        log.info("interrupted")


if __name__ == "__main__":
    main()
