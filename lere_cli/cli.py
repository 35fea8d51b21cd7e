"""
Lere CLI - Main entry point.

Offline administration of a plugin configuration file: validate zones and
edit the whitelist without a running server.
"""

import argparse
import sys
from typing import List, Optional
from uuid import UUID

from lere_access import AccessRegistry, parse_identity
from lere_logging import create_logger
from lere_multiplayer import PluginSettings
from lere_store import EntryStatus, YamlConfigStore
from lere_zone import SimpleWorld, StaticWorldLookup, ZoneRegistry


def parse_world(spec: str) -> SimpleWorld:
    """
    Parse a ``NAME=MAX_HEIGHT`` (or bare ``NAME``) world declaration.

    Raises:
        argparse.ArgumentTypeError: If the height is not an integer
    """
    name, sep, height = spec.partition("=")
    if not name:
        raise argparse.ArgumentTypeError(f"Invalid world declaration: {spec!r}")
    if not sep:
        return SimpleWorld(name)
    try:
        return SimpleWorld(name, int(height))
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"Invalid world declaration {spec!r}: {e}"
        )


def identity_arg(raw: str) -> UUID:
    try:
        return parse_identity(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid UUID format: {raw}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lere-cli",
        description="Lere CLI - Inspect zones and manage the whitelist in a config file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate zones (declare which worlds exist on the server)
  lere-cli --config config.yml --world world=320 --world arena=256 zones

  # Manage the whitelist
  lere-cli --config config.yml access-add 0f8fad5b-d9cb-469f-a165-70867728950e
  lere-cli --config config.yml access-remove 0f8fad5b-d9cb-469f-a165-70867728950e
  lere-cli --config config.yml access-list
  lere-cli --config config.yml access-check 0f8fad5b-d9cb-469f-a165-70867728950e
"""
    )

    parser.add_argument(
        "--config",
        default="config.yml",
        help="Plugin configuration file (default: config.yml)"
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="Optional add-on settings YAML (hub fallback, log level, ...)"
    )
    parser.add_argument(
        "--world",
        dest="worlds",
        action="append",
        type=parse_world,
        default=[],
        metavar="NAME[=MAX_HEIGHT]",
        help="World loaded on the server (repeatable; default: the hub world, height 256)"
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('zones', help='Load and validate zones, print the report')
    subparsers.add_parser('access-list', help='List whitelisted UUIDs')

    add = subparsers.add_parser('access-add', help='Whitelist a UUID')
    add.add_argument('identity', type=identity_arg, help='Player UUID')

    remove = subparsers.add_parser('access-remove', help='Remove a UUID')
    remove.add_argument('identity', type=identity_arg, help='Player UUID')

    check = subparsers.add_parser('access-check', help='Would this UUID be allowed to join?')
    check.add_argument('identity', type=identity_arg, help='Player UUID')

    return parser


def run_zones(store: YamlConfigStore, settings: PluginSettings, worlds: List[SimpleWorld]) -> int:
    lookup = StaticWorldLookup(worlds or [SimpleWorld(settings.hub.world)])
    registry = ZoneRegistry(
        store,
        lookup,
        hub=settings.hub,
        logger=create_logger("zones", level=settings.level),
    )
    report = registry.load_from_config()

    for entry in report.entries:
        line = f"{entry.status.value:>8}  {entry.key}"
        if entry.reason:
            line += f"  ({entry.reason})"
        print(line)
    if report.bootstrapped:
        print(f"Default hub '{settings.hub.zone_id}' written to {store.path}")

    ids = registry.list_zone_ids()
    print(f"Zones: {', '.join(ids) if ids else '(none)'}")
    return 0 if ids else 1


def run_access(args: argparse.Namespace, store: YamlConfigStore, settings: PluginSettings) -> int:
    access = AccessRegistry(store, logger=create_logger("access", level=settings.level))
    access.load(force=True)

    if args.command == 'access-list':
        entries = sorted(access.list(), key=str)
        state = "enabled" if access.enabled else "disabled"
        print(f"Whitelist ({state}) entries: {len(entries)}")
        for identity in entries:
            print(f" - {identity}")

    elif args.command == 'access-add':
        if access.add(args.identity):
            print(f"Added to whitelist: {args.identity}")
        else:
            print(f"UUID already present: {args.identity}")

    elif args.command == 'access-remove':
        if access.remove(args.identity):
            print(f"Removed from whitelist: {args.identity}")
        else:
            print(f"UUID not found: {args.identity}")

    elif args.command == 'access-check':
        allowed = access.is_allowed(args.identity)
        print(f"{args.identity}: {'allowed' if allowed else 'denied'}")
        return 0 if allowed else 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = (
            PluginSettings.from_yaml(args.settings) if args.settings
            else PluginSettings()
        )
        store = YamlConfigStore(
            args.config, logger=create_logger("config", level=settings.level)
        )

        if args.command == 'zones':
            return run_zones(store, settings, args.worlds)
        return run_access(args, store, settings)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
