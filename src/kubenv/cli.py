#!/usr/bin/env python3
"""kubenv command-line interface.

Usage:
    kubenv [--dir DIR] [--kube-dir DIR] [--config FILE] [-v] COMMAND

Environment variables:
    KUBENV_CONFIG       Settings file (default: ~/.config/kubenv/config.yaml)
    KUBENV_DIR          Profile directory (default: ~/.kube/kubenv)
    KUBE_DIR            Directory of the active config (default: ~/.kube)
    KUBENV_LOG_LEVEL    Console log level (default: WARNING)
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .config.settings import Settings, load_settings
from .config_store import ConfigStore
from .errors import KubenvError, ReadError, WriteError
from .utils.audit_log import setup_audit_logging
from .utils.logging_config import setup_logging
from .utils.streams import copy_stream

logger = logging.getLogger(__name__)


def print_error(message: str) -> None:
    print(f"[ERROR] {message}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubenv",
        description="CLI application for managing kubernetes environments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Store the current kubeconfig as "dev"
    kubenv add --name dev --file ~/.kube/config

    # Switch to another environment
    kubenv apply prod

    # Show stored environments (* marks the active one)
    kubenv list
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-d", "--dir",
        type=Path,
        help="Profile directory (default: ~/.kube/kubenv)",
    )
    parser.add_argument(
        "-k", "--kube-dir",
        type=Path,
        help="Directory holding the active config (default: ~/.kube)",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Settings file (default: ~/.config/kubenv/config.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    sub.add_parser("list", aliases=["ls"], help="List stored configs")
    sub.add_parser("current", help="Print the name of the active config")

    apply = sub.add_parser("apply", help="Make a stored config the active one")
    apply.add_argument("name")

    add = sub.add_parser("add", aliases=["import"], help="Store a new config")
    add.add_argument("-n", "--name", help="Config name (default: digest prefix)")
    add.add_argument("-f", "--file", type=Path, help="Read from file instead of stdin")

    remove = sub.add_parser("remove", aliases=["rm"], help="Delete a stored config")
    remove.add_argument("name")

    show = sub.add_parser("show", help="Print a stored config")
    show.add_argument("name")

    export = sub.add_parser("export", help="Write a stored config to a file")
    export.add_argument("name")
    export.add_argument("-f", "--file", type=Path, help="Destination (default: stdout)")

    return parser


def cmd_list(store: ConfigStore, args: argparse.Namespace) -> None:
    current = store.current_config()
    for profile in store.list_profiles():
        marker = "*" if current is not None and current.digest == profile.digest else " "
        print(f"{marker} {profile.name}")


def cmd_current(store: ConfigStore, args: argparse.Namespace) -> None:
    current = store.current_config()
    if current is not None:
        print(current.name)


def cmd_apply(store: ConfigStore, args: argparse.Namespace) -> None:
    store.apply(args.name)
    print(f"Apply config '{args.name}' successfully")


def cmd_add(store: ConfigStore, args: argparse.Namespace) -> None:
    if args.file is not None:
        try:
            reader = open(args.file, "rb")
        except OSError as e:
            raise ReadError(f"Cannot open file '{args.file}': {e}") from e
        with reader:
            profile = store.import_stream(reader, args.name)
    else:
        profile = store.import_stream(sys.stdin.buffer, args.name)

    if args.name:
        print(f"Import config '{profile.name}' successfully")
    else:
        print(f"Import config successfully as '{profile.name}'")


def cmd_remove(store: ConfigStore, args: argparse.Namespace) -> None:
    store.remove(args.name)
    print(f"Remove config '{args.name}' successfully")


def cmd_show(store: ConfigStore, args: argparse.Namespace) -> None:
    store.export_to(args.name, sys.stdout.buffer)


def cmd_export(store: ConfigStore, args: argparse.Namespace) -> None:
    if args.file is None:
        store.export_to(args.name, sys.stdout.buffer)
        return

    with store.open_content(args.name) as reader:
        try:
            writer = open(args.file, "wb")
        except OSError as e:
            raise WriteError(f"Cannot open file '{args.file}': {e}") from e
        with writer:
            copy_stream(reader, writer)
    print(f"Config '{args.name}' exported successfully")


COMMANDS = {
    "list": cmd_list,
    "ls": cmd_list,
    "current": cmd_current,
    "apply": cmd_apply,
    "add": cmd_add,
    "import": cmd_add,
    "remove": cmd_remove,
    "rm": cmd_remove,
    "show": cmd_show,
    "export": cmd_export,
}


def make_store(settings: Settings) -> ConfigStore:
    return ConfigStore(
        profile_dir=settings.dir,
        kube_dir=settings.kube_dir,
        index_active=settings.index_active,
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the kubenv CLI."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config).with_overrides(
            dir=args.dir,
            kube_dir=args.kube_dir,
            log_level="DEBUG" if args.verbose else None,
        )
        setup_logging(level=settings.log_level, log_file=settings.log_file)
        if settings.audit_log is not None:
            setup_audit_logging(settings.audit_log)

        store = make_store(settings)
        store.sync()
        COMMANDS[args.command](store, args)
    except KubenvError as e:
        logger.debug("Command failed", exc_info=True)
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
