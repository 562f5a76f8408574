"""CLI interface for winget-sources."""

import argparse
import json
import logging
import sys

from . import __version__
from .config import load_config
from .exceptions import ActionFailed, ParseError, ToolNotInstalled
from .manager import SourceManager

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NOT_INSTALLED = 127


def cmd_list(manager: SourceManager, args) -> int:
    """List installed sources."""
    sources = manager.list_sources()

    if args.format == "json":
        print(json.dumps([s.to_dict() for s in sources], indent=2))
        return EXIT_OK

    if not sources:
        print("No sources found", file=sys.stderr)
        return EXIT_OK

    width = max(len(s.name) for s in sources)
    print(f"Sources ({len(sources)} total):")
    for s in sources:
        print(f"  {s.name:<{width}}  {s.url}")
    return EXIT_OK


def cmd_add(manager: SourceManager, args) -> int:
    """Add a source."""
    if not manager.add_source(args.name, args.arg, args.type):
        print(f"Error: winget could not add source '{args.name}'", file=sys.stderr)
        return EXIT_FAILED
    print(f"Added source '{args.name}'")
    return EXIT_OK


def cmd_update(manager: SourceManager, args) -> int:
    """Update all sources."""
    if not manager.update_sources():
        print("Error: winget source update failed", file=sys.stderr)
        return EXIT_FAILED
    print("Sources updated")
    return EXIT_OK


def cmd_export(manager: SourceManager, args) -> int:
    """Export sources as JSON to stdout or a file."""
    if args.output:
        if not manager.export_sources_to_file(args.output, args.name):
            print("Error: winget source export produced no output", file=sys.stderr)
            return EXIT_FAILED
        print(f"Sources exported to {args.output}", file=sys.stderr)
        return EXIT_OK

    text = manager.export_sources(args.name)
    if not text:
        print("Error: winget source export produced no output", file=sys.stderr)
        return EXIT_FAILED
    print(text)
    return EXIT_OK


def create_parser():
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="winget-sources",
        description="winget-sources: manage winget package sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show installed sources as JSON
  winget-sources list --format json

  # Add a REST source (needs administrator rights)
  winget-sources add contoso https://contoso.example/api --type Microsoft.Rest

  # Export one source to a file
  winget-sources export --name winget --output winget-source.json

Exit codes:
  0   = Success
  1   = winget reported a failure, or the action failed
  127 = winget is not installed
"""
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", metavar="FILE", help="YAML config file (executable, timeout)")
    parser.add_argument("--executable", metavar="PATH",
                        help="winget executable (default: auto-detect, or $WINGET_SOURCES_EXECUTABLE)")
    parser.add_argument("--timeout", type=float, metavar="SECONDS",
                        help="Kill winget after SECONDS (default: no timeout)")
    parser.add_argument("-v", "--verbose", action="store_true")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    lst = subparsers.add_parser("list", help="List installed sources")
    lst.add_argument("--format", choices=["text", "json"], default="text")

    add = subparsers.add_parser("add", help="Add a source (needs administrator rights)")
    add.add_argument("name", help="Name of the new source")
    add.add_argument("arg", help="Source argument, usually a URL")
    add.add_argument("--type", help="Source type (e.g. Microsoft.Rest, required for msstore)")

    subparsers.add_parser("update", help="Update all sources")

    exp = subparsers.add_parser("export", help="Export sources as JSON")
    exp.add_argument("--name", help="Export only this source")
    exp.add_argument("--output", metavar="FILE", help="Write JSON to FILE instead of stdout")

    return parser


def main(argv=None):
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILED

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.config, executable=args.executable, timeout=args.timeout)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILED

    manager = SourceManager.from_config(config)
    handlers = {
        "list":   cmd_list,
        "add":    cmd_add,
        "update": cmd_update,
        "export": cmd_export,
    }
    try:
        return handlers[args.command](manager, args)
    except ToolNotInstalled as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NOT_INSTALLED
    except (ActionFailed, ParseError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
