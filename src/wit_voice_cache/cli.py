"""
Command line access to the voice cache.

Usage:
    wit-voices load
    wit-voices update
    wit-voices list --json
    wit-voices export voices.json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .cache import VoiceCache
from .config import load_configuration
from .errors import ConfigurationError
from .decoder import encode_voices
from .store import SnapshotStore


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="wit-voices",
        description="Manage the local cache of Wit.ai TTS voices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Refresh the cached voice list from Wit
  WIT_SERVER_TOKEN=... wit-voices update

  # Show cached voices as JSON
  wit-voices list --json

  # Use a different project directory
  wit-voices --project-dir /path/to/project load
        """,
    )
    parser.add_argument(
        "--project-dir",
        type=Path,
        default=None,
        help="Project root holding ProjectSettings/ (default: WIT_PROJECT_DIR or cwd)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("load", help="Load voices from the local snapshot")
    sub.add_parser("update", help="Download voices from Wit and save the snapshot")
    list_parser = sub.add_parser("list", help="Print cached voices")
    list_parser.add_argument("--json", action="store_true", help="Print as JSON")
    export_parser = sub.add_parser("export", help="Write cached voices to a file")
    export_parser.add_argument("path", type=Path, help="Output JSON file")

    return parser.parse_args(argv)


def _print_voices(cache: VoiceCache, as_json: bool) -> None:
    voices = cache.voices
    if as_json:
        print(json.dumps([v.model_dump(mode="json") for v in voices], indent=2))
        return
    for v in voices:
        styles = ", ".join(v.styles) if v.styles else "-"
        print(f"{v.name}\t{v.locale}\t{v.gender}\t{styles}")


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command. Returns the process exit code."""
    try:
        wit_config, settings = load_configuration()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    project_dir = args.project_dir or settings.project_dir
    cache = VoiceCache(SnapshotStore.for_project(project_dir))

    if args.command == "load":
        ok = cache.load()
        if ok:
            print(f"Loaded {len(cache.voices)} voices from {cache.store.path}")
        else:
            print(f"No usable voice snapshot at {cache.store.path}", file=sys.stderr)
        return 0 if ok else 1

    if args.command == "update":
        ok = asyncio.run(cache.update(wit_config))
        if ok:
            print(f"Updated {len(cache.voices)} voices, saved to {cache.store.path}")
        else:
            print("Voice update failed, see log for details", file=sys.stderr)
        return 0 if ok else 1

    if args.command == "list":
        if not cache.voices:
            print(f"No cached voices at {cache.store.path}", file=sys.stderr)
            return 1
        _print_voices(cache, args.json)
        return 0

    if args.command == "export":
        voices = cache.voices
        if not voices:
            print(f"No cached voices at {cache.store.path}", file=sys.stderr)
            return 1
        args.path.write_text(encode_voices(voices, indent=2), encoding="utf-8")
        print(f"Exported {len(voices)} voices to {args.path}")
        return 0

    return 1


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the ``wit-voices`` command."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
