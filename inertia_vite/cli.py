#!/usr/bin/env python3
"""
CLI Entry Point — inspect a build and preview the HTML shell
============================================================
Usage:
    inertia-vite render --config vite.yaml --props '{"component": "Home"}'
    inertia-vite render                      # settings from APP_ENV / VITE_* vars
    inertia-vite version --manifest dist/.vite/manifest.json
    inertia-vite entries --manifest dist/.vite/manifest.json

Values from a .env file in the working directory are loaded first.
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from . import manifest
from .manifest import ConfigurationError
from .settings import build_config, load_settings_file, settings_from_env

DEFAULT_PROPS = json.dumps({"component": "Home", "props": {}, "url": "/", "version": None})


def cmd_render(args) -> None:
    """Handle the 'render' subcommand: print the shell for the given props."""
    settings = load_settings_file(args.config) if args.config else settings_from_env()
    config = build_config(settings)
    print(config.render(args.props))


def cmd_version(args) -> None:
    """Handle the 'version' subcommand: print the manifest version token."""
    raw = manifest.read_manifest(args.manifest)
    manifest.parse_manifest(raw)
    print(manifest.manifest_version(raw))


def cmd_entries(args) -> None:
    """Handle the 'entries' subcommand: list manifest entries and their files."""
    entries = manifest.list_entries(manifest.read_manifest(args.manifest))
    width = max((len(name) for name in entries), default=0)
    for name, entry in entries.items():
        suffix = f"  (+{len(entry.css)} css)" if entry.css else ""
        print(f"{name.ljust(width)}  {entry.file}{suffix}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inertia-vite",
        description="Vite asset resolution and HTML shell generation for Inertia apps",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    rp = subparsers.add_parser("render", help="Print the HTML shell")
    rp.add_argument("--config", default=None, help="Settings file (.json/.yaml/.yml)")
    rp.add_argument("--props", default=DEFAULT_PROPS, help="Serialized page object")
    rp.set_defaults(func=cmd_render)

    vp = subparsers.add_parser("version", help="Print the manifest version token")
    vp.add_argument("--manifest", required=True, help="Path to manifest.json")
    vp.set_defaults(func=cmd_version)

    ep = subparsers.add_parser("entries", help="List manifest entries")
    ep.add_argument("--manifest", required=True, help="Path to manifest.json")
    ep.set_defaults(func=cmd_entries)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except (ConfigurationError, FileNotFoundError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
