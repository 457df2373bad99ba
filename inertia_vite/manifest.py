"""
Manifest Resolver — manifest.json → fingerprinted entry + version token
=======================================================================
Reads the manifest Vite writes next to a production build and resolves a
single entry point (e.g. ``src/main.ts``) to its output file, optional
integrity digest and CSS side-files.

The version token is the SHA-1 of the *whole* manifest buffer: any change in
the build output (shared chunks, vendor bundles) invalidates client caches,
even when the requested entry itself is unchanged.

Usage:
    entry, version = resolve(Path("dist/.vite/manifest.json").read_bytes(), "src/main.ts")
"""
from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from markupsafe import Markup

from .models import ManifestEntry
from .tags import asset_url, stylesheet_link
from .tracing import traced_manifest_resolve

logger = logging.getLogger("inertia_vite.manifest")

RawManifest = Union[bytes, str]


# ─────────────────────────────────────────────────────────────────────────────
# Exceptions
# ─────────────────────────────────────────────────────────────────────────────

class ConfigurationError(RuntimeError):
    """Raised at startup when the layout cannot be configured. Fatal."""


class ManifestError(ConfigurationError):
    """Base class for every manifest resolution failure."""


class ManifestMissingError(ManifestError):
    """The manifest file could not be read."""

    def __init__(self, path: Union[str, Path], cause: OSError):
        super().__init__(f"couldn't open manifest file {path}: {cause}")
        self.path = Path(path)


class MalformedManifestError(ManifestError):
    """The manifest is not UTF-8 JSON of the expected shape."""


class EntryMissingError(ManifestError):
    """The requested entry point is not a key of the manifest."""

    def __init__(self, entry_name: str):
        super().__init__(f"manifest missing entry for {entry_name}")
        self.entry_name = entry_name


# ─────────────────────────────────────────────────────────────────────────────
# Parsing
# ─────────────────────────────────────────────────────────────────────────────

def _as_bytes(raw: RawManifest) -> bytes:
    return raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)


def manifest_version(raw: RawManifest) -> str:
    """Hex SHA-1 over the raw manifest buffer."""
    return hashlib.sha1(_as_bytes(raw)).hexdigest()


def parse_manifest(raw: RawManifest) -> dict[str, Any]:
    """
    Decode and parse the manifest into a plain dict.

    Only the top level is checked here; individual entries are validated on
    lookup so that an odd, unrelated entry never masks an EntryMissingError.
    """
    try:
        text = raw if isinstance(raw, str) else bytes(raw).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedManifestError(f"manifest is not valid UTF-8: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedManifestError(f"manifest is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedManifestError(
            f"manifest must be a JSON object, got {type(data).__name__}"
        )
    return data


def _parse_entry(entry_name: str, raw: Any) -> ManifestEntry:
    """
    Convert one manifest value → ManifestEntry.

    ``file`` must be a non-empty string: an empty one would resolve to the
    site root (``/``) rather than a script, so it is rejected as malformed.
    """
    if not isinstance(raw, dict):
        raise MalformedManifestError(f"manifest entry {entry_name!r} must be an object")

    file = raw.get("file")
    if not isinstance(file, str) or not file:
        raise MalformedManifestError(f"manifest entry {entry_name!r} has no 'file'")

    integrity = raw.get("integrity")
    if integrity is not None and not isinstance(integrity, str):
        raise MalformedManifestError(
            f"manifest entry {entry_name!r}: 'integrity' must be a string"
        )

    css_raw = raw.get("css")
    if css_raw is None:
        css_raw = []
    if not isinstance(css_raw, list) or not all(isinstance(c, str) for c in css_raw):
        raise MalformedManifestError(
            f"manifest entry {entry_name!r}: 'css' must be a list of strings"
        )

    # Order matters for the cascade: keep it, duplicates included.
    return ManifestEntry(file=file, integrity=integrity, css=tuple(css_raw))


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def resolve(raw: RawManifest, entry_name: str) -> tuple[ManifestEntry, str]:
    """
    Resolve ``entry_name`` against a raw manifest buffer.

    Returns
    -------
    (ManifestEntry, version_token)

    Raises
    ------
    MalformedManifestError  — not UTF-8, not JSON, or the entry has a bad shape
    EntryMissingError       — the entry is not a key of the manifest
    """
    with traced_manifest_resolve(entry_name) as span:
        manifest = parse_manifest(raw)
        if entry_name not in manifest:
            raise EntryMissingError(entry_name)
        entry = _parse_entry(entry_name, manifest[entry_name])
        version = manifest_version(raw)
        span.set_attribute("manifest.version", version)

    logger.info(
        "Resolved manifest entry %s → %s (version %s)",
        entry_name, entry.file, version[:12],
    )
    return entry, version


def read_manifest(path: Union[str, Path]) -> bytes:
    """Read the raw manifest bytes; any OSError becomes ManifestMissingError."""
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ManifestMissingError(path, exc) from exc


def load(path: Union[str, Path], entry_name: str) -> tuple[ManifestEntry, str]:
    """read_manifest() + resolve()."""
    return resolve(read_manifest(path), entry_name)


def list_entries(raw: RawManifest) -> dict[str, ManifestEntry]:
    """Every well-formed entry of the manifest, in manifest order."""
    entries: dict[str, ManifestEntry] = {}
    for name, value in parse_manifest(raw).items():
        try:
            entries[name] = _parse_entry(name, value)
        except MalformedManifestError as exc:
            logger.debug("Skipping manifest entry %s: %s", name, exc)
    return entries


def css_links(entry: ManifestEntry, asset_path: Optional[str] = None) -> Markup:
    """Stylesheet <link> tags for the entry's CSS side-files, in manifest order."""
    return Markup("").join(
        stylesheet_link(asset_url(source, asset_path)) for source in entry.css
    )
