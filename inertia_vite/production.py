"""
Production layout — fingerprinted assets from manifest.json
===========================================================
The manifest is read, parsed and hashed once, when the builder is created.
Any failure there raises a ConfigurationError so the process refuses to
start instead of serving broken pages.

Usage:
    config = (
        Production.new("client/dist/.vite/manifest.json", "src/main.ts")
        .with_lang("en")
        .with_title("My app")
        .with_asset_path("static")   # scripts served from /static/...
        .into_config()
    )
    config.version   # SHA-1 of the manifest, use it for asset versioning
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Union

from . import manifest
from .document import ShellFragments, build_layout
from .models import DEFAULT_LANG, DEFAULT_TITLE, InertiaConfig, ManifestEntry, Mode
from .renderer import Renderer
from .tags import asset_url, module_script


@dataclass(frozen=True)
class Production:
    main: ManifestEntry
    version: str
    lang: str = DEFAULT_LANG
    title: str = DEFAULT_TITLE
    renderer: Optional[Renderer] = None
    template: Optional[str] = None
    asset_path: Optional[str] = None

    # ── Construction ─────────────────────────────────────────────────────────

    @classmethod
    def new(cls, manifest_path: Union[str, Path], main: str) -> "Production":
        """
        Read ``manifest_path`` and resolve ``main`` in it.

        Raises
        ------
        ManifestMissingError    — the file can't be read
        MalformedManifestError  — not UTF-8 JSON, or the entry has a bad shape
        EntryMissingError       — ``main`` is not in the manifest
        """
        return cls.from_bytes(manifest.read_manifest(manifest_path), main)

    @classmethod
    def from_bytes(cls, raw: bytes, main: str) -> "Production":
        entry, version = manifest.resolve(raw, main)
        return cls(main=entry, version=version)

    @classmethod
    def from_string(cls, manifest_string: str, main: str) -> "Production":
        return cls.from_bytes(manifest_string.encode("utf-8"), main)

    # ── Chained configuration ────────────────────────────────────────────────

    def with_lang(self, lang: str) -> "Production":
        return replace(self, lang=lang)

    def with_title(self, title: str) -> "Production":
        return replace(self, title=title)

    def with_renderer(self, renderer: Renderer, template: str) -> "Production":
        return replace(self, renderer=renderer, template=template)

    def with_asset_path(self, asset_path: str) -> "Production":
        """
        URL prefix the build output is served under, e.g. ``"static"``.

        Applies to the entry script and to the stylesheet links alike:
        ``/static/main.abc123.js`` and ``/static/style.css``.
        """
        return replace(self, asset_path=asset_path)

    # ── Finalization ─────────────────────────────────────────────────────────

    @property
    def main_path(self) -> str:
        return asset_url(self.main.file, self.asset_path)

    def fragments(self) -> ShellFragments:
        return ShellFragments(
            lang=self.lang,
            title=self.title,
            vite_main=module_script(self.main_path, self.main.integrity),
            vite_css=manifest.css_links(self.main, self.asset_path),
        )

    def into_config(self) -> InertiaConfig:
        layout = build_layout(
            self.fragments(), Mode.PRODUCTION.value, self.renderer, self.template,
        )
        return InertiaConfig(version=self.version, layout=layout)
