"""
inertia-vite
============
HTML shell generation for Inertia-style single-page apps built with Vite.

Given a serialized page object, produce the document the client app mounts
into: dev-server script tags in development, fingerprinted assets from
``manifest.json`` in production.

Basic usage:
    from inertia_vite import Development, Production

    if is_production:
        config = (
            Production.new("client/dist/.vite/manifest.json", "src/main.ts")
            .with_lang("en")
            .with_title("My app")
            .into_config()
        )
    else:
        config = (
            Development()
            .with_port(5173)
            .with_main("src/main.ts")
            .with_react()
            .into_config()
        )

    html = config.layout(page_json)   # once per request
    config.version                    # None in development
"""

from .models import HotReload, InertiaConfig, ManifestEntry, Mode
from .manifest import (
    ConfigurationError, ManifestError, ManifestMissingError,
    MalformedManifestError, EntryMissingError, resolve,
)
from .renderer import JinjaRenderer, RenderError, Renderer
from .development import Development
from .production import Production
from .settings import ViteSettings, build_config, load_settings_file, settings_from_env

__all__ = [
    # ── Layouts ─────────────────────────────────────────────────────────────
    "Development", "Production", "InertiaConfig", "HotReload", "Mode",
    # ── Manifest ────────────────────────────────────────────────────────────
    "ManifestEntry", "resolve",
    "ConfigurationError", "ManifestError", "ManifestMissingError",
    "MalformedManifestError", "EntryMissingError",
    # ── Templates ───────────────────────────────────────────────────────────
    "Renderer", "JinjaRenderer", "RenderError",
    # ── Settings ────────────────────────────────────────────────────────────
    "ViteSettings", "build_config", "load_settings_file", "settings_from_env",
]
