"""
Settings Loader — pick and build the layout from a file or the environment
==========================================================================
The layouts themselves never read the environment. This module is the thin
layer an application uses to decide between Development and Production.

File schema (.json, .yaml or .yml; every field optional):

    environment: production          # development (default) | production
    port: 5173                       # development only
    main: src/main.ts
    lang: en
    title: My app
    react: true                      # development only
    manifest_path: dist/.vite/manifest.json   # required in production
    asset_path: static               # production only
    template_dir: templates          # use a Jinja template for the shell
    template: app.html

Environment variables (see settings_from_env):
    APP_ENV, VITE_PORT, VITE_MAIN, VITE_LANG, VITE_TITLE, VITE_REACT,
    VITE_MANIFEST, VITE_ASSET_PATH, VITE_TEMPLATE_DIR, VITE_TEMPLATE
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from .development import Development
from .models import DEFAULT_LANG, DEFAULT_MAIN, DEFAULT_PORT, DEFAULT_TITLE, InertiaConfig, Mode
from .production import Production
from .renderer import JinjaRenderer

logger = logging.getLogger("inertia_vite.settings")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}

_ENV_VARS = {
    "APP_ENV": "environment",
    "VITE_PORT": "port",
    "VITE_MAIN": "main",
    "VITE_LANG": "lang",
    "VITE_TITLE": "title",
    "VITE_REACT": "react",
    "VITE_MANIFEST": "manifest_path",
    "VITE_ASSET_PATH": "asset_path",
    "VITE_TEMPLATE_DIR": "template_dir",
    "VITE_TEMPLATE": "template",
}


# ─────────────────────────────────────────────────────────────────────────────
# Public result type
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ViteSettings:
    """Everything needed to build an InertiaConfig."""
    environment: Mode = Mode.DEVELOPMENT
    port: int = DEFAULT_PORT
    main: str = DEFAULT_MAIN
    lang: str = DEFAULT_LANG
    title: str = DEFAULT_TITLE
    react: bool = False
    manifest_path: Optional[str] = None
    asset_path: Optional[str] = None
    template_dir: Optional[str] = None
    template: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return self.environment is Mode.PRODUCTION


# ─────────────────────────────────────────────────────────────────────────────
# Loaders
# ─────────────────────────────────────────────────────────────────────────────

def load_settings_dict(raw: Mapping[str, Any], source: str = "<dict>") -> ViteSettings:
    """
    Validate a plain mapping and return ViteSettings.

    Raises
    ------
    ValueError — unknown keys, or values of the wrong type
    """
    known = {f.name for f in fields(ViteSettings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"'{source}': unknown settings {unknown}. Valid keys: {sorted(known)}")

    settings = ViteSettings()

    if "environment" in raw:
        environment = raw["environment"]
        if isinstance(environment, str) and not isinstance(environment, Mode):
            environment = environment.strip().lower()
        try:
            settings.environment = Mode(environment)
        except ValueError:
            valid = [m.value for m in Mode]
            raise ValueError(
                f"'{source}': unknown environment {raw['environment']!r}. Valid values: {valid}"
            )

    if "port" in raw:
        try:
            settings.port = int(raw["port"])
        except (TypeError, ValueError):
            raise ValueError(f"'{source}': 'port' must be an integer, got {raw['port']!r}")

    if "react" in raw:
        settings.react = _parse_bool(raw["react"], "react", source)

    for key in ("main", "lang", "title"):
        if raw.get(key) is not None:
            setattr(settings, key, str(raw[key]))

    for key in ("manifest_path", "asset_path", "template_dir", "template"):
        value = raw.get(key)
        if value is not None and str(value).strip():
            setattr(settings, key, str(value).strip())

    if settings.is_production and not settings.manifest_path:
        raise ValueError(f"'{source}': 'manifest_path' is required in production")
    if (settings.template_dir is None) != (settings.template is None):
        raise ValueError(f"'{source}': 'template_dir' and 'template' must be set together")

    return settings


def load_settings_file(path: Union[str, Path]) -> ViteSettings:
    """
    Load settings from a .json, .yaml or .yml file.

    Relative ``manifest_path`` and ``template_dir`` values are resolved
    against the file's directory.

    Raises
    ------
    FileNotFoundError — file doesn't exist
    ValueError        — unsupported extension, or invalid content
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Settings file not found: {p}")

    suffix = p.suffix.lower()
    with open(p, encoding="utf-8") as fh:
        if suffix == ".json":
            data = json.load(fh)
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(fh)
        else:
            raise ValueError(
                f"Unsupported settings file extension '{suffix}'. "
                "Supported: .json, .yaml, .yml"
            )

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file '{p.name}' must contain a YAML/JSON object at the top level.")

    settings = load_settings_dict(data, source=str(p))
    for key in ("manifest_path", "template_dir"):
        value = getattr(settings, key)
        if value and not Path(value).is_absolute():
            setattr(settings, key, str(p.parent / value))
    return settings


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> ViteSettings:
    """Build settings from ``environ`` (default: os.environ)."""
    environ = os.environ if environ is None else environ
    raw = {key: environ[var] for var, key in _ENV_VARS.items() if var in environ}
    return load_settings_dict(raw, source="environment")


def build_config(settings: ViteSettings) -> InertiaConfig:
    """
    Build the InertiaConfig described by ``settings``.

    Production manifest errors propagate: a misconfigured build must stop
    the process at startup.
    """
    renderer = JinjaRenderer.from_directory(settings.template_dir) if settings.template_dir else None

    if settings.is_production:
        layout = Production.new(settings.manifest_path, settings.main)
        if settings.asset_path:
            layout = layout.with_asset_path(settings.asset_path)
    else:
        layout = Development(port=settings.port, main=settings.main)
        if settings.react:
            layout = layout.with_react()

    layout = layout.with_lang(settings.lang).with_title(settings.title)
    if renderer is not None:
        layout = layout.with_renderer(renderer, settings.template)

    logger.info("Building %s layout for %s", settings.environment.value, settings.main)
    return layout.into_config()


# ─────────────────────────────────────────────────────────────────────────────
# Internal helpers
# ─────────────────────────────────────────────────────────────────────────────

def _parse_bool(value: Any, key: str, source: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"'{source}': '{key}' must be a boolean, got {value!r}")
