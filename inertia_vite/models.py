"""
inertia-vite — Core Models & Types
==================================
Shared data structures: manifest entries, the hot-reload selector and the
(version, layout) pair handed to the web framework integration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional


# ─────────────────────────────────────────────
# Defaults
# ─────────────────────────────────────────────

DEFAULT_PORT = 5173
DEFAULT_MAIN = "src/main.ts"
DEFAULT_LANG = "en"
DEFAULT_TITLE = "Vite"

Layout = Callable[[str], str]


# ─────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────

class HotReload(str, Enum):
    """Client runtimes that need a registration preamble in development."""
    NONE = "none"
    REACT = "react"


class Mode(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


# ─────────────────────────────────────────────
# Manifest
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class ManifestEntry:
    """One resolved entry of a Vite ``manifest.json``."""
    file: str
    integrity: Optional[str] = None
    css: tuple[str, ...] = field(default_factory=tuple)


# ─────────────────────────────────────────────
# Output hand-off
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class InertiaConfig:
    """
    What the framework integration consumes.

    ``version`` is None in development; in production it is the manifest
    content hash, suitable for asset versioning. ``layout`` is called once
    per request with the serialized page object.
    """
    version: Optional[str]
    layout: Layout

    def render(self, props: str) -> str:
        return self.layout(props)
