"""
Development layout — assets served by the Vite dev server
=========================================================
Usage:
    config = (
        Development()
        .with_port(5173)
        .with_main("src/main.ts")
        .with_lang("en")
        .with_title("My app")
        .with_react()          # only when using @vitejs/plugin-react
        .into_config()
    )

Development assets are never versioned: ``config.version`` is None.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from markupsafe import Markup

from .document import ShellFragments, build_layout
from .models import (
    DEFAULT_LANG,
    DEFAULT_MAIN,
    DEFAULT_PORT,
    DEFAULT_TITLE,
    HotReload,
    InertiaConfig,
    Mode,
)
from .renderer import Renderer
from .tags import DEV_CLIENT_PATH, dev_server_url, inline_module, module_script, react_refresh_preamble


@dataclass(frozen=True)
class Development:
    port: int = DEFAULT_PORT
    main: str = DEFAULT_MAIN
    lang: str = DEFAULT_LANG
    title: str = DEFAULT_TITLE
    hot_reload: HotReload = HotReload.NONE
    renderer: Optional[Renderer] = None
    template: Optional[str] = None

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be in 1..65535, got {self.port}")
        # Accept the plain string too ("react").
        object.__setattr__(self, "hot_reload", HotReload(self.hot_reload))

    # ── Chained configuration ────────────────────────────────────────────────

    def with_port(self, port: int) -> "Development":
        return replace(self, port=port)

    def with_main(self, main: str) -> "Development":
        return replace(self, main=main)

    def with_lang(self, lang: str) -> "Development":
        return replace(self, lang=lang)

    def with_title(self, title: str) -> "Development":
        return replace(self, title=title)

    def with_hot_reload(self, framework: HotReload) -> "Development":
        return replace(self, hot_reload=framework)

    def with_react(self) -> "Development":
        """
        Set up Vite for React usage.

        Adds the react-refresh preamble to the head, ahead of every other
        module script.
        """
        return self.with_hot_reload(HotReload.REACT)

    def with_renderer(self, renderer: Renderer, template: str) -> "Development":
        """Render through ``renderer`` using ``template`` instead of the built-in shell."""
        return replace(self, renderer=renderer, template=template)

    # ── Finalization ─────────────────────────────────────────────────────────

    def fragments(self) -> ShellFragments:
        if self.hot_reload is HotReload.REACT:
            preamble = inline_module(react_refresh_preamble(self.port))
        else:
            preamble = Markup("")
        return ShellFragments(
            lang=self.lang,
            title=self.title,
            vite_main=module_script(dev_server_url(self.port, self.main)),
            vite_client=module_script(dev_server_url(self.port, DEV_CLIENT_PATH)),
            vite_react_refresh=preamble,
        )

    def into_config(self) -> InertiaConfig:
        layout = build_layout(
            self.fragments(), Mode.DEVELOPMENT.value, self.renderer, self.template,
        )
        return InertiaConfig(version=None, layout=layout)
