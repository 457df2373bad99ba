"""
HTML tag helpers shared by the development and production layouts.

Every helper returns ``markupsafe.Markup``; attribute values and text are
escaped on the way in, so the result can be embedded in a document or a
Jinja template without double escaping.
"""
from __future__ import annotations

from typing import Optional

from markupsafe import Markup, escape

DEV_CLIENT_PATH = "@vite-tool-client"
REACT_REFRESH_PATH = "@react-refresh"

_REACT_PREAMBLE = """
import RefreshRuntime from "{refresh_url}"
RefreshRuntime.injectIntoGlobalHook(window)
window.$RefreshReg$ = () => {{}}
window.$RefreshSig$ = () => (type) => type
window.__vite_plugin_react_preamble_installed__ = true
"""


def dev_server_url(port: int, path: str) -> str:
    """``http://localhost:{port}/{path}``; the dev server is always local."""
    return f"http://localhost:{port}/{path.lstrip('/')}"


def asset_url(file: str, asset_path: Optional[str] = None) -> str:
    """Absolute URL path of a built asset, optionally under a prefix."""
    prefix = (asset_path or "").strip("/")
    file = file.lstrip("/")
    if prefix:
        return f"/{prefix}/{file}"
    return f"/{file}"


def module_script(src: str, integrity: Optional[str] = None) -> Markup:
    if integrity:
        return Markup('<script type="module" src="{}" integrity="{}"></script>').format(
            src, integrity
        )
    return Markup('<script type="module" src="{}"></script>').format(src)


def inline_module(code: str) -> Markup:
    """Inline ``<script type="module">``. ``code`` is trusted and not escaped."""
    return Markup('<script type="module">{}</script>').format(Markup(code))


def stylesheet_link(href: str) -> Markup:
    return Markup('<link rel="stylesheet" href="{}"/>').format(href)


def react_refresh_preamble(port: int) -> str:
    """
    JS run before any React module so @vitejs/plugin-react can hook in.

    See https://github.com/vitejs/vite/issues/1984
    """
    return _REACT_PREAMBLE.format(refresh_url=dev_server_url(port, REACT_REFRESH_PATH))


def attribute_value(value: str) -> Markup:
    """Escape ``value`` for a double-quoted attribute, writing ``"`` as ``&quot;``."""
    return Markup(str(escape(value)).replace("&#34;", "&quot;"))


def app_element(props: str) -> Markup:
    """The mount element. ``props`` is request-derived and always escaped."""
    return Markup('<div id="app" data-page="{}"></div>').format(attribute_value(props))
