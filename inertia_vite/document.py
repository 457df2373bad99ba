"""
Document Assembler — head fragments + props → HTML shell
========================================================
Both layouts pre-render their head fragments once, at ``into_config()``
time, into a ShellFragments value. build_layout() wraps that value in the
per-request closure: either a full HTML5 document or, when a Renderer is
configured, a template rendered with the fragments as context.

Head order is fixed: hot-reload preamble → dev client → entry script →
stylesheets. A fragment that does not apply to a mode is empty and skipped.

Render failures are NOT propagated. The error is logged and the call
returns "" for that request only: a broken template should not take the
whole page handler down with it. This is intentional.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from markupsafe import Markup

from .models import Layout
from .renderer import Renderer
from .tags import app_element
from .tracing import traced_layout_render

logger = logging.getLogger("inertia_vite.document")

_DOCUMENT = Markup(
    '<!DOCTYPE html>'
    '<html lang="{lang}">'
    '<head>'
    '<title>{title}</title>'
    '<meta charset="utf-8">'
    '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
    '{head}'
    '</head>'
    '<body>{application}</body>'
    '</html>'
)


@dataclass(frozen=True)
class ShellFragments:
    """Pre-rendered, request-independent parts of the shell."""
    lang: str
    title: str
    vite_main: Markup
    vite_client: Markup = Markup("")
    vite_react_refresh: Markup = Markup("")
    vite_css: Markup = Markup("")

    def head(self) -> Markup:
        return Markup("").join(
            fragment
            for fragment in (self.vite_react_refresh, self.vite_client, self.vite_main, self.vite_css)
            if fragment
        )


def assemble_document(fragments: ShellFragments, props: str) -> str:
    """Complete HTML document with ``props`` escaped into the mount element."""
    return str(_DOCUMENT.format(
        lang=fragments.lang,
        title=fragments.title,
        head=fragments.head(),
        application=app_element(props),
    ))


def template_context(fragments: ShellFragments, props: str) -> dict[str, Markup]:
    """Name → fragment mapping handed to an external Renderer."""
    return {
        "vite_client": fragments.vite_client,
        "vite_main": fragments.vite_main,
        "vite_react_refresh": fragments.vite_react_refresh,
        "vite_css": fragments.vite_css,
        "application": app_element(props),
        "lang": Markup.escape(fragments.lang),
        "title": Markup.escape(fragments.title),
    }


def render_or_empty(
    renderer: Renderer, template: str, context: dict[str, Markup],
) -> tuple[str, bool]:
    """
    Run the renderer; on any failure log it and return "".

    Returns ``(output, failed)``. A template that renders to "" on purpose
    is not a failure.
    """
    try:
        return renderer.render(template, context), False
    except Exception as exc:  # noqa: BLE001
        logger.error("Failed to render template %s: %s", template, exc)
        return "", True


def build_layout(
    fragments: ShellFragments,
    mode: str,
    renderer: Optional[Renderer] = None,
    template: Optional[str] = None,
) -> Layout:
    """
    Return the props → document closure.

    The closure only reads ``fragments``, ``renderer`` and ``template``;
    it is safe to call from many threads at once.
    """
    if renderer is not None and template is not None:
        def layout(props: str) -> str:
            with traced_layout_render(mode, templated=True) as span:
                output, failed = render_or_empty(
                    renderer, template, template_context(fragments, props),
                )
                span.set_attribute("layout.degraded", failed)
            return output
    else:
        def layout(props: str) -> str:
            with traced_layout_render(mode, templated=False):
                return assemble_document(fragments, props)

    logger.debug("Layout finalized (mode=%s, renderer=%s)", mode, renderer is not None)
    return layout
