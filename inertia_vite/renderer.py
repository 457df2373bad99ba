"""
Renderer — pluggable template engine for custom layouts
=======================================================
The layouts never depend on a concrete template engine. Anything with a
``render(template, context) -> str`` method can be plugged in; JinjaRenderer
is the adapter shipped for Jinja2.

Context values are ``markupsafe.Markup`` fragments, so an autoescaping Jinja
environment inserts them verbatim:

    <head>{{ vite_react_refresh }}{{ vite_client }}{{ vite_main }}{{ vite_css }}</head>
    <body>{{ application }}</body>
"""
from __future__ import annotations

from pathlib import Path
from typing import Mapping, Protocol, Union, runtime_checkable

import jinja2


class RenderError(RuntimeError):
    """Raised by a renderer when a template is missing or fails to render."""

    def __init__(self, template: str, reason: str):
        super().__init__(f"Failed to render template {template!r}: {reason}")
        self.template = template


@runtime_checkable
class Renderer(Protocol):
    def render(self, template: str, context: Mapping[str, str]) -> str:
        ...


class JinjaRenderer:
    """
    Adapts a ``jinja2.Environment`` to the Renderer protocol.

    Jinja errors (missing template, syntax error, undefined variable under
    StrictUndefined, ...) are re-raised as RenderError.
    """

    def __init__(self, environment: jinja2.Environment):
        self.environment = environment

    @classmethod
    def from_directory(cls, directory: Union[str, Path]) -> "JinjaRenderer":
        """Autoescaping environment loading templates from ``directory``."""
        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(directory)),
            autoescape=jinja2.select_autoescape(default=True, default_for_string=True),
        )
        return cls(env)

    @classmethod
    def from_mapping(cls, templates: Mapping[str, str]) -> "JinjaRenderer":
        """Environment over in-memory template sources (name → source)."""
        env = jinja2.Environment(
            loader=jinja2.DictLoader(dict(templates)),
            autoescape=jinja2.select_autoescape(default=True, default_for_string=True),
        )
        return cls(env)

    def render(self, template: str, context: Mapping[str, str]) -> str:
        try:
            return self.environment.get_template(template).render(**context)
        except jinja2.TemplateError as exc:
            raise RenderError(template, str(exc) or type(exc).__name__) from exc
