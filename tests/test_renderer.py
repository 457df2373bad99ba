"""Tests for inertia_vite/renderer.py — Renderer protocol and JinjaRenderer."""
from __future__ import annotations

import jinja2
import pytest
from markupsafe import Markup

from inertia_vite.renderer import JinjaRenderer, RenderError, Renderer


def test_jinja_renderer_satisfies_protocol():
    assert isinstance(JinjaRenderer.from_mapping({}), Renderer)


def test_markup_values_are_not_escaped_but_plain_strings_are():
    renderer = JinjaRenderer.from_mapping({"t": "{{ safe }}|{{ unsafe }}"})
    out = renderer.render("t", {"safe": Markup("<b>ok</b>"), "unsafe": "<i>"})
    assert out == "<b>ok</b>|&lt;i&gt;"


def test_from_directory(tmp_path):
    (tmp_path / "app.html").write_text("<main>{{ application }}</main>", encoding="utf-8")
    renderer = JinjaRenderer.from_directory(tmp_path)
    assert renderer.render("app.html", {"application": Markup("<div></div>")}) == "<main><div></div></main>"


def test_missing_template_raises_render_error():
    renderer = JinjaRenderer.from_mapping({})
    with pytest.raises(RenderError) as excinfo:
        renderer.render("nope.html", {})
    assert excinfo.value.template == "nope.html"
    assert "nope.html" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, jinja2.TemplateNotFound)


def test_strict_undefined_raises_render_error():
    env = jinja2.Environment(
        loader=jinja2.DictLoader({"t": "{{ missing }}"}),
        undefined=jinja2.StrictUndefined,
    )
    with pytest.raises(RenderError):
        JinjaRenderer(env).render("t", {})


def test_syntax_error_raises_render_error():
    renderer = JinjaRenderer.from_mapping({"t": "{% for %}"})
    with pytest.raises(RenderError):
        renderer.render("t", {})
