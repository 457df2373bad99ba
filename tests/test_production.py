"""
Tests for inertia_vite/production.py — Production builder and production layout.
Covers: manifest loading, fail-fast construction, asset paths, integrity,
        CSS side-files, templated rendering, concurrent invocation.
"""
from __future__ import annotations

import hashlib
import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from inertia_vite.manifest import EntryMissingError, MalformedManifestError, ManifestMissingError
from inertia_vite.production import Production
from inertia_vite.renderer import JinjaRenderer

MANIFEST = '{"main.js": {"file": "main.hash-id-here.js", "css": ["style.css"]}}'
MANIFEST_WITH_INTEGRITY = (
    '{"main.js": {"file": "main.hash-id-here.js", '
    '"integrity": "sha000-shaHashHere1234", "css": ["style.css"]}}'
)
PROPS = '{"someprops": "somevalues"}'


# ─────────────────────────────────────────────────────────────────────────────
# Construction
# ─────────────────────────────────────────────────────────────────────────────

def test_production_new_entry_missing():
    with pytest.raises(EntryMissingError):
        Production.from_string('{"main.js": {}}', "nonexistent.js")


def test_production_from_string():
    production = Production.from_string(MANIFEST, "main.js")
    assert production.main.css == ("style.css",)
    assert production.main.file == "main.hash-id-here.js"
    assert production.main.integrity is None
    assert production.title == "Vite"
    assert production.lang == "en"
    assert production.asset_path is None
    assert production.version == hashlib.sha1(MANIFEST.encode()).hexdigest()


def test_production_new_reads_file(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text(MANIFEST, encoding="utf-8")
    production = Production.new(path, "main.js")
    assert production.main.file == "main.hash-id-here.js"
    assert production.version == hashlib.sha1(path.read_bytes()).hexdigest()


def test_production_new_missing_file(tmp_path):
    with pytest.raises(ManifestMissingError):
        Production.new(tmp_path / "missing.json", "main.js")


def test_production_new_malformed(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(MalformedManifestError):
        Production.new(str(path), "main.js")


def test_production_builder_methods():
    production = (
        Production.from_string(MANIFEST, "main.js")
        .with_lang("fr")
        .with_title("Untitled Inertia App")
        .with_asset_path("static")
    )
    assert production.lang == "fr"
    assert production.title == "Untitled Inertia App"
    assert production.asset_path == "static"


# ─────────────────────────────────────────────────────────────────────────────
# Built-in shell
# ─────────────────────────────────────────────────────────────────────────────

def test_production_into_config():
    production = Production.from_string(MANIFEST, "main.js").with_lang("jv").with_title("Untitled Inertia App")
    config = production.into_config()
    assert config.version == production.version

    rendered = config.layout(PROPS)
    assert '<script type="module" src="/main.hash-id-here.js"></script>' in rendered
    assert '<link rel="stylesheet" href="/style.css"/>' in rendered
    assert '<html lang="jv">' in rendered
    assert "<title>Untitled Inertia App</title>" in rendered
    assert "{&quot;someprops&quot;: &quot;somevalues&quot;}" in rendered
    assert "@vite-tool-client" not in rendered
    assert "RefreshRuntime" not in rendered


def test_production_into_config_with_integrity():
    config = Production.from_string(MANIFEST_WITH_INTEGRITY, "main.js").into_config()
    rendered = config.layout(PROPS)
    assert (
        '<script type="module" src="/main.hash-id-here.js" '
        'integrity="sha000-shaHashHere1234"></script>'
    ) in rendered


def test_integrity_attribute_absent_without_digest():
    rendered = Production.from_string(MANIFEST, "main.js").into_config().layout("{}")
    assert "integrity" not in rendered


def test_integrity_example_value():
    raw = '{"src/main.ts": {"file": "main.js", "integrity": "sha000-ABC"}}'
    rendered = Production.from_string(raw, "src/main.ts").into_config().layout("{}")
    assert 'integrity="sha000-ABC"' in rendered


def test_asset_path_prefix():
    raw = '{"src/main.ts": {"file": "main.abc123.js", "css": ["main.css"]}}'
    rendered = Production.from_string(raw, "src/main.ts").with_asset_path("static").into_config().layout("{}")
    assert 'src="/static/main.abc123.js"' in rendered
    assert 'href="/static/main.css"' in rendered


def test_script_before_stylesheets():
    raw = '{"m": {"file": "m.js", "css": ["b.css", "a.css"]}}'
    doc = Production.from_string(raw, "m").into_config().layout("{}")
    assert doc.index("/m.js") < doc.index("/b.css") < doc.index("/a.css")


def test_props_are_escaped():
    doc = Production.from_string(MANIFEST, "main.js").into_config().layout('{"a": "<script>"}')
    assert "&lt;script&gt;" in doc
    assert '"<script>"' not in doc


# ─────────────────────────────────────────────────────────────────────────────
# External renderer
# ─────────────────────────────────────────────────────────────────────────────

def test_templated_production_layout():
    renderer = JinjaRenderer.from_mapping({
        "layout.html": (
            "[{{ vite_client }}][{{ vite_react_refresh }}]"
            "{{ vite_main }}{{ vite_css }}{{ application }}"
        ),
    })
    config = (
        Production.from_string(MANIFEST_WITH_INTEGRITY, "main.js")
        .with_asset_path("assets")
        .with_renderer(renderer, "layout.html")
        .into_config()
    )
    assert config.layout("{}") == (
        "[][]"
        '<script type="module" src="/assets/main.hash-id-here.js" '
        'integrity="sha000-shaHashHere1234"></script>'
        '<link rel="stylesheet" href="/assets/style.css"/>'
        '<div id="app" data-page="{}"></div>'
    )


def test_templated_production_degrades_on_error():
    renderer = JinjaRenderer.from_mapping({"broken.html": "{% if %}"})
    config = Production.from_string(MANIFEST, "main.js").with_renderer(renderer, "broken.html").into_config()
    assert config.layout("{}") == ""
    assert config.version is not None


# ─────────────────────────────────────────────────────────────────────────────
# Concurrency
# ─────────────────────────────────────────────────────────────────────────────

def test_layout_is_safe_for_concurrent_calls():
    config = Production.from_string(MANIFEST, "main.js").into_config()
    props = [json.dumps({"n": i}) for i in range(200)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        docs = list(pool.map(config.layout, props))

    for i, doc in enumerate(docs):
        assert f'data-page="{{&quot;n&quot;: {i}}}"' in doc
