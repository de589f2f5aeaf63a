# SPDX-License-Identifier: MIT
"""Tests for :mod:`slugmint.metadata`."""

import base64
import json

from slugmint.metadata import DefaultMetadataRenderer


def test_render_is_deterministic() -> None:
    renderer = DefaultMetadataRenderer()
    assert renderer.render("abc", True, 3) == renderer.render("abc", True, 3)
    assert renderer.render("abc", True, 3) != renderer.render("abc", False, 3)


def test_data_uri_decodes_to_document() -> None:
    document = DefaultMetadataRenderer().render("7xKq2Lmn", False, 8)
    prefix = "data:application/json;base64,"
    uri = document.to_data_uri()
    assert uri.startswith(prefix)
    payload = json.loads(base64.b64decode(uri[len(prefix) :]))
    assert payload["name"] == "7xKq2Lmn"
    assert payload["attributes"] == [
        {"trait_type": "Type", "value": "Generated"},
        {"trait_type": "Length", "value": 8},
    ]


def test_svg_escapes_slug_text() -> None:
    document = DefaultMetadataRenderer(domain="https://sho.rt/").render(
        "<b>", True, 3
    )
    svg = base64.b64decode(document.image.split(",", 1)[1]).decode("utf-8")
    assert "https://sho.rt/&lt;b&gt;" in svg
    assert "<b>" not in svg
