# SPDX-License-Identifier: MIT
"""Descriptive metadata documents for registered slugs.

The renderer receives only ``(slug, is_custom, length)`` and must return the
same document for the same input. The default implementation produces a JSON
document with a plain SVG text badge embedded as a data URI.
"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod
from html import escape

from pydantic import Field
from pydantic_core import to_json

from .models import StrictModel


class Attribute(StrictModel):
    """Single trait exposed by the metadata document."""

    trait_type: str
    value: str | int


class SlugMetadata(StrictModel):
    """Display artifact describing a slug."""

    name: str = Field(..., min_length=1)
    description: str
    image: str = Field(..., description="Image URI, usually a data URI.")
    attributes: list[Attribute] = Field(default_factory=list)

    def to_json(self) -> bytes:
        """Return the document serialised as compact JSON."""
        return to_json(self)

    def to_data_uri(self) -> str:
        """Return the document as a base64 ``application/json`` data URI."""
        payload = base64.b64encode(self.to_json()).decode("ascii")
        return f"data:application/json;base64,{payload}"


class MetadataRenderer(ABC):
    """Interface for the metadata collaborator."""

    @abstractmethod
    def render(self, slug: str, is_custom: bool, length: int) -> SlugMetadata:
        """Return the metadata document for one slug."""


class DefaultMetadataRenderer(MetadataRenderer):
    """Render a JSON document with a single-line SVG badge."""

    def __init__(self, domain: str = "") -> None:
        self.domain = domain.rstrip("/")

    def _svg(self, slug: str, is_custom: bool) -> str:
        fill = "#f5b700" if is_custom else "#2d6cdf"
        label = escape(f"{self.domain}/{slug}" if self.domain else slug)
        return (
            '<svg xmlns="http://www.w3.org/2000/svg" width="400" height="120">'
            f'<rect width="400" height="120" rx="12" fill="{fill}"/>'
            '<text x="200" y="68" font-family="monospace" font-size="28" '
            f'text-anchor="middle" fill="#ffffff">{label}</text>'
            "</svg>"
        )

    def render(self, slug: str, is_custom: bool, length: int) -> SlugMetadata:
        svg = self._svg(slug, is_custom)
        image = "data:image/svg+xml;base64," + base64.b64encode(
            svg.encode("utf-8")
        ).decode("ascii")
        kind = "custom" if is_custom else "generated"
        return SlugMetadata(
            name=slug,
            description=f"Short link slug '{slug}' ({kind}, {length} characters).",
            image=image,
            attributes=[
                Attribute(trait_type="Type", value=kind.capitalize()),
                Attribute(trait_type="Length", value=length),
            ],
        )


__all__ = [
    "Attribute",
    "SlugMetadata",
    "MetadataRenderer",
    "DefaultMetadataRenderer",
]
