#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers serializing output trees to text."""

from snooty2mdx.renderers.base import BaseRenderer, InlineContentMixin
from snooty2mdx.renderers.mdast_json import MdastJsonRenderer
from snooty2mdx.renderers.mdx import MdxRenderer

__all__ = ["BaseRenderer", "InlineContentMixin", "MdastJsonRenderer", "MdxRenderer"]
