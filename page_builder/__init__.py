"""
page_builder — modèle de blocs typés, rendu HTML par tag et éditeurs « merge and emit ».
"""
from .blocks import BLOCK_TYPES, PageBlock, parse_block_content, default_content
from .renderer import render_block, render_blocks, render_page_header
from .editor import editor_for
from .errors import NotFound, ValidationFailure, TransportFailure, UnrecognizedBlockType

__all__ = [
    "BLOCK_TYPES", "PageBlock", "parse_block_content", "default_content",
    "render_block", "render_blocks", "render_page_header",
    "editor_for",
    "NotFound", "ValidationFailure", "TransportFailure", "UnrecognizedBlockType",
]
