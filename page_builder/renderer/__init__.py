from .html import render_block, render_blocks, embed_url, is_external
from .header import render_page_header

__all__ = ["render_block", "render_blocks", "embed_url", "is_external", "render_page_header"]
