from typing import Any, Dict, Type

from ..blocks import content_model_for
from .base import BlockEditor, OnChange, Panel, SPACING_PANEL
from .container import ContainerBlockEditor
from .variants import (
    BannerBlockEditor, CtaBlockEditor, GalleryBlockEditor, ImageBlockEditor,
    TextBlockEditor, VideoBlockEditor,
)

EDITORS: Dict[str, Type[BlockEditor]] = {
    "text":      TextBlockEditor,
    "image":     ImageBlockEditor,
    "cta":       CtaBlockEditor,
    "gallery":   GalleryBlockEditor,
    "video":     VideoBlockEditor,
    "container": ContainerBlockEditor,
    "banner":    BannerBlockEditor,
}


def editor_for(block_type: str, content: Any, on_change: OnChange) -> BlockEditor:
    """Éditeur de la variante ; UnrecognizedBlockType si le tag est inconnu."""
    content_model_for(block_type)
    return EDITORS[block_type](content, on_change)


__all__ = [
    "BlockEditor", "Panel", "SPACING_PANEL", "EDITORS", "editor_for",
    "ContainerBlockEditor", "TextBlockEditor", "ImageBlockEditor", "CtaBlockEditor",
    "VideoBlockEditor", "GalleryBlockEditor", "BannerBlockEditor",
]
