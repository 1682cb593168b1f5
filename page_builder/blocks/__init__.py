"""
Blocs — exports publics + registry type → contenu typé.
"""
import copy
from typing import Any, Dict, Optional, Type, Union

from ..errors import UnrecognizedBlockType
from .base import WireModel, BlockSpacing, BlockContent, PageBlock, SPACING_FIELDS, lenient_choice, lenient_int
from .text import TextBlockContent
from .image import ImageAlignment, ImageBlockContent, ImageDimensions
from .cta import CtaBlockContent, CtaVariant
from .gallery import GalleryBlockContent, GalleryImage, GalleryVariant
from .video import VideoBlockContent
from .container import ContainerBlockContent, ContainerLayout
from .banner import BannerBlockContent, BannerText, BannerCta, BannerVariant

BLOCK_TYPES: Dict[str, Type[BlockContent]] = {
    "text":      TextBlockContent,
    "image":     ImageBlockContent,
    "cta":       CtaBlockContent,
    "gallery":   GalleryBlockContent,
    "video":     VideoBlockContent,
    "container": ContainerBlockContent,
    "banner":    BannerBlockContent,
}

# Contenu initial d'un bloc fraîchement ajouté dans l'éditeur de page
_DEFAULT_CONTENT: Dict[str, Dict[str, Any]] = {
    "text":      {"html": "<p>Il tuo contenuto qui...</p>"},
    "image":     {"imageUrl": "", "alt": "", "caption": ""},
    "cta":       {"title": "", "description": "", "buttonText": "", "buttonUrl": ""},
    "gallery":   {"images": [], "variant": "grid", "columns": 3, "gap": "1rem"},
    "video":     {"videoUrl": "", "title": ""},
    "container": {"layout": "columns", "columns": 2, "gap": "1rem", "children": []},
    "banner":    {"variant": "boxed", "content": {}, "cta": {}},
}


_WRAPPER_KEYS = {"id", "type", "content", "order", "orderIndex"}


def content_model_for(block_type: str) -> Type[BlockContent]:
    """Classe de contenu associée à un tag. Lève UnrecognizedBlockType si inconnu."""
    model = BLOCK_TYPES.get(block_type)
    if model is None:
        raise UnrecognizedBlockType(block_type)
    return model


def parse_block_content(block_type: str, raw: Optional[Dict[str, Any]]) -> Optional[BlockContent]:
    """contentJson brut → contenu typé, ou None pour un tag inconnu."""
    model = BLOCK_TYPES.get(block_type)
    if model is None:
        return None
    return model.model_validate(raw or {})


def default_content(block_type: str) -> Dict[str, Any]:
    content_model_for(block_type)
    return copy.deepcopy(_DEFAULT_CONTENT[block_type])


def block_type_of(entry: Any) -> str:
    """Tag d'un bloc brut, sans valider son contenu ("" si absent ou non textuel)."""
    if isinstance(entry, PageBlock):
        return entry.type
    block_type = entry.get("type") if isinstance(entry, dict) else None
    return block_type if isinstance(block_type, str) else ""


def as_page_block(entry: Union[PageBlock, Dict[str, Any]]) -> PageBlock:
    """
    Normalise un bloc ou un enfant de container en PageBlock.
    Accepte {id, type, contentJson}, {id, type, content} ou la forme aplatie {type, ...}.
    """
    if isinstance(entry, PageBlock):
        return entry
    if not isinstance(entry, dict):
        return PageBlock(type="")
    if "contentJson" in entry or "content_json" in entry:
        return PageBlock.model_validate(entry)
    if isinstance(entry.get("content"), dict) and set(entry) <= _WRAPPER_KEYS:
        content = entry["content"]
    else:
        content = {k: v for k, v in entry.items() if k not in ("id", "type")}
    return PageBlock(id=entry.get("id"), type=entry.get("type", ""), content_json=content)


__all__ = [
    "WireModel", "BlockSpacing", "BlockContent", "PageBlock", "SPACING_FIELDS", "lenient_choice", "lenient_int",
    "TextBlockContent",
    "ImageBlockContent", "ImageDimensions", "ImageAlignment",
    "CtaBlockContent", "CtaVariant",
    "GalleryBlockContent", "GalleryImage", "GalleryVariant",
    "VideoBlockContent",
    "ContainerBlockContent", "ContainerLayout",
    "BannerBlockContent", "BannerText", "BannerCta", "BannerVariant",
    "BLOCK_TYPES", "content_model_for", "parse_block_content", "default_content", "as_page_block",
    "block_type_of",
]
