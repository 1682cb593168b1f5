"""Bloc Gallery — grille d'images (2, 3 ou 4 colonnes)."""
from typing import List, Literal, Optional, get_args

from pydantic import Field, field_validator

from .base import BlockContent, WireModel, lenient_choice, lenient_int

GalleryVariant = Literal["carousel", "masonry", "grid"]


class GalleryImage(WireModel):
    url: str = ""
    alt: Optional[str] = None
    caption: Optional[str] = None


class GalleryBlockContent(BlockContent):
    images: List[GalleryImage] = Field(default_factory=list)
    variant: GalleryVariant = "grid"
    columns: Optional[int] = 3
    gap: Optional[str] = None

    # Valeur non entière → None, le renderer retombe sur 3 colonnes
    @field_validator("columns", mode="before")
    @classmethod
    def _columns(cls, v):
        return lenient_int(v)

    @field_validator("variant", mode="before")
    @classmethod
    def _variant(cls, v):
        return lenient_choice(v, get_args(GalleryVariant), "grid")
