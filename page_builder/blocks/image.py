"""Bloc Image — image seule avec caption et lien optionnels."""
from typing import Literal, Optional, get_args

from pydantic import AliasChoices, Field, field_validator

from .base import BlockContent, WireModel, lenient_choice

ImageAlignment = Literal["left", "center", "right"]


class ImageDimensions(WireModel):
    width: Optional[str] = None
    height: Optional[str] = None
    aspect_ratio: Optional[str] = None


class ImageBlockContent(BlockContent):
    # Ancien format admin : "url"
    image_url: str = Field("", validation_alias=AliasChoices("imageUrl", "url", "image_url"))
    alt: str = ""
    caption: Optional[str] = None
    link: Optional[str] = None
    dimensions: Optional[ImageDimensions] = None
    alignment: Optional[ImageAlignment] = None

    @field_validator("alignment", mode="before")
    @classmethod
    def _alignment(cls, v):
        return lenient_choice(v, get_args(ImageAlignment))
