"""Bloc Banner — bandeau boxed/fullwidth avec fond, titre et CTA."""
from typing import Dict, Literal, Optional, get_args

from pydantic import field_validator

from .base import BlockContent, WireModel, lenient_choice

BannerVariant = Literal["boxed", "fullwidth"]


class BannerText(WireModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    title_typography: Optional[Dict[str, str]] = None
    subtitle_typography: Optional[Dict[str, str]] = None


class BannerCta(WireModel):
    text: Optional[str] = None
    link: Optional[str] = None
    button_style: Optional[Dict[str, str]] = None


class BannerBlockContent(BlockContent):
    variant: BannerVariant = "boxed"
    background_image: Optional[str] = None
    background_color: Optional[str] = None
    content: Optional[BannerText] = None
    cta: Optional[BannerCta] = None

    @field_validator("variant", mode="before")
    @classmethod
    def _variant(cls, v):
        return lenient_choice(v, get_args(BannerVariant), "boxed")
