"""Bloc CTA — titre + description + bouton (interne ou externe)."""
from typing import Literal, Optional, get_args

from pydantic import field_validator

from .base import BlockContent, lenient_choice

CtaVariant = Literal["default", "outline", "secondary"]


class CtaBlockContent(BlockContent):
    title: str = ""
    description: Optional[str] = None
    button_text: str = ""
    button_url: str = ""
    variant: CtaVariant = "default"

    @field_validator("variant", mode="before")
    @classmethod
    def _variant(cls, v):
        return lenient_choice(v, get_args(CtaVariant), "default")
