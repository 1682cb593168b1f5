"""Éditeurs des autres variantes — même contrat que le container, panneaux propres."""
from typing import Any, Dict, Optional, get_args

from pydantic.alias_generators import to_snake

from ..blocks import (
    BannerBlockContent, BannerCta, BannerText, BannerVariant, CtaBlockContent, CtaVariant,
    GalleryBlockContent, GalleryVariant, ImageAlignment,
    GalleryImage, ImageBlockContent, ImageDimensions, TextBlockContent, VideoBlockContent,
)
from ..errors import ValidationFailure
from .base import BlockEditor, Panel, SPACING_PANEL

GALLERY_COLUMN_CHOICES = (2, 3, 4)


class TextBlockEditor(BlockEditor):
    content_model = TextBlockContent
    panels = (
        Panel("content", "Contenuto", ("html",)),
        Panel("typography", "Tipografia", ("typography",)),
        SPACING_PANEL,
    )

    def update_typography(self, key: str, value: Optional[str]) -> TextBlockContent:
        return self.update_content(typography={**(self.content.typography or {}), key: value})


class ImageBlockEditor(BlockEditor):
    content_model = ImageBlockContent
    panels = (
        Panel("content", "Contenuto", ("image_url", "alt", "caption", "link")),
        Panel("layout", "Layout", ("dimensions", "alignment")),
        SPACING_PANEL,
    )
    choices = {"alignment": get_args(ImageAlignment)}

    def update_dimensions(self, key: str, value: Optional[str]) -> ImageBlockContent:
        dims = self.content.dimensions or ImageDimensions()
        return self.update_content(dimensions=dims.model_copy(update={to_snake(key): value}))


class CtaBlockEditor(BlockEditor):
    content_model = CtaBlockContent
    panels = (
        Panel("content", "Contenuto", ("title", "description", "button_text", "button_url", "variant")),
        SPACING_PANEL,
    )
    choices = {"variant": get_args(CtaVariant)}


class VideoBlockEditor(BlockEditor):
    content_model = VideoBlockContent
    panels = (
        Panel("content", "Contenuto", ("video_url", "title", "description")),
        SPACING_PANEL,
    )


class GalleryBlockEditor(BlockEditor):
    content_model = GalleryBlockContent
    panels = (
        Panel("images", "Immagini", ("images",)),
        Panel("layout", "Layout", ("variant", "columns", "gap")),
        SPACING_PANEL,
    )
    choices = {"variant": get_args(GalleryVariant)}

    def check(self, updates: Dict[str, Any]) -> None:
        columns = updates.get("columns")
        if columns is not None and columns not in GALLERY_COLUMN_CHOICES:
            raise ValidationFailure("Colonne ammesse : 2, 3 o 4", field="columns")

    def add_image(self, url: str, alt: str = "", caption: Optional[str] = None) -> GalleryBlockContent:
        return self.update_content(images=[*self.content.images, GalleryImage(url=url, alt=alt, caption=caption)])

    def update_image(self, index: int, field: str, value: str) -> GalleryBlockContent:
        if field not in ("url", "alt", "caption"):
            raise ValueError(f"Champ d'image inconnu : {field}")
        images = list(self.content.images)
        images[index] = images[index].model_copy(update={field: value})
        return self.update_content(images=images)

    def remove_image(self, index: int) -> GalleryBlockContent:
        return self.update_content(images=[img for i, img in enumerate(self.content.images) if i != index])


class BannerBlockEditor(BlockEditor):
    content_model = BannerBlockContent
    panels = (
        Panel("background", "Sfondo", ("variant", "background_image", "background_color")),
        Panel("content", "Contenuto", ("title", "subtitle"), source="content"),
        Panel("cta", "Pulsante", ("text", "link"), source="cta"),
        SPACING_PANEL,
    )
    choices = {"variant": get_args(BannerVariant)}

    def update_text(self, field: str, value: Any) -> BannerBlockContent:
        text = self.content.content or BannerText()
        return self.update_content(content=text.model_copy(update={to_snake(field): value}))

    def update_cta(self, field: str, value: Any) -> BannerBlockContent:
        cta = self.content.cta or BannerCta()
        return self.update_content(cta=cta.model_copy(update={to_snake(field): value}))
