"""Bloc Video — YouTube / Vimeo / URL embarquable directe."""
from typing import Optional

from pydantic import AliasChoices, Field

from .base import BlockContent


class VideoBlockContent(BlockContent):
    # Ancien format admin : "url"
    video_url: str = Field("", validation_alias=AliasChoices("videoUrl", "url", "video_url"))
    title: Optional[str] = None
    description: Optional[str] = None
