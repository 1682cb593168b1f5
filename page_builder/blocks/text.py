"""Bloc Text — HTML riche, injecté tel quel par le renderer."""
from typing import Dict, Optional

from .base import BlockContent


class TextBlockContent(BlockContent):
    html: str = ""
    typography: Optional[Dict[str, str]] = None
