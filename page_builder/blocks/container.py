"""
Bloc Container — layout colonnes/lignes + spacing, enfants imbriqués.

`children` est optionnel (création avant insertion des enfants) ; chaque enfant a la
forme d'un PageBlock ({id?, type, content}) ou l'ancienne forme aplatie ({type, ...champs}).
"""
from typing import Any, Dict, List, Literal, Optional, get_args

from pydantic import field_validator

from .base import BlockContent, lenient_choice, lenient_int

ContainerLayout = Literal["columns", "rows"]


class ContainerBlockContent(BlockContent):
    layout: ContainerLayout = "columns"
    columns: Optional[int] = None
    gap: Optional[str] = None
    children: Optional[List[Dict[str, Any]]] = None

    @field_validator("columns", mode="before")
    @classmethod
    def _columns(cls, v):
        return lenient_int(v)

    @field_validator("layout", mode="before")
    @classmethod
    def _layout(cls, v):
        return lenient_choice(v, get_args(ContainerLayout), "columns")
