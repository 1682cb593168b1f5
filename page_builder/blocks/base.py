"""
Blocs de base pour page_builder.
Un bloc = tag `type` + contenu typé (`contentJson` côté API, clés camelCase).
"""
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Modèle snake_case en Python, camelCase sur le fil. Clés inconnues conservées."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def lenient_int(value: Any) -> Optional[int]:
    """Entier ou None : 4, "4", 4.0 → 4 ; 2.5, "four", True → None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    return None


def lenient_choice(value: Any, choices: Tuple[Any, ...], default: Any = None) -> Any:
    """Valeur si elle fait partie des choix, sinon la valeur par défaut."""
    try:
        return value if value in choices else default
    except TypeError:
        return default


class BlockSpacing(WireModel):
    """Marges/paddings CSS libres ("2rem", "0", "12px"). Chaque champ est optionnel."""
    padding_top: Optional[str] = None
    padding_bottom: Optional[str] = None
    padding_left: Optional[str] = None
    padding_right: Optional[str] = None
    margin_top: Optional[str] = None
    margin_bottom: Optional[str] = None
    margin_left: Optional[str] = None
    margin_right: Optional[str] = None


SPACING_FIELDS = tuple(BlockSpacing.model_fields)


class BlockContent(WireModel):
    """Contenu d'un bloc (classe parente de tous les contenus typés)."""
    spacing: Optional[BlockSpacing] = None


class PageBlock(WireModel):
    """Bloc tel que stocké : id + type + contentJson brut + position."""
    id: Optional[str] = None
    type: str
    content_json: Dict[str, Any] = Field(default_factory=dict)
    order_index: int = 0

    # Enfants de container : id numérique (index) accepté
    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v
