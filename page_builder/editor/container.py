"""
Éditeur Container — panneaux Layout et Spaziatura.

Les enfants ne sont jamais écrits ici (leur appartenance est gérée par l'éditeur de page) ;
seul leur nombre est affiché. Passer en `rows` garde la valeur de `columns` en sommeil.
"""
from typing import Any, Dict, Tuple

from ..blocks import ContainerBlockContent
from ..errors import ValidationFailure
from .base import BlockEditor, Panel, SPACING_PANEL

COLUMN_CHOICES = range(1, 7)
LAYOUT_CHOICES = ("columns", "rows")


class ContainerBlockEditor(BlockEditor):
    content_model = ContainerBlockContent
    panels = (
        Panel("layout", "Layout", ("layout", "columns", "gap")),
        SPACING_PANEL,
    )
    readonly_fields = frozenset({"children"})

    @property
    def children_count(self) -> int:
        return len(self.content.children or [])

    def visible_fields(self, panel_key: str) -> Tuple[str, ...]:
        fields = super().visible_fields(panel_key)
        if panel_key == "layout" and self.content.layout != "columns":
            return tuple(f for f in fields if f != "columns")
        return fields

    def check(self, updates: Dict[str, Any]) -> None:
        if "layout" in updates and updates["layout"] not in LAYOUT_CHOICES:
            raise ValidationFailure(f"Layout inconnu : {updates['layout']}", field="layout")
        columns = updates.get("columns")
        if columns is not None and columns not in COLUMN_CHOICES:
            raise ValidationFailure("Le nombre de colonnes doit être compris entre 1 et 6", field="columns")
