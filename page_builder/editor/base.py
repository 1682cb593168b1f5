"""
Éditeurs de blocs — contrat « fusionner puis émettre ».

Chaque modification produit un contenu complet (jamais un patch partiel), passé une seule
fois à `on_change` ; ce contenu devient l'état courant de l'éditeur.
"""
from typing import Any, Callable, ClassVar, Dict, FrozenSet, NamedTuple, Optional, Tuple, Type

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from ..blocks import BlockContent, BlockSpacing, SPACING_FIELDS
from ..errors import ValidationFailure

OnChange = Callable[[BlockContent], None]


class Panel(NamedTuple):
    key: str
    label: str
    fields: Tuple[str, ...]
    source: Optional[str] = None   # sous-objet lu par le panneau (ex: "spacing")


SPACING_PANEL = Panel("spacing", "Spaziatura", SPACING_FIELDS, source="spacing")


class BlockEditor:
    content_model: ClassVar[Type[BlockContent]] = BlockContent
    panels: ClassVar[Tuple[Panel, ...]] = (SPACING_PANEL,)
    readonly_fields: ClassVar[FrozenSet[str]] = frozenset()
    # Champs à valeurs fermées : le rendu retombe sur un défaut, l'éditeur refuse
    choices: ClassVar[Dict[str, Tuple[Any, ...]]] = {}

    def __init__(self, content: Any, on_change: OnChange):
        if not isinstance(content, self.content_model):
            content = self.content_model.model_validate(
                content.model_dump() if isinstance(content, BlockContent) else (content or {})
            )
        self.content = content
        self._on_change = on_change

    # ── Primitives ──────────────────────────────────────────────────────────

    def update_content(self, partial: Optional[Dict[str, Any]] = None, **fields) -> BlockContent:
        """Fusion superficielle de `partial` dans le contenu courant, puis émission."""
        updates = {to_snake(k): v for k, v in {**(partial or {}), **fields}.items()}
        for name in updates:
            if name in self.readonly_fields:
                raise ValidationFailure(f"Champ non modifiable : {name}", field=name)
            if name not in self.content_model.model_fields:
                raise ValidationFailure(f"Champ inconnu : {name}", field=name)
            allowed = self.choices.get(name)
            if allowed is not None and updates[name] is not None and updates[name] not in allowed:
                raise ValidationFailure(f"Valeur non autorisée pour {name} : {updates[name]!r}", field=name)
        self.check(updates)

        try:
            merged = self.content_model.model_validate({**dict(self.content), **updates})
        except ValidationError as e:
            field = ".".join(str(p) for p in e.errors()[0]["loc"]) or None
            raise ValidationFailure(e.errors()[0]["msg"], field=field) from e

        self.content = merged
        self._on_change(merged)
        return merged

    def update_spacing(self, field: str, value: Optional[str]) -> BlockContent:
        """Un seul champ de spacing ; les sept autres sont conservés."""
        name = to_snake(field)
        if name not in SPACING_FIELDS:
            raise ValueError(f"Champ de spacing inconnu : {field}")
        spacing = self.content.spacing or BlockSpacing()
        return self.update_content(spacing=spacing.model_copy(update={name: value}))

    def check(self, updates: Dict[str, Any]) -> None:
        """Validation propre à la variante ; lève ValidationFailure."""

    # ── Lecture pour l'affichage ────────────────────────────────────────────

    def panel(self, key: str) -> Panel:
        for panel in self.panels:
            if panel.key == key:
                return panel
        raise KeyError(key)

    def visible_fields(self, panel_key: str) -> Tuple[str, ...]:
        return self.panel(panel_key).fields

    def values(self, panel_key: str) -> Dict[str, Any]:
        panel = self.panel(panel_key)
        source = getattr(self.content, panel.source) if panel.source else self.content
        return {f: getattr(source, f, None) if source is not None else None
                for f in self.visible_fields(panel_key)}

    def to_json(self) -> Dict[str, Any]:
        return self.content.to_json()
