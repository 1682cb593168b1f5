"""
Admin des page headers — formulaire par clé de page, upsert + invalidation du cache.

Pas de mise à jour optimiste : le cache des headers n'est invalidé qu'après un PUT réussi,
et la soumission est bloquée tant que le PUT est en cours.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from page_builder.errors import NotFound, TransportFailure, ValidationFailure

from .cache import HEADERS_KEY, PAGES_KEY, QueryCache
from .client import CmsClient

log = logging.getLogger(__name__)

STATIC_PAGES: Tuple[Tuple[str, str], ...] = (
    ("home",      "Home"),
    ("courses",   "Corsi"),
    ("surf-camp", "Surf Camp"),
    ("community", "Community"),
    ("dashboard", "Dashboard"),
)
DEFAULT_PAGE = "courses"

HEADER_DEFAULTS: Dict[str, str] = {
    "imageUrl":      "",
    "title":         "",
    "subtitle":      "",
    "paddingTop":    "py-16",
    "paddingBottom": "py-24",
    "minHeight":     "min-h-96",
}
FORM_FIELDS = tuple(HEADER_DEFAULTS)


def header_form_values(header: Optional[Dict[str, Any]],
                       custom_page: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
    """Header existant, sinon champs header* de la page custom, sinon valeurs par défaut."""
    if header is None and custom_page is not None:
        return {
            **HEADER_DEFAULTS,
            "imageUrl": custom_page.get("headerImageUrl") or "",
            "title":    custom_page.get("headerTitle") or custom_page.get("title") or "",
            "subtitle": custom_page.get("headerSubtitle") or "",
        }
    header = header or {}
    return {k: header.get(k) or default for k, default in HEADER_DEFAULTS.items()}


def page_choices(custom_pages: List[Dict[str, Any]]) -> List[Tuple[str, str]]:
    return [*STATIC_PAGES, *((p["slug"], f"{p['title']} (custom)") for p in custom_pages)]


def page_header_or_defaults(client: CmsClient, page_key: str,
                            cache: Optional[QueryCache] = None) -> Dict[str, str]:
    """Lecture publique : 404 = aucun header configuré, on rend les valeurs par défaut."""
    cache = cache if cache is not None else QueryCache()

    def load():
        try:
            return client.get_header(page_key)
        except NotFound:
            return None

    return header_form_values(cache.fetch((*HEADERS_KEY, page_key), load))


@dataclass
class Notice:
    title: str
    description: str
    variant: str = "default"


class PageHeaderAdmin:
    def __init__(self, client: CmsClient, cache: Optional[QueryCache] = None):
        self.client   = client
        self.cache    = cache if cache is not None else QueryCache()
        self.selected = DEFAULT_PAGE
        self.form: Dict[str, str] = dict(HEADER_DEFAULTS)
        self.errors: Dict[str, str] = {}
        self.saving   = False
        self.notice: Optional[Notice] = None

    # ── Lectures (cache) ──
    def headers(self) -> List[Dict[str, Any]]:
        return self.cache.fetch(HEADERS_KEY, self.client.list_headers)

    def custom_pages(self) -> List[Dict[str, Any]]:
        return self.cache.fetch(PAGES_KEY, self.client.list_pages)

    def choices(self) -> List[Tuple[str, str]]:
        return page_choices(self.custom_pages())

    # ── Formulaire ──
    def select(self, page_key: str) -> Dict[str, str]:
        header = next((h for h in self.headers() if h.get("page") == page_key), None)
        custom_page = None
        if header is None:
            custom_page = next((p for p in self.custom_pages() if p.get("slug") == page_key), None)
        self.selected = page_key
        self.form = header_form_values(header, custom_page)
        self.errors = {}
        return self.form

    def update(self, **fields) -> Dict[str, str]:
        unknown = set(fields) - set(FORM_FIELDS)
        if unknown:
            raise ValidationFailure(f"Champs inconnus : {', '.join(sorted(unknown))}")
        self.form = {**self.form, **fields}
        return self.form

    def submit(self) -> bool:
        """True si le header est enregistré ; False si refusé (déjà en cours) ou en échec transport."""
        if self.saving:
            log.debug("header %s : soumission ignorée, enregistrement en cours", self.selected)
            return False
        if not (self.form.get("title") or "").strip():
            self.errors = {"title": "Il titolo è obbligatorio"}
            raise ValidationFailure(self.errors["title"], field="title")

        self.errors = {}
        self.saving = True
        try:
            self.client.put_header(self.selected, dict(self.form))
        except TransportFailure as e:
            log.warning("header %s non enregistré : %s", self.selected, e)
            self.notice = Notice("Errore", "Impossibile salvare le modifiche.", "destructive")
            return False
        finally:
            self.saving = False

        self.cache.invalidate(HEADERS_KEY)
        self.notice = Notice("Salvato!", "L'intestazione è stata aggiornata con successo.")
        return True

    def dismiss(self) -> None:
        self.notice = None
