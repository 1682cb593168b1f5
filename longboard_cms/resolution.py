"""
Résolution de page dynamique : slug → page → blocs ordonnés → rendu.

États : loading → error | not_found | ready.
Page absente, non publiée ou en échec → not_found, sans tenter le chargement des blocs.
Les blocs ne sont chargés qu'après la page (dépendance séquentielle).
Un resolve() dépassé par un plus récent voit son résultat ignoré (compteur de génération).
"""
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from html import escape
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from page_builder.errors import NotFound, TransportFailure
from page_builder.renderer import render_blocks, render_page_header

from .cache import QueryCache
from .database import db_get_page_by_slug, db_list_blocks
from .models import block_to_dict, page_to_dict

log = logging.getLogger(__name__)

SITE_NAME = os.getenv("SITE_NAME", "Scuola di Longboard")


class PageState(str, Enum):
    LOADING   = "loading"
    ERROR     = "error"
    NOT_FOUND = "not_found"
    READY     = "ready"


@dataclass
class DocumentMeta:
    """Métadonnées du document englobant (<title>, meta description)."""
    title: str = SITE_NAME
    description: Optional[str] = None


def apply_seo(meta: DocumentMeta, page: Dict[str, Any]) -> DocumentMeta:
    """Idempotent : appliqué deux fois, même résultat."""
    meta.title = page.get("seoTitle") or page.get("title") or SITE_NAME
    if page.get("seoDescription"):
        meta.description = page["seoDescription"]
    return meta


@dataclass
class PageView:
    slug: str
    state: PageState = PageState.LOADING
    page: Optional[Dict[str, Any]] = None
    blocks: List[Dict[str, Any]] = field(default_factory=list)
    fragments: List[str] = field(default_factory=list)
    error: Optional[str] = None


class PageSource(Protocol):
    def get_page_by_slug(self, slug: str) -> Dict[str, Any]: ...   # NotFound si absente
    def get_blocks(self, page_id: str) -> List[Dict[str, Any]]: ...


class DbPageSource:
    """Source directe sur la base (rendu serveur de /p/{slug})."""

    def __init__(self, db: Session):
        self.db = db

    def get_page_by_slug(self, slug: str) -> Dict[str, Any]:
        try:
            page = db_get_page_by_slug(self.db, slug)
        except SQLAlchemyError as e:
            raise TransportFailure(f"lecture page {slug} : {e}") from e
        if page is None:
            raise NotFound(f"page {slug}")
        return page_to_dict(page)

    def get_blocks(self, page_id: str) -> List[Dict[str, Any]]:
        try:
            return [block_to_dict(b) for b in db_list_blocks(self.db, page_id)]
        except SQLAlchemyError as e:
            raise TransportFailure(f"lecture blocs {page_id} : {e}") from e


class PageResolver:
    def __init__(self, source: PageSource, cache: Optional[QueryCache] = None,
                 meta: Optional[DocumentMeta] = None):
        self.source     = source
        self.cache      = cache if cache is not None else QueryCache()
        self.meta       = meta or DocumentMeta()
        self.generation = 0
        self.view: Optional[PageView] = None

    def resolve(self, slug: str) -> PageView:
        self.generation += 1
        generation = self.generation
        self.view = PageView(slug=slug)

        view = self._load(slug)
        if generation != self.generation:
            log.debug("résolution de %s dépassée (génération %d < %d), ignorée", slug, generation, self.generation)
            return view

        self.view = view
        if view.state is PageState.READY:
            apply_seo(self.meta, view.page)
        return view

    def _load(self, slug: str) -> PageView:
        try:
            page = self.cache.fetch(("/api/custom-pages/slug", slug), lambda: self.source.get_page_by_slug(slug))
        except NotFound:
            return PageView(slug=slug, state=PageState.NOT_FOUND)
        except TransportFailure as e:
            log.info("page %s introuvable (%s)", slug, e)
            return PageView(slug=slug, state=PageState.NOT_FOUND)
        if not page or not page.get("published"):
            return PageView(slug=slug, state=PageState.NOT_FOUND)

        page_id = page["id"]
        try:
            blocks = self.cache.fetch(("/api/custom-pages", page_id, "blocks"), lambda: self.source.get_blocks(page_id))
        except TransportFailure as e:
            log.warning("blocs de %s indisponibles : %s", slug, e)
            return PageView(slug=slug, state=PageState.ERROR, page=page, error=str(e))

        return PageView(slug=slug, state=PageState.READY, page=page, blocks=blocks,
                        fragments=render_blocks(blocks))


# ── Rendu du document ───────────────────────────────────────────────────────

_NOT_FOUND_BODY = """<div class="page-status">
  <h1>Pagina non trovata</h1>
  <p>La pagina che stai cercando non esiste o non è stata pubblicata.</p>
  <a href="/">Torna alla home</a>
</div>"""

_ERROR_BODY = """<div class="page-status">
  <h1>Errore</h1>
  <p>Impossibile caricare il contenuto della pagina. Riprova più tardi.</p>
  <a href="/">Torna alla home</a>
</div>"""


def render_page_view(view: PageView, meta: Optional[DocumentMeta] = None) -> str:
    meta = meta or DocumentMeta()
    if view.state is PageState.READY:
        page = view.page
        header = render_page_header(
            title=page.get("headerTitle") or page.get("title") or "",
            image_url=page.get("headerImageUrl"),
            subtitle=page.get("headerSubtitle"),
        )
        blocks = "\n".join(view.fragments)
        body = f"""{header}
<main class="page-content">
  <div class="page-content__inner">
{blocks}
  </div>
</main>"""
    elif view.state is PageState.ERROR:
        body = _ERROR_BODY
    else:
        body = _NOT_FOUND_BODY

    description = f'\n<meta name="description" content="{escape(meta.description, quote=True)}">' if meta.description else ""
    return f"""<!DOCTYPE html><html lang="it"><head>
<meta charset="UTF-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>{escape(meta.title)}</title>{description}
<style>
*{{box-sizing:border-box;margin:0;padding:0}}
body{{font-family:'Segoe UI',sans-serif;color:#1a1a2e;line-height:1.5}}
.page-content__inner{{max-width:56rem;margin:0 auto;padding:48px 16px;display:flex;flex-direction:column;gap:48px}}
.page-status{{min-height:100vh;display:flex;flex-direction:column;align-items:center;justify-content:center;text-align:center;gap:16px}}
</style>
</head><body>
{body}
</body></html>"""
