"""
Custom pages + page blocks.

GET    /api/custom-pages                         → pages publiées (toutes pour l'admin)
GET    /api/custom-pages/slug/{slug}             → page (404 absente, 403 non publiée)
GET    /api/custom-pages/{page_id}/blocks        → blocs ordonnés par orderIndex
GET    /p/{slug}                                 → page rendue (HTML)

GET/POST        /api/admin/custom-pages
GET/PUT/DELETE  /api/admin/custom-pages/{page_id}
POST            /api/admin/custom-pages/{page_id}/blocks   (containerId → enfant du container)
PUT             /api/admin/page-blocks/reorder
PUT/DELETE      /api/admin/page-blocks/{block_id}
"""
import logging
import uuid
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from page_builder.blocks import content_model_for, default_content

from ...database import (
    get_db, db_list_pages, db_get_page, db_get_page_by_slug, db_create_page, db_update_page,
    db_delete_page, db_list_blocks, db_get_block, db_next_order_index, db_create_block,
    db_update_block, db_delete_block, db_append_child, db_reorder_blocks, db_sync_page_header,
)
from ...models import (
    CustomPageDB, PageBlockDB, CustomPageInput, CustomPageUpdate, PageBlockInput,
    PageBlockUpdate, ReorderInput, page_to_dict, block_to_dict,
)
from ...resolution import DbPageSource, PageResolver, PageState, render_page_view
from ...sanitize import sanitize_content
from ..auth import check_token, is_admin

log = logging.getLogger(__name__)
router = APIRouter(tags=["Pages"])


def _checked_content(block_type: str, raw: Dict[str, Any]) -> Dict[str, Any]:
    """Valide le contentJson contre le schéma du type puis nettoie le HTML des blocs text."""
    model = content_model_for(block_type)
    try:
        model.model_validate(raw)
    except ValidationError as e:
        err = e.errors()[0]
        raise HTTPException(400, f"Contenuto non valido ({'.'.join(str(p) for p in err['loc'])}) : {err['msg']}")
    return sanitize_content(block_type, raw)


def _page_or_404(db: Session, page_id: str) -> CustomPageDB:
    page = db_get_page(db, page_id)
    if not page:
        raise HTTPException(404, "Pagina non trovata")
    return page


def _block_or_404(db: Session, block_id: str) -> PageBlockDB:
    block = db_get_block(db, block_id)
    if not block:
        raise HTTPException(404, "Blocco non trovato")
    return block


# ── API publique ──────────────────────────────────────────────────────────────

@router.get("/api/custom-pages")
def list_pages(request: Request, db: Session = Depends(get_db)):
    pages = db_list_pages(db, published_only=not is_admin(request))
    return [page_to_dict(p) for p in pages]


@router.get("/api/custom-pages/slug/{slug}")
def get_page_by_slug(slug: str, request: Request, db: Session = Depends(get_db)):
    page = db_get_page_by_slug(db, slug)
    if not page:
        raise HTTPException(404, "Pagina non trovata")
    if not page.published and not is_admin(request):
        raise HTTPException(403, "Pagina non pubblicata")
    return page_to_dict(page)


@router.get("/api/custom-pages/{page_id}/blocks")
def list_blocks(page_id: str, db: Session = Depends(get_db)):
    return [block_to_dict(b) for b in db_list_blocks(db, page_id)]


@router.get("/p/{slug}", response_class=HTMLResponse)
def dynamic_page(slug: str, db: Session = Depends(get_db)):
    resolver = PageResolver(DbPageSource(db))
    view = resolver.resolve(slug)
    status = {PageState.READY: 200, PageState.NOT_FOUND: 404}.get(view.state, 503)
    return HTMLResponse(render_page_view(view, resolver.meta), status_code=status)


# ── Admin : pages ─────────────────────────────────────────────────────────────

@router.get("/api/admin/custom-pages")
def admin_list_pages(request: Request, db: Session = Depends(get_db)):
    check_token(request)
    return [page_to_dict(p) for p in db_list_pages(db)]


@router.post("/api/admin/custom-pages", status_code=201)
def admin_create_page(payload: CustomPageInput, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    if db_get_page_by_slug(db, payload.slug):
        raise HTTPException(400, f"Slug '{payload.slug}' già in uso")
    data = payload.model_dump()
    data["menu_location"] = payload.menu_location.value
    page = db_create_page(db, CustomPageDB(**data))
    db_sync_page_header(db, page)
    log.info("Page créée : %s (%s)", page.slug, page.id)
    return page_to_dict(page)


@router.get("/api/admin/custom-pages/{page_id}")
def admin_get_page(page_id: str, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    return page_to_dict(_page_or_404(db, page_id))


@router.put("/api/admin/custom-pages/{page_id}")
def admin_update_page(page_id: str, payload: CustomPageUpdate, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    page = _page_or_404(db, page_id)
    data = payload.model_dump(exclude_unset=True)
    if data.get("slug") and data["slug"] != page.slug and db_get_page_by_slug(db, data["slug"]):
        raise HTTPException(400, f"Slug '{data['slug']}' già in uso")
    if data.get("menu_location") is not None:
        data["menu_location"] = payload.menu_location.value

    old_slug = page.slug
    page = db_update_page(db, page, **data)
    db_sync_page_header(db, page, old_slug=old_slug)
    return page_to_dict(page)


@router.delete("/api/admin/custom-pages/{page_id}", status_code=204)
def admin_delete_page(page_id: str, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    page = _page_or_404(db, page_id)
    db_delete_page(db, page)
    log.info("Page supprimée : %s", page_id)
    return Response(status_code=204)


# ── Admin : blocs ─────────────────────────────────────────────────────────────

@router.post("/api/admin/custom-pages/{page_id}/blocks", status_code=201)
def admin_create_block(page_id: str, payload: PageBlockInput, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    _page_or_404(db, page_id)
    raw = payload.content_json if payload.content_json is not None else default_content(payload.type)
    content = _checked_content(payload.type, raw)

    if payload.container_id:
        container = _block_or_404(db, payload.container_id)
        if container.custom_page_id != page_id or container.type != "container":
            raise HTTPException(400, "Il blocco di destinazione non è un container di questa pagina")
        child = {"id": str(uuid.uuid4()), "type": payload.type, "content": content}
        container = db_append_child(db, container, child)
        return JSONResponse(block_to_dict(container), status_code=201)

    order_index = payload.order_index if payload.order_index is not None else db_next_order_index(db, page_id)
    block = db_create_block(db, PageBlockDB(
        custom_page_id=page_id, type=payload.type, order_index=order_index, content_json=content,
    ))
    return block_to_dict(block)


@router.put("/api/admin/page-blocks/reorder")
def admin_reorder_blocks(payload: ReorderInput, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    moved = db_reorder_blocks(db, ((b.id, b.order_index) for b in payload.blocks))
    return {"ok": True, "moved": moved}


@router.put("/api/admin/page-blocks/{block_id}")
def admin_update_block(block_id: str, payload: PageBlockUpdate, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    block = _block_or_404(db, block_id)
    data = {}
    if payload.content_json is not None:
        data["content_json"] = _checked_content(block.type, payload.content_json)
    if payload.order_index is not None:
        data["order_index"] = payload.order_index
    return block_to_dict(db_update_block(db, block, **data))


@router.delete("/api/admin/page-blocks/{block_id}", status_code=204)
def admin_delete_block(block_id: str, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    db_delete_block(db, _block_or_404(db, block_id))
    return Response(status_code=204)
