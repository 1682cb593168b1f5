"""SQLite — init + session + CRUD helpers"""
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, CustomPageDB, PageBlockDB, PageHeaderDB

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"
DATA_DIR.mkdir(exist_ok=True)

DB_PATH      = os.getenv("DB_PATH", str(DATA_DIR / "longboard_cms.db"))
ENGINE       = create_engine(f"sqlite:///{DB_PATH}", connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)

HEADER_DEFAULT_LAYOUT = {"padding_top": "py-16", "padding_bottom": "py-24", "min_height": "min-h-96"}


@event.listens_for(ENGINE, "connect")
def _sqlite_foreign_keys(dbapi_conn, _record):
    # ON DELETE CASCADE de page_blocks
    dbapi_conn.execute("PRAGMA foreign_keys=ON")


def init_db():
    Base.metadata.create_all(bind=ENGINE)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def new_session() -> Session:
    """Session indépendante (hors requête FastAPI)."""
    return SessionLocal()


# ── Custom pages ──
def db_list_pages(db: Session, published_only: bool = False) -> List[CustomPageDB]:
    q = db.query(CustomPageDB)
    if published_only:
        q = q.filter_by(published=True)
    return q.order_by(CustomPageDB.created_at.desc()).all()

def db_get_page(db: Session, page_id: str) -> Optional[CustomPageDB]:
    return db.query(CustomPageDB).filter_by(id=page_id).first()

def db_get_page_by_slug(db: Session, slug: str) -> Optional[CustomPageDB]:
    return db.query(CustomPageDB).filter_by(slug=slug).first()

def db_create_page(db: Session, obj: CustomPageDB) -> CustomPageDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_update_page(db: Session, page: CustomPageDB, **kwargs) -> CustomPageDB:
    for k, v in kwargs.items():
        setattr(page, k, v)
    db.commit(); db.refresh(page); return page

def db_delete_page(db: Session, page: CustomPageDB):
    db.delete(page); db.commit()


# ── Page blocks ──
def db_list_blocks(db: Session, page_id: str) -> List[PageBlockDB]:
    return db.query(PageBlockDB).filter_by(custom_page_id=page_id).order_by(PageBlockDB.order_index).all()

def db_get_block(db: Session, block_id: str) -> Optional[PageBlockDB]:
    return db.query(PageBlockDB).filter_by(id=block_id).first()

def db_next_order_index(db: Session, page_id: str) -> int:
    last = db.query(PageBlockDB).filter_by(custom_page_id=page_id).order_by(PageBlockDB.order_index.desc()).first()
    return last.order_index + 1 if last else 0

def db_create_block(db: Session, obj: PageBlockDB) -> PageBlockDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_update_block(db: Session, block: PageBlockDB, **kwargs) -> PageBlockDB:
    for k, v in kwargs.items():
        setattr(block, k, v)
    db.commit(); db.refresh(block); return block

def db_delete_block(db: Session, block: PageBlockDB):
    db.delete(block); db.commit()

def db_append_child(db: Session, container: PageBlockDB, child: dict) -> PageBlockDB:
    """Ajoute un enfant à la fin de contentJson.children (nouveau dict : mutation JSON détectée)."""
    content = dict(container.content_json or {})
    content["children"] = [*(content.get("children") or []), child]
    return db_update_block(db, container, content_json=content)

def db_reorder_blocks(db: Session, positions: Iterable[Tuple[str, int]]) -> int:
    """Applique les orderIndex reçus ; ids inconnus ignorés. Retourne le nombre de blocs déplacés."""
    moved = 0
    for block_id, order_index in positions:
        block = db_get_block(db, block_id)
        if block is None:
            log.debug("reorder : bloc %s absent, ignoré", block_id)
            continue
        block.order_index = order_index
        moved += 1
    db.commit()
    return moved


# ── Page headers ──
def db_list_headers(db: Session) -> List[PageHeaderDB]:
    return db.query(PageHeaderDB).order_by(PageHeaderDB.page).all()

def db_get_header(db: Session, page: str) -> Optional[PageHeaderDB]:
    return db.query(PageHeaderDB).filter_by(page=page).first()

def db_upsert_header(db: Session, page: str, **kwargs) -> PageHeaderDB:
    header = db_get_header(db, page)
    if header is None:
        header = PageHeaderDB(page=page)
        db.add(header)
    for k, v in kwargs.items():
        if v is None and k in HEADER_DEFAULT_LAYOUT:
            v = HEADER_DEFAULT_LAYOUT[k]
        setattr(header, k, v)
    db.commit(); db.refresh(header); return header

def db_delete_header(db: Session, page: str) -> bool:
    header = db_get_header(db, page)
    if header is None:
        return False
    db.delete(header); db.commit()
    return True

def db_sync_page_header(db: Session, page: CustomPageDB, old_slug: Optional[str] = None) -> PageHeaderDB:
    """Header d'une page custom recalé sur ses champs header* ; l'ancien slug est supprimé."""
    if old_slug and old_slug != page.slug:
        db_delete_header(db, old_slug)
    return db_upsert_header(
        db, page.slug,
        title=page.header_title or page.title,
        image_url=page.header_image_url or "",
        subtitle=page.header_subtitle or "",
        **HEADER_DEFAULT_LAYOUT,
    )
