"""
Data models — CustomPage, PageBlock, PageHeader
SQLAlchemy (SQLite) + Pydantic v2 (corps de requête camelCase)
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# ── ENUMS ──────────────────────────────────────────────────────────────

class MenuLocation(str, Enum):
    HEADER = "header"
    FOOTER = "footer"
    NONE   = "none"


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class CustomPageDB(Base):
    __tablename__ = "custom_pages"
    id:                Mapped[str]            = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    slug:              Mapped[str]            = mapped_column(sa.String, unique=True, nullable=False)
    title:             Mapped[str]            = mapped_column(sa.String, nullable=False)
    header_image_url:  Mapped[Optional[str]]  = mapped_column(sa.String)
    header_title:      Mapped[Optional[str]]  = mapped_column(sa.String)
    header_subtitle:   Mapped[Optional[str]]  = mapped_column(sa.Text)
    published:         Mapped[bool]           = mapped_column(sa.Boolean, default=False)
    menu_location:     Mapped[str]            = mapped_column(sa.String, default=MenuLocation.NONE.value)
    global_spacing:    Mapped[Optional[dict]] = mapped_column(sa.JSON)
    seo_title:         Mapped[Optional[str]]  = mapped_column(sa.String)
    seo_description:   Mapped[Optional[str]]  = mapped_column(sa.Text)
    created_at:        Mapped[datetime]       = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:        Mapped[datetime]       = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    blocks: Mapped[List["PageBlockDB"]] = relationship(
        "PageBlockDB", back_populates="page", cascade="all, delete-orphan", order_by="PageBlockDB.order_index",
    )


class PageBlockDB(Base):
    __tablename__ = "page_blocks"
    id:             Mapped[str]      = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    custom_page_id: Mapped[str]      = mapped_column(sa.String, sa.ForeignKey("custom_pages.id", ondelete="CASCADE"), nullable=False)
    type:           Mapped[str]      = mapped_column(sa.String, nullable=False)
    order_index:    Mapped[int]      = mapped_column(sa.Integer, default=0)
    content_json:   Mapped[dict]     = mapped_column(sa.JSON, default=dict)
    created_at:     Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:     Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    page: Mapped["CustomPageDB"] = relationship("CustomPageDB", back_populates="blocks")


class PageHeaderDB(Base):
    __tablename__ = "page_headers"
    page:           Mapped[str]           = mapped_column(sa.String, primary_key=True)
    image_url:      Mapped[Optional[str]] = mapped_column(sa.String)
    title:          Mapped[str]           = mapped_column(sa.String, nullable=False)
    subtitle:       Mapped[Optional[str]] = mapped_column(sa.Text)
    padding_top:    Mapped[str]           = mapped_column(sa.String, default="py-16")
    padding_bottom: Mapped[str]           = mapped_column(sa.String, default="py-24")
    min_height:     Mapped[str]           = mapped_column(sa.String, default="min-h-96")
    updated_at:     Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ── Pydantic (corps de requête) ────────────────────────────────────────

class CamelInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomPageInput(CamelInput):
    slug:             str
    title:            str
    header_image_url: Optional[str]            = None
    header_title:     Optional[str]            = None
    header_subtitle:  Optional[str]            = None
    published:        bool                     = False
    menu_location:    MenuLocation             = MenuLocation.NONE
    global_spacing:   Optional[Dict[str, Any]] = None
    seo_title:        Optional[str]            = None
    seo_description:  Optional[str]            = None


class CustomPageUpdate(CamelInput):
    slug:             Optional[str]            = None
    title:            Optional[str]            = None
    header_image_url: Optional[str]            = None
    header_title:     Optional[str]            = None
    header_subtitle:  Optional[str]            = None
    published:        Optional[bool]           = None
    menu_location:    Optional[MenuLocation]   = None
    global_spacing:   Optional[Dict[str, Any]] = None
    seo_title:        Optional[str]            = None
    seo_description:  Optional[str]            = None


class PageBlockInput(CamelInput):
    """containerId → le bloc est ajouté aux enfants de ce container au lieu de la page."""
    type:         str
    content_json: Optional[Dict[str, Any]] = None
    order_index:  Optional[int]            = None
    container_id: Optional[str]            = None


class PageBlockUpdate(CamelInput):
    content_json: Optional[Dict[str, Any]] = None
    order_index:  Optional[int]            = None


class BlockPosition(CamelInput):
    id:          str
    order_index: int


class ReorderInput(CamelInput):
    blocks: List[BlockPosition] = Field(default_factory=list)


class PageHeaderInput(CamelInput):
    title:          str
    image_url:      Optional[str] = None
    subtitle:       Optional[str] = None
    padding_top:    Optional[str] = None
    padding_bottom: Optional[str] = None
    min_height:     Optional[str] = None


# ── Sérialisation (camelCase, comme l'API d'origine) ───────────────────

def _iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


def page_to_dict(p: CustomPageDB) -> dict:
    return {
        "id": p.id, "slug": p.slug, "title": p.title,
        "headerImageUrl": p.header_image_url, "headerTitle": p.header_title,
        "headerSubtitle": p.header_subtitle,
        "published": bool(p.published), "menuLocation": p.menu_location,
        "globalSpacing": p.global_spacing,
        "seoTitle": p.seo_title, "seoDescription": p.seo_description,
        "createdAt": _iso(p.created_at), "updatedAt": _iso(p.updated_at),
    }


def block_to_dict(b: PageBlockDB) -> dict:
    return {
        "id": b.id, "customPageId": b.custom_page_id, "type": b.type,
        "orderIndex": b.order_index, "contentJson": b.content_json or {},
        "createdAt": _iso(b.created_at), "updatedAt": _iso(b.updated_at),
    }


def header_to_dict(h: PageHeaderDB) -> dict:
    return {
        "page": h.page, "imageUrl": h.image_url, "title": h.title, "subtitle": h.subtitle,
        "paddingTop": h.padding_top, "paddingBottom": h.padding_bottom,
        "minHeight": h.min_height, "updatedAt": _iso(h.updated_at),
    }
