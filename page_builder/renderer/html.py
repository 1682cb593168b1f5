"""
Renderer HTML — bloc (type + contentJson) → fragment HTML.
Dispatch par tag ; tag inconnu → None : le bloc est ignoré, ses voisins sont rendus.

Le HTML des blocs `text` est injecté tel quel (nettoyé en amont, à l'écriture admin).
"""
import logging
import re
from html import escape
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
from urllib.parse import parse_qs, urlparse

from pydantic import ValidationError

from ..blocks import (
    BLOCK_TYPES, SPACING_FIELDS, BlockSpacing, PageBlock, as_page_block, block_type_of,
    TextBlockContent, ImageBlockContent, CtaBlockContent, GalleryBlockContent,
    VideoBlockContent, ContainerBlockContent, BannerBlockContent,
)

log = logging.getLogger(__name__)

YOUTUBE_EMBED = "https://www.youtube.com/embed/{id}"
VIMEO_EMBED   = "https://player.vimeo.com/video/{id}"
# Identifiant introuvable (ex: lien YouTube sans ?v=) → URL d'embed dégradée, pas d'erreur
MISSING_VIDEO_ID = "undefined"

_GALLERY_GRID = {
    2: "gallery-block--cols-2",
    3: "gallery-block--cols-3",
    4: "gallery-block--cols-4",
}
_CONTAINER_COLUMNS = range(1, 7)
_CONTAINER_DEFAULT_COLUMNS = 2
_CONTAINER_DEFAULT_GAP = "1rem"

_VIDEO_ALLOW = "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"


# ── Helpers ─────────────────────────────────────────────────────────────────

def _attr(value: Optional[str]) -> str:
    return escape(value or "", quote=True)


def is_external(url: str) -> bool:
    """Lien externe = commence littéralement par "http"."""
    return url.startswith("http")


def _link_attrs(url: str) -> str:
    if is_external(url):
        return ' target="_blank" rel="noopener noreferrer"'
    return ""


def _kebab(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "-", name.replace("_", "-")).lower()


def css_props(props: Optional[Dict[str, Any]]) -> List[str]:
    """{"fontSize": "2rem"} → ["font-size:2rem"] ; valeurs vides ignorées."""
    if not props:
        return []
    return [f"{_kebab(k)}:{v}" for k, v in props.items() if v not in (None, "")]


def spacing_css(spacing: Optional[BlockSpacing]) -> List[str]:
    """Seuls les champs renseignés sont émis (les autres n'écrasent rien)."""
    if spacing is None:
        return []
    out = []
    for field in SPACING_FIELDS:
        value = getattr(spacing, field)
        if value:
            out.append(f"{_kebab(field)}:{value}")
    return out


def _style(parts: List[str]) -> str:
    return f' style="{_attr(";".join(parts))}"' if parts else ""


def embed_url(url: str) -> str:
    """
    URL vidéo → URL d'embed.
    youtu.be/<id>?…  → youtube embed
    youtube.com?v=<id> → youtube embed
    vimeo.com/<id>?… → player vimeo
    sinon → inchangée (supposée déjà embarquable)
    """
    if "youtube.com" in url or "youtu.be" in url:
        if "youtu.be" in url:
            parts = url.split("youtu.be/")
            video_id = parts[1].split("?")[0] if len(parts) > 1 else None
        else:
            video_id = parse_qs(urlparse(url).query, keep_blank_values=True).get("v", [None])[0]
        return YOUTUBE_EMBED.format(id=MISSING_VIDEO_ID if video_id is None else video_id)
    if "vimeo.com" in url:
        parts = url.split("vimeo.com/")
        video_id = parts[1].split("?")[0] if len(parts) > 1 else None
        return VIMEO_EMBED.format(id=MISSING_VIDEO_ID if video_id is None else video_id)
    return url


# ── Renderers par type ──────────────────────────────────────────────────────

def render_text_block(c: TextBlockContent) -> str:
    style = _style(css_props(c.typography) + spacing_css(c.spacing))
    return f'<div class="text-block prose"{style}>{c.html}</div>'


def render_image_block(c: ImageBlockContent) -> str:
    dims = c.dimensions
    styles = [
        f"width:{dims.width if dims and dims.width else 'auto'}",
        f"height:{dims.height if dims and dims.height else 'auto'}",
    ]
    if dims and dims.aspect_ratio:
        styles.append(f"aspect-ratio:{dims.aspect_ratio}")
    styles += spacing_css(c.spacing)

    align = f" image-block__img--{c.alignment}" if c.alignment else ""
    img = f'<img src="{_attr(c.image_url)}" alt="{_attr(c.alt)}" class="image-block__img{align}"{_style(styles)}>'
    if c.link:
        img = f'<a href="{_attr(c.link)}"{_link_attrs(c.link)}>{img}</a>'
    caption = f'\n  <figcaption class="image-block__caption">{escape(c.caption)}</figcaption>' if c.caption else ""
    return f'<figure class="image-block">\n  {img}{caption}\n</figure>'


def render_cta_block(c: CtaBlockContent) -> str:
    description = f'\n  <p class="cta-block__description">{escape(c.description)}</p>' if c.description else ""
    return f"""<div class="cta-block"{_style(spacing_css(c.spacing))}>
  <h3 class="cta-block__title">{escape(c.title)}</h3>{description}
  <a href="{_attr(c.button_url)}" class="btn btn-{c.variant} btn-lg"{_link_attrs(c.button_url)}>{escape(c.button_text)}<span class="cta-block__arrow" aria-hidden="true">→</span></a>
</div>"""


def render_gallery_block(c: GalleryBlockContent) -> str:
    grid = _GALLERY_GRID.get(c.columns or 3, _GALLERY_GRID[3])
    styles = ([f"gap:{c.gap}"] if c.gap else []) + spacing_css(c.spacing)

    items = []
    for i, image in enumerate(c.images, 1):
        caption = f'<figcaption class="gallery-block__caption">{escape(image.caption)}</figcaption>' if image.caption else ""
        items.append(
            f'<figure class="gallery-block__item">'
            f'<img src="{_attr(image.url)}" alt="{_attr(image.alt or f"Gallery image {i}")}" loading="lazy">'
            f'{caption}</figure>'
        )
    return f'<div class="gallery-block {grid}"{_style(styles)}>{"".join(items)}</div>'


def render_video_block(c: VideoBlockContent) -> str:
    title = f'<h3 class="video-block__title">{escape(c.title)}</h3>\n  ' if c.title else ""
    description = f'<p class="video-block__description">{escape(c.description)}</p>\n  ' if c.description else ""
    return f"""<div class="video-block"{_style(spacing_css(c.spacing))}>
  {title}{description}<div class="video-block__frame">
    <iframe src="{_attr(embed_url(c.video_url))}" allow="{_VIDEO_ALLOW}" allowfullscreen></iframe>
  </div>
</div>"""


def render_banner_block(c: BannerBlockContent) -> str:
    wrapper = "banner-block--boxed" if c.variant == "boxed" else "banner-block--fullwidth"
    styles = []
    if c.background_image:
        styles += [f"background-image:url('{c.background_image}')", "background-size:cover", "background-position:center"]
    if c.background_color:
        styles.append(f"background-color:{c.background_color}")
    styles += spacing_css(c.spacing)

    parts = []
    text = c.content
    if text and text.title:
        parts.append(f'<h2 class="banner-block__title"{_style(css_props(text.title_typography))}>{escape(text.title)}</h2>')
    if text and text.subtitle:
        parts.append(f'<p class="banner-block__subtitle"{_style(css_props(text.subtitle_typography))}>{escape(text.subtitle)}</p>')
    if c.cta and c.cta.text and c.cta.link:
        parts.append(f'<a href="{_attr(c.cta.link)}" class="btn"{_style(css_props(c.cta.button_style))}>{escape(c.cta.text)}</a>')

    return f'<div class="banner-block {wrapper}"{_style(styles)}>\n  <div class="banner-block__inner">{"".join(parts)}</div>\n</div>'


def render_container_block(c: ContainerBlockContent) -> str:
    if c.layout == "columns":
        n = c.columns if c.columns in _CONTAINER_COLUMNS else _CONTAINER_DEFAULT_COLUMNS
        classes = f"container-block container-block--columns container-block--cols-{n}"
        styles = ["display:grid", f"grid-template-columns:repeat({n},minmax(0,1fr))"]
    else:
        classes = "container-block container-block--rows"
        styles = ["display:flex", "flex-direction:column"]
    styles.append(f"gap:{c.gap or _CONTAINER_DEFAULT_GAP}")
    styles += spacing_css(c.spacing)

    inner = "\n".join(render_blocks(c.children or []))
    return f'<div class="{classes}"{_style(styles)}>\n{inner}\n</div>'


_RENDERERS: Dict[str, Callable[[Any], str]] = {
    "text":      render_text_block,
    "image":     render_image_block,
    "cta":       render_cta_block,
    "gallery":   render_gallery_block,
    "video":     render_video_block,
    "container": render_container_block,
    "banner":    render_banner_block,
}


# ── Dispatch ────────────────────────────────────────────────────────────────

def render_block(block: Union[PageBlock, Dict[str, Any]]) -> Optional[str]:
    """Rend un bloc. Tag inconnu → None, contenu invalide → div vide (jamais d'exception)."""
    block_type = block_type_of(block)
    renderer = _RENDERERS.get(block_type)
    if renderer is None:
        log.debug("Bloc ignoré : type %r inconnu", block_type)
        return None
    try:
        block = as_page_block(block)
        content = BLOCK_TYPES[block_type].model_validate(block.content_json)
    except ValidationError as e:
        log.warning("Bloc %s : contenu invalide (%d erreurs), rendu vide", block_type, e.error_count())
        return f'<div class="block block--{block_type} block--invalid"></div>'
    return renderer(content)


def render_blocks(blocks: Iterable[Union[PageBlock, Dict[str, Any]]]) -> List[str]:
    """Rend une séquence ordonnée ; les blocs inconnus sont sautés sans interrompre la suite."""
    fragments = []
    for block in blocks:
        fragment = render_block(block)
        if fragment is not None:
            fragments.append(fragment)
    return fragments
