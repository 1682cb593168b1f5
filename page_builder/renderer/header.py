"""Page header — bandeau hero (image + titre + sous-titre), indépendant des blocs."""
from html import escape
from typing import Optional

DEFAULT_PADDING_TOP = "py-16"
DEFAULT_PADDING_BOTTOM = "py-24"
DEFAULT_MIN_HEIGHT = "min-h-96"


def render_page_header(
    title: str,
    image_url: Optional[str] = None,
    subtitle: Optional[str] = None,
    padding_top: Optional[str] = None,
    padding_bottom: Optional[str] = None,
    min_height: Optional[str] = None,
) -> str:
    """Sans image → fond dégradé. Les paddings sont des classes utilitaires (py-16 → pt-16)."""
    padding_top = padding_top or DEFAULT_PADDING_TOP
    padding_bottom = padding_bottom or DEFAULT_PADDING_BOTTOM
    padding_class = f"{padding_top.replace('py-', 'pt-')} {padding_bottom.replace('py-', 'pb-')}"

    if image_url:
        background = (
            f'<img src="{escape(image_url, quote=True)}" alt="{escape(title, quote=True)}" class="page-header__image">\n'
            f'  <div class="page-header__overlay"></div>'
        )
    else:
        background = '<div class="page-header__gradient"></div>'

    subtitle_html = f'\n    <p class="page-header__subtitle">{escape(subtitle)}</p>' if subtitle else ""

    return f"""<header class="page-header {escape(min_height or DEFAULT_MIN_HEIGHT)}">
  {background}
  <div class="page-header__content {escape(padding_class)}">
    <h1 class="page-header__title">{escape(title)}</h1>{subtitle_html}
  </div>
</header>"""
