"""
Nettoyage HTML des blocs `text` à l'écriture admin (bleach).
Le renderer injecte le HTML tel quel : tout passe par ici avant stockage.
"""
import copy
from typing import Any, Dict

import bleach

ALLOWED_TAGS = [
    "p", "br", "strong", "b", "em", "i", "u", "s", "code", "pre", "span", "div",
    "h1", "h2", "h3", "h4", "h5", "h6", "ul", "ol", "li", "blockquote",
    "a", "img", "hr", "table", "thead", "tbody", "tr", "th", "td",
]
ALLOWED_ATTRIBUTES = {
    "a":    ["href", "title", "target", "rel"],
    "img":  ["src", "alt", "title", "width", "height"],
    "*":    ["class"],
}


def clean_html(html: str) -> str:
    return bleach.clean(html or "", tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES, strip=True)


def _clean_child(child: Any) -> Any:
    if not isinstance(child, dict):
        return child
    for key in ("contentJson", "content"):
        if isinstance(child.get(key), dict):
            child[key] = sanitize_content(child.get("type", ""), child[key])
            return child
    # forme aplatie {type, html, ...}
    return sanitize_content(child.get("type", ""), child)


def sanitize_content(block_type: str, content: Dict[str, Any]) -> Dict[str, Any]:
    """Copie nettoyée du contentJson ; les enfants d'un container sont traités récursivement."""
    content = copy.deepcopy(content or {})
    if block_type == "text" and isinstance(content.get("html"), str):
        content["html"] = clean_html(content["html"])
    elif block_type == "container" and isinstance(content.get("children"), list):
        content["children"] = [_clean_child(c) for c in content["children"]]
    return content
