"""
Page headers — bandeau hero par page (clé statique ou slug de page custom).

GET    /api/page-headers                  → tous les headers
GET    /api/page-headers/{page}           → header (404 = aucun header configuré)
PUT    /api/admin/page-headers/{page}     → upsert
DELETE /api/admin/page-headers/{page}     → suppression (204)
GET    /admin/page-headers                → onglet admin
"""
import logging
from html import escape

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ...database import (
    get_db, db_list_headers, db_get_header, db_upsert_header, db_delete_header, db_list_pages,
    db_get_page_by_slug,
)
from ...header_admin import DEFAULT_PAGE, header_form_values, page_choices
from ...models import PageHeaderInput, header_to_dict, page_to_dict
from ..auth import check_token

log = logging.getLogger(__name__)
router = APIRouter(tags=["Page headers"])


# ── API publique ──────────────────────────────────────────────────────────────

@router.get("/api/page-headers")
def list_headers(db: Session = Depends(get_db)):
    return [header_to_dict(h) for h in db_list_headers(db)]


@router.get("/api/page-headers/{page}")
def get_header(page: str, db: Session = Depends(get_db)):
    header = db_get_header(db, page)
    if not header:
        raise HTTPException(404, f"Nessuna intestazione per '{page}'")
    return header_to_dict(header)


# ── Admin ─────────────────────────────────────────────────────────────────────

@router.put("/api/admin/page-headers/{page}")
def upsert_header(page: str, payload: PageHeaderInput, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    if not payload.title.strip():
        raise HTTPException(400, "Il titolo è obbligatorio")
    header = db_upsert_header(db, page, **payload.model_dump())
    log.info("Header %s enregistré", page)
    return header_to_dict(header)


@router.delete("/api/admin/page-headers/{page}", status_code=204)
def delete_header(page: str, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    if db_delete_header(db, page):
        log.info("Header %s supprimé", page)
    return Response(status_code=204)


_FIELDS = [
    ("imageUrl",      "URL immagine",    "text"),
    ("title",         "Titolo *",        "text"),
    ("subtitle",      "Sottotitolo",     "textarea"),
    ("paddingTop",    "Padding superiore", "text"),
    ("paddingBottom", "Padding inferiore", "text"),
    ("minHeight",     "Altezza minima",  "text"),
]


@router.get("/admin/page-headers", response_class=HTMLResponse)
def page_headers_admin(request: Request, page: str = DEFAULT_PAGE, db: Session = Depends(get_db)):
    token = check_token(request)
    header = db_get_header(db, page)
    custom_page = db_get_page_by_slug(db, page) if header is None else None
    values = header_form_values(
        header_to_dict(header) if header else None,
        page_to_dict(custom_page) if custom_page else None,
    )
    choices = page_choices([page_to_dict(p) for p in db_list_pages(db)])

    options = "".join(
        f'<option value="{escape(key, quote=True)}"{" selected" if key == page else ""}>{escape(label)}</option>'
        for key, label in choices
    )
    inputs = ""
    for name, label, kind in _FIELDS:
        value = escape(values[name], quote=True)
        if kind == "textarea":
            field = f'<textarea name="{name}" rows="3">{value}</textarea>'
        else:
            field = f'<input type="text" name="{name}" value="{value}">'
        inputs += f'<label>{label}</label>{field}\n'

    preview = (f'<img src="{escape(values["imageUrl"], quote=True)}" '
               f'style="width:100%;max-height:180px;object-fit:cover;border-radius:6px;margin-bottom:14px">'
               if values["imageUrl"] else "")

    return HTMLResponse(f"""<!DOCTYPE html><html lang="it"><head>
<meta charset="UTF-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>Intestazioni pagine — Admin</title>
<style>*{{box-sizing:border-box;margin:0;padding:0}}body{{font-family:'Segoe UI',sans-serif;background:#0f0f1a;color:#e8e8f0}}
label{{display:block;color:#aaa;font-size:11px;margin:12px 0 4px}}
input,textarea,select{{width:100%;background:#0f0f1a;border:1px solid #2a2a4e;color:#e8e8f0;padding:8px 12px;border-radius:6px;font-size:13px;font-family:inherit}}
.toast{{position:fixed;bottom:24px;right:24px;background:#1a1a2e;color:#fff;padding:12px 20px;border-radius:8px;font-size:13px;display:none;z-index:999}}
.toast.err{{background:#4a1a1a;color:#e94560}}</style>
</head><body>
<div style="max-width:720px;margin:0 auto;padding:24px">
  <h1 style="color:#fff;font-size:18px;margin-bottom:4px">Intestazioni pagine</h1>
  <p style="color:#aaa;font-size:12px;margin-bottom:18px">Immagine, titolo e sottotitolo del banner in cima a ogni pagina.</p>
  <label>Pagina</label>
  <select id="page-select" onchange="location.href='/admin/page-headers?page='+encodeURIComponent(this.value)+'&token='+T">{options}</select>
  <form id="header-form" onsubmit="saveHeader(event)" style="background:#1a1a2e;border:1px solid #2a2a4e;border-radius:8px;padding:20px;margin-top:18px">
    {preview}
{inputs}
    <div id="title-error" style="color:#e94560;font-size:12px;margin-top:6px"></div>
    <button id="save-btn" type="submit"
      style="background:#e94560;color:#fff;border:none;padding:10px 24px;border-radius:6px;cursor:pointer;font-size:13px;font-weight:bold;width:100%;margin-top:18px">
      Salva modifiche
    </button>
  </form>
</div>
<div id="toast" class="toast" onclick="this.style.display='none'"></div>

<script>
const T = '{escape(token, quote=True)}';
const PAGE = '{escape(page, quote=True)}';
function toast(msg, err) {{
  const t = document.getElementById('toast');
  t.textContent = msg; t.className = err ? 'toast err' : 'toast'; t.style.display = 'block';
  if (!err) setTimeout(() => t.style.display = 'none', 3000);
}}
async function saveHeader(e) {{
  e.preventDefault();
  const btn = document.getElementById('save-btn');
  if (btn.disabled) return;
  const data = Object.fromEntries(new FormData(document.getElementById('header-form')).entries());
  const titleError = document.getElementById('title-error');
  if (!data.title.trim()) {{ titleError.textContent = 'Il titolo è obbligatorio'; return; }}
  titleError.textContent = '';
  btn.disabled = true; btn.textContent = 'Salvataggio…';
  try {{
    const r = await fetch('/api/admin/page-headers/' + encodeURIComponent(PAGE) + '?token=' + T, {{
      method: 'PUT', headers: {{'Content-Type': 'application/json'}}, body: JSON.stringify(data)
    }});
    if (r.ok) toast("Salvato! L'intestazione è stata aggiornata con successo.");
    else toast('Errore : impossibile salvare le modifiche.', true);
  }} catch (err) {{
    toast('Errore : impossibile salvare le modifiche.', true);
  }} finally {{
    btn.disabled = false; btn.textContent = 'Salva modifiche';
  }}
}}
</script>
</body></html>""")
