"""
Client HTTP de l'API CMS (requests).

404 → NotFound (absence valide, l'appelant retombe sur un défaut) ; connexion KO ou
autre statut non-2xx → TransportFailure. Pas de retry.
"""
import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from page_builder.errors import NotFound, TransportFailure

log = logging.getLogger(__name__)

CMS_BASE_URL    = os.getenv("CMS_BASE_URL", "http://localhost:8000")
DEFAULT_TIMEOUT = 10


class CmsClient:
    def __init__(self, base_url: str = CMS_BASE_URL, session=None,
                 timeout: float = DEFAULT_TIMEOUT, admin_token: Optional[str] = None):
        self.base_url    = base_url.rstrip("/")
        self.session     = session or requests.Session()
        self.timeout     = timeout
        self.admin_token = admin_token

    def _request(self, method: str, path: str, json: Optional[dict] = None, admin: bool = False):
        headers = {"X-Admin-Token": self.admin_token} if admin and self.admin_token else {}
        try:
            return self.session.request(
                method, f"{self.base_url}{path}", json=json, headers=headers, timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.warning("%s %s : %s", method, path, e)
            raise TransportFailure(f"{method} {path} : {e}") from e

    def _json(self, resp, absent=(404,)) -> Any:
        if resp.status_code in absent:
            raise NotFound(f"HTTP {resp.status_code} {resp.url}")
        if not 200 <= resp.status_code < 300:
            log.warning("%s → HTTP %s", resp.url, resp.status_code)
            raise TransportFailure(f"HTTP {resp.status_code}", status_code=resp.status_code)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # ── Pages ──
    def get_page_by_slug(self, slug: str) -> Dict[str, Any]:
        """Page ou NotFound ; une page non publiée (403) est traitée comme absente."""
        resp = self._request("GET", f"/api/custom-pages/slug/{quote(slug, safe='')}")
        return self._json(resp, absent=(403, 404))

    def get_blocks(self, page_id: str) -> List[Dict[str, Any]]:
        resp = self._request("GET", f"/api/custom-pages/{quote(page_id, safe='')}/blocks")
        return self._json(resp, absent=()) or []

    def list_pages(self) -> List[Dict[str, Any]]:
        return self._json(self._request("GET", "/api/custom-pages"), absent=()) or []

    # ── Page headers ──
    def list_headers(self) -> List[Dict[str, Any]]:
        return self._json(self._request("GET", "/api/page-headers"), absent=()) or []

    def get_header(self, page: str) -> Dict[str, Any]:
        return self._json(self._request("GET", f"/api/page-headers/{quote(page, safe='')}"))

    def put_header(self, page: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        resp = self._request("PUT", f"/api/admin/page-headers/{quote(page, safe='')}", json=data, admin=True)
        return self._json(resp, absent=())

    def delete_header(self, page: str) -> None:
        try:
            self._json(self._request("DELETE", f"/api/admin/page-headers/{quote(page, safe='')}", admin=True))
        except NotFound:
            log.debug("header %s déjà absent", page)
