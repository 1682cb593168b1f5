"""
Cache de requêtes — clé = tuple ("/api/page-headers", "courses"), invalidation par préfixe.
Pas de verrou : la dernière écriture gagne.
"""
import logging
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

log = logging.getLogger(__name__)

Key = Tuple[Hashable, ...]

HEADERS_KEY: Key = ("/api/page-headers",)
PAGES_KEY: Key   = ("/api/custom-pages",)


class QueryCache:
    def __init__(self):
        self._entries: Dict[Key, Any] = {}

    def __contains__(self, key: Key) -> bool:
        return key in self._entries

    def get(self, key: Key, default: Optional[Any] = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: Key, value: Any) -> None:
        self._entries[key] = value

    def fetch(self, key: Key, loader: Callable[[], Any]) -> Any:
        """Valeur en cache, sinon loader() (les exceptions du loader remontent, rien n'est mis en cache)."""
        if key not in self._entries:
            self._entries[key] = loader()
        return self._entries[key]

    def invalidate(self, prefix: Key) -> int:
        stale = [k for k in self._entries if k[:len(prefix)] == prefix]
        for k in stale:
            del self._entries[k]
        log.debug("cache : %d clé(s) invalidée(s) pour %s", len(stale), prefix)
        return len(stale)
