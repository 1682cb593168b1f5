"""
Erreurs page_builder — taxonomie partagée avec l'app.

NotFound              → slug/header absent, fallback silencieux (jamais loggé en erreur)
ValidationFailure     → champ invalide ou requis manquant, affiché inline
TransportFailure      → réseau / stockage KO, notification + abandon (pas de retry)
UnrecognizedBlockType → type de bloc inconnu ; le renderer l'ignore, l'admin le refuse
"""
from typing import Optional


class PageBuilderError(Exception):
    """Classe parente de toutes les erreurs page_builder."""


class NotFound(PageBuilderError):
    pass


class ValidationFailure(PageBuilderError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class TransportFailure(PageBuilderError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UnrecognizedBlockType(PageBuilderError):
    def __init__(self, block_type: str):
        super().__init__(f"Type de bloc inconnu : {block_type!r}")
        self.block_type = block_type
