# boutique_manager/core/exceptions.py
"""
Erreurs métier typées.

Les services lèvent ces erreurs; seuls les handlers enregistrés dans
main.py les traduisent en codes HTTP.
"""
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ErrorKind(str, Enum):
    AUTH_ERROR = "AUTH_ERROR"
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"
    BUSINESS_ERROR = "BUSINESS_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppError(Exception):
    """Erreur de base portant un type et des détails structurés"""
    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    default_message: str = "Erreur interne du serveur"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message, "code": self.kind.value}
        if self.details:
            body["details"] = self.details
        return body


class AuthenticationError(AppError):
    kind = ErrorKind.AUTH_ERROR
    default_message = "Non authentifié"


class AuthorizationError(AppError):
    kind = ErrorKind.AUTHORIZATION_ERROR
    default_message = "Accès refusé"


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION_ERROR
    default_message = "Données invalides"


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT
    default_message = "Cette ressource existe déjà"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        if field:
            details = {**(details or {}), "field": field}
        super().__init__(message, details)


class BusinessError(AppError):
    """Règle métier violée (dépendances existantes, stock insuffisant...)"""
    kind = ErrorKind.BUSINESS_ERROR
    default_message = "Opération impossible"


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Ressource non trouvée"


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> Dict[str, List[str]]:
    """Regroupe les erreurs Pydantic par chemin de champ"""
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        # Le premier élément indique la source (body, query, path)
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        path = ".".join(loc) or "_"
        grouped.setdefault(path, []).append(error.get("msg", "Valeur invalide"))
    return grouped
