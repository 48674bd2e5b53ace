"""
String localization for user-facing messages.

Messages are looked up by their English text. A culture without an entry for
a key falls back to the default culture and finally to the key itself, so
English never needs a catalog of its own beyond overrides.
"""

import logging
from typing import Dict, Optional

from fastapi import Request

from webapi.core.config import settings, get_supported_cultures

logger = logging.getLogger(__name__)


MESSAGE_CATALOGS: Dict[str, Dict[str, str]] = {
    "en": {},
    "fr": {
        "Role Not Found": "Rôle introuvable",
        "Brand Not Found": "Marque introuvable",
        "Not allowed to delete {0} Role.": "Suppression du rôle {0} non autorisée.",
        "Not allowed to delete {0} Role as it is being used.":
            "Suppression du rôle {0} non autorisée car il est utilisé.",
        "Role {0} Deleted.": "Rôle {0} supprimé.",
        "Role {0} Created.": "Rôle {0} créé.",
        "Role {0} Updated.": "Rôle {0} mis à jour.",
        "Register role failed": "Échec de la création du rôle",
        "Update role failed": "Échec de la mise à jour du rôle",
        "Not allowed to modify {0} Role.": "Modification du rôle {0} non autorisée.",
        "Not allowed to modify Permissions for this Role.":
            "Modification des permissions de ce rôle non autorisée.",
        "Not allowed to deselect {0} or {1} or {2} for this Role.":
            "Impossible de retirer {0}, {1} ou {2} pour ce rôle.",
        "Update permissions failed.": "Échec de la mise à jour des permissions.",
        "Permissions Updated.": "Permissions mises à jour.",
        "Role name '{0}' is already taken.": "Le nom de rôle '{0}' est déjà utilisé.",
        "Role name '{0}' is invalid.": "Le nom de rôle '{0}' est invalide.",
        "Brand {0} already exists.": "La marque {0} existe déjà.",
        "Authentication required": "Authentification requise",
        "Invalid or expired token": "Jeton invalide ou expiré",
        "Permission denied": "Permission refusée",
        "Internal server error": "Erreur interne du serveur",
    },
}


class Localizer:
    """Maps message keys to display strings for one culture."""

    def __init__(self, culture: Optional[str] = None, catalogs: Optional[Dict[str, Dict[str, str]]] = None):
        self.culture = culture or settings.default_culture
        self.catalogs = catalogs if catalogs is not None else MESSAGE_CATALOGS

    def __getitem__(self, key: str) -> str:
        for culture in (self.culture, settings.default_culture):
            catalog = self.catalogs.get(culture)
            if catalog and key in catalog:
                return catalog[key]
        return key

    def format(self, key: str, *args) -> str:
        """Localize ``key`` and substitute ``{0}``-style placeholders."""
        return self[key].format(*args)


def resolve_culture(accept_language: Optional[str]) -> str:
    """Pick the first supported culture from an Accept-Language header."""
    if not accept_language:
        return settings.default_culture

    supported = get_supported_cultures()
    for part in accept_language.split(","):
        tag = part.split(";")[0].strip().lower()
        if not tag:
            continue
        language = tag.split("-")[0]
        if tag in supported:
            return tag
        if language in supported:
            return language

    logger.debug(f"No supported culture in Accept-Language '{accept_language}', using default")
    return settings.default_culture


def get_localizer(request: Request) -> Localizer:
    """FastAPI dependency returning a localizer for the request's culture."""
    return Localizer(resolve_culture(request.headers.get("accept-language")))
