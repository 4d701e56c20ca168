"""
Entidades del dominio.
"""
from formio_import.domain.entities.publication import (
    DEFAULT_LANGUAGE,
    PublicationInfo,
    get_publication_info,
    get_published_languages,
    normalize_language,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "PublicationInfo",
    "get_publication_info",
    "get_published_languages",
    "normalize_language",
]
