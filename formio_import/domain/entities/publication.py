"""
Reglas de dominio sobre idiomas y estado de publicacion de un formulario.

Funciones puras (sin I/O) sobre los valores de las properties de Form.io,
para poder testearlas facilmente.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from formio_import.shared.utils.datetime_utils import DateTimeUtils

DEFAULT_LANGUAGE = "nb"

# Codigos con region que se reducen a su codigo base
_LANGUAGE_ALIASES = {
    "nb-NO": "nb",
    "nn-NO": "nn",
}


def normalize_language(code: str) -> str:
    """'nn-NO' -> 'nn', 'nb-NO' -> 'nb'. Cualquier otro codigo se deja igual."""
    return _LANGUAGE_ALIASES.get(code, code)


def get_published_languages(published_languages: Optional[Sequence[str]]) -> list[str]:
    """
    Idiomas publicados de un formulario, normalizados y sin duplicados.
    El idioma por defecto (nb) se incluye siempre.
    """
    languages: list[str] = []
    for code in published_languages or []:
        lang = normalize_language(code)
        if lang not in languages:
            languages.append(lang)
    if DEFAULT_LANGUAGE not in languages:
        languages.append(DEFAULT_LANGUAGE)
    return languages


@dataclass(frozen=True)
class PublicationInfo:
    """Estado de publicacion derivado de las properties del formulario."""

    is_published: bool
    published_at: Optional[datetime] = None
    published_by: Optional[str] = None
    languages: list[str] = field(default_factory=list)


def get_publication_info(
    published: Optional[str],
    unpublished: Optional[str],
    *,
    published_by: Optional[str] = None,
    published_languages: Optional[Sequence[str]] = None,
    is_test_form: bool = False,
) -> PublicationInfo:
    """
    Un formulario esta publicado si tiene timestamp 'published' y no tiene
    'unpublished'. Cualquier valor en 'unpublished' (aunque sea anterior a
    'published') lo deja despublicado. Los formularios de test nunca se publican.
    """
    if is_test_form or unpublished:
        return PublicationInfo(is_published=False)

    published_at = DateTimeUtils.from_iso_string(published)
    if published_at is None:
        return PublicationInfo(is_published=False)

    return PublicationInfo(
        is_published=True,
        published_at=published_at,
        published_by=published_by,
        languages=get_published_languages(published_languages),
    )
