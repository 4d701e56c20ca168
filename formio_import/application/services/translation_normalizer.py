"""
Normalizador de submissions de traducciones.

Form.io guarda una submission por idioma y sujeto (un formulario o un tag
global). Este modulo las fusiona en un unico mapeo key -> {idioma -> texto}:

- el orden de las keys es el de primera aparicion (entre todas las submissions)
- solo se fusionan los idiomas traducidos 'nn' y 'en'; 'nb' se deriva de la key
- una segunda submission del mismo idioma pisa las keys solapadas y se
  registra como anomalia (no es un error)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from loguru import logger

from formio_import.domain.entities.publication import normalize_language
from formio_import.infrastructure.external.formio.types import TranslationSubmission

TRANSLATED_LANGUAGES = ("nn", "en")


@dataclass
class NormalizedTranslations:
    """Resultado de fusionar las submissions de un sujeto."""

    keys: List[str] = field(default_factory=list)
    nn: Dict[str, Optional[str]] = field(default_factory=dict)
    en: Dict[str, Optional[str]] = field(default_factory=dict)
    duplicate_languages: List[str] = field(default_factory=list)

    def values_for(self, key: str) -> tuple[Optional[str], Optional[str]]:
        """Retorna (nn, en) para una key."""
        return self.nn.get(key), self.en.get(key)


def normalize_submissions(
    submissions: Sequence[TranslationSubmission],
    *,
    subject: str,
) -> NormalizedTranslations:
    """
    Fusiona las submissions de un sujeto.

    Args:
        submissions: Submissions de Form.io (una por idioma, idealmente)
        subject: Sujeto para los logs (skjemanummer o tag global)
    """
    result = NormalizedTranslations()
    seen_keys: set[str] = set()
    seen_languages: set[str] = set()

    for submission in submissions:
        data = submission.data
        for key in data.i18n:
            if key not in seen_keys:
                seen_keys.add(key)
                result.keys.append(key)

        lang = normalize_language(data.language)
        if lang not in TRANSLATED_LANGUAGES:
            logger.debug(f"[{subject}] Ignorando idioma no soportado '{data.language}'")
            continue

        if lang in seen_languages:
            logger.warning(f"[{subject}] Recurso de idioma duplicado [{lang} - {data.form or data.name}]")
            result.duplicate_languages.append(lang)
        seen_languages.add(lang)

        target = result.nn if lang == "nn" else result.en
        target.update(data.i18n)

    return result
