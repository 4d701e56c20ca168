"""
Cliente mínimo de la API REST de Form.io (solo lectura).

Requisitos cubiertos:
- httpx (async)
- listado de formularios por tag, acotado por MAX_NUMBER_OF_FORMS
- submissions de traducciones por formulario y del namespace global

No hay reintentos: un fallo es terminal para la unidad de trabajo que hizo
la llamada (la corrida completa o un formulario).
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from formio_import.shared.exceptions.domain import SourceUnavailableException

from .types import FormioForm, FormListing, InvalidForm, TranslationSubmission

GLOBAL_NAMESPACE = "global"


class FormioClient:
    """
    Cliente HTTP de Form.io.

    Importante:
    - Traduce cualquier fallo (transporte, status no 2xx, JSON invalido) a
      SourceUnavailableException.
    - El caller es dueño del ciclo de vida: usar `async with` o `aclose()`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout_s: float = 30.0,
        form_tag: str = "nav-skjema",
        max_number_of_forms: int = 1000,
        translations_limit: int = 1000,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout_s)
        self._form_tag = form_tag
        self._max_number_of_forms = max_number_of_forms
        self._translations_limit = translations_limit

    async def __aenter__(self) -> "FormioClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_forms(self) -> FormListing:
        """
        Lista los formularios con el tag configurado.

        Cada formulario se valida por separado: uno con payload invalido queda en
        `FormListing.invalid` y no impide leer el resto.
        """
        logger.info("Obteniendo formularios...")
        payload = await self._get_json(
            "formularios",
            "/form",
            params={"type": "form", "tag": self._form_tag, "limit": self._max_number_of_forms},
        )
        if not isinstance(payload, list):
            raise SourceUnavailableException("formularios", "se esperaba una lista JSON")

        listing = FormListing()
        for item in payload:
            try:
                listing.forms.append(FormioForm.model_validate(item))
            except ValidationError as e:
                invalid = InvalidForm.from_payload(item, e)
                logger.warning(
                    f"[{invalid.skjemanummer}] Formulario con payload invalido "
                    f"(_id={invalid.id} path={invalid.path}): {e.error_count()} errores"
                )
                listing.invalid.append(invalid)
        return listing

    async def fetch_translations(self, form_path: str) -> list[TranslationSubmission]:
        """Lista las submissions de traducciones de un formulario."""
        resource = f"traducciones de {form_path}"
        payload = await self._get_json(
            resource,
            "/language/submission",
            params={"data.name": f"{GLOBAL_NAMESPACE}.{form_path}", "limit": self._translations_limit},
        )
        return self._parse_list(resource, payload, TranslationSubmission)

    async def fetch_global_translations(self) -> list[TranslationSubmission]:
        """Lista las submissions de traducciones globales."""
        resource = "traducciones globales"
        payload = await self._get_json(
            resource,
            "/language/submission",
            params={"data.name": GLOBAL_NAMESPACE, "limit": self._translations_limit},
        )
        return self._parse_list(resource, payload, TranslationSubmission)

    async def _get_json(self, resource: str, path: str, *, params: dict[str, Any]) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Error al obtener {resource}: {e}")
            raise SourceUnavailableException(resource, str(e)) from e

        if not response.is_success:
            logger.error(f"Error al obtener {resource}: {response.status_code} {response.reason_phrase}")
            raise SourceUnavailableException(
                resource, response.reason_phrase or "error HTTP", status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Respuesta invalida al obtener {resource}: {e}")
            raise SourceUnavailableException(resource, "respuesta no es JSON valido") from e

    @staticmethod
    def _parse_list(resource: str, payload: Any, model):
        if not isinstance(payload, list):
            raise SourceUnavailableException(resource, "se esperaba una lista JSON")
        try:
            return [model.model_validate(item) for item in payload]
        except ValidationError as e:
            raise SourceUnavailableException(resource, f"payload invalido: {e}") from e
