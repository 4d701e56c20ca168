"""
Tipos de los payloads de Form.io.

Solo se modelan los campos que el import necesita de forma estructurada.
`components` y el resto de `properties` se tratan como blobs opacos: se
guardan tal cual (serializados a JSON) sin interpretar su esquema.
"""
from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class FormProperties(BaseModel):
    """Bolsa `properties` de un formulario Form.io."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    skjemanummer: str = ""
    published: Optional[str] = None
    published_by: Optional[str] = Field(default=None, alias="publishedBy")
    unpublished: Optional[str] = None
    unpublished_by: Optional[str] = Field(default=None, alias="unpublishedBy")
    published_languages: Optional[list[str]] = Field(default=None, alias="publishedLanguages")
    is_test_form: Optional[bool] = Field(default=None, alias="isTestForm")
    modified_by: Optional[str] = Field(default=None, alias="modifiedBy")


class FormioForm(BaseModel):
    """Formulario tal como lo devuelve `GET /form`."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    path: str
    title: str = ""
    components: list[Any] = Field(default_factory=list)
    properties: Optional[FormProperties] = None

    @property
    def skjemanummer(self) -> str:
        return self.properties.skjemanummer if self.properties else ""

    @property
    def is_test_form(self) -> bool:
        return bool(self.properties and self.properties.is_test_form is True)

    def components_json(self) -> str:
        return json.dumps(self.components)

    def properties_json(self) -> str:
        """Serializa `properties` con los nombres originales de Form.io."""
        if self.properties is None:
            return json.dumps(None)
        return json.dumps(self.properties.model_dump(by_alias=True, exclude_unset=True))


class SubmissionData(BaseModel):
    """Contenido `data` de una submission del recurso `language`."""

    model_config = ConfigDict(extra="allow")

    language: str = ""
    i18n: dict[str, Optional[str]] = Field(default_factory=dict)
    name: Optional[str] = None
    form: Optional[str] = None
    tag: Optional[str] = None


class TranslationSubmission(BaseModel):
    """Submission de traducciones de un idioma, para un formulario o el namespace global."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    data: SubmissionData = Field(default_factory=SubmissionData)


class InvalidForm(BaseModel):
    """Formulario cuyo payload no pasa la validacion; se reporta como fallo propio."""

    id: Optional[str] = None
    path: str = ""
    skjemanummer: str = ""
    error: str

    @classmethod
    def from_payload(cls, item: Any, error: Exception) -> "InvalidForm":
        raw = item if isinstance(item, dict) else {}
        props = raw.get("properties") if isinstance(raw.get("properties"), dict) else {}
        return cls(
            id=_text_or_none(raw.get("_id")),
            path=_text_or_none(raw.get("path")) or "",
            skjemanummer=_text_or_none(props.get("skjemanummer")) or "",
            error=str(error),
        )


class FormListing(BaseModel):
    """Resultado de `GET /form`: formularios validos y los que no se pudieron leer."""

    forms: list[FormioForm] = Field(default_factory=list)
    invalid: list[InvalidForm] = Field(default_factory=list)


def _text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None
