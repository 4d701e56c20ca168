"""
DTOs del import.
Cada reconciliacion retorna su propio resultado; el coordinador de la
corrida los fusiona en el resumen (no hay estado global compartido).
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from formio_import.shared.constants.import_constants import FormImportStatus


class TooLongTranslationDTO(BaseModel):
    """Key omitida porque la key o alguno de sus valores supera el largo maximo."""

    skjemanummer: str = Field(..., description="Skjemanummer del formulario")
    too_long_key: str = Field(..., description="Prefijo de la key (max 40 caracteres)")
    key_length: int = Field(..., description="Largo de la key")
    nn_length: Optional[int] = Field(None, description="Largo del valor nynorsk")
    en_length: Optional[int] = Field(None, description="Largo del valor ingles")


class TranslationCountDTO(BaseModel):
    """Formulario con mas de dos submissions de traducciones (anomalia)."""

    skjemanummer: str
    number_of_translations: int


class FormImportResultDTO(BaseModel):
    """Resultado de reconciliar un formulario."""

    skjemanummer: str
    path: str
    status: FormImportStatus
    form_created: bool = False
    translations_created: int = 0
    translations_existing: int = 0
    too_long_translations: List[TooLongTranslationDTO] = Field(default_factory=list)
    number_of_translation_submissions: int = 0
    publication_id: Optional[int] = None
    publication_created: bool = False
    error: Optional[str] = None


class GlobalImportResultDTO(BaseModel):
    """Resultado de reconciliar las traducciones globales."""

    translations_created: int = 0
    translations_existing: int = 0
    duplicate_languages: List[str] = Field(default_factory=list)
    snapshot_id: Optional[int] = Field(None, description="Snapshot global vigente tras la reconciliacion")
    snapshot_created: bool = False


class RunSummaryDTO(BaseModel):
    """Resumen de la corrida (se imprime al final, incluso si la corrida aborta)."""

    dry_run: bool = False
    global_translations: Optional[GlobalImportResultDTO] = None
    max_translation_length: int = 0
    forms_with_too_long_translation: List[TooLongTranslationDTO] = Field(default_factory=list)
    too_long_skjemanummer: List[str] = Field(default_factory=list)
    more_than_two_translations: List[TranslationCountDTO] = Field(default_factory=list)
    skipped_without_properties: List[str] = Field(default_factory=list)
    failed_inserts_skjemanummer: List[str] = Field(default_factory=list)
    success_inserts_skjemanummer: List[str] = Field(default_factory=list)
    aborted_reason: Optional[str] = None

    def add_form_result(self, result: FormImportResultDTO) -> None:
        """Fusiona el resultado de un formulario en el resumen."""
        if result.status == FormImportStatus.SKJEMANUMMER_TOO_LONG:
            self.too_long_skjemanummer.append(result.skjemanummer)
        elif result.status == FormImportStatus.SKIPPED_NO_PROPERTIES:
            self.skipped_without_properties.append(result.path)
        elif result.status == FormImportStatus.FAILED:
            self.failed_inserts_skjemanummer.append(result.skjemanummer)
        else:
            self.success_inserts_skjemanummer.append(result.skjemanummer)

        if result.number_of_translation_submissions > 2:
            self.more_than_two_translations.append(
                TranslationCountDTO(
                    skjemanummer=result.skjemanummer,
                    number_of_translations=result.number_of_translation_submissions,
                )
            )

        for too_long in result.too_long_translations:
            self.forms_with_too_long_translation.append(too_long)
            self.max_translation_length = max(
                self.max_translation_length,
                too_long.key_length,
                too_long.nn_length or 0,
                too_long.en_length or 0,
            )

    @property
    def counts(self) -> dict:
        return {
            "succeeded": len(self.success_inserts_skjemanummer),
            "failed": len(self.failed_inserts_skjemanummer),
            "skjemanummer_too_long": len(self.too_long_skjemanummer),
            "value_too_long": len(self.forms_with_too_long_translation),
            "more_than_two_translations": len(self.more_than_two_translations),
            "skipped_without_properties": len(self.skipped_without_properties),
        }
