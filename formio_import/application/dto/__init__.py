"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .import_dto import (
    TooLongTranslationDTO,
    TranslationCountDTO,
    FormImportResultDTO,
    GlobalImportResultDTO,
    RunSummaryDTO,
)
