"""
Coordinador de la corrida de import.

Orden:
1. Traducciones globales (transaccion propia, debe confirmar antes de seguir)
2. Formularios, consumidos desde una cola por un numero fijo de workers

El numero de workers es la capacidad del pool de conexiones: cada formulario
retiene una conexion durante toda su transaccion, asi que lanzar mas
formularios en paralelo solo los dejaria esperando una conexion.
"""
from __future__ import annotations

import asyncio
from typing import List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from formio_import.application.dto.import_dto import FormImportResultDTO, RunSummaryDTO
from formio_import.application.use_cases.form_import_use_cases import FormImportUseCases
from formio_import.application.use_cases.global_translation_use_cases import GlobalTranslationUseCases
from formio_import.core.config import Settings
from formio_import.infrastructure.external.formio.formio_client import FormioClient
from formio_import.infrastructure.external.formio.types import FormioForm, FormListing, InvalidForm
from formio_import.shared.constants.import_constants import FormImportStatus
from formio_import.shared.exceptions.domain import (
    GlobalPersistenceException,
    InvalidFormPayloadException,
    SourceUnavailableException,
)


class ImportRunUseCases:
    """Orquestador de una corrida completa."""

    def __init__(
        self,
        *,
        settings: Settings,
        formio: FormioClient,
        session_factory: async_sessionmaker[AsyncSession],
        workers: Optional[int] = None,
    ):
        self.settings = settings
        self.formio = formio
        self.workers = workers or settings.db_pool_capacity
        self.global_translations = GlobalTranslationUseCases(
            settings=settings, formio=formio, session_factory=session_factory
        )
        self.forms = FormImportUseCases(
            settings=settings, formio=formio, session_factory=session_factory
        )

    async def run(self) -> RunSummaryDTO:
        """
        Ejecuta la corrida y retorna el resumen.

        Los fallos fatales (Form.io no disponible, fallo de traducciones
        globales) no se relanzan: quedan en `aborted_reason` con cero
        formularios importados.
        """
        summary = RunSummaryDTO(dry_run=self.settings.DRY_RUN)
        try:
            summary.global_translations = await self.global_translations.reconcile()
            listing = await self.fetch_importable_forms()
        except (SourceUnavailableException, GlobalPersistenceException) as e:
            logger.error(f"Corrida abortada: {e.message}")
            summary.aborted_reason = e.message
            return summary

        for invalid in listing.invalid:
            summary.add_form_result(invalid_form_result(invalid))

        logger.info(f"Importando {len(listing.forms)} formularios con {self.workers} workers...")
        for result in await self.import_forms(listing.forms, summary.global_translations.snapshot_id):
            summary.add_form_result(result)
        return summary

    async def fetch_importable_forms(self) -> FormListing:
        """Formularios de Form.io, excluyendo los marcados como formulario de test."""
        listing = await self.formio.fetch_forms()
        importable = [form for form in listing.forms if not form.is_test_form]
        skipped = len(listing.forms) - len(importable)
        if skipped:
            logger.info(f"Excluidos {skipped} formularios de test")
        return FormListing(forms=importable, invalid=listing.invalid)

    async def import_forms(
        self,
        forms: List[FormioForm],
        global_snapshot_id: Optional[int],
    ) -> List[FormImportResultDTO]:
        """Importa los formularios con un pool acotado de workers."""
        queue: asyncio.Queue[FormioForm] = asyncio.Queue()
        for form in forms:
            queue.put_nowait(form)

        async def worker() -> List[FormImportResultDTO]:
            results: List[FormImportResultDTO] = []
            while True:
                try:
                    form = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return results
                results.append(await self.forms.import_form(form, global_snapshot_id))
                queue.task_done()

        worker_count = max(1, min(self.workers, len(forms)))
        batches = await asyncio.gather(*(worker() for _ in range(worker_count)))
        return [result for batch in batches for result in batch]


def invalid_form_result(invalid: InvalidForm) -> FormImportResultDTO:
    """Un formulario ilegible cuenta como fallo propio (sin skjemanummer se usa el path)."""
    label = invalid.skjemanummer or invalid.path or (invalid.id or "")
    error = InvalidFormPayloadException(label, invalid.error)
    return FormImportResultDTO(
        skjemanummer=label,
        path=invalid.path,
        status=FormImportStatus.FAILED,
        error=error.message,
    )
