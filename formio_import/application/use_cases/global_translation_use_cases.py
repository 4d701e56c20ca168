"""
Caso de uso: reconciliar las traducciones globales.

Se ejecuta una sola vez por corrida, antes de cualquier formulario, en su
propia transaccion. Cualquier fallo aborta la corrida: la publicacion de
cada formulario referencia el snapshot global que sale de aqui.
"""
from __future__ import annotations

from collections import OrderedDict
from typing import List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from formio_import.application.dto.import_dto import GlobalImportResultDTO
from formio_import.application.services.publication_snapshot_builder import PublicationSnapshotBuilder
from formio_import.application.services.translation_normalizer import normalize_submissions
from formio_import.core.config import Settings
from formio_import.infrastructure.external.formio.formio_client import FormioClient
from formio_import.infrastructure.external.formio.types import TranslationSubmission
from formio_import.infrastructure.repositories.publication_repository import PublicationRepository
from formio_import.infrastructure.repositories.translation_repository import (
    CandidateTranslation,
    TranslationRepository,
    UpsertStatus,
)
from formio_import.shared.constants.import_constants import VALIDATION_TAG
from formio_import.shared.exceptions.domain import GlobalPersistenceException


def group_by_tag(
    submissions: List[TranslationSubmission],
) -> "OrderedDict[Optional[str], List[TranslationSubmission]]":
    """Agrupa submissions globales por tag, en orden de primera aparicion."""
    groups: "OrderedDict[Optional[str], List[TranslationSubmission]]" = OrderedDict()
    for submission in submissions:
        groups.setdefault(submission.data.tag, []).append(submission)
    return groups


class GlobalTranslationUseCases:
    """Reconciliador de traducciones globales."""

    def __init__(
        self,
        *,
        settings: Settings,
        formio: FormioClient,
        session_factory: async_sessionmaker[AsyncSession],
    ):
        self.settings = settings
        self.formio = formio
        self.session_factory = session_factory

    async def reconcile(self) -> GlobalImportResultDTO:
        """
        Importa las traducciones globales y retorna el snapshot global vigente.

        Raises:
            SourceUnavailableException: si Form.io falla
            GlobalPersistenceException: si falla la transaccion
        """
        submissions = await self.formio.fetch_global_translations()
        logger.info(f"Cargadas {len(submissions)} submissions de traducciones globales")

        try:
            async with self.session_factory() as session:
                async with session.begin():
                    return await self._reconcile_in_transaction(session, submissions)
        except Exception as e:
            logger.exception("Fallo la reconciliacion de traducciones globales (rollback)")
            raise GlobalPersistenceException(e) from e

    async def _reconcile_in_transaction(
        self,
        session: AsyncSession,
        submissions: List[TranslationSubmission],
    ) -> GlobalImportResultDTO:
        created_by = self.settings.IMPORT_CREATED_BY
        translations = TranslationRepository(session, created_by=created_by, dry_run=self.settings.DRY_RUN)
        builder = PublicationSnapshotBuilder(PublicationRepository(session), created_by=created_by)

        result = GlobalImportResultDTO()
        revision_ids: List[int] = []
        seen_keys: set[str] = set()

        for tag, group in group_by_tag(submissions).items():
            normalized = normalize_submissions(group, subject=f"global:{tag}")
            result.duplicate_languages.extend(normalized.duplicate_languages)

            for key in normalized.keys:
                # Primera aparicion gana: una key ya vista en otro tag no se repite
                if key in seen_keys:
                    continue
                seen_keys.add(key)

                nn, en = normalized.values_for(key)
                candidate = CandidateTranslation(
                    key=key,
                    nb=None if tag == VALIDATION_TAG else key,
                    nn=nn,
                    en=en,
                )
                outcome = await translations.upsert_global_translation(tag, candidate)

                if outcome.status == UpsertStatus.EXISTING:
                    result.translations_existing += 1
                elif outcome.status in (UpsertStatus.CREATED, UpsertStatus.SIMULATED):
                    result.translations_created += 1
                if outcome.revision_id is not None:
                    revision_ids.append(outcome.revision_id)

        logger.info(
            f"Traducciones globales: {result.translations_created} nuevas, "
            f"{result.translations_existing} existentes"
        )

        if self.settings.DRY_RUN:
            result.snapshot_id = await builder.repository.latest_global_snapshot_id()
            return result

        result.snapshot_id, result.snapshot_created = await builder.build_global_snapshot(
            revision_ids, created_any=result.translations_created > 0
        )
        return result
