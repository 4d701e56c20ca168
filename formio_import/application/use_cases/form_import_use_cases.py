"""
Caso de uso: reconciliar un formulario.

Cada formulario es una unidad de trabajo atomica (una sesion, una conexion
del pool, una transaccion):
1. skjemanummer demasiado largo -> se rechaza sin abrir transaccion
2. upsert del formulario por path (si existe, se reutiliza su ultima revision)
3. upsert de cada key de traduccion (las keys demasiado largas se omiten)
4. si esta publicado: snapshot de traducciones + registro de publicacion
5. commit; cualquier excepcion hace rollback solo de este formulario
"""
from __future__ import annotations

from typing import List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from formio_import.application.dto.import_dto import FormImportResultDTO, TooLongTranslationDTO
from formio_import.application.services.publication_snapshot_builder import PublicationSnapshotBuilder
from formio_import.application.services.translation_normalizer import normalize_submissions
from formio_import.core.config import Settings
from formio_import.domain.entities.publication import PublicationInfo, get_publication_info
from formio_import.infrastructure.external.formio.formio_client import FormioClient
from formio_import.infrastructure.external.formio.types import FormioForm
from formio_import.infrastructure.repositories.form_repository import FormRepository
from formio_import.infrastructure.repositories.publication_repository import PublicationRepository
from formio_import.infrastructure.repositories.translation_repository import (
    CandidateTranslation,
    TranslationRepository,
    UpsertStatus,
)
from formio_import.shared.constants.import_constants import (
    FormImportStatus,
    TOO_LONG_KEY_PREFIX_LENGTH,
)
from formio_import.shared.exceptions.domain import PersistenceException
from formio_import.shared.utils.text_utils import TextUtils


class FormImportUseCases:
    """Reconciliador de formularios."""

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

    async def import_form(self, form: FormioForm, global_snapshot_id: Optional[int]) -> FormImportResultDTO:
        """
        Importa un formulario. Nunca lanza: los fallos quedan en el resultado.

        Args:
            form: Formulario de Form.io
            global_snapshot_id: Snapshot global vigente (ya confirmado)
        """
        skjemanummer = form.skjemanummer
        result = FormImportResultDTO(
            skjemanummer=skjemanummer, path=form.path, status=FormImportStatus.SUCCESS
        )

        if form.properties is None:
            logger.info(f"Omitiendo formulario sin properties (_id={form.id} path={form.path})")
            result.status = FormImportStatus.SKIPPED_NO_PROPERTIES
            return result

        if TextUtils.utf16_length(skjemanummer) > self.settings.MAX_LENGTH_SKJEMANUMMER:
            logger.info(
                f"[{skjemanummer}] Omitiendo formulario, skjemanummer demasiado largo "
                f"(_id={form.id}, title={form.title})"
            )
            result.status = FormImportStatus.SKJEMANUMMER_TOO_LONG
            return result

        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await self._import_in_transaction(session, form, global_snapshot_id, result)
        except Exception as e:
            error = PersistenceException(skjemanummer, e)
            logger.opt(exception=e).error(f"[{skjemanummer}] Fallo el import, rollback (_id={form.id})")
            return FormImportResultDTO(
                skjemanummer=skjemanummer,
                path=form.path,
                status=FormImportStatus.FAILED,
                number_of_translation_submissions=result.number_of_translation_submissions,
                error=error.message,
            )

        logger.info(
            f"[{skjemanummer}] Formulario importado "
            f"(traducciones nuevas={result.translations_created}, existentes={result.translations_existing})"
        )
        return result

    async def _import_in_transaction(
        self,
        session: AsyncSession,
        form: FormioForm,
        global_snapshot_id: Optional[int],
        result: FormImportResultDTO,
    ) -> None:
        settings = self.settings
        skjemanummer = form.skjemanummer
        forms = FormRepository(session, created_by=settings.IMPORT_CREATED_BY)
        translations = TranslationRepository(
            session, created_by=settings.IMPORT_CREATED_BY, dry_run=settings.DRY_RUN
        )

        existing = await forms.find_by_path(form.path)
        form_id: Optional[int] = None
        form_revision_id: Optional[int] = None
        if existing is not None:
            form_id, form_revision_id = existing.form_id, existing.revision_id
            logger.info(f"[{skjemanummer}] El formulario ya existe, no se inserta (dbId={form_id})")
        elif not settings.DRY_RUN:
            created = await forms.create_with_revision(form)
            form_id, form_revision_id = created.form_id, created.revision_id
            result.form_created = True
            logger.info(f"[{skjemanummer}] Formulario insertado (dbId={form_id})")
        else:
            result.form_created = True
            logger.info(f"[{skjemanummer}] Formulario se insertaria (simulacion)")

        logger.debug(f"[{skjemanummer}] Cargando traducciones... (dbId={form_id})")
        submissions = await self.formio.fetch_translations(form.path)
        result.number_of_translation_submissions = len(submissions)
        logger.info(f"[{skjemanummer}] Cargadas {len(submissions)} submissions de traducciones")

        normalized = normalize_submissions(submissions, subject=skjemanummer)
        revision_ids: List[int] = []
        for key in normalized.keys:
            nn, en = normalized.values_for(key)
            candidate = CandidateTranslation(key=key, nb=key, nn=nn, en=en)
            outcome = await translations.upsert_form_translation(
                form_id, candidate, max_length=settings.MAX_LENGTH_TRANSLATION
            )

            if outcome.status == UpsertStatus.VALUE_TOO_LARGE:
                too_long_key = key[:TOO_LONG_KEY_PREFIX_LENGTH]
                logger.warning(
                    f"[{skjemanummer}] Omitiendo traduccion, key o valor demasiado largo [{too_long_key}...]"
                )
                result.too_long_translations.append(
                    TooLongTranslationDTO(
                        skjemanummer=skjemanummer,
                        too_long_key=too_long_key,
                        key_length=TextUtils.utf16_length(key),
                        nn_length=TextUtils.utf16_length(nn) if nn is not None else None,
                        en_length=TextUtils.utf16_length(en) if en is not None else None,
                    )
                )
                continue

            if outcome.status == UpsertStatus.EXISTING:
                result.translations_existing += 1
            else:
                result.translations_created += 1
            if outcome.revision_id is not None:
                revision_ids.append(outcome.revision_id)

        publication = publication_info_for(form)
        if not publication.is_published or settings.DRY_RUN:
            return

        builder = PublicationSnapshotBuilder(
            PublicationRepository(session), created_by=settings.IMPORT_CREATED_BY
        )
        form_snapshot_id, _ = await builder.build_form_snapshot(
            form_id,
            revision_ids,
            created_any=result.form_created or result.translations_created > 0,
            published_at=publication.published_at,
            published_by=publication.published_by,
        )
        result.publication_id, result.publication_created = await builder.publish(
            form_revision_id=form_revision_id,
            form_snapshot_id=form_snapshot_id,
            global_snapshot_id=global_snapshot_id,
            publication=publication,
        )
        if global_snapshot_id is None:
            logger.warning(f"[{skjemanummer}] Publicado sin snapshot de traducciones globales")
        logger.info(
            f"[{skjemanummer}] Publicacion registrada (id={result.publication_id}, "
            f"idiomas={','.join(publication.languages)})"
        )


def publication_info_for(form: FormioForm) -> PublicationInfo:
    """Estado de publicacion a partir de las properties de Form.io."""
    props = form.properties
    if props is None:
        return PublicationInfo(is_published=False)
    return get_publication_info(
        props.published,
        props.unpublished,
        published_by=props.published_by,
        published_languages=props.published_languages,
        is_test_form=props.is_test_form is True,
    )
