"""
Repositorio de snapshots de publicacion y registros de publicacion.

Los snapshots agrupan revisiones concretas (tablas puente) y nunca se
modifican una vez confirmados.
"""
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from formio_import.infrastructure.database.models import (
    FormPublicationModel,
    PublishedFormTranslationModel,
    PublishedFormTranslationRevisionModel,
    PublishedGlobalTranslationModel,
    PublishedGlobalTranslationRevisionModel,
)


class PublicationRepository:
    """
    Gestiona published_global_translation, published_form_translation,
    sus tablas puente y form_publication.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def latest_global_snapshot_id(self) -> Optional[int]:
        query = (
            select(PublishedGlobalTranslationModel.id)
            .order_by(PublishedGlobalTranslationModel.id.desc())
            .limit(1)
        )
        return (await self.db.execute(query)).scalar_one_or_none()

    async def create_global_snapshot(self, revision_ids: Iterable[int], *, created_by: str) -> int:
        snapshot = PublishedGlobalTranslationModel(created_by=created_by)
        self.db.add(snapshot)
        await self.db.flush()
        self.db.add_all(
            PublishedGlobalTranslationRevisionModel(
                published_global_translation_id=snapshot.id,
                global_translation_revision_id=revision_id,
            )
            for revision_id in _distinct(revision_ids)
        )
        await self.db.flush()
        return snapshot.id

    async def latest_form_snapshot_id(self, form_id: int) -> Optional[int]:
        query = (
            select(PublishedFormTranslationModel.id)
            .where(PublishedFormTranslationModel.form_id == form_id)
            .order_by(PublishedFormTranslationModel.id.desc())
            .limit(1)
        )
        return (await self.db.execute(query)).scalar_one_or_none()

    async def create_form_snapshot(
        self,
        form_id: int,
        revision_ids: Iterable[int],
        *,
        published_at: Optional[datetime],
        created_by: str,
    ) -> int:
        snapshot = PublishedFormTranslationModel(form_id=form_id, created_by=created_by)
        if published_at is not None:
            snapshot.created_at = published_at
        self.db.add(snapshot)
        await self.db.flush()
        self.db.add_all(
            PublishedFormTranslationRevisionModel(
                published_form_translation_id=snapshot.id,
                form_translation_revision_id=revision_id,
            )
            for revision_id in _distinct(revision_ids)
        )
        await self.db.flush()
        return snapshot.id

    async def find_publication(
        self,
        *,
        form_revision_id: int,
        form_snapshot_id: int,
        global_snapshot_id: Optional[int],
    ) -> Optional[int]:
        """Busca un registro de publicacion identico (mismas tres referencias)."""
        if global_snapshot_id is None:
            global_clause = FormPublicationModel.published_global_translation_id.is_(None)
        else:
            global_clause = FormPublicationModel.published_global_translation_id == global_snapshot_id
        query = (
            select(FormPublicationModel.id)
            .where(
                FormPublicationModel.form_revision_id == form_revision_id,
                FormPublicationModel.published_form_translation_id == form_snapshot_id,
                global_clause,
            )
            .limit(1)
        )
        return (await self.db.execute(query)).scalar_one_or_none()

    async def create_publication(
        self,
        *,
        form_revision_id: int,
        form_snapshot_id: int,
        global_snapshot_id: Optional[int],
        languages: list[str],
        published_at: Optional[datetime],
        created_by: str,
    ) -> int:
        publication = FormPublicationModel(
            form_revision_id=form_revision_id,
            published_form_translation_id=form_snapshot_id,
            published_global_translation_id=global_snapshot_id,
            languages=list(languages),
            created_by=created_by,
        )
        if published_at is not None:
            publication.created_at = published_at
        self.db.add(publication)
        await self.db.flush()
        return publication.id


def _distinct(revision_ids: Iterable[int]) -> list[int]:
    return list(dict.fromkeys(revision_ids))
