"""
Constructor de snapshots de publicacion.

Regla comun: solo se crea un snapshot nuevo cuando la corrida produjo
contenido nuevo (o aun no existe ninguno); si no, se reutiliza el ultimo.
Asi el historial de publicaciones nunca registra un evento vacio y un
re-import identico no escribe filas.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from loguru import logger

from formio_import.domain.entities.publication import PublicationInfo
from formio_import.infrastructure.repositories.publication_repository import PublicationRepository


class PublicationSnapshotBuilder:
    """Crea o reutiliza snapshots y registros de publicacion dentro de una transaccion."""

    def __init__(self, repository: PublicationRepository, *, created_by: str = "IMPORT"):
        self.repository = repository
        self.created_by = created_by

    async def build_global_snapshot(
        self,
        revision_ids: Sequence[int],
        *,
        created_any: bool,
    ) -> tuple[Optional[int], bool]:
        """
        Retorna (snapshot_id, creado). snapshot_id es None si nunca se ha
        creado un snapshot global y esta corrida tampoco produjo contenido.
        """
        if created_any:
            snapshot_id = await self.repository.create_global_snapshot(
                revision_ids, created_by=self.created_by
            )
            logger.info(
                f"Snapshot de traducciones globales creado (id={snapshot_id}, revisiones={len(revision_ids)})"
            )
            return snapshot_id, True

        snapshot_id = await self.repository.latest_global_snapshot_id()
        logger.info(f"Sin traducciones globales nuevas, se reutiliza el snapshot id={snapshot_id}")
        return snapshot_id, False

    async def build_form_snapshot(
        self,
        form_id: int,
        revision_ids: Sequence[int],
        *,
        created_any: bool,
        published_at: Optional[datetime],
        published_by: Optional[str],
    ) -> tuple[int, bool]:
        """Retorna (snapshot_id, creado) para el snapshot de traducciones de un formulario."""
        if not created_any:
            latest = await self.repository.latest_form_snapshot_id(form_id)
            if latest is not None:
                return latest, False

        snapshot_id = await self.repository.create_form_snapshot(
            form_id,
            revision_ids,
            published_at=published_at,
            created_by=published_by or self.created_by,
        )
        return snapshot_id, True

    async def publish(
        self,
        *,
        form_revision_id: int,
        form_snapshot_id: int,
        global_snapshot_id: Optional[int],
        publication: PublicationInfo,
    ) -> tuple[int, bool]:
        """
        Inserta el registro de publicacion, salvo que ya exista uno identico.
        Retorna (publication_id, creado).
        """
        existing = await self.repository.find_publication(
            form_revision_id=form_revision_id,
            form_snapshot_id=form_snapshot_id,
            global_snapshot_id=global_snapshot_id,
        )
        if existing is not None:
            return existing, False

        publication_id = await self.repository.create_publication(
            form_revision_id=form_revision_id,
            form_snapshot_id=form_snapshot_id,
            global_snapshot_id=global_snapshot_id,
            languages=publication.languages,
            published_at=publication.published_at,
            created_by=publication.published_by or self.created_by,
        )
        return publication_id, True
