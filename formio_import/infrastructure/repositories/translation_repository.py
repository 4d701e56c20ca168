"""
Upsert por clave natural para traducciones de formulario y traducciones globales.

Contrato (igual para ambos tipos):
- Si la clave natural ya existe: se retorna la revision mas reciente sin
  modificar nada (EXISTING). No es un error ni un rechazo de validacion.
- Si no existe y algun valor supera el limite: no se inserta nada
  (VALUE_TOO_LARGE).
- Si no existe y pasa la validacion: se inserta la fila padre y su revision #1
  (CREATED). En dry-run no se escribe y se retorna SIMULATED.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from formio_import.infrastructure.database.models import (
    FormTranslationModel,
    FormTranslationRevisionModel,
    GlobalTranslationModel,
    GlobalTranslationRevisionModel,
)
from formio_import.shared.utils.text_utils import TextUtils


class UpsertStatus(str, Enum):
    CREATED = "created"
    EXISTING = "existing"
    VALUE_TOO_LARGE = "value_too_large"
    SIMULATED = "simulated"


@dataclass(frozen=True)
class CandidateTranslation:
    """Valores candidatos para una key (nb, nn, en)."""

    key: str
    nb: Optional[str]
    nn: Optional[str]
    en: Optional[str]

    def longest_value(self) -> int:
        """Largo maximo entre key, nn y en, en unidades UTF-16."""
        return max(
            TextUtils.utf16_length(self.key),
            TextUtils.utf16_length(self.nn),
            TextUtils.utf16_length(self.en),
        )

    def exceeds(self, max_length: Optional[int]) -> bool:
        return max_length is not None and self.longest_value() > max_length


@dataclass(frozen=True)
class UpsertOutcome:
    status: UpsertStatus
    revision_id: Optional[int] = None

    @property
    def created(self) -> bool:
        return self.status == UpsertStatus.CREATED


class TranslationRepository:
    """
    Gestiona form_translation / global_translation y sus revisiones.
    Opera dentro de la transaccion de la sesion recibida; no hace commit.
    """

    def __init__(self, db: AsyncSession, *, created_by: str = "IMPORT", dry_run: bool = False):
        self.db = db
        self.created_by = created_by
        self.dry_run = dry_run

    async def upsert_form_translation(
        self,
        form_id: Optional[int],
        candidate: CandidateTranslation,
        *,
        max_length: Optional[int] = None,
    ) -> UpsertOutcome:
        """
        Upsert por (form_id, key). form_id es None solo en dry-run para un
        formulario que aun no existe: la busqueda no puede encontrar nada.
        """

        async def lookup() -> Optional[int]:
            if form_id is None:
                return None
            query = (
                select(FormTranslationRevisionModel.id)
                .join(
                    FormTranslationModel,
                    FormTranslationRevisionModel.form_translation_id == FormTranslationModel.id,
                )
                .where(FormTranslationModel.form_id == form_id, FormTranslationModel.key == candidate.key)
                .order_by(FormTranslationRevisionModel.revision.desc())
                .limit(1)
            )
            return (await self.db.execute(query)).scalar_one_or_none()

        async def insert() -> int:
            translation = FormTranslationModel(form_id=form_id, key=candidate.key, created_by=self.created_by)
            self.db.add(translation)
            await self.db.flush()
            revision = FormTranslationRevisionModel(
                form_translation_id=translation.id,
                revision=1,
                nb=candidate.nb,
                nn=candidate.nn,
                en=candidate.en,
                created_by=self.created_by,
            )
            self.db.add(revision)
            await self.db.flush()
            return revision.id

        return await self._upsert(lookup, insert, candidate, max_length)

    async def upsert_global_translation(
        self,
        tag: Optional[str],
        candidate: CandidateTranslation,
        *,
        max_length: Optional[int] = None,
    ) -> UpsertOutcome:
        """Upsert por key global. El tag solo se guarda al crear."""

        async def lookup() -> Optional[int]:
            query = (
                select(GlobalTranslationRevisionModel.id)
                .join(
                    GlobalTranslationModel,
                    GlobalTranslationRevisionModel.global_translation_id == GlobalTranslationModel.id,
                )
                .where(GlobalTranslationModel.key == candidate.key)
                .order_by(GlobalTranslationRevisionModel.revision.desc())
                .limit(1)
            )
            return (await self.db.execute(query)).scalar_one_or_none()

        async def insert() -> int:
            translation = GlobalTranslationModel(key=candidate.key, tag=tag, created_by=self.created_by)
            self.db.add(translation)
            await self.db.flush()
            revision = GlobalTranslationRevisionModel(
                global_translation_id=translation.id,
                revision=1,
                nb=candidate.nb,
                nn=candidate.nn,
                en=candidate.en,
                created_by=self.created_by,
            )
            self.db.add(revision)
            await self.db.flush()
            return revision.id

        return await self._upsert(lookup, insert, candidate, max_length)

    async def _upsert(
        self,
        lookup: Callable[[], Awaitable[Optional[int]]],
        insert: Callable[[], Awaitable[int]],
        candidate: CandidateTranslation,
        max_length: Optional[int],
    ) -> UpsertOutcome:
        existing_revision_id = await lookup()
        if existing_revision_id is not None:
            return UpsertOutcome(UpsertStatus.EXISTING, existing_revision_id)

        if candidate.exceeds(max_length):
            return UpsertOutcome(UpsertStatus.VALUE_TOO_LARGE)

        if self.dry_run:
            return UpsertOutcome(UpsertStatus.SIMULATED)

        return UpsertOutcome(UpsertStatus.CREATED, await insert())
