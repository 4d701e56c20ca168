"""
Repositorio de formularios y sus revisiones.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from formio_import.infrastructure.database.models import FormModel, FormRevisionModel
from formio_import.infrastructure.external.formio.types import FormioForm

UNKNOWN_AUTHOR = "ukjent"


@dataclass(frozen=True)
class FormRef:
    """Referencia a un formulario y su revision mas reciente."""

    form_id: int
    revision_id: Optional[int]


class FormRepository:
    """
    Gestiona las tablas form y form_revision.
    Opera dentro de la transaccion de la sesion recibida; no hace commit.
    """

    def __init__(self, db: AsyncSession, *, created_by: str = "IMPORT"):
        self.db = db
        self.created_by = created_by

    async def find_by_path(self, path: str) -> Optional[FormRef]:
        """Busca un formulario por su clave natural (path)."""
        query = select(FormModel.id).where(FormModel.path == path)
        form_id = (await self.db.execute(query)).scalar_one_or_none()
        if form_id is None:
            return None
        return FormRef(form_id=form_id, revision_id=await self.latest_revision_id(form_id))

    async def latest_revision_id(self, form_id: int) -> Optional[int]:
        query = (
            select(FormRevisionModel.id)
            .where(FormRevisionModel.form_id == form_id)
            .order_by(FormRevisionModel.revision.desc())
            .limit(1)
        )
        return (await self.db.execute(query)).scalar_one_or_none()

    async def create_with_revision(self, form: FormioForm) -> FormRef:
        """
        Inserta el formulario y su revision #1 a partir del payload de Form.io.
        """
        form_row = FormModel(
            skjemanummer=form.skjemanummer,
            path=form.path,
            created_by=self.created_by,
        )
        self.db.add(form_row)
        await self.db.flush()

        modified_by = form.properties.modified_by if form.properties else None
        revision_row = FormRevisionModel(
            form_id=form_row.id,
            revision=1,
            title=form.title,
            components=form.components_json(),
            properties=form.properties_json(),
            created_by=modified_by or UNKNOWN_AUTHOR,
        )
        self.db.add(revision_row)
        await self.db.flush()
        return FormRef(form_id=form_row.id, revision_id=revision_row.id)
