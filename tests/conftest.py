"""
Configuración de fixtures para pytest.
"""
from typing import Any, AsyncGenerator, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from formio_import.core.config import Settings
from formio_import.infrastructure.database.session import Base, create_session_factory
from formio_import.infrastructure.database import models  # noqa: F401
from formio_import.infrastructure.external.formio.formio_client import FormioClient
from formio_import.infrastructure.external.formio.types import FormioForm, FormListing, TranslationSubmission


def build_form(
    path: str,
    skjemanummer: str = "NAV 10-07.17",
    *,
    title: str = "Skjema",
    published: Optional[str] = None,
    unpublished: Optional[str] = None,
    published_languages: Optional[List[str]] = None,
    is_test_form: Optional[bool] = None,
    with_properties: bool = True,
) -> FormioForm:
    """Construye un formulario tal como lo devuelve Form.io."""
    payload: Dict[str, Any] = {
        "_id": f"id-{path}",
        "path": path,
        "title": title,
        "components": [{"type": "textfield", "key": "fornavn", "label": "Fornavn"}],
    }
    if with_properties:
        properties: Dict[str, Any] = {"skjemanummer": skjemanummer, "modifiedBy": "ola.nordmann"}
        if published is not None:
            properties["published"] = published
            properties["publishedBy"] = "kari.nordmann"
        if unpublished is not None:
            properties["unpublished"] = unpublished
        if published_languages is not None:
            properties["publishedLanguages"] = published_languages
        if is_test_form is not None:
            properties["isTestForm"] = is_test_form
        payload["properties"] = properties
    return FormioForm.model_validate(payload)


def build_submission(
    language: str,
    i18n: Dict[str, Optional[str]],
    *,
    name: str = "global",
    form: Optional[str] = None,
    tag: Optional[str] = None,
) -> TranslationSubmission:
    """Construye una submission del recurso language."""
    data: Dict[str, Any] = {"language": language, "i18n": i18n, "name": name}
    if form is not None:
        data["form"] = form
    if tag is not None:
        data["tag"] = tag
    return TranslationSubmission.model_validate({"_id": f"sub-{language}-{name}", "data": data})


async def count_rows(session_factory: async_sessionmaker[AsyncSession], model) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.fixture
def make_form():
    return build_form


@pytest.fixture
def make_submission():
    return build_submission


@pytest.fixture
def database_url(tmp_path) -> str:
    """
    SQLite en archivo (no :memory:): cada sesion abre su propia conexion y
    las transacciones de distintos formularios quedan realmente aisladas.
    """
    return f"sqlite+aiosqlite:///{tmp_path / 'forms.db'}"


@pytest.fixture
def settings(database_url) -> Settings:
    return Settings(
        FORMIO_BASE_URL="http://formio.test",
        DATABASE_URL=database_url,
        DB_POOL_SIZE=1,
        DB_MAX_OVERFLOW=0,
        DRY_RUN=False,
    )


@pytest.fixture
def dry_run_settings(settings) -> Settings:
    return settings.model_copy(update={"DRY_RUN": True})


@pytest.fixture
async def engine(database_url) -> AsyncGenerator[AsyncEngine, None]:
    """Engine de prueba con todas las tablas creadas."""
    engine = create_async_engine(database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Sesión de base de datos para tests de repositorios."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def formio() -> AsyncMock:
    """
    Cliente Form.io falso. Por defecto no hay formularios ni traducciones;
    cada test configura lo que necesita.
    """
    client = AsyncMock(spec=FormioClient)
    client.fetch_forms.return_value = FormListing()
    client.fetch_global_translations.return_value = []
    client.fetch_translations.return_value = []
    return client
