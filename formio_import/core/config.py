"""
Configuracion central del import.
Gestiona variables de entorno y los limites de la corrida.

El import se ejecuta como job (cron / task scheduler): no hay servidor,
solo una corrida que lee Form.io y escribe en PostgreSQL.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion del import.
    Lee variables de entorno y proporciona valores por defecto.

    - FORMIO_BASE_URL es obligatoria (se valida al arrancar, no al importar)
    - DRY_RUN=true ejecuta lecturas y validaciones pero no escribe nada
    - DATABASE_URL se puede especificar completa o por componentes
    """

    # Fuente de contenido (Form.io)
    FORMIO_BASE_URL: str = Field(default="")
    FORMIO_FORM_TAG: str = Field(default="nav-skjema")
    MAX_NUMBER_OF_FORMS: int = Field(default=1000)
    TRANSLATIONS_LIMIT: int = Field(default=1000)
    HTTP_TIMEOUT_S: float = Field(default=30.0)

    # Politica de import
    DRY_RUN: bool = Field(default=False)
    MAX_LENGTH_TRANSLATION: int = Field(default=5120)
    MAX_LENGTH_SKJEMANUMMER: int = Field(default=24)
    IMPORT_CREATED_BY: str = Field(default="IMPORT")

    # Base de datos - Componentes separados
    DATABASE_HOST: str = Field(default="localhost")
    DATABASE_PORT: int = Field(default=5432)
    DATABASE_USER: str = Field(default="forms_api")
    DATABASE_PASSWORD: str = Field(default="forms_api")
    DATABASE_NAME: str = Field(default="forms_api")

    # Base de datos - URL completa (override de componentes si se proporciona)
    DATABASE_URL: str = Field(default="")
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=0)

    DEBUG: bool = Field(default=False)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="")

    @computed_field
    @property
    def effective_database_url(self) -> str:
        """
        Retorna la URL de base de datos efectiva.
        Si DATABASE_URL esta definida, la usa directamente.
        Si no, construye la URL desde los componentes individuales.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    @computed_field
    @property
    def db_pool_capacity(self) -> int:
        """Numero maximo de conexiones simultaneas que entrega el pool."""
        return max(1, self.DB_POOL_SIZE + self.DB_MAX_OVERFLOW)

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Retorna la instancia de configuracion (cacheada)."""
    return Settings()


settings = get_settings()
