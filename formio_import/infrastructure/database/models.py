"""
Modelos de base de datos (ORM).

Todas las tablas son append-only: una fila confirmada nunca se modifica.
Las correcciones se hacen agregando una revision nueva.
"""
from sqlalchemy import (
    Column,
    String,
    Integer,
    DateTime,
    Text,
    JSON,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from formio_import.infrastructure.database.session import Base


class FormModel(Base):
    """Formulario. Clave natural: path."""

    __tablename__ = "form"

    id = Column(Integer, primary_key=True, index=True)
    skjemanummer = Column(String(24), nullable=False)
    path = Column(String(255), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<Form(id={self.id}, skjemanummer={self.skjemanummer}, path={self.path})>"


class FormRevisionModel(Base):
    """
    Revision de un formulario.
    components y properties se guardan como JSON serializado (blob opaco).
    """

    __tablename__ = "form_revision"
    __table_args__ = (UniqueConstraint("form_id", "revision", name="uq_form_revision"),)

    id = Column(Integer, primary_key=True, index=True)
    form_id = Column(Integer, ForeignKey("form.id"), nullable=False, index=True)
    revision = Column(Integer, nullable=False)
    title = Column(Text, nullable=False)
    components = Column(Text, nullable=False)
    properties = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<FormRevision(id={self.id}, form_id={self.form_id}, revision={self.revision})>"


class FormTranslationModel(Base):
    """Traduccion de un formulario. Clave natural: (form_id, key)."""

    __tablename__ = "form_translation"
    __table_args__ = (UniqueConstraint("form_id", "key", name="uq_form_translation_key"),)

    id = Column(Integer, primary_key=True, index=True)
    form_id = Column(Integer, ForeignKey("form.id"), nullable=False, index=True)
    key = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(255), nullable=False)


class FormTranslationRevisionModel(Base):
    """Revision de una traduccion de formulario. nb es siempre igual a la key."""

    __tablename__ = "form_translation_revision"
    __table_args__ = (
        UniqueConstraint("form_translation_id", "revision", name="uq_form_translation_revision"),
    )

    id = Column(Integer, primary_key=True, index=True)
    form_translation_id = Column(Integer, ForeignKey("form_translation.id"), nullable=False, index=True)
    revision = Column(Integer, nullable=False)
    nb = Column(Text, nullable=True)
    nn = Column(Text, nullable=True)
    en = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(255), nullable=False)


class GlobalTranslationModel(Base):
    """Traduccion global (compartida por todos los formularios). Clave natural: key."""

    __tablename__ = "global_translation"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(Text, nullable=False, unique=True)
    tag = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(255), nullable=False)


class GlobalTranslationRevisionModel(Base):
    """
    Revision de una traduccion global.
    nb es NULL cuando el tag es 'validering' (la key es un identificador tecnico).
    """

    __tablename__ = "global_translation_revision"
    __table_args__ = (
        UniqueConstraint("global_translation_id", "revision", name="uq_global_translation_revision"),
    )

    id = Column(Integer, primary_key=True, index=True)
    global_translation_id = Column(Integer, ForeignKey("global_translation.id"), nullable=False, index=True)
    revision = Column(Integer, nullable=False)
    nb = Column(Text, nullable=True)
    nn = Column(Text, nullable=True)
    en = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(255), nullable=False)


class PublishedGlobalTranslationModel(Base):
    """Snapshot inmutable de revisiones de traducciones globales publicadas."""

    __tablename__ = "published_global_translation"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(255), nullable=False)


class PublishedGlobalTranslationRevisionModel(Base):
    """Tabla puente: snapshot global -> revision de traduccion global."""

    __tablename__ = "published_global_translation_revision"

    published_global_translation_id = Column(
        Integer, ForeignKey("published_global_translation.id"), primary_key=True
    )
    global_translation_revision_id = Column(
        Integer, ForeignKey("global_translation_revision.id"), primary_key=True
    )


class PublishedFormTranslationModel(Base):
    """
    Snapshot inmutable de revisiones de traducciones de un formulario.
    created_at es el timestamp 'published' del formulario.
    """

    __tablename__ = "published_form_translation"

    id = Column(Integer, primary_key=True, index=True)
    form_id = Column(Integer, ForeignKey("form.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(255), nullable=False)


class PublishedFormTranslationRevisionModel(Base):
    """Tabla puente: snapshot de formulario -> revision de traduccion."""

    __tablename__ = "published_form_translation_revision"

    published_form_translation_id = Column(
        Integer, ForeignKey("published_form_translation.id"), primary_key=True
    )
    form_translation_revision_id = Column(
        Integer, ForeignKey("form_translation_revision.id"), primary_key=True
    )


class FormPublicationModel(Base):
    """
    Publicacion: esta revision del formulario, con estas traducciones y este
    snapshot global, estuvo publicada en estos idiomas.
    """

    __tablename__ = "form_publication"

    id = Column(Integer, primary_key=True, index=True)
    form_revision_id = Column(Integer, ForeignKey("form_revision.id"), nullable=False, index=True)
    published_form_translation_id = Column(
        Integer, ForeignKey("published_form_translation.id"), nullable=False
    )
    published_global_translation_id = Column(
        Integer, ForeignKey("published_global_translation.id"), nullable=True
    )
    languages = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(255), nullable=False)

    def __repr__(self):
        return (
            f"<FormPublication(id={self.id}, form_revision_id={self.form_revision_id}, "
            f"languages={self.languages})>"
        )
