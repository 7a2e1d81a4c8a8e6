from sqlalchemy import (
    Column, Integer, DateTime, ForeignKey, ForeignKeyConstraint, UniqueConstraint,
)

from app.db.base import Base


class DocumentSection(Base):
    __tablename__ = "documents_x_sections"
    __table_args__ = (
        UniqueConstraint("document_id", "position", name="uq_documents_x_sections_position"),
    )

    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True)
    section_id = Column(Integer, ForeignKey("sections.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, nullable=False)


class DocumentEducation(Base):
    __tablename__ = "documents_x_educations"
    __table_args__ = (
        UniqueConstraint("document_id", "position", name="uq_documents_x_educations_position"),
    )

    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True)
    education_id = Column(Integer, ForeignKey("educations.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, nullable=False)


class DocumentExperience(Base):
    """Carries its own id so text snippets can be ordered per document experience"""
    __tablename__ = "documents_x_experiences"
    __table_args__ = (
        UniqueConstraint("document_id", "experience_id", name="uq_documents_x_experiences_item"),
        UniqueConstraint("document_id", "position", name="uq_documents_x_experiences_position"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    experience_id = Column(Integer, ForeignKey("experiences.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)


class ExperienceTextSnippet(Base):
    __tablename__ = "experiences_x_text_snippets"
    __table_args__ = (
        ForeignKeyConstraint(
            ["text_snippet_id", "text_snippet_version"],
            ["text_snippets.id", "text_snippets.version"],
            ondelete="CASCADE",
        ),
        UniqueConstraint(
            "document_x_experience_id", "position",
            name="uq_experiences_x_text_snippets_position",
        ),
    )

    document_x_experience_id = Column(
        Integer, ForeignKey("documents_x_experiences.id", ondelete="CASCADE"), primary_key=True
    )
    text_snippet_id = Column(Integer, primary_key=True)
    text_snippet_version = Column(DateTime, nullable=False)
    position = Column(Integer, nullable=False)


class DocumentSkill(Base):
    """Skills are text snippets listed directly on a document"""
    __tablename__ = "documents_x_skills"
    __table_args__ = (
        ForeignKeyConstraint(
            ["text_snippet_id", "text_snippet_version"],
            ["text_snippets.id", "text_snippets.version"],
            ondelete="CASCADE",
        ),
        UniqueConstraint("document_id", "position", name="uq_documents_x_skills_position"),
    )

    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True)
    text_snippet_id = Column(Integer, primary_key=True)
    text_snippet_version = Column(DateTime, nullable=False)
    position = Column(Integer, nullable=False)
