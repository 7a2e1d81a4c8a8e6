from app.db.repositories.user_repository import UserRepository
from app.db.repositories.contact_info_repository import ContactInfoRepository
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.section_repository import SectionRepository
from app.db.repositories.education_repository import EducationRepository
from app.db.repositories.experience_repository import ExperienceRepository
from app.db.repositories.text_snippet_repository import TextSnippetRepository
from app.db.repositories.relationship_repository import (
    RelationshipSpec, RelationshipRepository,
    DOCUMENT_SECTIONS, DOCUMENT_EDUCATIONS, DOCUMENT_EXPERIENCES, EXPERIENCE_TEXT_SNIPPETS,
    DOCUMENT_SKILLS
)

__all__ = [
    "UserRepository",
    "ContactInfoRepository",
    "DocumentRepository",
    "SectionRepository",
    "EducationRepository",
    "ExperienceRepository",
    "TextSnippetRepository",
    "RelationshipSpec",
    "RelationshipRepository",
    "DOCUMENT_SECTIONS",
    "DOCUMENT_EDUCATIONS",
    "DOCUMENT_EXPERIENCES",
    "EXPERIENCE_TEXT_SNIPPETS",
    "DOCUMENT_SKILLS",
]
