from app.db.base import Base
from app.db.models.user import User
from app.db.models.contact_info import ContactInfo
from app.db.models.document import Document
from app.db.models.section import Section
from app.db.models.education import Education
from app.db.models.experience import Experience
from app.db.models.text_snippet import TextSnippet, TextSnippetId
from app.db.models.relationships import (
    DocumentSection, DocumentEducation, DocumentExperience, ExperienceTextSnippet, DocumentSkill
)

__all__ = [
    "Base",
    "User",
    "ContactInfo",
    "Document",
    "Section",
    "Education",
    "Experience",
    "TextSnippet",
    "TextSnippetId",
    "DocumentSection",
    "DocumentEducation",
    "DocumentExperience",
    "ExperienceTextSnippet",
    "DocumentSkill",
]
