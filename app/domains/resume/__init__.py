from app.domains.resume.entities import (
    Section, Education, Experience, TextSnippet,
    DocumentSection, DocumentEducation, DocumentExperience, ExperienceTextSnippet
)

__all__ = [
    "Section", "Education", "Experience", "TextSnippet",
    "DocumentSection", "DocumentEducation", "DocumentExperience", "ExperienceTextSnippet",
]
