from datetime import date, datetime
from typing import Optional, List


class Section:
    """Globally seeded resume section such as Education"""

    def __init__(self, id: int, section_name: str):
        self.id = id
        self.section_name = section_name

    def __repr__(self) -> str:
        return f"Section(id={self.id}, name={self.section_name})"


class Education:
    def __init__(
        self,
        id: int,
        owner: str,
        school: str,
        location: str,
        start_date: date,
        degree: str,
        end_date: Optional[date] = None,
        gpa: Optional[str] = None,
        awards_and_honors: Optional[str] = None,
        activities: Optional[str] = None
    ):
        self.id = id
        self.owner = owner
        self.school = school
        self.location = location
        self.start_date = start_date
        self.end_date = end_date
        self.degree = degree
        self.gpa = gpa
        self.awards_and_honors = awards_and_honors
        self.activities = activities

    def __repr__(self) -> str:
        return f"Education(id={self.id}, school={self.school})"


class Experience:
    def __init__(
        self,
        id: int,
        owner: str,
        title: str,
        organization: str,
        location: str,
        start_date: date,
        end_date: Optional[date] = None
    ):
        self.id = id
        self.owner = owner
        self.title = title
        self.organization = organization
        self.location = location
        self.start_date = start_date
        self.end_date = end_date
        # Filled in when read back as part of a document
        self.text_snippets: List["TextSnippet"] = []

    def __repr__(self) -> str:
        return f"Experience(id={self.id}, title={self.title})"


class TextSnippet:
    """One version of a snippet; newer versions point back through parent"""

    def __init__(
        self,
        id: int,
        version: datetime,
        owner: str,
        type: str,
        content: str,
        parent: Optional[datetime] = None
    ):
        self.id = id
        self.version = version
        self.owner = owner
        self.parent = parent
        self.type = type
        self.content = content

    def __repr__(self) -> str:
        return f"TextSnippet(id={self.id}, version={self.version.isoformat()})"


class DocumentSection:
    def __init__(self, document_id: int, section_id: int, position: int):
        self.document_id = document_id
        self.section_id = section_id
        self.position = position


class DocumentEducation:
    def __init__(self, document_id: int, education_id: int, position: int):
        self.document_id = document_id
        self.education_id = education_id
        self.position = position


class DocumentExperience:
    def __init__(self, id: int, document_id: int, experience_id: int, position: int):
        self.id = id
        self.document_id = document_id
        self.experience_id = experience_id
        self.position = position


class ExperienceTextSnippet:
    def __init__(
        self,
        document_x_experience_id: int,
        text_snippet_id: int,
        text_snippet_version: datetime,
        position: int
    ):
        self.document_x_experience_id = document_x_experience_id
        self.text_snippet_id = text_snippet_id
        self.text_snippet_version = text_snippet_version
        self.position = position


class DocumentSkill:
    def __init__(
        self,
        document_id: int,
        text_snippet_id: int,
        text_snippet_version: datetime,
        position: int
    ):
        self.document_id = document_id
        self.text_snippet_id = text_snippet_id
        self.text_snippet_version = text_snippet_version
        self.position = position
