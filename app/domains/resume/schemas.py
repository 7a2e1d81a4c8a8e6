from datetime import date, datetime
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator, model_validator

from app.domains.common.schemas import CamelModel, RequestModel, UpdateModel


class SectionResponse(CamelModel):
    id: int
    section_name: str


class EducationCreate(RequestModel):
    school: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    start_date: date
    end_date: Optional[date] = None
    degree: str = Field(..., min_length=1, max_length=255)
    gpa: Optional[str] = Field(None, max_length=50)
    awards_and_honors: Optional[str] = Field(None, max_length=500)
    activities: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("End date can not be before start date")
        return self


class EducationUpdate(UpdateModel):
    NULLABLE_FIELDS = ("end_date", "gpa", "awards_and_honors", "activities")

    school: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    degree: Optional[str] = Field(None, min_length=1, max_length=255)
    gpa: Optional[str] = Field(None, max_length=50)
    awards_and_honors: Optional[str] = Field(None, max_length=500)
    activities: Optional[str] = Field(None, max_length=500)


class EducationResponse(CamelModel):
    id: int
    owner: str
    school: str
    location: str
    start_date: date
    end_date: Optional[date] = None
    degree: str
    gpa: Optional[str] = None
    awards_and_honors: Optional[str] = None
    activities: Optional[str] = None


class ExperienceCreate(RequestModel):
    title: str = Field(..., min_length=1, max_length=255)
    organization: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    start_date: date
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("End date can not be before start date")
        return self


class ExperienceUpdate(UpdateModel):
    NULLABLE_FIELDS = ("end_date",)

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    organization: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ExperienceResponse(CamelModel):
    id: int
    owner: str
    title: str
    organization: str
    location: str
    start_date: date
    end_date: Optional[date] = None


class TextSnippetCreate(RequestModel):
    type: str = Field(..., min_length=1, max_length=50)
    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        if not v.strip():
            raise ValueError("Content cannot be empty")
        return v


class TextSnippetUpdate(UpdateModel):
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    content: Optional[str] = Field(None, min_length=1, max_length=5000)


class TextSnippetResponse(CamelModel):
    id: int
    version: datetime
    owner: str
    parent: Optional[datetime] = None
    type: str
    content: str


class ExperienceInDocumentResponse(ExperienceResponse):
    """An experience as shown on a document, with its bullet points"""
    text_snippets: List[TextSnippetResponse] = []


class DocumentSectionResponse(CamelModel):
    document_id: int
    section_id: int
    position: int


class DocumentEducationResponse(CamelModel):
    document_id: int
    education_id: int
    position: int


class DocumentExperienceResponse(CamelModel):
    id: int
    document_id: int
    experience_id: int
    position: int


class ExperienceTextSnippetResponse(CamelModel):
    document_x_experience_id: int
    text_snippet_id: int
    text_snippet_version: datetime
    position: int


class DocumentSkillResponse(CamelModel):
    document_id: int
    text_snippet_id: int
    text_snippet_version: datetime
    position: int


# Envelopes keep the relationship keys exactly as clients read them


class SectionsEnvelope(CamelModel):
    sections: List[SectionResponse]


class DocumentSectionEnvelope(BaseModel):
    document_x_section: DocumentSectionResponse


class EducationEnvelope(CamelModel):
    education: EducationResponse


class EducationsEnvelope(CamelModel):
    educations: List[EducationResponse]


class DocumentEducationEnvelope(BaseModel):
    document_x_education: DocumentEducationResponse


class EducationCreatedEnvelope(BaseModel):
    education: EducationResponse
    document_x_education: DocumentEducationResponse


class ExperienceEnvelope(CamelModel):
    experience: ExperienceResponse


class ExperiencesEnvelope(CamelModel):
    experiences: List[ExperienceResponse]


class DocumentExperienceEnvelope(BaseModel):
    document_x_experience: DocumentExperienceResponse


class ExperienceCreatedEnvelope(BaseModel):
    experience: ExperienceResponse
    document_x_experience: DocumentExperienceResponse


class TextSnippetsEnvelope(CamelModel):
    text_snippets: List[TextSnippetResponse]


class ExperienceTextSnippetEnvelope(BaseModel):
    experience_x_text_snippet: ExperienceTextSnippetResponse = Field(
        ..., alias="experience_x_textSnippet"
    )

    model_config = {"populate_by_name": True}


class TextSnippetCreatedEnvelope(BaseModel):
    text_snippet: TextSnippetResponse = Field(..., alias="textSnippet")
    experience_x_text_snippet: ExperienceTextSnippetResponse = Field(
        ..., alias="experience_x_textSnippet"
    )

    model_config = {"populate_by_name": True}


class SkillsEnvelope(CamelModel):
    skills: List[TextSnippetResponse]


class DocumentSkillEnvelope(BaseModel):
    document_x_skill: DocumentSkillResponse


class SkillCreatedEnvelope(BaseModel):
    text_snippet: TextSnippetResponse = Field(..., alias="textSnippet")
    document_x_skill: DocumentSkillResponse

    model_config = {"populate_by_name": True}
