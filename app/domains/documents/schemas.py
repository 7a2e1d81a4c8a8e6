from datetime import datetime
from typing import Optional, List

from pydantic import Field, field_validator

from app.domains.common.schemas import CamelModel, RequestModel, UpdateModel
from app.domains.identity.schemas import ContactInfoResponse
from app.domains.resume.schemas import (
    SectionResponse, EducationResponse, ExperienceInDocumentResponse, TextSnippetResponse
)


def _strip_name(v):
    if v is not None and not v.strip():
        raise ValueError("Document name cannot be empty")
    return v.strip() if v else v


class DocumentCreate(RequestModel):
    """Body for a new, non-master document"""
    document_name: str = Field(..., min_length=1, max_length=50)
    is_template: bool = False

    @field_validator("document_name")
    @classmethod
    def validate_document_name(cls, v):
        return _strip_name(v)


class DocumentUpdate(UpdateModel):
    """Only the fields sent are written"""
    document_name: Optional[str] = Field(None, min_length=1, max_length=50)
    is_template: Optional[bool] = None
    is_locked: Optional[bool] = None

    @field_validator("document_name")
    @classmethod
    def validate_document_name(cls, v):
        return _strip_name(v)


class DocumentResponse(CamelModel):
    id: int
    document_name: str
    owner: str
    created_on: datetime
    last_updated: Optional[datetime] = None
    is_master: bool
    is_template: bool
    is_locked: bool


class DocumentContentResponse(DocumentResponse):
    """Document with its contact info and ordered section items"""
    contact_info: Optional[ContactInfoResponse] = None
    sections: List[SectionResponse] = []
    educations: List[EducationResponse] = []
    experiences: List[ExperienceInDocumentResponse] = []
    skills: List[TextSnippetResponse] = []


class DocumentEnvelope(CamelModel):
    document: DocumentResponse


class DocumentContentEnvelope(CamelModel):
    document: DocumentContentResponse


class DocumentsEnvelope(CamelModel):
    documents: List[DocumentResponse]
