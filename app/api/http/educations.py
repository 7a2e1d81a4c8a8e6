from typing import List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import ensure_correct_user
from app.core.db import get_db
from app.domains.resume.schemas import (
    EducationCreate, EducationUpdate, EducationResponse, DocumentEducationResponse,
    EducationEnvelope, EducationsEnvelope, DocumentEducationEnvelope, EducationCreatedEnvelope
)
from app.domains.resume.section_items import EDUCATION, SectionItemService

router = APIRouter(prefix="/users/{username}", tags=["educations"])


@router.get("/educations", response_model=EducationsEnvelope)
async def get_educations(
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    educations = await SectionItemService(db, EDUCATION).get_all(owner)
    return EducationsEnvelope(educations=[EducationResponse.model_validate(e) for e in educations])


@router.post(
    "/documents/{document_id}/educations",
    response_model=EducationCreatedEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_education(
    document_id: int,
    education_data: EducationCreate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Creates an education on the master document"""
    education, relationship = await SectionItemService(db, EDUCATION).create_section_item(
        owner, document_id, education_data.model_dump()
    )
    return EducationCreatedEnvelope(
        education=EducationResponse.model_validate(education),
        document_x_education=DocumentEducationResponse.model_validate(relationship)
    )


@router.post(
    "/documents/{document_id}/educations/{education_id}",
    response_model=DocumentEducationEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def attach_education(
    document_id: int,
    education_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    relationship = await SectionItemService(db, EDUCATION).attach_item(owner, document_id, education_id)
    return DocumentEducationEnvelope(
        document_x_education=DocumentEducationResponse.model_validate(relationship)
    )


@router.put("/documents/{document_id}/educations", response_model=EducationsEnvelope)
async def reorder_educations(
    document_id: int,
    education_ids: List[int] = Body(...),
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    educations = await SectionItemService(db, EDUCATION).reorder_items(owner, document_id, education_ids)
    return EducationsEnvelope(educations=[EducationResponse.model_validate(e) for e in educations])


@router.delete(
    "/documents/{document_id}/educations/{education_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def detach_education(
    document_id: int,
    education_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    await SectionItemService(db, EDUCATION).detach_item(owner, document_id, education_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/educations/{education_id}", response_model=EducationEnvelope)
async def update_education(
    education_id: int,
    update_data: EducationUpdate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    education = await SectionItemService(db, EDUCATION).update_item(
        owner, education_id, update_data.changes()
    )
    return EducationEnvelope(education=EducationResponse.model_validate(education))


@router.delete("/educations/{education_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_education(
    education_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Deletes the education from every document"""
    await SectionItemService(db, EDUCATION).delete_item(owner, education_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
