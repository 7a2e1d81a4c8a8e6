from typing import List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import ensure_correct_user
from app.core.db import get_db
from app.domains.resume.schemas import (
    ExperienceCreate, ExperienceUpdate, ExperienceResponse, DocumentExperienceResponse,
    ExperienceEnvelope, ExperiencesEnvelope, DocumentExperienceEnvelope, ExperienceCreatedEnvelope
)
from app.domains.resume.section_items import EXPERIENCE, SectionItemService

router = APIRouter(prefix="/users/{username}", tags=["experiences"])


@router.get("/experiences", response_model=ExperiencesEnvelope)
async def get_experiences(
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    experiences = await SectionItemService(db, EXPERIENCE).get_all(owner)
    return ExperiencesEnvelope(experiences=[ExperienceResponse.model_validate(e) for e in experiences])


@router.post(
    "/documents/{document_id}/experiences",
    response_model=ExperienceCreatedEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_experience(
    document_id: int,
    experience_data: ExperienceCreate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    experience, relationship = await SectionItemService(db, EXPERIENCE).create_section_item(
        owner, document_id, experience_data.model_dump()
    )
    return ExperienceCreatedEnvelope(
        experience=ExperienceResponse.model_validate(experience),
        document_x_experience=DocumentExperienceResponse.model_validate(relationship)
    )


@router.post(
    "/documents/{document_id}/experiences/{experience_id}",
    response_model=DocumentExperienceEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def attach_experience(
    document_id: int,
    experience_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """The experience keeps no snippets on the new document until they are attached"""
    relationship = await SectionItemService(db, EXPERIENCE).attach_item(owner, document_id, experience_id)
    return DocumentExperienceEnvelope(
        document_x_experience=DocumentExperienceResponse.model_validate(relationship)
    )


@router.put("/documents/{document_id}/experiences", response_model=ExperiencesEnvelope)
async def reorder_experiences(
    document_id: int,
    experience_ids: List[int] = Body(...),
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    experiences = await SectionItemService(db, EXPERIENCE).reorder_items(owner, document_id, experience_ids)
    return ExperiencesEnvelope(experiences=[ExperienceResponse.model_validate(e) for e in experiences])


@router.delete(
    "/documents/{document_id}/experiences/{experience_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def detach_experience(
    document_id: int,
    experience_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Also drops the text snippet orderings of this document experience"""
    await SectionItemService(db, EXPERIENCE).detach_item(owner, document_id, experience_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/experiences/{experience_id}", response_model=ExperienceEnvelope)
async def update_experience(
    experience_id: int,
    update_data: ExperienceUpdate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    experience = await SectionItemService(db, EXPERIENCE).update_item(
        owner, experience_id, update_data.changes()
    )
    return ExperienceEnvelope(experience=ExperienceResponse.model_validate(experience))


@router.delete("/experiences/{experience_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_experience(
    experience_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Deletes the experience; its text snippet orderings go with it"""
    await SectionItemService(db, EXPERIENCE).delete_item(owner, experience_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
