from typing import List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import ensure_correct_user
from app.core.db import get_db
from app.domains.resume.schemas import (
    SectionResponse, SectionsEnvelope, DocumentSectionResponse, DocumentSectionEnvelope
)
from app.domains.resume.section_items import SECTION, SectionItemService
from app.domains.resume.services import SectionService

router = APIRouter(tags=["sections"])


@router.get("/sections", response_model=SectionsEnvelope)
async def get_sections(db: AsyncSession = Depends(get_db)):
    """Every section a document can show"""
    sections = await SectionService(db).get_all()
    return SectionsEnvelope(sections=[SectionResponse.model_validate(s) for s in sections])


@router.post(
    "/users/{username}/documents/{document_id}/sections/{section_id}",
    response_model=DocumentSectionEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def attach_section(
    document_id: int,
    section_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    relationship = await SectionItemService(db, SECTION).attach_item(owner, document_id, section_id)
    return DocumentSectionEnvelope(
        document_x_section=DocumentSectionResponse.model_validate(relationship)
    )


@router.put("/users/{username}/documents/{document_id}/sections", response_model=SectionsEnvelope)
async def reorder_sections(
    document_id: int,
    section_ids: List[int] = Body(...),
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Body is the full list of section IDs in their new order"""
    sections = await SectionItemService(db, SECTION).reorder_items(owner, document_id, section_ids)
    return SectionsEnvelope(sections=[SectionResponse.model_validate(s) for s in sections])


@router.delete(
    "/users/{username}/documents/{document_id}/sections/{section_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def detach_section(
    document_id: int,
    section_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    await SectionItemService(db, SECTION).detach_item(owner, document_id, section_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
