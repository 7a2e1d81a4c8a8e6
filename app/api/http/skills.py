from typing import List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import ensure_correct_user
from app.core.db import get_db
from app.domains.resume.schemas import (
    TextSnippetCreate, TextSnippetUpdate, TextSnippetResponse, DocumentSkillResponse,
    SkillsEnvelope, DocumentSkillEnvelope, SkillCreatedEnvelope
)
from app.domains.resume.services import SkillService

router = APIRouter(prefix="/users/{username}/documents/{document_id}/skills", tags=["skills"])


@router.post("", response_model=SkillCreatedEnvelope, status_code=status.HTTP_201_CREATED)
async def create_skill(
    document_id: int,
    skill_data: TextSnippetCreate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Creates a skill snippet on the master document"""
    snippet, relationship = await SkillService(db).create_skill(
        owner, document_id, skill_data.model_dump()
    )
    return SkillCreatedEnvelope(
        text_snippet=TextSnippetResponse.model_validate(snippet),
        document_x_skill=DocumentSkillResponse.model_validate(relationship)
    )


@router.post(
    "/{text_snippet_id}",
    response_model=DocumentSkillEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def attach_skill(
    document_id: int,
    text_snippet_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    relationship = await SkillService(db).attach_skill(owner, document_id, text_snippet_id)
    return DocumentSkillEnvelope(document_x_skill=DocumentSkillResponse.model_validate(relationship))


@router.put("", response_model=SkillsEnvelope)
async def reorder_skills(
    document_id: int,
    text_snippet_ids: List[int] = Body(...),
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    skills = await SkillService(db).reorder_skills(owner, document_id, text_snippet_ids)
    return SkillsEnvelope(skills=[TextSnippetResponse.model_validate(s) for s in skills])


@router.patch("/{text_snippet_id}", response_model=SkillCreatedEnvelope)
async def update_skill(
    document_id: int,
    text_snippet_id: int,
    update_data: TextSnippetUpdate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """New version of the skill, shown on this document only"""
    snippet, relationship = await SkillService(db).update_skill(
        owner, document_id, text_snippet_id, update_data.changes()
    )
    return SkillCreatedEnvelope(
        text_snippet=TextSnippetResponse.model_validate(snippet),
        document_x_skill=DocumentSkillResponse.model_validate(relationship)
    )


@router.delete("/{text_snippet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def detach_skill(
    document_id: int,
    text_snippet_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    await SkillService(db).detach_skill(owner, document_id, text_snippet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
