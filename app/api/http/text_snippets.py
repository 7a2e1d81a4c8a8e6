from datetime import datetime
from typing import List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import ensure_correct_user
from app.core.db import get_db
from app.domains.resume.schemas import (
    TextSnippetCreate, TextSnippetUpdate, TextSnippetResponse, ExperienceTextSnippetResponse,
    TextSnippetsEnvelope, ExperienceTextSnippetEnvelope, TextSnippetCreatedEnvelope
)
from app.domains.resume.services import TextSnippetService

router = APIRouter(prefix="/users/{username}", tags=["text snippets"])

EXPERIENCE_PATH = "/documents/{document_id}/experiences/{experience_id}/text-snippets"


def _created(snippet, relationship) -> TextSnippetCreatedEnvelope:
    return TextSnippetCreatedEnvelope(
        text_snippet=TextSnippetResponse.model_validate(snippet),
        experience_x_text_snippet=ExperienceTextSnippetResponse.model_validate(relationship)
    )


@router.get("/text-snippets", response_model=TextSnippetsEnvelope)
async def get_text_snippets(
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Newest version of each of the user's snippets"""
    snippets = await TextSnippetService(db).get_all(owner)
    return TextSnippetsEnvelope(text_snippets=[TextSnippetResponse.model_validate(s) for s in snippets])


@router.post(EXPERIENCE_PATH, response_model=TextSnippetCreatedEnvelope, status_code=status.HTTP_201_CREATED)
async def create_text_snippet(
    document_id: int,
    experience_id: int,
    snippet_data: TextSnippetCreate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    snippet, relationship = await TextSnippetService(db).create_text_snippet(
        owner, document_id, experience_id, snippet_data.model_dump()
    )
    return _created(snippet, relationship)


@router.post(
    EXPERIENCE_PATH + "/{text_snippet_id}",
    response_model=ExperienceTextSnippetEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def attach_text_snippet(
    document_id: int,
    experience_id: int,
    text_snippet_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    relationship = await TextSnippetService(db).attach_text_snippet(
        owner, document_id, experience_id, text_snippet_id
    )
    return ExperienceTextSnippetEnvelope(
        experience_x_text_snippet=ExperienceTextSnippetResponse.model_validate(relationship)
    )


@router.put(EXPERIENCE_PATH, response_model=TextSnippetsEnvelope)
async def reorder_text_snippets(
    document_id: int,
    experience_id: int,
    text_snippet_ids: List[int] = Body(...),
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    snippets = await TextSnippetService(db).reorder_text_snippets(
        owner, document_id, experience_id, text_snippet_ids
    )
    return TextSnippetsEnvelope(text_snippets=[TextSnippetResponse.model_validate(s) for s in snippets])


@router.patch(EXPERIENCE_PATH + "/{text_snippet_id}", response_model=TextSnippetCreatedEnvelope)
async def update_text_snippet(
    document_id: int,
    experience_id: int,
    text_snippet_id: int,
    update_data: TextSnippetUpdate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Saves a new version and shows it under this experience"""
    snippet, relationship = await TextSnippetService(db).update_text_snippet(
        owner, document_id, experience_id, text_snippet_id, update_data.changes()
    )
    return _created(snippet, relationship)


@router.delete(EXPERIENCE_PATH + "/{text_snippet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def detach_text_snippet(
    document_id: int,
    experience_id: int,
    text_snippet_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    await TextSnippetService(db).detach_text_snippet(owner, document_id, experience_id, text_snippet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/text-snippets/{text_snippet_id}/{version}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_text_snippet(
    text_snippet_id: int,
    version: datetime,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Deletes one version of a snippet"""
    await TextSnippetService(db).delete_text_snippet(owner, text_snippet_id, version)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
