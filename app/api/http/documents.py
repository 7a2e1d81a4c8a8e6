from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import ensure_correct_user
from app.core.db import get_db
from app.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentResponse, DocumentContentResponse,
    DocumentEnvelope, DocumentContentEnvelope, DocumentsEnvelope
)
from app.domains.documents.services import DocumentService

router = APIRouter(prefix="/users/{username}/documents", tags=["documents"])


@router.get("", response_model=DocumentsEnvelope)
async def get_user_documents(
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Lists the user's documents"""
    documents = await DocumentService(db).get_user_documents(owner)
    return DocumentsEnvelope(
        documents=[DocumentResponse.model_validate(document) for document in documents]
    )


@router.post("", response_model=DocumentEnvelope, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    document = await DocumentService(db).create_document(owner, document_data)
    return DocumentEnvelope(document=DocumentResponse.model_validate(document))


@router.get("/{document_id}", response_model=DocumentContentEnvelope)
async def get_document(
    document_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """The document with all of its contents, in display order"""
    content = await DocumentService(db).get_document(owner, document_id)
    return DocumentContentEnvelope(document=DocumentContentResponse.model_validate(content))


@router.patch("/{document_id}", response_model=DocumentEnvelope)
async def update_document(
    document_id: int,
    update_data: DocumentUpdate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    document = await DocumentService(db).update_document(owner, document_id, update_data.changes())
    return DocumentEnvelope(document=DocumentResponse.model_validate(document))


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: int,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    await DocumentService(db).delete_document(owner, document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
