import logging
from typing import Optional, List, Dict, Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError

from app.core.errors import server_error
from app.db.base import utc_now
from app.db.models.document import Document as DocumentModel
from app.db.repositories.base import check_fields, raise_for_integrity_error
from app.domains.documents.entities import Document

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Documents table access"""

    UPDATABLE_FIELDS = Document.UPDATABLE_FIELDS

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        owner: str,
        document_name: str,
        is_master: bool = False,
        is_template: bool = False
    ) -> Document:
        """Inserts a document"""
        now = utc_now()
        db_document = DocumentModel(
            document_name=document_name,
            owner=owner,
            created_on=now,
            last_updated=now,
            is_master=is_master,
            is_template=is_template,
            is_locked=False
        )
        self.session.add(db_document)
        try:
            await self.session.flush()
        except IntegrityError as err:
            raise_for_integrity_error(
                err,
                unique_message=f'Document with name "{document_name}" already exists.',
                foreign_key_message=f'User "{owner}" does not exist.'
            )
        return self._to_domain(db_document)

    async def get(self, document_id: int, for_update: bool = False) -> Optional[Document]:
        """Fetches a document, optionally locking its row"""
        query = (
            select(DocumentModel)
            .where(DocumentModel.id == document_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def get_by_owner(self, owner: str) -> List[Document]:
        """All documents of a user, oldest first"""
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.owner == owner)
            .order_by(DocumentModel.created_on, DocumentModel.id)
            .execution_options(populate_existing=True)
        )
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def get_master(self, owner: str) -> Optional[Document]:
        result = await self.session.execute(
            select(DocumentModel).where(
                DocumentModel.owner == owner, DocumentModel.is_master.is_(True)
            )
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def update(self, document: Document, props: Dict[str, Any]) -> Document:
        """Writes the given fields and returns the refreshed document.

        The caller already holds the document, so a missing row here is a
        server error rather than a not found.
        """
        check_fields(props, self.UPDATABLE_FIELDS)
        if not props:
            return document

        stmt = (
            update(DocumentModel)
            .where(DocumentModel.id == document.id)
            .values(**props, last_updated=utc_now())
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as err:
            raise_for_integrity_error(
                err,
                unique_message=f'Document with name "{props.get("document_name")}" already exists.'
            )

        if result.rowcount == 0:
            logger.error("Document %s not found while updating", document.id)
            raise server_error(f"Document with ID {document.id} could not be updated.")

        return await self.get(document.id)

    async def delete(self, document_id: int) -> int:
        """Deletes a document, relationship rows cascade"""
        result = await self.session.execute(
            delete(DocumentModel).where(DocumentModel.id == document_id)
        )
        return result.rowcount

    def _to_domain(self, db_document: DocumentModel) -> Document:
        """ORM row to domain entity"""
        return Document(
            id=db_document.id,
            document_name=db_document.document_name,
            owner=db_document.owner,
            created_on=db_document.created_on,
            last_updated=db_document.last_updated,
            is_master=db_document.is_master,
            is_template=db_document.is_template,
            is_locked=db_document.is_locked
        )
