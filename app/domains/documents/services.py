import logging
from typing import List, Dict, Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import transaction
from app.core.errors import forbidden
from app.db.repositories.contact_info_repository import ContactInfoRepository
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.education_repository import EducationRepository
from app.db.repositories.experience_repository import ExperienceRepository
from app.db.repositories.relationship_repository import (
    RelationshipRepository, DOCUMENT_EXPERIENCES
)
from app.db.repositories.section_repository import SectionRepository
from app.db.repositories.text_snippet_repository import TextSnippetRepository
from app.domains.common.ownership import find_owned, validate_ownership
from app.domains.documents.entities import Document, DocumentContent
from app.domains.documents.schemas import DocumentCreate

logger = logging.getLogger(__name__)


class DocumentService:
    """Documents of a user"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)

    async def create_document(self, owner: str, document_data: DocumentCreate) -> Document:
        """Creates a non-master document"""
        async with transaction(self.session):
            document = await self.document_repository.create(
                owner=owner,
                document_name=document_data.document_name,
                is_template=document_data.is_template
            )
        return document

    async def get_user_documents(self, owner: str) -> List[Document]:
        return await self.document_repository.get_by_owner(owner)

    async def get_document(self, owner: str, document_id: int) -> DocumentContent:
        """A document with its contact info and every attached item in order"""
        document = await validate_ownership(
            self.document_repository, owner, document_id, label="document"
        )

        experiences = await ExperienceRepository(self.session).get_all_in_document(document_id)
        document_experiences = RelationshipRepository(self.session, DOCUMENT_EXPERIENCES)
        snippet_repository = TextSnippetRepository(self.session)
        for experience in experiences:
            document_x_experience = await document_experiences.get(document_id, experience.id)
            experience.text_snippets = await snippet_repository.get_all_in_experience(
                document_x_experience.id
            )

        return DocumentContent(
            document,
            contact_info=await ContactInfoRepository(self.session).get(owner),
            sections=await SectionRepository(self.session).get_all_in_document(document_id),
            educations=await EducationRepository(self.session).get_all_in_document(document_id),
            experiences=experiences,
            skills=await snippet_repository.get_all_in_document(document_id)
        )

    async def update_document(self, owner: str, document_id: int, props: Dict[str, Any]) -> Document:
        """Updates a document; master documents only take a new name"""
        async with transaction(self.session):
            document = await validate_ownership(
                self.document_repository, owner, document_id, label="document", for_update=True
            )
            document.check_update(props)
            document = await self.document_repository.update(document, props)
        return document

    async def delete_document(self, owner: str, document_id: int) -> None:
        """Deletes a non-master document; missing documents are ignored"""
        async with transaction(self.session):
            document = await find_owned(
                self.document_repository, owner, document_id, label="document", for_update=True
            )
            if document is None:
                return
            if document.is_master:
                logger.error("User %s attempted to delete master document %s", owner, document_id)
                raise forbidden("Can not delete primary resume template.")
            removed = await self.document_repository.delete(document_id)

        logger.info("Deleted document %s (%s row(s))", document_id, removed)
