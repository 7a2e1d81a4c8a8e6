import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import transaction
from app.core.errors import forbidden, not_found
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.relationship_repository import (
    RelationshipRepository, RelationshipSpec,
    DOCUMENT_EXPERIENCES, DOCUMENT_SKILLS, EXPERIENCE_TEXT_SNIPPETS
)
from app.db.repositories.section_repository import SectionRepository
from app.db.repositories.text_snippet_repository import TextSnippetRepository
from app.domains.common.ownership import find_owned, validate_ownership
from app.domains.documents.entities import Document
from app.domains.resume.entities import DocumentSkill, Section, TextSnippet
from app.domains.resume.section_items import append, reorder

logger = logging.getLogger(__name__)


class SectionService:
    """Read access to the seeded sections"""

    def __init__(self, session: AsyncSession):
        self.section_repository = SectionRepository(session)

    async def get_all(self) -> List[Section]:
        return await self.section_repository.get_all()


def as_naive_utc(value: datetime) -> datetime:
    """Versions are stored as naive UTC"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class SnippetListService:
    """Text snippets ordered within one scope of a document.

    Subclasses name the relationship holding the order and say how a scope is
    found; scope_key is whatever they need for that beyond the document.
    """

    relationship_spec: RelationshipSpec
    label = "text snippet"

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)
        self.snippet_repository = TextSnippetRepository(session)
        self.relationships = RelationshipRepository(session, self.relationship_spec)

    async def _lock_scope(self, owner: str, document_id: int, scope_key: Any) -> Tuple[Document, int]:
        """Locks the document and returns it with the scope id to order under"""
        raise NotImplementedError

    async def _snippets_in(self, scope_id: int) -> List[TextSnippet]:
        raise NotImplementedError

    async def create_text_snippet(
        self, owner: str, document_id: int, scope_key: Any, props: Dict[str, Any]
    ) -> Tuple[TextSnippet, Any]:
        """New snippet appended to a scope of the master document"""
        async with transaction(self.session):
            document, scope_id = await self._lock_scope(owner, document_id, scope_key)
            if not document.is_master:
                logger.error(
                    "User %s attempted to add a/an %s to non-master document %s",
                    owner, self.label, document_id
                )
                raise forbidden(
                    f"{self.label.capitalize()}s can only be added to the primary resume template."
                )

            snippet = await self.snippet_repository.add(owner, props)
            relationship = await append(
                self.relationships, scope_id, snippet.id, text_snippet_version=snippet.version
            )

        return snippet, relationship

    async def attach_text_snippet(
        self, owner: str, document_id: int, scope_key: Any, snippet_id: int
    ) -> Any:
        """Appends the newest version of an existing snippet"""
        async with transaction(self.session):
            snippet = await validate_ownership(
                self.snippet_repository, owner, snippet_id, label="text snippet"
            )
            _, scope_id = await self._lock_scope(owner, document_id, scope_key)
            relationship = await append(
                self.relationships, scope_id, snippet.id, text_snippet_version=snippet.version
            )

        return relationship

    async def reorder_text_snippets(
        self, owner: str, document_id: int, scope_key: Any, snippet_ids: List[int]
    ) -> List[TextSnippet]:
        async with transaction(self.session):
            _, scope_id = await self._lock_scope(owner, document_id, scope_key)
            await reorder(self.relationships, scope_id, snippet_ids)

        return await self._snippets_in(scope_id)

    async def update_text_snippet(
        self,
        owner: str,
        document_id: int,
        scope_key: Any,
        snippet_id: int,
        props: Dict[str, Any]
    ) -> Tuple[TextSnippet, Any]:
        """Writes a new version and points this scope at it.

        Other documents keep showing the version they were attached with.
        """
        async with transaction(self.session):
            _, scope_id = await self._lock_scope(owner, document_id, scope_key)
            relationship = await self.relationships.get(scope_id, snippet_id)
            if relationship is None:
                raise not_found(
                    f"Can not find {self.label} with ID {snippet_id} in document {document_id}."
                )

            current = await validate_ownership(
                self.snippet_repository,
                owner,
                snippet_id,
                relationship.text_snippet_version,
                label="text snippet"
            )
            if not props:
                return current, relationship

            snippet = await self.snippet_repository.add_version(current, props)
            relationship = await self.relationships.update(
                scope_id, snippet_id, {"text_snippet_version": snippet.version}
            )

        return snippet, relationship

    async def detach_text_snippet(
        self, owner: str, document_id: int, scope_key: Any, snippet_id: int
    ) -> None:
        async with transaction(self.session):
            _, scope_id = await self._lock_scope(owner, document_id, scope_key)
            removed = await self.relationships.delete(scope_id, snippet_id)

        logger.info(
            "Detached %s %s from document %s (%s row(s))",
            self.label, snippet_id, document_id, removed
        )


class TextSnippetService(SnippetListService):
    """Text snippets ordered under one experience of one document"""

    relationship_spec = EXPERIENCE_TEXT_SNIPPETS

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.document_experiences = RelationshipRepository(session, DOCUMENT_EXPERIENCES)

    async def _lock_scope(
        self, owner: str, document_id: int, experience_id: int
    ) -> Tuple[Document, int]:
        document = await validate_ownership(
            self.document_repository, owner, document_id, label="document", for_update=True
        )
        document_x_experience = await self.document_experiences.get(document_id, experience_id)
        if document_x_experience is None:
            raise not_found(
                f"Can not find experience with ID {experience_id} in document {document_id}."
            )
        return document, document_x_experience.id

    async def _snippets_in(self, scope_id: int) -> List[TextSnippet]:
        return await self.snippet_repository.get_all_in_experience(scope_id)

    async def get_all(self, owner: str) -> List[TextSnippet]:
        return await self.snippet_repository.get_all(owner)

    async def delete_text_snippet(self, owner: str, snippet_id: int, version: datetime) -> None:
        """Deletes one version; missing versions are ignored"""
        version = as_naive_utc(version)
        async with transaction(self.session):
            snippet = await find_owned(
                self.snippet_repository, owner, snippet_id, version, label="text snippet"
            )
            if snippet is None:
                return
            await self.snippet_repository.delete(snippet_id, version)


class SkillService(SnippetListService):
    """Skills: text snippets listed straight on a document"""

    relationship_spec = DOCUMENT_SKILLS
    label = "skill"

    async def _lock_scope(
        self, owner: str, document_id: int, scope_key: Any = None
    ) -> Tuple[Document, int]:
        document = await validate_ownership(
            self.document_repository, owner, document_id, label="document", for_update=True
        )
        return document, document.id

    async def _snippets_in(self, scope_id: int) -> List[TextSnippet]:
        return await self.snippet_repository.get_all_in_document(scope_id)

    async def create_skill(
        self, owner: str, document_id: int, props: Dict[str, Any]
    ) -> Tuple[TextSnippet, DocumentSkill]:
        return await self.create_text_snippet(owner, document_id, None, props)

    async def attach_skill(self, owner: str, document_id: int, snippet_id: int) -> DocumentSkill:
        return await self.attach_text_snippet(owner, document_id, None, snippet_id)

    async def reorder_skills(
        self, owner: str, document_id: int, snippet_ids: List[int]
    ) -> List[TextSnippet]:
        return await self.reorder_text_snippets(owner, document_id, None, snippet_ids)

    async def update_skill(
        self, owner: str, document_id: int, snippet_id: int, props: Dict[str, Any]
    ) -> Tuple[TextSnippet, DocumentSkill]:
        return await self.update_text_snippet(owner, document_id, None, snippet_id, props)

    async def detach_skill(self, owner: str, document_id: int, snippet_id: int) -> None:
        await self.detach_text_snippet(owner, document_id, None, snippet_id)
