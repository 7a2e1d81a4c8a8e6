import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import transaction
from app.core.errors import bad_request, forbidden, not_found
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.education_repository import EducationRepository
from app.db.repositories.experience_repository import ExperienceRepository
from app.db.repositories.relationship_repository import (
    RelationshipRepository, RelationshipSpec,
    DOCUMENT_SECTIONS, DOCUMENT_EDUCATIONS, DOCUMENT_EXPERIENCES,
)
from app.db.repositories.section_repository import SectionRepository
from app.domains.common.ownership import find_owned, validate_ownership
from app.domains.documents.entities import Document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionItemKind:
    """Everything the ordering protocol needs to know about one item kind"""
    label: str
    repository: Callable[[AsyncSession], Any]
    relationship: RelationshipSpec
    # Sections are shared by everybody and have no owner
    owned: bool = True

    @property
    def title(self) -> str:
        return self.label.capitalize()


SECTION = SectionItemKind("section", SectionRepository, DOCUMENT_SECTIONS, owned=False)
EDUCATION = SectionItemKind("education", EducationRepository, DOCUMENT_EDUCATIONS)
EXPERIENCE = SectionItemKind("experience", ExperienceRepository, DOCUMENT_EXPERIENCES)


def check_exact_permutation(existing_ids: List[Any], ordered_ids: List[Any], label: str) -> None:
    """ordered_ids must name every existing item exactly once"""
    if (
        len(ordered_ids) != len(existing_ids)
        or len(set(ordered_ids)) != len(ordered_ids)
        or set(ordered_ids) != set(existing_ids)
    ):
        logger.error(
            "Provided %s IDs %s do not exactly match %s", label, ordered_ids, existing_ids
        )
        raise bad_request(
            f"Exactly all {label}s need to be included "
            "when updating their positions in a document."
        )


async def append(relationships: RelationshipRepository, scope_id: int, item_id: int, **extra):
    """Adds a relationship row after the last one in its scope"""
    next_position = await relationships.last_position(scope_id) + 1
    return await relationships.add(scope_id, item_id, next_position, **extra)


async def reorder(relationships: RelationshipRepository, scope_id: int, ordered_ids: List[Any]) -> None:
    """Rewrites positions of a scope to follow ordered_ids"""
    existing = await relationships.get_all(scope_id)
    item_column = relationships.spec.item_column
    check_exact_permutation(
        [getattr(row, item_column) for row in existing], ordered_ids, relationships.spec.label
    )
    await relationships.update_all_positions(scope_id, ordered_ids)


class SectionItemService:
    """Create, attach, reorder, detach and delete for one SectionItemKind.

    Every mutation runs in a single transaction and takes a row lock on the
    document first, so concurrent writers to one document see each other's
    positions.
    """

    def __init__(self, session: AsyncSession, kind: SectionItemKind):
        self.session = session
        self.kind = kind
        self.document_repository = DocumentRepository(session)
        self.item_repository = kind.repository(session)
        self.relationships = RelationshipRepository(session, kind.relationship)

    async def _lock_document(self, owner: str, document_id: int) -> Document:
        return await validate_ownership(
            self.document_repository, owner, document_id, label="document", for_update=True
        )

    async def _check_item(self, owner: str, item_id: int) -> Any:
        if self.kind.owned:
            return await validate_ownership(self.item_repository, owner, item_id, label=self.kind.label)

        item = await self.item_repository.get(item_id)
        if item is None:
            raise not_found(f"Can not find {self.kind.label} with ID {item_id}.")
        return item

    async def create_section_item(
        self, owner: str, document_id: int, props: Dict[str, Any]
    ) -> Tuple[Any, Any]:
        """Creates an item and appends it to the master document"""
        logger.debug("create %s for %s in document %s", self.kind.label, owner, document_id)

        async with transaction(self.session):
            document = await self._lock_document(owner, document_id)
            if not document.is_master:
                logger.error(
                    "User %s attempted to add a/an %s to non-master document %s",
                    owner, self.kind.label, document_id
                )
                raise forbidden(
                    f"{self.kind.title}s can only be added to the primary resume template."
                )

            item = await self.item_repository.add(owner, props)
            relationship = await append(self.relationships, document_id, item.id)

        return item, relationship

    async def attach_item(self, owner: str, document_id: int, item_id: int) -> Any:
        """Appends an existing item to a document"""
        logger.debug("attach %s %s to document %s", self.kind.label, item_id, document_id)

        async with transaction(self.session):
            await self._check_item(owner, item_id)
            await self._lock_document(owner, document_id)
            relationship = await append(self.relationships, document_id, item_id)

        return relationship

    async def reorder_items(self, owner: str, document_id: int, item_ids: List[int]) -> List[Any]:
        """Puts the items of a document in the given order"""
        logger.debug("reorder %ss of document %s to %s", self.kind.label, document_id, item_ids)

        async with transaction(self.session):
            await self._lock_document(owner, document_id)
            await reorder(self.relationships, document_id, item_ids)

        return await self.item_repository.get_all_in_document(document_id)

    async def detach_item(self, owner: str, document_id: int, item_id: int) -> None:
        """Removes an item from a document; the item itself stays"""
        async with transaction(self.session):
            await self._lock_document(owner, document_id)
            removed = await self.relationships.delete(document_id, item_id)

        logger.info(
            "Detached %s %s from document %s (%s row(s))",
            self.kind.label, item_id, document_id, removed
        )

    async def get_all_in_document(self, document_id: int) -> List[Any]:
        return await self.item_repository.get_all_in_document(document_id)

    async def get_all(self, owner: str) -> List[Any]:
        """Every item of this kind the user owns"""
        return await self.item_repository.get_all(owner)

    async def update_item(self, owner: str, item_id: int, props: Dict[str, Any]) -> Any:
        async with transaction(self.session):
            item = await validate_ownership(self.item_repository, owner, item_id, label=self.kind.label)
            item = await self.item_repository.update(item, props)
        return item

    async def delete_item(self, owner: str, item_id: int) -> None:
        """Deletes an item and, through cascades, every attachment of it"""
        async with transaction(self.session):
            item: Optional[Any] = await find_owned(
                self.item_repository, owner, item_id, label=self.kind.label
            )
            if item is None:
                return
            removed = await self.item_repository.delete(item_id)

        logger.info("Deleted %s %s (%s row(s))", self.kind.label, item_id, removed)
