from typing import Optional, List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.models.section import Section as SectionModel
from app.db.repositories.relationship_repository import (
    DOCUMENT_SECTIONS, RelationshipRepository
)
from app.domains.resume.entities import Section


class SectionRepository:
    """Sections are seeded by migration and only ever read"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, section_id: int) -> Optional[Section]:
        db_section = await self.session.get(SectionModel, section_id)
        return self._to_domain(db_section) if db_section else None

    async def get_all(self) -> List[Section]:
        result = await self.session.execute(select(SectionModel).order_by(SectionModel.id))
        return [self._to_domain(row) for row in result.scalars().all()]

    async def get_all_in_document(self, document_id: int) -> List[Section]:
        """Sections of a document in position order"""
        rows = await RelationshipRepository(self.session, DOCUMENT_SECTIONS).get_item_rows(document_id)
        return [self._to_domain(row) for row in rows]

    def _to_domain(self, db_section: SectionModel) -> Section:
        return Section(id=db_section.id, section_name=db_section.section_name)
