from typing import Optional, List, Dict, Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError

from app.core.errors import server_error
from app.db.models.experience import Experience as ExperienceModel
from app.db.repositories.base import check_fields, raise_for_integrity_error
from app.db.repositories.relationship_repository import (
    DOCUMENT_EXPERIENCES, RelationshipRepository
)
from app.domains.resume.entities import Experience


class ExperienceRepository:
    UPDATABLE_FIELDS = ("title", "organization", "location", "start_date", "end_date")

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, owner: str, props: Dict[str, Any]) -> Experience:
        """Inserts an experience owned by owner"""
        check_fields(props, self.UPDATABLE_FIELDS)
        db_experience = ExperienceModel(
            owner=owner, **{field: props.get(field) for field in self.UPDATABLE_FIELDS}
        )
        self.session.add(db_experience)
        try:
            await self.session.flush()
        except IntegrityError as err:
            raise_for_integrity_error(err, foreign_key_message=f'User "{owner}" does not exist.')
        return self._to_domain(db_experience)

    async def get(self, experience_id: int) -> Optional[Experience]:
        result = await self.session.execute(
            select(ExperienceModel).where(ExperienceModel.id == experience_id)
            .execution_options(populate_existing=True)
        )
        db_experience = result.scalar_one_or_none()
        return self._to_domain(db_experience) if db_experience else None

    async def get_all(self, owner: str) -> List[Experience]:
        result = await self.session.execute(
            select(ExperienceModel)
            .where(ExperienceModel.owner == owner)
            .order_by(ExperienceModel.id)
            .execution_options(populate_existing=True)
        )
        return [self._to_domain(row) for row in result.scalars().all()]

    async def get_all_in_document(self, document_id: int) -> List[Experience]:
        """Experiences of a document in position order"""
        rows = await RelationshipRepository(self.session, DOCUMENT_EXPERIENCES).get_item_rows(document_id)
        return [self._to_domain(row) for row in rows]

    async def update(self, experience: Experience, props: Dict[str, Any]) -> Experience:
        check_fields(props, self.UPDATABLE_FIELDS)
        if not props:
            return experience

        result = await self.session.execute(
            update(ExperienceModel)
            .where(ExperienceModel.id == experience.id)
            .values(**props)
        )
        if result.rowcount == 0:
            raise server_error(f"Experience with ID {experience.id} could not be updated.")
        return await self.get(experience.id)

    async def delete(self, experience_id: int) -> int:
        result = await self.session.execute(
            delete(ExperienceModel).where(ExperienceModel.id == experience_id)
        )
        return result.rowcount

    def _to_domain(self, db_experience: ExperienceModel) -> Experience:
        return Experience(
            id=db_experience.id,
            owner=db_experience.owner,
            title=db_experience.title,
            organization=db_experience.organization,
            location=db_experience.location,
            start_date=db_experience.start_date,
            end_date=db_experience.end_date
        )
