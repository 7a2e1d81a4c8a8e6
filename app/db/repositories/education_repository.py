from typing import Optional, List, Dict, Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError

from app.core.errors import server_error
from app.db.models.education import Education as EducationModel
from app.db.repositories.base import check_fields, raise_for_integrity_error
from app.db.repositories.relationship_repository import (
    DOCUMENT_EDUCATIONS, RelationshipRepository
)
from app.domains.resume.entities import Education


class EducationRepository:
    UPDATABLE_FIELDS = (
        "school",
        "location",
        "start_date",
        "end_date",
        "degree",
        "gpa",
        "awards_and_honors",
        "activities",
    )

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, owner: str, props: Dict[str, Any]) -> Education:
        """Inserts an education owned by owner"""
        check_fields(props, self.UPDATABLE_FIELDS)
        db_education = EducationModel(
            owner=owner, **{field: props.get(field) for field in self.UPDATABLE_FIELDS}
        )
        self.session.add(db_education)
        try:
            await self.session.flush()
        except IntegrityError as err:
            raise_for_integrity_error(err, foreign_key_message=f'User "{owner}" does not exist.')
        return self._to_domain(db_education)

    async def get(self, education_id: int) -> Optional[Education]:
        result = await self.session.execute(
            select(EducationModel).where(EducationModel.id == education_id)
            .execution_options(populate_existing=True)
        )
        db_education = result.scalar_one_or_none()
        return self._to_domain(db_education) if db_education else None

    async def get_all(self, owner: str) -> List[Education]:
        """Every education of a user"""
        result = await self.session.execute(
            select(EducationModel)
            .where(EducationModel.owner == owner)
            .order_by(EducationModel.id)
            .execution_options(populate_existing=True)
        )
        return [self._to_domain(row) for row in result.scalars().all()]

    async def get_all_in_document(self, document_id: int) -> List[Education]:
        """Educations of a document in position order"""
        rows = await RelationshipRepository(self.session, DOCUMENT_EDUCATIONS).get_item_rows(document_id)
        return [self._to_domain(row) for row in rows]

    async def update(self, education: Education, props: Dict[str, Any]) -> Education:
        check_fields(props, self.UPDATABLE_FIELDS)
        if not props:
            return education

        result = await self.session.execute(
            update(EducationModel)
            .where(EducationModel.id == education.id)
            .values(**props)
        )
        if result.rowcount == 0:
            raise server_error(f"Education with ID {education.id} could not be updated.")
        return await self.get(education.id)

    async def delete(self, education_id: int) -> int:
        result = await self.session.execute(
            delete(EducationModel).where(EducationModel.id == education_id)
        )
        return result.rowcount

    def _to_domain(self, db_education: EducationModel) -> Education:
        return Education(
            id=db_education.id,
            owner=db_education.owner,
            school=db_education.school,
            location=db_education.location,
            start_date=db_education.start_date,
            end_date=db_education.end_date,
            degree=db_education.degree,
            gpa=db_education.gpa,
            awards_and_honors=db_education.awards_and_honors,
            activities=db_education.activities
        )
