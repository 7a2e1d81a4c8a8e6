from typing import Optional, Dict, Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.models.contact_info import ContactInfo as ContactInfoModel
from app.db.repositories.base import check_fields
from app.domains.identity.entities import ContactInfo


class ContactInfoRepository:
    UPDATABLE_FIELDS = ContactInfo.FIELDS

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, username: str) -> Optional[ContactInfo]:
        """Contact info of a user, if any was saved"""
        db_info = await self.session.get(ContactInfoModel, username)
        return self._to_domain(db_info) if db_info else None

    async def upsert(self, username: str, props: Dict[str, Any]) -> ContactInfo:
        """Creates or replaces the contact info of a user"""
        check_fields(props, self.UPDATABLE_FIELDS)

        result = await self.session.execute(
            select(ContactInfoModel).where(ContactInfoModel.username == username)
        )
        db_info = result.scalar_one_or_none()
        if db_info is None:
            db_info = ContactInfoModel(username=username)
            self.session.add(db_info)

        for field in self.UPDATABLE_FIELDS:
            setattr(db_info, field, props.get(field))

        await self.session.flush()
        return self._to_domain(db_info)

    def _to_domain(self, db_info: ContactInfoModel) -> ContactInfo:
        return ContactInfo(
            username=db_info.username,
            full_name=db_info.full_name,
            location=db_info.location,
            email=db_info.email,
            phone=db_info.phone,
            linkedin=db_info.linkedin,
            github=db_info.github
        )
