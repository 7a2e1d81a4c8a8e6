import logging
from typing import Optional, Dict, Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.db import transaction
from app.core.errors import AppError, ErrorKind, not_found
from app.core.security import create_access_token
from app.db.repositories.contact_info_repository import ContactInfoRepository
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User, ContactInfo
from app.domains.identity.schemas import UserCreate, UserLogin, UserUpdate

logger = logging.getLogger(__name__)


class IdentityService:
    """Registration, sign-in and account management"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)
        self.document_repository = DocumentRepository(session)
        self.contact_info_repository = ContactInfoRepository(session)

    async def register_user(self, user_data: UserCreate) -> User:
        """Creates the user together with their master document"""
        logger.debug("Registering user %s", user_data.username)
        async with transaction(self.session):
            if await self.user_repository.get_by_username(user_data.username):
                logger.warning("Username %s is taken", user_data.username)
                raise AppError(
                    ErrorKind.CONFLICT, f'Username "{user_data.username}" is not available.'
                )
            user = await self.user_repository.create(
                User.create_user(username=user_data.username, password=user_data.password)
            )
            await self.document_repository.create(
                owner=user.username,
                document_name=settings.master_document_name,
                is_master=True
            )
        logger.info("Registered user %s", user.username)
        return user

    async def authenticate_user(self, login_data: UserLogin) -> User:
        """Returns the user when the credentials match"""
        user = await self.user_repository.get_by_username(login_data.username)
        if not user or not user.authenticate(login_data.password):
            logger.warning("Failed sign-in for %s", login_data.username)
            raise AppError(ErrorKind.UNAUTHORIZED, "Invalid username/password.")
        return user

    async def login_user(self, login_data: UserLogin) -> str:
        """Checks the credentials and issues a JWT"""
        user = await self.authenticate_user(login_data)
        return self.issue_token(user)

    def issue_token(self, user: User) -> str:
        return create_access_token(data={"sub": user.username})

    async def update_user(self, username: str, update_data: UserUpdate) -> User:
        """Changes the password after re-checking the old one"""
        async with transaction(self.session):
            user = await self.user_repository.get_by_username(username)
            if user is None:
                raise not_found(f'User "{username}" does not exist.')

            if update_data.new_password is not None:
                if not user.authenticate(update_data.old_password):
                    logger.warning("Wrong old password while updating %s", username)
                    raise AppError(ErrorKind.UNAUTHORIZED, "Invalid username/password.")
                user.change_password(update_data.new_password)
                user = await self.user_repository.update_password(user)

        return user

    async def delete_user(self, username: str) -> None:
        """Removes the account and everything it owns"""
        async with transaction(self.session):
            removed = await self.user_repository.delete(username)
        logger.info("Deleted user %s (%s row(s))", username, removed)

    async def get_contact_info(self, username: str) -> Optional[ContactInfo]:
        return await self.contact_info_repository.get(username)

    async def save_contact_info(self, username: str, props: Dict[str, Any]) -> ContactInfo:
        async with transaction(self.session):
            contact_info = await self.contact_info_repository.upsert(username, props)
        return contact_info
