import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError

from app.core.db import Constraint, classify_integrity_error
from app.core.errors import AppError, ErrorKind, server_error
from app.db.models.user import User as UserModel
from app.domains.identity.entities import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Users table access; flushes but never commits"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Inserts a new user"""
        db_user = UserModel(username=user.username, password=user.password_hash)
        self.session.add(db_user)
        try:
            await self.session.flush()
        except IntegrityError as err:
            if classify_integrity_error(err) is Constraint.UNIQUE:
                raise AppError(
                    ErrorKind.CONFLICT, f'Username "{user.username}" is not available.'
                ) from err
            raise
        return self._to_domain(db_user)

    async def get_by_username(self, username: str) -> Optional[User]:
        """Looks a user up by username"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
            .execution_options(populate_existing=True)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def update_password(self, user: User) -> User:
        """Stores the user's current password hash"""
        result = await self.session.execute(
            update(UserModel)
            .where(UserModel.username == user.username)
            .values(password=user.password_hash)
        )
        if result.rowcount == 0:
            logger.error("User %s vanished while updating password", user.username)
            raise server_error(f'User "{user.username}" could not be updated.')
        return user

    async def delete(self, username: str) -> int:
        """Deletes a user, owned rows go with it"""
        result = await self.session.execute(
            delete(UserModel).where(UserModel.username == username)
        )
        return result.rowcount

    def _to_domain(self, db_user: UserModel) -> User:
        return User(username=db_user.username, password_hash=db_user.password)
