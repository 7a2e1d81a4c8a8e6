from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import ensure_correct_user
from app.core.db import get_db
from app.domains.identity.schemas import (
    UserUpdate, UserResponse, UserEnvelope,
    ContactInfoUpdate, ContactInfoResponse, ContactInfoEnvelope
)
from app.domains.identity.services import IdentityService

router = APIRouter(prefix="/users/{username}", tags=["users"])


@router.patch("", response_model=UserEnvelope)
async def update_user(
    update_data: UserUpdate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Changes the password of the account"""
    user = await IdentityService(db).update_user(owner, update_data)
    return UserEnvelope(user=UserResponse(username=user.username))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Deletes the account and everything it owns"""
    await IdentityService(db).delete_user(owner)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/contact-info", response_model=ContactInfoEnvelope)
async def get_contact_info(
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    contact_info = await IdentityService(db).get_contact_info(owner)
    return ContactInfoEnvelope(
        contact_info=ContactInfoResponse.model_validate(contact_info) if contact_info else None
    )


@router.put("/contact-info", response_model=ContactInfoEnvelope)
async def save_contact_info(
    contact_data: ContactInfoUpdate,
    owner: str = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db)
):
    """Creates or replaces the contact info"""
    contact_info = await IdentityService(db).save_contact_info(owner, contact_data.model_dump())
    return ContactInfoEnvelope(contact_info=ContactInfoResponse.model_validate(contact_info))
