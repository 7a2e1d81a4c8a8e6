from typing import Optional

from pydantic import Field, field_validator, model_validator

from app.domains.common.schemas import CamelModel, RequestModel


def _check_password_strength(v: str) -> str:
    if not any(c.isupper() for c in v):
        raise ValueError("Password must contain at least one uppercase letter")
    if not any(c.islower() for c in v):
        raise ValueError("Password must contain at least one lowercase letter")
    if not any(c.isdigit() for c in v):
        raise ValueError("Password must contain at least one digit")
    if all(c.isalnum() for c in v):
        raise ValueError("Password must contain at least one symbol")
    return v


class UserCreate(RequestModel):
    """Registration body"""
    username: str = Field(..., min_length=3, max_length=30)
    password: str = Field(..., min_length=6, max_length=20)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if not v.replace("_", "").replace("-", "").isalnum():
            raise ValueError("Username must contain only alphanumeric characters, underscores, and hyphens")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return _check_password_strength(v)


class UserLogin(RequestModel):
    """Sign-in body"""
    username: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=1)


class UserUpdate(RequestModel):
    """Account update body; the old password is required to set a new one"""
    old_password: Optional[str] = None
    new_password: Optional[str] = Field(None, min_length=6, max_length=20)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v):
        return _check_password_strength(v) if v is not None else v

    @model_validator(mode="after")
    def require_old_password(self):
        if self.new_password is not None and not self.old_password:
            raise ValueError("Old password is required to set a new password")
        return self


class UserResponse(CamelModel):
    username: str


class UserEnvelope(CamelModel):
    user: UserResponse


class TokenResponse(CamelModel):
    auth_token: str


class ContactInfoUpdate(RequestModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    linkedin: Optional[str] = Field(None, max_length=255)
    github: Optional[str] = Field(None, max_length=255)


class ContactInfoResponse(CamelModel):
    username: str
    full_name: str
    location: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None


class ContactInfoEnvelope(CamelModel):
    contact_info: Optional[ContactInfoResponse] = None
