"""User-related request models."""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from jobboard.core.schemas import UserRole


class RegisterRequest(BaseModel):
    """Body of POST /api/v1/user/register."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    phone: str
    address: str
    password: str = Field(..., min_length=8)
    role: UserRole
    first_niche: Optional[str] = Field(None, alias="firstNiche")
    second_niche: Optional[str] = Field(None, alias="secondNiche")
    third_niche: Optional[str] = Field(None, alias="thirdNiche")
    cover_letter: Optional[str] = Field(None, alias="coverLetter")


class LoginRequest(BaseModel):
    """Body of POST /api/v1/user/login."""
    role: UserRole
    email: str
    password: str


class ProfileUpdate(BaseModel):
    """Body of PUT /api/v1/user/update/profile. Omitted fields are left unchanged."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    cover_letter: Optional[str] = Field(None, alias="coverLetter")
    first_niche: Optional[str] = Field(None, alias="firstNiche")
    second_niche: Optional[str] = Field(None, alias="secondNiche")
    third_niche: Optional[str] = Field(None, alias="thirdNiche")


class PasswordUpdate(BaseModel):
    """Body of PUT /api/v1/user/update/password."""
    model_config = ConfigDict(populate_by_name=True)

    old_password: str = Field(..., alias="oldPassword")
    new_password: str = Field(..., alias="newPassword", min_length=8)
    confirm_password: str = Field(..., alias="confirmPassword")
