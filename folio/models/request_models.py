"""Request models for API endpoints."""

import re
from datetime import date
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator
from pydantic_core import PydanticCustomError

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

PASSWORD_RULES = (
    "Please enter a password with the following criteria: 1. Has 8 or more characters. "
    "2. Has at least 1 uppercase and 1 lowercase letter. 3. Contains at least 1 number"
)
_PASSWORD_CHECKS = (
    re.compile(r"[a-z]"),
    re.compile(r"[A-Z]"),
    re.compile(r"\d"),
)


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    name: NonEmptyStr = Field(..., description="Display name", examples=["Ada Lovelace"])
    email: EmailStr = Field(..., description="Unique email address", examples=["ada@mail.com"])
    password: str = Field(..., description="Plain text password", examples=["Secret123!"])

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        if len(value) < 8 or not all(check.search(value) for check in _PASSWORD_CHECKS):
            raise PydanticCustomError("password_strength", PASSWORD_RULES)
        return value


class LoginRequest(BaseModel):
    """Request model for signing in."""

    email: EmailStr
    password: NonEmptyStr


class PostCreateRequest(BaseModel):
    text: NonEmptyStr = Field(..., examples=["hello"])


class ProjectCreateRequest(BaseModel):
    title: NonEmptyStr
    description: NonEmptyStr


class CommentCreateRequest(BaseModel):
    text: NonEmptyStr


class ProfileRequest(BaseModel):
    """
    Request model for creating or updating the caller's profile.

    ``skills`` is a comma separated string. Social links may be given at the
    top level and are moved under ``social``. Extra fields are accepted.
    """

    model_config = ConfigDict(extra="allow")

    status: NonEmptyStr = Field(..., examples=["Developer"])
    skills: NonEmptyStr = Field(..., examples=["python, fastapi, mongodb"])
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None


class ExperienceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: NonEmptyStr
    company: NonEmptyStr
    location: Optional[str] = None
    from_: date = Field(..., alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


def _reject_null(value):
    # Omitting a field leaves it unchanged; null would erase a required value
    if value is None:
        raise PydanticCustomError("null_value", "Field cannot be null")
    return value


class ExperienceUpdateRequest(BaseModel):
    """Partial update of one experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[NonEmptyStr] = None
    company: Optional[NonEmptyStr] = None
    location: Optional[str] = None
    from_: Optional[date] = Field(None, alias="from")
    to: Optional[date] = None
    current: Optional[bool] = None
    description: Optional[str] = None

    @field_validator("title", "company", "from_")
    @classmethod
    def not_null(cls, value):
        return _reject_null(value)


class EducationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    school: NonEmptyStr
    degree: NonEmptyStr
    fieldofstudy: NonEmptyStr
    from_: date = Field(..., alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


class EducationUpdateRequest(BaseModel):
    """Partial update of one education entry."""

    model_config = ConfigDict(populate_by_name=True)

    school: Optional[NonEmptyStr] = None
    degree: Optional[NonEmptyStr] = None
    fieldofstudy: Optional[NonEmptyStr] = None
    from_: Optional[date] = Field(None, alias="from")
    to: Optional[date] = None
    current: Optional[bool] = None
    description: Optional[str] = None

    @field_validator("school", "degree", "fieldofstudy", "from_")
    @classmethod
    def not_null(cls, value):
        return _reject_null(value)


class ChartCreateRequest(BaseModel):
    chartName: NonEmptyStr
    chartType: Optional[str] = None
    createdBy: Optional[str] = None
