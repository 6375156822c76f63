"""Pydantic models for users and pirgs."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserBase(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=3, max_length=255)
    firstname: str = Field("", max_length=128)
    lastname: str = Field("", max_length=128)


class UserCreate(UserBase):
    """Request body for creating a user."""


class UserUpdate(BaseModel):
    """Partial update; unset fields are left alone."""

    username: Optional[str] = Field(None, min_length=1, max_length=64)
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    firstname: Optional[str] = Field(None, max_length=128)
    lastname: Optional[str] = Field(None, max_length=128)


class User(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class PirgBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)
    owner_id: int


class PirgCreate(PirgBase):
    """Request body for creating a pirg."""

    member_ids: List[int] = Field(default_factory=list)


class PirgUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=64)
    owner_id: Optional[int] = None


class Pirg(PirgBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    member_ids: List[int] = Field(default_factory=list)


class MemberRequest(BaseModel):
    """Request body for adding a user to a pirg."""

    user_id: int
