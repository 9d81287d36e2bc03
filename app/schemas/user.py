"""Pydantic schemas for `User` domain objects."""

import re
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.models.user import AccountStatus, UserRole


USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]{3,30}$")


def _check_username(v: str) -> str:
	if not USERNAME_RE.match(v):
		raise ValueError("Username must be 3-30 characters: letters, digits, '_', '.', '-'")
	return v


def _normalize_email(v: str) -> str:
	v = v.lower()
	if len(v) > 100:
		raise ValueError("Email address must be at most 100 characters")
	return v


class UserCreate(BaseModel):
	username: str
	email: EmailStr
	password: str = Field(..., min_length=6, max_length=128)

	@field_validator("username")
	@classmethod
	def validate_username(cls, v: str) -> str:
		return _check_username(v)

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		return _normalize_email(v)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"username": "jane_doe",
			"email": "jane@example.com",
			"password": "StrongPass!234",
		}
	})


class UserLogin(BaseModel):
	identifier: str = Field(..., min_length=1, description="Email or username")
	password: str = Field(..., min_length=1)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"identifier": "jane@example.com",
			"password": "StrongPass!234",
		}
	})


class UserUpdate(BaseModel):
	email: Optional[EmailStr] = None
	username: Optional[str] = None
	current_password: Optional[str] = None
	new_password: Optional[str] = Field(None, min_length=6, max_length=128)

	@field_validator("username")
	@classmethod
	def validate_username(cls, v: Optional[str]) -> Optional[str]:
		if v is None:
			return v
		return _check_username(v)

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: Optional[str]) -> Optional[str]:
		if v is None:
			return v
		return _normalize_email(v)

	@property
	def changes_credentials(self) -> bool:
		return bool(self.email or self.username or self.new_password)


class AccountDelete(BaseModel):
	password: str = Field(..., min_length=1)


class UserStatusUpdate(BaseModel):
	status: AccountStatus


class UserDetailsUpdate(BaseModel):
	full_name: Optional[str] = Field(None, max_length=100)
	bio: Optional[str] = None
	is_public: Optional[bool] = None
	location: Optional[str] = Field(None, max_length=100)
	website: Optional[str] = Field(None, max_length=255)


class UserDetailsResponse(BaseModel):
	full_name: Optional[str] = None
	bio: Optional[str] = None
	is_public: Optional[bool] = None
	location: Optional[str] = None
	website: Optional[str] = None
	updated_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
	id: UUID
	username: str
	email: str
	role: UserRole
	status: AccountStatus
	created_at: datetime

	model_config = ConfigDict(from_attributes=True, json_schema_extra={
		"example": {
			"id": "5b8f0c7e-3b1a-4a57-9d59-2f1a3c1f0d11",
			"username": "jane_doe",
			"email": "jane@example.com",
			"role": "user",
			"status": "active",
			"created_at": "2025-01-01T10:00:00Z",
		}
	})


class UserProfileResponse(UserResponse):
	updated_at: datetime
	details: Optional[UserDetailsResponse] = None


class UserSummary(BaseModel):
	"""Author info embedded in content responses."""
	id: UUID
	username: str

	model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
	user: UserResponse
	access_token: str
	token_type: str = "bearer"


class UserUpdateResponse(BaseModel):
	user: UserResponse
	access_token: Optional[str] = None
