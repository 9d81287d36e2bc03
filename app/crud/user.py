"""CRUD operations for `User` model."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.core.security import get_password_hash, verify_password
from app.crud.base import CRUDBase
from app.models.user import AccountStatus, User, UserRole
from app.models.user_details import UserDetails
from app.schemas.user import UserCreate, UserDetailsUpdate, UserUpdate


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
	def get_by_email(self, db: Session, email: Optional[str]) -> Optional[User]:
		if not email:
			return None
		stmt = select(User).where(User.email == email.lower()).limit(1)
		return db.scalars(stmt).first()

	def get_by_username(self, db: Session, username: Optional[str]) -> Optional[User]:
		if not username:
			return None
		stmt = select(User).where(User.username == username).limit(1)
		return db.scalars(stmt).first()

	def get_by_identifier(self, db: Session, identifier: str) -> Optional[User]:
		"""Find a user by email or username."""
		stmt = (
			select(User)
			.where(or_(User.email == identifier.lower(), User.username == identifier))
			.limit(1)
		)
		return db.scalars(stmt).first()

	def get_active(self, db: Session, id: Any) -> Optional[User]:
		"""Get a user only if active and not soft-deleted."""
		stmt = select(User).where(User.id == id, User.is_active).limit(1)
		return db.scalars(stmt).first()

	def exists_with(self, db: Session, *, username: str, email: str) -> bool:
		stmt = select(User.id).where(or_(User.email == email, User.username == username)).limit(1)
		return db.scalars(stmt).first() is not None

	def create_user(
		self,
		db: Session,
		*,
		user_in: UserCreate,
		role: UserRole = UserRole.USER,
	) -> User:
		db_obj = User(
			username=user_in.username,
			email=user_in.email,
			password_hash=get_password_hash(user_in.password),
			role=role,
			status=AccountStatus.ACTIVE,
		)
		return self.save(db, db_obj)

	def authenticate(self, db: Session, *, identifier: str, password: str) -> Optional[User]:
		"""Check credentials; deleted accounts never authenticate."""
		user = self.get_by_identifier(db, identifier)
		if not user:
			return None
		if user.status == AccountStatus.DELETED or user.deleted_at is not None:
			return None
		if not verify_password(password, user.password_hash):
			return None
		return user

	def update_account(
		self,
		db: Session,
		*,
		db_obj: User,
		email: Optional[str] = None,
		username: Optional[str] = None,
		new_password: Optional[str] = None,
	) -> User:
		if email:
			db_obj.email = email
		if username:
			db_obj.username = username
		if new_password:
			db_obj.password_hash = get_password_hash(new_password)
		return self.save(db, db_obj)

	def soft_delete(self, db: Session, *, db_obj: User) -> User:
		"""Mark the account deleted without removing the row."""
		db_obj.status = AccountStatus.DELETED
		db_obj.deleted_at = datetime.now(timezone.utc)
		return self.save(db, db_obj)

	def set_status(self, db: Session, *, db_obj: User, status: AccountStatus) -> User:
		db_obj.status = status
		if status == AccountStatus.DELETED:
			db_obj.deleted_at = db_obj.deleted_at or datetime.now(timezone.utc)
		else:
			db_obj.deleted_at = None
		return self.save(db, db_obj)

	def upsert_details(self, db: Session, *, db_obj: User, details_in: UserDetailsUpdate) -> UserDetails:
		"""Create or update the profile details row for a user."""
		details = db_obj.details
		if details is None:
			details = UserDetails(user_id=db_obj.id)
		for field, value in details_in.model_dump(exclude_unset=True).items():
			setattr(details, field, value)
		try:
			db.add(details)
			db.commit()
			db.refresh(details)
		except Exception:
			db.rollback()
			raise
		return details


crud_user = CRUDUser(User)
