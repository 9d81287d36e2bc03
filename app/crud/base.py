"""Shared persistence helpers for the Letspost models."""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.database import Base
from app.utils.slugify import generate_slug, slugify


ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
	"""Base for the per-model CRUD singletons.

	Writes commit immediately and roll the session back when the store rejects them.
	"""

	def __init__(self, model: Type[ModelType]):
		self.model = model

	# ----- Read -----
	def get(self, db: Session, id: Any) -> Optional[ModelType]:
		"""Get one record by primary key."""
		return db.get(self.model, id)

	def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[ModelType]:
		"""Get records with pagination."""
		stmt = select(self.model).offset(skip).limit(limit)
		return list(db.scalars(stmt).all())

	def generate_unique_slug(
		self,
		db: Session,
		title: str,
		*,
		fallback: str,
		max_length: Optional[int] = None,
		exclude_id: Any = None,
	) -> str:
		"""Slug for ``title`` that no other row of this model uses.

		Only slugs sharing the base prefix can collide, so only those are loaded.
		With a length cap the base may be shortened to fit a suffix, so the
		prefix leaves room for one of up to ten digits.
		"""
		prefix = slugify(title, max_length=max_length) or fallback
		if max_length is not None:
			prefix = prefix[: max(1, max_length - 11)]
		stmt = select(self.model.slug).where(self.model.slug.like(f"{prefix}%"))
		if exclude_id is not None:
			stmt = stmt.where(self.model.id != exclude_id)
		existing = db.scalars(stmt).all()
		return generate_slug(title, existing, fallback=fallback, max_length=max_length)

	# ----- Write helpers -----
	def save(self, db: Session, db_obj: ModelType) -> ModelType:
		"""Add, commit and refresh one object; roll back on failure."""
		try:
			db.add(db_obj)
			db.commit()
			db.refresh(db_obj)
		except Exception:
			db.rollback()
			raise
		return db_obj

	# ----- Update -----
	def update(
		self,
		db: Session,
		*,
		db_obj: ModelType,
		obj_in: Union[UpdateSchemaType, Dict[str, Any]],
	) -> ModelType:
		"""Update a record with fields from a Pydantic schema or dict."""
		update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)

		for field, value in update_data.items():
			if hasattr(db_obj, field):
				setattr(db_obj, field, value)

		return self.save(db, db_obj)

	# ----- Delete -----
	def remove(self, db: Session, *, db_obj: ModelType) -> ModelType:
		"""Hard delete a record. Returns the deleted object."""
		try:
			db.delete(db_obj)
			db.commit()
		except Exception:
			db.rollback()
			raise
		return db_obj
