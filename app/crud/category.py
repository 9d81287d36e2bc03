"""CRUD operations for Category."""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.category import Category
from app.models.post import Post
from app.schemas.category import CategoryCreate, CategoryUpdate

SLUG_FALLBACK = "category"
SLUG_MAX_LENGTH = 60


class CRUDCategory(CRUDBase[Category, CategoryCreate, CategoryUpdate]):
    """CRUD operations for Category."""

    def get_all(self, db: Session) -> List[Category]:
        """Get all categories ordered by name."""
        stmt = select(Category).order_by(Category.name.asc())
        return list(db.scalars(stmt).all())

    def get_by_slug(self, db: Session, slug: str) -> Optional[Category]:
        stmt = select(Category).where(Category.slug == slug).limit(1)
        return db.scalars(stmt).first()

    def get_by_name(self, db: Session, name: str) -> Optional[Category]:
        stmt = select(Category).where(Category.name == name).limit(1)
        return db.scalars(stmt).first()

    def create_category(self, db: Session, *, category_in: CategoryCreate) -> Category:
        """Create a category with a unique slug derived from its name."""
        slug = self.generate_unique_slug(
            db, category_in.name, fallback=SLUG_FALLBACK, max_length=SLUG_MAX_LENGTH
        )
        category = Category(
            name=category_in.name,
            slug=slug,
            description=category_in.description,
        )
        return self.save(db, category)

    def update_category(
        self,
        db: Session,
        *,
        db_obj: Category,
        category_in: CategoryUpdate,
    ) -> Category:
        """Update a category; a new name regenerates the slug."""
        update_data = category_in.model_dump(exclude_unset=True)
        if update_data.get("name"):
            update_data["slug"] = self.generate_unique_slug(
                db,
                update_data["name"],
                fallback=SLUG_FALLBACK,
                max_length=SLUG_MAX_LENGTH,
                exclude_id=db_obj.id,
            )
        return self.update(db, db_obj=db_obj, obj_in=update_data)

    def has_posts(self, db: Session, *, category_id: int) -> bool:
        stmt = select(Post.id).where(Post.category_id == category_id).limit(1)
        return db.scalars(stmt).first() is not None


# Singleton instance
crud_category = CRUDCategory(Category)
