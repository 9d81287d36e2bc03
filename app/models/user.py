import uuid
from enum import Enum

from sqlalchemy import Column, String, TIMESTAMP, Index, Uuid, and_, Enum as SQLEnum
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class User(Base):
    __tablename__ = "users"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Authentication
    username = Column(String(30), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Role & Account Status
    role = Column(
        SQLEnum(UserRole, name="user_role", values_callable=_enum_values),
        nullable=False,
        default=UserRole.USER,
    )
    status = Column(
        SQLEnum(AccountStatus, name="account_status", values_callable=_enum_values),
        nullable=False,
        default=AccountStatus.ACTIVE,
    )

    # Timestamps
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Soft delete
    deleted_at = Column(TIMESTAMP(timezone=True), nullable=True)

    __table_args__ = (
        Index("user_created_idx", "created_at"),
    )

    # Relationships
    details = relationship(
        "UserDetails",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    posts = relationship("Post", back_populates="author", passive_deletes=True)
    comments = relationship("Comment", back_populates="author", passive_deletes=True)
    likes = relationship("Like", back_populates="user", passive_deletes=True)

    @hybrid_property
    def is_active(self) -> bool:
        """Active status and not soft-deleted."""
        return self.status == AccountStatus.ACTIVE and self.deleted_at is None

    @is_active.expression
    def is_active(cls):
        return and_(cls.status == AccountStatus.ACTIVE, cls.deleted_at.is_(None))

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
