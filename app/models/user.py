import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String
from sqlalchemy.orm import relationship

from app.db.base_class import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserStatus(str, enum.Enum):
    """Lifecycle of a user row; a deleted row is kept as a tombstone."""
    ACTIVE = "active"
    DELETED = "deleted"


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_email_status", "email", "deleted_at"),
        Index("idx_users_creation_status", "created_at", "deleted_at"),
        Index("idx_users_active_users", "email_verified_at", "deleted_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash, never serialized
    email_verified_at = Column(DateTime(timezone=True), nullable=True, index=True)
    remember_token = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    profile = relationship(
        "UserProfile",
        uselist=False,
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    posts = relationship(
        "Post",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Post.created_at.desc()",
    )
    permissions = relationship(
        "UserPermission",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def status(self) -> UserStatus:
        return UserStatus.DELETED if self.deleted_at is not None else UserStatus.ACTIVE

    @property
    def is_deleted(self) -> bool:
        return self.status is UserStatus.DELETED

    @property
    def is_verified(self) -> bool:
        return self.email_verified_at is not None

    def has_capability(self, capability: str) -> bool:
        return any(p.permission == capability for p in self.permissions)

    def mark_email_as_verified(self) -> None:
        self.email_verified_at = utcnow()

    def soft_delete(self) -> None:
        self.deleted_at = utcnow()

    def restore(self) -> None:
        self.deleted_at = None

    def __repr__(self):
        return f"<User {self.email}>"
