import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base_class import Base
from app.models.user import utcnow


class Capability(str, enum.Enum):
    """Named permissions checked before a users action runs."""
    VIEW = "view users"
    CREATE = "create users"
    UPDATE = "update users"
    DELETE = "delete users"
    RESTORE = "restore users"


class UserPermission(Base):
    __tablename__ = "user_permissions"
    __table_args__ = (
        UniqueConstraint("user_id", "permission", name="uq_user_permissions_user_permission"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    permission = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    user = relationship("User", back_populates="permissions")

    def __repr__(self):
        return f"<UserPermission {self.user_id}:{self.permission}>"
