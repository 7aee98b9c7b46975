import enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from app.db.base_class import Base
from app.models.user import utcnow


class GenderType(str, enum.Enum):
    male = "male"
    female = "female"
    other = "other"
    prefer_not_to_say = "prefer_not_to_say"


class UserProfile(Base):
    __tablename__ = "user_profiles"
    __table_args__ = (
        Index("idx_user_profiles_user_visibility", "user_id", "is_public"),
        Index("idx_user_profiles_location", "country", "city"),
        Index("idx_user_profiles_created_at", "created_at"),
    )

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    phone = Column(String(20), index=True)
    birth_date = Column(Date)
    gender = Column(Enum(GenderType, name="gender_type"))
    bio = Column(Text)
    website = Column(String(255))
    address_line_1 = Column(String(255))
    address_line_2 = Column(String(255))
    city = Column(String(100))
    state = Column(String(100))
    postal_code = Column(String(20))
    country = Column(String(2), index=True)  # ISO 3166-1 alpha-2
    preferences = Column(JSON)
    is_public = Column(Boolean, default=False, nullable=False)
    accepts_marketing = Column(Boolean, default=False, nullable=False)
    timezone = Column(String(50), default="UTC", nullable=False)
    locale = Column(String(10), default="es", nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="profile")

    COMPLETION_FIELDS = ("phone", "birth_date", "address_line_1", "city", "country")

    @property
    def is_complete(self) -> bool:
        return all(getattr(self, field) for field in self.COMPLETION_FIELDS)
