from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.models.base_columns import new_uuid, utcnow
from app.models.enums import UserRole


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    profile_image_url = Column(String, nullable=True)
    # Papel global; dentro de cada empresa vale o papel de UserCompany.
    role = Column(String(32), nullable=False, default=UserRole.TECHNICIAN.value)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    memberships = relationship("UserCompany", back_populates="user", cascade="all, delete-orphan")
