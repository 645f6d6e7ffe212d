from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.models.base_columns import new_uuid, utcnow
from app.models.enums import CompanyPlan


class Company(Base):
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    plan = Column(String(32), nullable=False, default=CompanyPlan.PYME.value)
    max_users = Column(Integer, nullable=False, default=10)
    max_assets = Column(Integer, nullable=False, default=500)
    is_active = Column(Boolean, nullable=False, default=True)

    # pyme usa RUC, professional usa cédula; nunca os dois.
    ruc = Column(String(32), unique=True, nullable=True)
    cedula = Column(String(32), unique=True, nullable=True)
    address = Column(Text, nullable=True)
    phone = Column(String(64), nullable=True)
    email = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    memberships = relationship("UserCompany", back_populates="company", cascade="all, delete-orphan")
    assets = relationship("Asset", back_populates="company", cascade="all, delete-orphan")
    contracts = relationship("Contract", cascade="all, delete-orphan")
    licenses = relationship("License", cascade="all, delete-orphan")
    maintenance_records = relationship("MaintenanceRecord", cascade="all, delete-orphan")
    activity_logs = relationship("ActivityLog", cascade="all, delete-orphan")
    notifications = relationship("Notification", cascade="all, delete-orphan")
