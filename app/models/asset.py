from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.models.base_columns import new_uuid, utcnow
from app.models.enums import AssetStatus, AssetType


class Asset(Base):
    __tablename__ = "assets"

    id = Column(String(36), primary_key=True, default=new_uuid)
    company_id = Column(String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String(32), nullable=False, default=AssetType.PHYSICAL.value)
    description = Column(Text, nullable=True)
    serial_number = Column(String, nullable=True)
    model = Column(String, nullable=True)
    manufacturer = Column(String, nullable=True)
    purchase_date = Column(DateTime, nullable=True)
    warranty_expiry = Column(DateTime, nullable=True)
    monthly_cost = Column(Numeric(10, 2), nullable=False, default=0)
    annual_cost = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(String(32), nullable=False, default=AssetStatus.ACTIVE.value)
    location = Column(String, nullable=True)
    assigned_to = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    # Somente para type=application.
    application_type = Column(String(32), nullable=True)
    url = Column(String, nullable=True)
    version = Column(String, nullable=True)
    domain_cost = Column(Numeric(10, 2), nullable=False, default=0)
    ssl_cost = Column(Numeric(10, 2), nullable=False, default=0)
    hosting_cost = Column(Numeric(10, 2), nullable=False, default=0)
    server_cost = Column(Numeric(10, 2), nullable=False, default=0)
    domain_expiry = Column(DateTime, nullable=True)
    ssl_expiry = Column(DateTime, nullable=True)
    hosting_expiry = Column(DateTime, nullable=True)
    server_expiry = Column(DateTime, nullable=True)
    assigned_technician_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    company = relationship("Company", back_populates="assets")
    assigned_technician = relationship("User")
    licenses = relationship("License", back_populates="asset")
    maintenance_records = relationship(
        "MaintenanceRecord",
        back_populates="asset",
        cascade="all, delete-orphan",
    )
