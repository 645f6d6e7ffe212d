from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.models.base_columns import new_uuid, utcnow
from app.models.enums import MaintenancePriority, MaintenanceStatus


class MaintenanceRecord(Base):
    __tablename__ = "maintenance_records"

    id = Column(String(36), primary_key=True, default=new_uuid)
    asset_id = Column(String(36), ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True)
    company_id = Column(String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    maintenance_type = Column(String(32), nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    vendor = Column(String, nullable=True)
    cost = Column(Numeric(10, 2), nullable=False, default=0)
    scheduled_date = Column(DateTime, nullable=True)
    completed_date = Column(DateTime, nullable=True)
    next_maintenance_date = Column(DateTime, nullable=True)
    status = Column(String(32), nullable=False, default=MaintenanceStatus.SCHEDULED.value)
    priority = Column(String(16), nullable=False, default=MaintenancePriority.MEDIUM.value)
    technician = Column(String, nullable=True)
    parts_replaced = Column(Text, nullable=True)
    time_spent = Column(Integer, nullable=True)  # minutos
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    asset = relationship("Asset", back_populates="maintenance_records")
