from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.models.base_columns import new_uuid, utcnow
from app.models.enums import AssetStatus


class License(Base):
    __tablename__ = "licenses"

    id = Column(String(36), primary_key=True, default=new_uuid)
    company_id = Column(String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    asset_id = Column(String(36), ForeignKey("assets.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String, nullable=False)
    vendor = Column(String, nullable=False)
    license_key = Column(String, nullable=True)
    license_type = Column(String, nullable=True)
    max_users = Column(Integer, nullable=True)
    current_users = Column(Integer, nullable=False, default=0)
    purchase_date = Column(DateTime, nullable=True)
    expiry_date = Column(DateTime, nullable=True)
    monthly_cost = Column(Numeric(10, 2), nullable=False, default=0)
    annual_cost = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(String(32), nullable=False, default=AssetStatus.ACTIVE.value)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    asset = relationship("Asset", back_populates="licenses")
