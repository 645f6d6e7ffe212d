from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Numeric, String, Text

from app.core.database import Base
from app.models.base_columns import new_uuid, utcnow
from app.models.enums import ContractStatus


class Contract(Base):
    __tablename__ = "contracts"

    id = Column(String(36), primary_key=True, default=new_uuid)
    company_id = Column(String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    vendor = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    contract_type = Column(String, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    renewal_date = Column(DateTime, nullable=True)
    monthly_cost = Column(Numeric(10, 2), nullable=False, default=0)
    annual_cost = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(String(32), nullable=False, default=ContractStatus.ACTIVE.value)
    auto_renewal = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
