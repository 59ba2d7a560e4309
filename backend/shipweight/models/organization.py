from sqlalchemy import Column, DateTime, String, func

from shipweight.core.database import Base
from shipweight.models.shared import UUIDType, generate_uuid


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    default_currency = Column(String(3), nullable=False, default="GBP")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
