from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func

from database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(256), nullable=False)
    description = Column(Text, nullable=False)
    coverage_amount = Column(Numeric(14, 2), nullable=False)
    premium = Column(Numeric(14, 2), nullable=False)
    # Months; 0 means lifetime cover
    duration = Column(Integer, nullable=False, default=0)
    is_approved = Column(Boolean, nullable=False, default=False, index=True)
    created_by = Column(Integer, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
