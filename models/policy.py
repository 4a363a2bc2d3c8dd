from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import relationship

from database import Base

POLICY_PENDING = "pending"
POLICY_APPROVED = "approved"
POLICY_DENIED = "denied"


class Policy(Base):
    """Coverage held by an account: either created directly or purchased from a product."""

    __tablename__ = "policies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)
    policy_type = Column(String(64), nullable=True)
    coverage_amount = Column(Numeric(14, 2), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    status = Column(String(16), nullable=False, default=POLICY_PENDING, index=True)
    approved_by = Column(Integer, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    owner = relationship("Account", foreign_keys=[owner_id])
    product = relationship("Product")
    claims = relationship("Claim", back_populates="policy", cascade="all, delete-orphan")
