from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from database import Base

CLAIM_PENDING = "pending"
CLAIM_APPROVED = "approved"
CLAIM_DENIED = "denied"
CLAIM_PAID = "paid"


class Claim(Base):
    __tablename__ = "claims"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Unique: at most one claim per policy
    policy_id = Column(
        Integer, ForeignKey("policies.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    amount = Column(Numeric(14, 2), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default=CLAIM_PENDING, index=True)
    rejection_reason = Column(Text, nullable=True)
    approved_by = Column(Integer, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    policy = relationship("Policy", back_populates="claims")
