from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func

from database import Base


class Transaction(Base):
    """Append-only record of money movements (currently only purchases)."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    policy_id = Column(Integer, ForeignKey("policies.id", ondelete="SET NULL"), nullable=True)
    amount = Column(Numeric(14, 2), nullable=False)
    transaction_type = Column(String(32), nullable=False, default="purchase")
    status = Column(String(16), nullable=False, default="completed")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Approval(Base):
    """Append-only audit row for every admin decision on a product, policy or claim."""

    __tablename__ = "approvals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_type = Column(String(16), nullable=False, index=True)
    entity_id = Column(Integer, nullable=False, index=True)
    admin_id = Column(Integer, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True)
    decision = Column(Boolean, nullable=False)
    reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
