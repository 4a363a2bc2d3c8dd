from sqlalchemy import Column, DateTime, Integer, String, func

from database import Base

ROLE_STANDARD = "standard"
ROLE_ADMIN = "admin"


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(256), nullable=False)
    # At least one of contact/email is set; either may be used to log in
    contact = Column(String(128), unique=True, nullable=True, index=True)
    email = Column(String(320), unique=True, nullable=True, index=True)
    password_hash = Column(String(128), nullable=False)
    role = Column(String(16), nullable=False, default=ROLE_STANDARD)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
