from typing import Literal, Optional

from pydantic import BaseModel, Field

Role = Literal["standard", "admin"]


class AuthSubject(BaseModel):
    """The authenticated caller, as carried by a verified bearer token."""

    id: int
    role: Role

    model_config = {"frozen": True}

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1)
    contact: Optional[str] = None
    email: Optional[str] = None
    password: str = Field(..., min_length=1)
    role: Role = "standard"


class LoginRequest(BaseModel):
    contact: Optional[str] = None
    email: Optional[str] = None
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    contact: Optional[str] = None
    email: Optional[str] = None


class RoleUpdate(BaseModel):
    role: Role
