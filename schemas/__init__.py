from schemas.admin import DecisionRequest
from schemas.auth import AuthSubject, LoginRequest, ProfileUpdate, RegisterRequest, Role, RoleUpdate
from schemas.claim import ClaimCreate, ClaimStatusUpdate
from schemas.policy import PolicyCreate
from schemas.product import ProductCreate, PurchaseRequest

__all__ = [
    "AuthSubject",
    "ClaimCreate",
    "ClaimStatusUpdate",
    "DecisionRequest",
    "LoginRequest",
    "PolicyCreate",
    "ProductCreate",
    "ProfileUpdate",
    "PurchaseRequest",
    "RegisterRequest",
    "Role",
    "RoleUpdate",
]
