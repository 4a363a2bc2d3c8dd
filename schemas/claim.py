from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class ClaimCreate(BaseModel):
    policy_id: int = Field(
        ...,
        validation_alias=AliasChoices("policyId", "policy_id", "policyPurchaseId", "policy_purchase_id"),
    )
    amount: Decimal = Field(
        ...,
        max_digits=14,
        decimal_places=2,
        validation_alias=AliasChoices("amount", "claimAmount", "claim_amount"),
    )
    description: Optional[str] = None


class ClaimStatusUpdate(BaseModel):
    status: str
