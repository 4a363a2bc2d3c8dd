from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class ProductCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    coverage_amount: Decimal = Field(
        ...,
        max_digits=14,
        decimal_places=2,
        validation_alias=AliasChoices("coverage_amount", "coverageAmount"),
    )
    premium: Decimal = Field(..., max_digits=14, decimal_places=2)
    duration: int = Field(..., description="Duration in months (0 for lifetime)")


class PurchaseRequest(BaseModel):
    start_date: Optional[str] = Field(None, validation_alias=AliasChoices("startDate", "start_date"))
    end_date: Optional[str] = Field(None, validation_alias=AliasChoices("endDate", "end_date"))
