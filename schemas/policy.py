from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class PolicyCreate(BaseModel):
    # Dates stay strings here so unparsable values surface as a 400 from the service
    type: str = Field(..., min_length=1)
    amount: Decimal = Field(..., max_digits=14, decimal_places=2)
    start_date: str = Field(..., validation_alias=AliasChoices("startDate", "start_date"))
    end_date: Optional[str] = Field(None, validation_alias=AliasChoices("endDate", "end_date"))
    policyholder_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("policyholderId", "policyholder_id")
    )
