from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class DecisionRequest(BaseModel):
    """Admin decision: true approves, false denies."""

    decision: bool
    reason: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("reason", "rejection_reason", "rejectionReason"),
    )
