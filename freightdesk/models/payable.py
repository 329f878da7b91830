from typing import Optional

from pydantic import BaseModel


class Payable(BaseModel):
    id: str
    org_id: str
    load_id: str
    driver_id: Optional[str] = None
    description: str
    total_amount: float
    settlement_id: Optional[str] = None
    created_at: str
    updated_at: str


class UnassignedPayable(BaseModel):
    id: str
    load_id: str
    load_internal_id: Optional[str] = None
    description: str
    total_amount: float
    created_at: str
    held_reason: Optional[str] = None


class UnassignedPayables(BaseModel):
    """Payables not on any settlement, split by whether the next
    settlement run may pick them up."""

    eligible: list[UnassignedPayable]
    held: list[UnassignedPayable]
    total_eligible: float
    total_held: float
