from typing import Optional

from pydantic import BaseModel, Field, field_validator

from freightdesk.models.enums import Currency, RateType


class ContractLane(BaseModel):
    id: str
    org_id: str
    customer_id: str
    hcr: Optional[str] = None
    trip_number: Optional[str] = None
    contract_name: str
    contract_period_start: str
    contract_period_end: str
    rate_type: RateType
    rate: float
    currency: Currency
    miles: Optional[float] = None
    stops: list[dict] = []
    is_active: bool = True
    is_deleted: bool = False
    created_by: str
    created_at: str
    updated_at: str


class ConvertToContractRequest(BaseModel):
    contract_name: Optional[str] = Field(
        None, description="Defaults to 'Lane: {customer} - {trip}'"
    )
    rate_type: Optional[RateType] = Field(
        None, description="Per Mile, Flat Rate or Per Stop (default Flat Rate)"
    )
    rate: Optional[float] = Field(None, ge=0, description="Default 0")

    @field_validator("contract_name", mode="before")
    @classmethod
    def blank_name_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ConversionResult(BaseModel):
    success: bool = True
    message: str
    loads_converted: int
    contract_lane_id: str
    lane_created: bool


class ConfirmSpotResult(BaseModel):
    success: bool = True


class PromotionCheckResult(BaseModel):
    promoted: bool
    lane: Optional[str] = None


class CountResponse(BaseModel):
    count: int
