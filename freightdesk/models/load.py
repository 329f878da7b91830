from typing import Optional

from pydantic import BaseModel

from freightdesk.models.enums import HoldReason, LoadType


class Load(BaseModel):
    id: str
    org_id: str
    internal_id: str
    order_number: str
    customer_id: str
    primary_driver_id: Optional[str] = None
    contract_miles: Optional[float] = None
    load_type: LoadType = LoadType.UNMAPPED
    parsed_hcr: Optional[str] = None
    parsed_trip_number: Optional[str] = None
    requires_manual_review: bool = False
    is_held: bool = False
    held_reason: Optional[str] = None
    held_reason_code: Optional[HoldReason] = None
    held_at: Optional[str] = None
    held_by: Optional[str] = None
    has_signed_pod: bool = False
    pod_storage_id: Optional[str] = None
    pod_uploaded_at: Optional[str] = None
    created_at: str
    updated_at: str


class HeldLoad(BaseModel):
    """A held load as shown on the accountant's hold queue."""

    id: str
    internal_id: str
    order_number: str
    primary_driver_id: Optional[str] = None
    driver_name: Optional[str] = None
    is_held: bool
    held_reason: Optional[str] = None
    held_reason_code: Optional[HoldReason] = None
    held_at: Optional[str] = None
    held_by: Optional[str] = None
    has_signed_pod: bool = False
    created_at: str


class ReviewLoad(BaseModel):
    """A load waiting on spot/contract disposition.

    `matching_spot_loads` is how many loads a conversion of this
    route would reclassify.
    """

    id: str
    internal_id: str
    order_number: str
    customer_id: str
    load_type: LoadType
    parsed_hcr: Optional[str] = None
    parsed_trip_number: Optional[str] = None
    matching_spot_loads: int = 0
    created_at: str
