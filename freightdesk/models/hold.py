from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from freightdesk.models.enums import HoldReason, SettlementStatus


class HoldRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "reason_code": "MISSING_POD",
                "note": "Waiting on signed POD from consignee",
            }
        }
    )

    reason_code: HoldReason = Field(
        HoldReason.OTHER,
        description="MISSING_POD holds are cleared by a POD upload with auto_release",
    )
    note: Optional[str] = Field(
        None, description="Free-text reason shown to accountants"
    )

    @field_validator("note", mode="before")
    @classmethod
    def blank_note_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class BulkHoldRequest(HoldRequest):
    load_ids: list[str] = Field(..., min_length=1)


class BulkReleaseRequest(BaseModel):
    load_ids: list[str] = Field(..., min_length=1)


class PodUploadRequest(BaseModel):
    storage_id: str = Field(..., min_length=1, description="Reference to the stored POD file")
    auto_release: bool = Field(
        False, description="Release the load if it is held for a missing POD"
    )


class HoldResult(BaseModel):
    success: bool
    message: str
    payables_unassigned: Optional[int] = None


class ReleaseResult(BaseModel):
    success: bool
    message: str


class BulkError(BaseModel):
    load_id: str
    error: str


class BulkResult(BaseModel):
    successful: int = 0
    failed: int = 0
    errors: list[BulkError] = []


class PodUploadResult(BaseModel):
    success: bool
    message: str
    was_released: bool = False


class HoldEligibility(BaseModel):
    can_hold: bool
    reason: Optional[str] = None
    has_payables: bool = False
    payables_in_settlement: bool = False
    settlement_status: Optional[SettlementStatus] = None
