from freightdesk.models.enums import (
    LoadType,
    SettlementStatus,
    HoldReason,
    RateType,
    Currency,
)
from freightdesk.models.auth import AuthContext
from freightdesk.models.load import Load, HeldLoad, ReviewLoad
from freightdesk.models.hold import (
    HoldRequest,
    BulkHoldRequest,
    BulkReleaseRequest,
    PodUploadRequest,
    HoldResult,
    ReleaseResult,
    BulkError,
    BulkResult,
    PodUploadResult,
    HoldEligibility,
)
from freightdesk.models.lane import (
    ContractLane,
    ConvertToContractRequest,
    ConversionResult,
    ConfirmSpotResult,
    PromotionCheckResult,
    CountResponse,
)
from freightdesk.models.payable import Payable, UnassignedPayable, UnassignedPayables

__all__ = [
    "LoadType",
    "SettlementStatus",
    "HoldReason",
    "RateType",
    "Currency",
    "AuthContext",
    "Load",
    "HeldLoad",
    "ReviewLoad",
    "HoldRequest",
    "BulkHoldRequest",
    "BulkReleaseRequest",
    "PodUploadRequest",
    "HoldResult",
    "ReleaseResult",
    "BulkError",
    "BulkResult",
    "PodUploadResult",
    "HoldEligibility",
    "ContractLane",
    "ConvertToContractRequest",
    "ConversionResult",
    "ConfirmSpotResult",
    "PromotionCheckResult",
    "CountResponse",
    "Payable",
    "UnassignedPayable",
    "UnassignedPayables",
]
