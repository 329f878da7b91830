from enum import Enum


class LoadType(str, Enum):
    """Load classification. CONTRACT is an exact lane match, SPOT a
    wildcard match, UNMAPPED no match at all."""

    SPOT = "SPOT"
    CONTRACT = "CONTRACT"
    UNMAPPED = "UNMAPPED"


class SettlementStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    PAID = "PAID"
    VOID = "VOID"


class HoldReason(str, Enum):
    """Why a load is held. Only MISSING_POD is cleared by a POD upload."""

    MISSING_POD = "MISSING_POD"
    OTHER = "OTHER"


class RateType(str, Enum):
    PER_MILE = "Per Mile"
    FLAT_RATE = "Flat Rate"
    PER_STOP = "Per Stop"


class Currency(str, Enum):
    USD = "USD"
    CAD = "CAD"
    MXN = "MXN"
