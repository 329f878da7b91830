import pytest
from pydantic import ValidationError

from freightdesk.config import Settings
from freightdesk.models.enums import Currency, RateType


def test_lane_defaults_are_typed():
    s = Settings(default_rate_type="Per Stop", default_currency="CAD")
    assert s.default_rate_type == RateType.PER_STOP
    assert s.default_currency == Currency.CAD


def test_unknown_rate_type_rejected():
    with pytest.raises(ValidationError):
        Settings(default_rate_type="flat")
