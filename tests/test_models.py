"""
Tests for result and record types.
"""
import pytest

from shipit.core.exceptions import ShipitServiceError, ShipitTransportError
from shipit.models import ErrorKind, PriceOption, ShipitResult, parse_price


class TestShipitResult:
    """Test the tagged result."""

    def test_ok(self):
        result = ShipitResult.ok([1, 2])

        assert result
        assert result.value == [1, 2]
        assert result.error_kind is None

    def test_transport_failure(self):
        error = ShipitTransportError("Network error: refused")

        result = ShipitResult.failure(error, "There was an error executing service x (Network error: refused).")

        assert not result
        assert result.error_kind == ErrorKind.TRANSPORT
        assert result.error is error
        assert result.error_message.startswith("There was an error")

    def test_service_failure_defaults_to_error_message(self):
        result = ShipitResult.failure(ShipitServiceError("invalid token", endpoint="couriers"))

        assert result.error_kind == ErrorKind.SERVICE
        assert result.error_message == "invalid token"
        assert result.error.to_dict()["details"]["endpoint"] == "couriers"

    def test_successful_empty_value_is_truthy(self):
        assert ShipitResult.ok([])
        assert ShipitResult.ok(0)


class TestPriceOption:
    """Test price option decoding."""

    def test_courier_name_wins_over_original_courier(self):
        option = PriceOption.from_api({
            "available_to_shipping": True,
            "courier": {"name": "Chilexpress"},
            "original_courier": "chilexpress",
            "price": "2000",
        })

        assert option.label == "Chilexpress"
        assert option.amount == 2000.0

    def test_missing_availability_means_unavailable(self):
        option = PriceOption.from_api({"price": "1"})

        assert option.available is False
        assert option.label is None

    def test_non_object_option_rejected(self):
        with pytest.raises(ShipitServiceError):
            PriceOption.from_api("2000")


class TestParsePrice:
    """Prices must be finite numbers."""

    @pytest.mark.parametrize("raw, expected", [("1500.5", 1500.5), (2000, 2000.0), (" 10 ", 10.0)])
    def test_valid(self, raw, expected):
        assert parse_price(raw) == expected

    @pytest.mark.parametrize("raw", [None, True, "", "1.500,00", "nan", "-inf", {"amount": 1}])
    def test_invalid(self, raw):
        with pytest.raises(ShipitServiceError) as exc_info:
            parse_price(raw)

        assert exc_info.value.code == "INVALID_PRICE"
