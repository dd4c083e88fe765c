"""
Data classes for the Shipit client.

Raw webservice payloads are loosely typed JSON. Everything the client hands
back to callers is shaped into one of the classes below.
"""
import enum
import math
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from shipit.core.config import DEFAULT_API_BASE, DEFAULT_TIMEOUT_SECONDS
from shipit.core.exceptions import (
    ShipitError,
    ShipitServiceError,
    ShipitTransportError,
)

T = TypeVar("T")


@dataclass(frozen=True)
class ClientConfig:
    """Shipit credentials and connection settings."""
    email: str
    access_token: str
    is_development: bool = False
    base_url: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __repr__(self) -> str:
        # Keep the token out of tracebacks and logs
        return (
            f"ClientConfig(email={self.email!r}, access_token='***', "
            f"is_development={self.is_development!r}, base_url={self.base_url!r})"
        )


@dataclass(frozen=True)
class Courier:
    """A courier available through Shipit."""
    id: str
    name: str
    active: bool
    image_url: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Courier":
        """Build from a `couriers` endpoint record."""
        try:
            return cls(
                id=data["slug"],
                name=data["name"],
                active=bool(data.get("available_to_ship", False)),
                image_url=data.get("image_original_url"),
            )
        except (KeyError, TypeError) as e:
            raise ShipitServiceError(
                message=f"Malformed courier record: {e}",
                code="MALFORMED_RESPONSE",
                endpoint="couriers",
            )


def parse_price(value: Any, endpoint: str = "prices") -> float:
    """
    Convert a price from the webservice to float.

    Prices usually arrive as numeric strings ("1500.5"). Anything that is not
    a finite number is rejected instead of being coerced to zero or NaN.
    """
    if isinstance(value, bool) or value is None:
        raise ShipitServiceError(
            message=f"Invalid price value: {value!r}",
            code="INVALID_PRICE",
            endpoint=endpoint,
        )
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ShipitServiceError(
            message=f"Invalid price value: {value!r}",
            code="INVALID_PRICE",
            endpoint=endpoint,
        )
    if not math.isfinite(price):
        raise ShipitServiceError(
            message=f"Invalid price value: {value!r}",
            code="INVALID_PRICE",
            endpoint=endpoint,
        )
    return price


@dataclass(frozen=True)
class PriceOption:
    """One courier option from the `prices` endpoint."""
    price: Any
    available: bool
    courier_name: Optional[str] = None
    original_courier: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "PriceOption":
        if not isinstance(data, dict):
            raise ShipitServiceError(
                message=f"Malformed price option: {data!r}",
                code="MALFORMED_RESPONSE",
                endpoint="prices",
            )
        courier = data.get("courier")
        courier_name = courier.get("name") if isinstance(courier, dict) else None
        return cls(
            price=data.get("price"),
            available=bool(data.get("available_to_shipping", False)),
            courier_name=courier_name,
            original_courier=data.get("original_courier"),
        )

    @property
    def label(self) -> Optional[str]:
        """Courier display name, or the original courier label if unnamed."""
        if self.courier_name is not None:
            return self.courier_name
        return self.original_courier

    @property
    def amount(self) -> float:
        return parse_price(self.price)


class ErrorKind(str, enum.Enum):
    """Why a call failed."""
    TRANSPORT = "transport"  # no usable response
    SERVICE = "service"  # response carried an error


@dataclass
class ShipitResult(Generic[T]):
    """
    Outcome of a ShipitClient call.

    Either `success` is True and `value` holds the payload, or `success` is
    False and `error_kind`, `error_message` and `error` describe the failure.
    """
    success: bool
    value: Optional[T] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    error: Optional[ShipitError] = None

    @classmethod
    def ok(cls, value: T) -> "ShipitResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def failure(cls, error: ShipitError, message: Optional[str] = None) -> "ShipitResult[T]":
        if isinstance(error, ShipitTransportError):
            kind = ErrorKind.TRANSPORT
        else:
            kind = ErrorKind.SERVICE
        return cls(
            success=False,
            error_kind=kind,
            error_message=message or error.message,
            error=error,
        )

    @property
    def is_transport_error(self) -> bool:
        return self.error_kind is ErrorKind.TRANSPORT

    @property
    def is_service_error(self) -> bool:
        return self.error_kind is ErrorKind.SERVICE

    def unwrap(self) -> T:
        """Return the value, or raise the stored error."""
        if self.success:
            return self.value
        raise self.error

    def __bool__(self) -> bool:
        return self.success
