"""
Shipit webservice client.

Usage:
    from shipit import ShipitClient

    with ShipitClient("store@example.com", "token") as client:
        result = client.list_couriers()
        if result:
            couriers = result.value
"""
from shipit.core.exceptions import ShipitError, ShipitServiceError, ShipitTransportError
from shipit.models import ClientConfig, Courier, ErrorKind, PriceOption, ShipitResult
from shipit.package_size import PACKAGE_SIZES, classify_package_size
from shipit.services.shipit_client import ShipitClient, check_errors

__version__ = "1.0.0"

__all__ = [
    "ShipitClient",
    "ShipitResult",
    "ErrorKind",
    "ClientConfig",
    "Courier",
    "PriceOption",
    "ShipitError",
    "ShipitServiceError",
    "ShipitTransportError",
    "PACKAGE_SIZES",
    "classify_package_size",
    "check_errors",
]
