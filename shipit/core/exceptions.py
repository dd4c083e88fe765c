"""
Shipit Client Exception Hierarchy

Structured exception classes for calls against the Shipit webservice.
All exceptions include code, message, and details for logging and debugging.

Exception Hierarchy:
    ShipitError
    ├── ShipitTransportError
    │     No usable response: network failure, empty body, non-JSON body
    └── ShipitServiceError
          Response decoded, but the service reported an error or sent
          a payload that cannot be shaped
"""
import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class ShipitError(Exception):
    """
    Base exception for all Shipit client errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        details: Additional context for debugging
    """

    default_code: str = "SHIPIT_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ShipitTransportError(ShipitError):
    """The call could not be completed or its body could not be decoded."""
    default_code = "NETWORK_ERROR"


class ShipitServiceError(ShipitError):
    """The service answered, but with an error or an unusable payload."""
    default_code = "SERVICE_ERROR"

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details.update({
            "endpoint": endpoint,
            "status_code": status_code,
        })
        super().__init__(message, details=details, **kwargs)
        self.endpoint = endpoint
        self.status_code = status_code
