"""
Shipit API Client

Covers the four Shipit webservice resources used for eCommerce shipping:
- Communes (destination regions)
- Couriers
- Prices (shipping cost estimates)
- Packages (shipment creation)

Every call returns a ShipitResult. Transport failures (no response, or a body
that is not JSON) and service failures (the response carries an `error`) are
reported separately so callers can tell them apart.
"""
import copy
import logging
from typing import Any, Dict, List, Optional

import httpx

from shipit.core.config import DEFAULT_API_BASE, DEFAULT_TIMEOUT_SECONDS, Settings, get_settings
from shipit.core.exceptions import ShipitError, ShipitServiceError, ShipitTransportError
from shipit.core.logging_utils import mask_secret, sanitize_for_logging
from shipit.models import ClientConfig, Courier, PriceOption, ShipitResult, parse_price
from shipit.package_size import classify_package_size

logger = logging.getLogger(__name__)

# API endpoints, relative to {base_url}/v/
COMMUNES_ENDPOINT = "communes"
COURIERS_ENDPOINT = "couriers"
PRICES_ENDPOINT = "prices"
PACKAGES_ENDPOINT = "packages"

API_VERSION_ACCEPT = "application/vnd.shipit.v3"

# Prepended to package references in development mode
DEVELOPMENT_REFERENCE_PREFIX = "TEST-"

# Key used for the single quote returned in best-price mode
BEST_PRICE_KEY = "shipit"


def check_errors(result: Any) -> Optional[Any]:
    """Return the `error` payload of a decoded response, or None."""
    if isinstance(result, dict) and result.get("error"):
        return result["error"]
    return None


class ShipitClient:
    """
    Synchronous Shipit API client.

    Configuration is fixed at construction. The underlying httpx.Client is
    created on first use and released by close(); a client passed in through
    `http_client` belongs to the caller and is left open.
    """

    classify_package_size = staticmethod(classify_package_size)

    def __init__(
        self,
        email: str,
        access_token: str,
        is_development: bool = False,
        *,
        base_url: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ):
        self._config = ClientConfig(
            email=email,
            access_token=access_token,
            is_development=is_development,
            base_url=base_url.rstrip("/"),
            timeout=timeout,
        )
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> "ShipitClient":
        """Create a client from environment-backed Settings."""
        settings = settings or get_settings()
        if not settings.has_credentials:
            logger.warning("Shipit credentials are not configured; requests will be rejected")
        return cls(
            email=settings.SHIPIT_EMAIL,
            access_token=settings.SHIPIT_ACCESS_TOKEN,
            is_development=settings.SHIPIT_DEVELOPMENT,
            base_url=settings.SHIPIT_API_BASE,
            timeout=settings.SHIPIT_TIMEOUT_SECONDS,
            http_client=http_client,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _get_http_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.Client(timeout=self._config.timeout)
        return self._http_client

    def close(self):
        """Close HTTP client."""
        if self._http_client is not None and self._owns_http_client:
            self._http_client.close()
            self._http_client = None

    def __enter__(self) -> "ShipitClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Shipit-Email": self._config.email,
            "X-Shipit-Access-Token": self._config.access_token,
            "Accept": API_VERSION_ACCEPT,
        }

    def _execute(self, endpoint: str, params: Optional[Dict] = None) -> Any:
        """
        Call an endpoint and return the decoded JSON body.

        A GET is issued when there are no params, otherwise a POST with the
        params as JSON body.

        Raises:
            ShipitTransportError: no response, empty body, or invalid JSON
            ShipitServiceError: the body carries an `error`, or HTTP status >= 400
        """
        client = self._get_http_client()
        url = f"{self._config.base_url}/v/{endpoint}"
        method = "GET" if params is None else "POST"

        logger.debug(
            f"Shipit API {method} {endpoint} as {self._config.email} "
            f"(token {mask_secret(self._config.access_token)})"
        )

        try:
            if params is None:
                response = client.get(url, headers=self._headers())
            else:
                response = client.post(url, headers=self._headers(), json=params)
        except httpx.RequestError as e:
            logger.error(f"Shipit API request failed: {method} {endpoint}: {e}")
            raise ShipitTransportError(
                message=f"Network error: {e}",
                code="NETWORK_ERROR",
                details={"endpoint": endpoint},
            )

        logger.debug(f"Shipit API {method} {endpoint} -> {response.status_code}")

        if not response.content:
            logger.error(f"Shipit API returned an empty body: {endpoint} ({response.status_code})")
            raise ShipitTransportError(
                message="Empty response",
                code="EMPTY_RESPONSE",
                details={"endpoint": endpoint, "status_code": response.status_code},
            )

        try:
            result = response.json()
        except ValueError as e:
            logger.error(
                f"Shipit API returned invalid JSON: {endpoint} ({response.status_code}) - "
                f"{sanitize_for_logging(response.text)}"
            )
            raise ShipitTransportError(
                message=f"Invalid JSON response: {e}",
                code="INVALID_JSON",
                details={"endpoint": endpoint, "status_code": response.status_code},
            )

        error = check_errors(result)
        if error:
            error_msg = error if isinstance(error, str) else str(error)
            logger.error(f"Shipit API error on {endpoint}: {sanitize_for_logging(error_msg)}")
            raise ShipitServiceError(
                message=error_msg,
                endpoint=endpoint,
                status_code=response.status_code,
                details={"error": error},
            )

        if response.status_code >= 400:
            logger.error(f"Shipit API error on {endpoint}: HTTP {response.status_code}")
            raise ShipitServiceError(
                message=f"HTTP {response.status_code}",
                code=f"HTTP_{response.status_code}",
                endpoint=endpoint,
                status_code=response.status_code,
            )

        return result

    def _failure(self, operation: str, error: ShipitError) -> ShipitResult:
        if isinstance(error, ShipitTransportError):
            message = f"There was an error executing service {operation} ({error.message})."
            return ShipitResult.failure(error, message)
        return ShipitResult.failure(error)

    # ==================== Communes ====================

    def list_regions(self) -> ShipitResult[Any]:
        """
        Get the communes Shipit delivers to.

        Returns:
            ShipitResult with the decoded response, unmodified
        """
        try:
            result = self._execute(COMMUNES_ENDPOINT)
        except ShipitError as e:
            return self._failure("list_regions", e)

        return ShipitResult.ok(result)

    # ==================== Couriers ====================

    def list_couriers(self) -> ShipitResult[List[Courier]]:
        """
        Get the couriers available to the account.

        Returns:
            ShipitResult with a list of Courier
        """
        try:
            result = self._execute(COURIERS_ENDPOINT)
            if not isinstance(result, list):
                raise ShipitServiceError(
                    message="Expected a list of couriers",
                    code="MALFORMED_RESPONSE",
                    endpoint=COURIERS_ENDPOINT,
                )
            couriers = [Courier.from_api(record) for record in result]
        except ShipitError as e:
            return self._failure("list_couriers", e)

        return ShipitResult.ok(couriers)

    # ==================== Prices ====================

    def estimate_cost(self, params: Dict, best_price: bool = False) -> ShipitResult[Dict[str, float]]:
        """
        Calculate the shipping cost of a package.

        Args:
            params: Request body for the prices endpoint
            best_price: Return only Shipit's lowest price instead of one
                price per available courier

        Returns:
            ShipitResult with a mapping of courier label to cost. In
            best-price mode the only key is "shipit".
        """
        try:
            result = self._execute(PRICES_ENDPOINT, params)
            costs = self._shape_costs(result, best_price)
        except ShipitError as e:
            return self._failure("estimate_cost", e)

        return ShipitResult.ok(costs)

    def _shape_costs(self, result: Any, best_price: bool) -> Dict[str, float]:
        if not isinstance(result, dict):
            raise ShipitServiceError(
                message="Expected a price object",
                code="MALFORMED_RESPONSE",
                endpoint=PRICES_ENDPOINT,
            )

        if best_price:
            lower_price = result.get("lower_price")
            if not isinstance(lower_price, dict):
                raise ShipitServiceError(
                    message="Response has no lower_price",
                    code="MALFORMED_RESPONSE",
                    endpoint=PRICES_ENDPOINT,
                )
            return {BEST_PRICE_KEY: parse_price(lower_price.get("price"))}

        prices = result.get("prices") or []
        if not isinstance(prices, list):
            raise ShipitServiceError(
                message="Expected a list of prices",
                code="MALFORMED_RESPONSE",
                endpoint=PRICES_ENDPOINT,
            )

        costs = {}
        for option in (PriceOption.from_api(p) for p in prices):
            if not option.available:
                continue
            if option.label is None:
                logger.warning("Skipping Shipit price option with no courier label")
                continue
            costs[option.label] = option.amount

        return costs

    # ==================== Packages ====================

    def create_shipment(self, params: Dict) -> ShipitResult[int]:
        """
        Create a shipment.

        In development mode the package reference is prefixed with "TEST-".
        The caller's params are never modified.

        Args:
            params: Request body for the packages endpoint

        Returns:
            ShipitResult with the Shipit shipment id
        """
        if self._config.is_development:
            params = self._tag_development_reference(params)

        try:
            result = self._execute(PACKAGES_ENDPOINT, params)
            shipment_id = self._shape_shipment_id(result)
        except ShipitError as e:
            return self._failure("create_shipment", e)

        logger.info(f"Shipit shipment {shipment_id} created")
        return ShipitResult.ok(shipment_id)

    def _tag_development_reference(self, params: Dict) -> Dict:
        try:
            reference = params["package"]["reference"]
        except (KeyError, TypeError):
            raise ValueError("params['package']['reference'] is required in development mode")

        tagged = copy.deepcopy(params)
        tagged["package"]["reference"] = f"{DEVELOPMENT_REFERENCE_PREFIX}{reference}"
        logger.debug(f"Development mode: reference {reference!r} sent as {tagged['package']['reference']!r}")
        return tagged

    def _shape_shipment_id(self, result: Any) -> int:
        shipment_id = result.get("id") if isinstance(result, dict) else None
        if isinstance(shipment_id, bool) or shipment_id is None:
            raise ShipitServiceError(
                message="Response has no shipment id",
                code="MALFORMED_RESPONSE",
                endpoint=PACKAGES_ENDPOINT,
            )
        try:
            return int(shipment_id)
        except (TypeError, ValueError):
            raise ShipitServiceError(
                message=f"Invalid shipment id: {shipment_id!r}",
                code="MALFORMED_RESPONSE",
                endpoint=PACKAGES_ENDPOINT,
            )
