"""Authenticated JSON request wrapper for the portal backend."""

import time
from typing import Any, Optional

import httpx
import structlog

from portal.config import settings
from portal.session import AuthSession

logger = structlog.get_logger()


class ApiGateway:
    """Issues authenticated requests and normalizes every failure.

    Transport errors, non-2xx statuses and unparseable bodies all surface
    as a single PortalAPIError carrying a human readable message.
    """

    def __init__(
        self,
        session: AuthSession,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize gateway.

        Args:
            session: Session supplying the bearer token
            base_url: Backend URL, defaults to settings.API_URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.session = session
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.transport = transport

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    async def request(self, endpoint: str, method: str = "GET", body: Any = None) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            endpoint: Path beginning with "/", e.g. "/api/assessments"
            method: HTTP method
            body: JSON-serializable payload, omitted when None

        Returns:
            Decoded JSON (dict or list); {} for an empty body

        Raises:
            PortalAPIError: On any transport, HTTP or decoding failure
        """
        url = f"{self.base_url}{endpoint}"
        start_time = time.perf_counter()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._headers(),
                    json=body,
                )
        except httpx.HTTPError as e:
            logger.error("API request failed", method=method, endpoint=endpoint, error=str(e))
            raise PortalAPIError(str(e) or "Network request failed") from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        data = self._decode(response, method, endpoint)

        if not response.is_success:
            message = self._error_message(data, response.status_code)
            logger.error(
                "API request failed",
                method=method,
                endpoint=endpoint,
                status_code=response.status_code,
                error=message,
            )
            raise PortalAPIError(message, status_code=response.status_code)

        logger.debug(
            "API request completed",
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        return data

    def _decode(self, response: httpx.Response, method: str, endpoint: str) -> Any:
        """Decode a response body, rejecting anything that is not JSON."""
        content_type = response.headers.get("content-type", "")
        text = response.text

        if "application/json" in content_type and text:
            try:
                return response.json()
            except ValueError as e:
                logger.error(
                    "Failed to parse JSON",
                    method=method,
                    endpoint=endpoint,
                    body=text[:500],
                )
                raise PortalAPIError(
                    "Invalid JSON response from server",
                    status_code=response.status_code,
                ) from e

        if text:
            # Might be an HTML error page from a proxy
            logger.error(
                "Non-JSON response",
                method=method,
                endpoint=endpoint,
                status_code=response.status_code,
                body=text[:500],
            )
            raise PortalAPIError(
                "Server returned non-JSON response",
                status_code=response.status_code,
            )

        return {}

    @staticmethod
    def _error_message(data: Any, status_code: int) -> str:
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict):
                error = error.get("message")
            message = error or data.get("message")
            if message:
                return str(message)
        return f"Request failed with status {status_code}"


class PortalAPIError(Exception):
    """Raised when a backend request fails for any reason."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
