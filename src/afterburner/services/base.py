"""Base HTTP client for GitHub integrations."""

from abc import ABC, abstractmethod
from typing import Any

import httpx


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(APIError):
    """Raised when API rate limit is exceeded."""

    def __init__(self, message: str = "Rate limit exceeded"):
        super().__init__(message, status_code=429)


class NotFoundError(APIError):
    """Raised when a resource is not found."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class BaseAPIClient(ABC):
    """Abstract base class for external API clients.

    Provides common functionality for HTTP requests and error handling.
    """

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        """Initialize the base API client.

        Args:
            base_url: The base URL for the API.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def default_headers(self) -> dict[str, str]:
        """Return default headers for API requests."""
        ...

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.default_headers,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, etc.).
            endpoint: API endpoint path.
            params: Query parameters.
            data: Form-encoded request body.
            headers: Additional headers to include.

        Returns:
            Decoded JSON response (object or array).

        Raises:
            NotFoundError: If the resource is not found (404).
            RateLimitError: If rate limit is exceeded (429).
            APIError: For other HTTP errors.
        """
        client = await self._get_client()
        url = f"{endpoint.lstrip('/')}"

        request_headers = dict(self.default_headers)
        if headers:
            request_headers.update(headers)

        try:
            response = await client.request(
                method=method,
                url=url,
                params=params,
                data=data,
                headers=request_headers,
            )
        except httpx.TimeoutException as e:
            raise APIError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise APIError(f"Request failed: {e}") from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        """Handle the HTTP response.

        GitHub reports an exhausted rate limit as 403 with
        ``X-RateLimit-Remaining: 0`` as well as 429.
        """
        if response.status_code == 404:
            raise NotFoundError()

        if response.status_code == 429 or (
            response.status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"
        ):
            raise RateLimitError()

        if response.status_code >= 400:
            raise APIError(
                f"API error: {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON response: {e}") from e

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make a GET request to the API."""
        return await self._request("GET", endpoint, params=params, headers=headers)

    async def post(
        self,
        endpoint: str,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make a POST request with a form-encoded body."""
        return await self._request("POST", endpoint, data=data, headers=headers)
