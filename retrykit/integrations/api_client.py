"""Backend API client for retrykit.

Async HTTP client that sends every request through with_retry and
normalizes the backend's response envelope.
"""

from typing import Any, Callable, Dict, Optional, Union

import httpx

from retrykit.config import Config
from retrykit.core.errors import from_transport_error, http_status_error
from retrykit.core.execution.retry_executor import RetryExecutor
from retrykit.core.logging import logger
from retrykit.core.retry_config import RetryConfigLike, merge_config
from retrykit.models.responses import ApiResponse

TokenSource = Union[str, Callable[[], Optional[str]], None]

CONNECTIVITY_TIMEOUT = 5.0  # seconds


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiClient:
    """HTTP client for the backend REST API.

    Usage:
        async with ApiClient(token="...") as api:
            bookings = await api.get("/bookings", params={"date": "2024-05-01"})
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        token: TokenSource = None,
        retry_config: RetryConfigLike = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        executor_options: Optional[Dict[str, Any]] = None,
    ):
        """Initialize ApiClient.

        Args:
            base_url: API root (API_BASE_URL or http://localhost:5010/api)
            timeout: Per-request timeout in seconds (API_TIMEOUT or 10)
            token: Bearer token, or a callable returning the current token
            retry_config: Default retry settings for every request
            transport: Custom httpx transport (e.g., httpx.MockTransport in tests)
            executor_options: Extra RetryExecutor keyword arguments (rng, observer, sleep)
        """
        self.base_url = (base_url or Config.api_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.api_timeout()
        self._token = token if token is not None else Config.api_token()
        self.retry_config = merge_config(retry_config)
        self._executor_options = executor_options or {}
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    def _auth_headers(self) -> Dict[str, str]:
        token = self._token() if callable(self._token) else self._token
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def _clean_endpoint(self, endpoint: str) -> str:
        # Avoid /api/api/... when the base URL already ends with /api
        if self.base_url.endswith("/api") and endpoint.startswith("/api"):
            endpoint = endpoint[len("/api"):] or "/"
        return endpoint

    async def _send(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(
                method, endpoint, headers=self._auth_headers(), **kwargs
            )
        except httpx.HTTPError as e:
            raise from_transport_error(e) from e

        if not response.is_success:
            raise http_status_error(response.status_code, _decode(response))
        return response

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        retry_config: RetryConfigLike = None,
    ) -> ApiResponse:
        """Send a request, retrying transient failures.

        Args:
            method: HTTP method
            endpoint: Path relative to base_url
            params: Query parameters
            json: JSON body
            retry_config: Overrides merged over the client's retry settings

        Returns:
            Normalized ApiResponse

        Raises:
            HttpStatusError, NetworkError, RequestTimeoutError, GenericError
        """
        path = self._clean_endpoint(endpoint)
        config = merge_config(retry_config, base=self.retry_config)
        executor = RetryExecutor(config, **self._executor_options)

        kwargs: Dict[str, Any] = {}
        if params:
            kwargs["params"] = params
        if json is not None:
            kwargs["json"] = json

        try:
            response = await executor.run(
                lambda: self._send(method.upper(), path, **kwargs),
                f"API request to {endpoint}",
            )
        except Exception as e:
            logger.error(
                "api_request_failed",
                method=method.upper(),
                endpoint=endpoint,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        return ApiResponse.from_body(_decode(response), response.status_code)

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs: Any) -> Any:
        return (await self.request("GET", endpoint, params=params, **kwargs)).data

    async def post(self, endpoint: str, data: Any = None, **kwargs: Any) -> Any:
        return (await self.request("POST", endpoint, json=data, **kwargs)).data

    async def put(self, endpoint: str, data: Any = None, **kwargs: Any) -> Any:
        return (await self.request("PUT", endpoint, json=data, **kwargs)).data

    async def patch(self, endpoint: str, data: Any = None, **kwargs: Any) -> Any:
        return (await self.request("PATCH", endpoint, json=data, **kwargs)).data

    async def delete(self, endpoint: str, **kwargs: Any) -> Any:
        return (await self.request("DELETE", endpoint, **kwargs)).data

    async def check_connectivity(self, endpoint: str = "/health") -> bool:
        """Check whether the backend answers a HEAD request. Never retries."""
        try:
            response = await self._client.head(
                self._clean_endpoint(endpoint), timeout=CONNECTIVITY_TIMEOUT
            )
        except httpx.HTTPError as e:
            logger.warning("connectivity_check_failed", endpoint=endpoint, error=str(e))
            return False

        if response.is_success:
            return True

        logger.warning(
            "connectivity_check_failed", endpoint=endpoint, status=response.status_code
        )
        return False
