"""Okta REST API client wrapper built on requests."""

from dataclasses import dataclass
from typing import Any

import requests

from ..utils.logging_utils import get_logger
from .config import API_TIMEOUT, USER_AGENT
from .exceptions import APIError, AuthenticationError

# Module logger
logger = get_logger(__name__)


@dataclass
class ApiResponse:
    """Decoded API response plus the pagination cursor it carried."""

    data: Any
    next_url: str | None = None
    status_code: int = 200


def _error_summary(response: requests.Response) -> str | None:
    """Pull Okta's errorSummary out of an error response, if present."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or None
    if isinstance(body, dict):
        summary = body.get("errorSummary")
        return str(summary) if summary else None
    return None


def get_next_link(response: requests.Response) -> str | None:
    """Return the rel="next" URL from a response's Link header.

    Args:
        response: HTTP response

    Returns:
        Optional[str]: Next page URL, or None on the last page
    """
    next_link = response.links.get("next")
    if not next_link:
        return None
    url = next_link.get("url")
    return url or None


class OktaClient:
    """Minimal synchronous client for the Okta management API.

    Authenticates with a static API token and maps HTTP failures onto the
    groupexport exception hierarchy. Use as a context manager so the
    underlying session is always closed.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        session: requests.Session | None = None,
        timeout: float = API_TIMEOUT,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Okta org base URL, e.g. https://acme.okta.com
            token: Okta API token
            session: Optional pre-built session (mainly for tests)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"SSWS {token}",
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            }
        )

    def __enter__(self) -> "OktaClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def build_url(self, path_or_url: str) -> str:
        """Resolve an API path against the base URL; absolute URLs pass through."""
        if path_or_url.startswith(("https://", "http://")):
            return path_or_url
        return f"{self.base_url}/{path_or_url.lstrip('/')}"

    def get(
        self, path_or_url: str, params: dict[str, Any] | None = None
    ) -> ApiResponse:
        """Issue a GET request and decode the JSON body.

        Args:
            path_or_url: API path (``/api/v1/groups``) or absolute URL
            params: Optional query parameters

        Returns:
            ApiResponse: Decoded body and next-page URL

        Raises:
            AuthenticationError: On 401 or 403 responses
            APIError: On any other failure
        """
        url = self.build_url(path_or_url)
        logger.debug(
            f"GET {url}",
            extra={"operation": "api_request", "api_endpoint": url},
        )

        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={"operation": "api_request", "api_endpoint": url},
            )
            raise APIError("Request failed", endpoint=url, details=str(e)) from e

        self._raise_for_status(response, url)

        try:
            data = response.json()
        except ValueError as e:
            raise APIError(
                "Response is not valid JSON",
                status_code=response.status_code,
                endpoint=url,
                details=str(e),
            ) from e

        return ApiResponse(
            data=data,
            next_url=get_next_link(response),
            status_code=response.status_code,
        )

    def _raise_for_status(self, response: requests.Response, url: str) -> None:
        """Translate error status codes into groupexport exceptions."""
        status = response.status_code
        if status < 400:
            return

        summary = _error_summary(response)
        logger.warning(
            f"API GET {url} returned {status}",
            extra={
                "operation": "api_request",
                "api_endpoint": url,
                "status_code": status,
            },
        )

        if status == 401:
            raise AuthenticationError(
                "Invalid API token", status_code=status, details=summary
            )
        if status == 403:
            raise AuthenticationError(
                "API token lacks permission for this request",
                status_code=status,
                details=summary,
            )
        raise APIError(
            "API request failed", status_code=status, endpoint=url, details=summary
        )

    def get_current_user(self) -> dict[str, Any]:
        """Fetch the user that owns the API token."""
        response = self.get("/api/v1/users/me")
        data: dict[str, Any] = response.data if isinstance(response.data, dict) else {}
        return data
