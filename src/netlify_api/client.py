"""
Netlify API Client - Async client for the site operations.

Wraps the five Netlify REST operations the site reconciler needs. Every
request opens its own aiohttp session and authenticates with a personal
access token.
"""

import logging
from typing import Any, Dict, Optional

import aiohttp

from netlify_api.models import Site, SiteSetup

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.netlify.com/api/v1"


class NetlifyAPIError(Exception):
    """Raised when a Netlify API call fails."""

    def __init__(self, operation: str, status: Optional[int], message: str):
        self.operation = operation
        self.status = status
        self.message = message
        super().__init__(f"{operation} failed ({status}): {message}")


class SiteNotFoundError(NetlifyAPIError):
    """Raised by get_site when the site does not exist (HTTP 404)."""


class NetlifyClient:
    """
    Client for the Netlify site endpoints.

    The client carries the authentication context and is passed explicitly
    into each reconciler call.
    """

    def __init__(
        self,
        api_token: str,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: int = 30,
    ):
        self.api_token = api_token
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout

        if not self.api_token:
            logger.warning(
                "Netlify token not configured. Set NETLIFY_AUTH_TOKEN "
                "environment variable."
            )

    def __repr__(self) -> str:
        return f"NetlifyClient(api_base_url={self.api_base_url!r})"

    async def create_site(self, setup: SiteSetup) -> Site:
        """Create a site in the token owner's default account."""
        data = await self._request(
            "createSite", "POST", "/sites", json=setup.to_payload()
        )
        return Site.from_payload(data)

    async def create_site_in_team(self, account_slug: str, setup: SiteSetup) -> Site:
        """Create a site under the given team account."""
        data = await self._request(
            "createSiteInTeam",
            "POST",
            f"/{account_slug}/sites",
            json=setup.to_payload(),
        )
        return Site.from_payload(data)

    async def get_site(self, site_id: str) -> Site:
        """
        Fetch a site by ID.

        Raises:
            SiteNotFoundError: If the site does not exist.
            NetlifyAPIError: For any other failure.
        """
        data = await self._request(
            "getSite", "GET", f"/sites/{site_id}", raise_not_found=True
        )
        return Site.from_payload(data)

    async def update_site(self, site_id: str, setup: SiteSetup) -> Site:
        data = await self._request(
            "updateSite", "PATCH", f"/sites/{site_id}", json=setup.to_payload()
        )
        return Site.from_payload(data)

    async def delete_site(self, site_id: str) -> None:
        await self._request(
            "deleteSite", "DELETE", f"/sites/{site_id}", expect_body=False
        )

    # Private helper methods

    def _get_headers(self) -> Dict[str, str]:
        """Get HTTP headers for Netlify API requests."""
        headers = {
            "Accept": "application/json",
            "User-Agent": "siteop",
        }
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        expect_body: bool = True,
        raise_not_found: bool = False,
    ) -> Dict[str, Any]:
        url = f"{self.api_base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        logger.debug(f"{operation}: {method} {url}")

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(
                    method, url, headers=self._get_headers(), json=json
                ) as response:
                    if response.status >= 400:
                        error_text = await response.text()
                        if response.status == 404 and raise_not_found:
                            raise SiteNotFoundError(
                                operation, response.status, error_text
                            )
                        logger.error(
                            f"{operation} failed: {response.status} - {error_text}"
                        )
                        raise NetlifyAPIError(operation, response.status, error_text)

                    if not expect_body:
                        return {}
                    return await response.json()
        except aiohttp.ClientError as e:
            logger.error(f"{operation} request error: {e}")
            raise NetlifyAPIError(operation, None, str(e)) from e
