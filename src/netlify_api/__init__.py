"""
Netlify API package.

Typed models and an async client for the Netlify site endpoints.
"""

from netlify_api.client import NetlifyAPIError, NetlifyClient, SiteNotFoundError
from netlify_api.models import (
    BuildSettings,
    RepoConfig,
    Site,
    SiteAttributes,
    SiteSetup,
)

__all__ = [
    "BuildSettings",
    "NetlifyAPIError",
    "NetlifyClient",
    "RepoConfig",
    "Site",
    "SiteAttributes",
    "SiteNotFoundError",
    "SiteSetup",
]
