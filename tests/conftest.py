"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from netlify_api.client import NetlifyClient
from netlify_api.models import BuildSettings, Site


@pytest.fixture
def mock_client():
    """Create a mock Netlify client."""
    return AsyncMock(spec=NetlifyClient)


@pytest.fixture
def sample_site_payload():
    """Sample getSite response body with a connected repo."""
    return {
        "id": "site-123",
        "name": "site1",
        "custom_domain": "www.example.com",
        "deploy_url": "https://abc--site1.netlify.app",
        "account_slug": "team-x",
        "account_name": "Team X",
        "url": "https://www.example.com",
        "build_settings": {
            "cmd": "npm run build",
            "deploy_key_id": "key-1",
            "dir": "web",
            "provider": "gitlab",
            "repo_path": "grp/proj",
            "repo_branch": "dev",
            "installation_id": 4242,
            "repo_url": "https://gitlab.com/grp/proj",
        },
    }


@pytest.fixture
def sample_site(sample_site_payload):
    """Sample Site model with a connected repo."""
    return Site.from_payload(sample_site_payload)


@pytest.fixture
def bare_site():
    """Sample Site model with no repo and a server-assigned name."""
    return Site(
        id="site-456",
        name="brave-curie-1234",
        deploy_url="https://def--brave-curie-1234.netlify.app",
        account_slug="team-x",
        account_name="Team X",
        build_settings=BuildSettings(),
    )


def mock_aiohttp_session(status=200, json_body=None, text_body=""):
    """
    Build a patched aiohttp.ClientSession return value.

    Returns:
        Tuple of (session_cls_return_value, session, response).
    """
    mock_resp = AsyncMock()
    mock_resp.status = status
    mock_resp.json = AsyncMock(return_value=json_body)
    mock_resp.text = AsyncMock(return_value=text_body)

    mock_session = AsyncMock()
    mock_session.request = MagicMock(
        return_value=AsyncMock(
            __aenter__=AsyncMock(return_value=mock_resp),
            __aexit__=AsyncMock(return_value=False),
        )
    )

    session_ctx = AsyncMock(
        __aenter__=AsyncMock(return_value=mock_session),
        __aexit__=AsyncMock(return_value=False),
    )
    return session_ctx, mock_session, mock_resp
