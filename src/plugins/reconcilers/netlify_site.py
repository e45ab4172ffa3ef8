"""
Netlify Site Reconciler - CRUD lifecycle for the ``netlify_site`` resource.

Maps declared site attributes onto the Netlify site endpoints and maps the
returned site back into tracked state. Create and update always finish with
a read so that computed fields are refreshed from the API.
"""

import logging
from typing import Any, Dict, List, Optional

from netlify_api.client import NetlifyAPIError, NetlifyClient, SiteNotFoundError
from netlify_api.models import Site, SiteAttributes, SiteSetup
from plugins.reconcilers.base import (
    IncompleteCreateError,
    ResourceData,
    ResourceReconciler,
)

logger = logging.getLogger(__name__)

REPO_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["provider", "repo_path", "repo_branch"],
    "additionalProperties": False,
    "properties": {
        "command": {"type": "string"},
        "deploy_key_id": {"type": "string"},
        "dir": {"type": "string"},
        "provider": {"type": "string", "minLength": 1},
        "repo_path": {"type": "string", "minLength": 1},
        "repo_branch": {"type": "string", "minLength": 1},
    },
}

SITE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "name": {"type": "string"},
        "custom_domain": {"type": "string"},
        "account_slug": {"type": "string"},
        "repo": {"oneOf": [{"type": "null"}, REPO_SCHEMA]},
    },
}


def build_site_setup(declared: SiteAttributes) -> SiteSetup:
    """Build the request body used by both create variants and update."""
    return SiteSetup(
        name=declared.name,
        custom_domain=declared.custom_domain,
        repo=declared.repo,
    )


def site_to_attributes(site: Site) -> Dict[str, Any]:
    """Map a remote site onto the tracked attribute map."""
    repo = None
    if site.build_settings is not None:
        repo_config = site.build_settings.to_repo_config()
        if repo_config is not None:
            repo = repo_config.to_dict()

    return {
        "name": site.name,
        "custom_domain": site.custom_domain,
        "deploy_url": site.deploy_url,
        "account_slug": site.account_slug,
        "account_name": site.account_name,
        "repo": repo,
    }


class NetlifySiteReconciler(ResourceReconciler):
    """Reconciler for Netlify sites."""

    @property
    def name(self) -> str:
        return "netlify_site"

    @property
    def resource_types(self) -> List[str]:
        return ["netlify_site"]

    @property
    def schema(self) -> Dict[str, Any]:
        return SITE_SCHEMA

    async def create(
        self, client: NetlifyClient, declared: Dict[str, Any]
    ) -> ResourceData:
        attrs = SiteAttributes.from_dict(declared)
        setup = build_site_setup(attrs)

        if attrs.account_slug:
            logger.info(f"Creating site in team '{attrs.account_slug}'")
            site = await client.create_site_in_team(attrs.account_slug, setup)
        else:
            logger.info("Creating site in default account")
            site = await client.create_site(setup)

        logger.info(f"Created site {site.id}")
        try:
            data = await self.read(client, site.id)
        except NetlifyAPIError as e:
            raise IncompleteCreateError(
                ResourceData(id=site.id),
                f"Created site {site.id} but could not read it back: {e}",
            ) from e

        if data is None:
            raise IncompleteCreateError(
                ResourceData(id=site.id),
                f"Created site {site.id} but it was not found when read back",
            )
        return data

    async def read(
        self, client: NetlifyClient, resource_id: str
    ) -> Optional[ResourceData]:
        try:
            site = await client.get_site(resource_id)
        except SiteNotFoundError:
            logger.warning(f"Site {resource_id} was removed remotely")
            return None

        return ResourceData(id=resource_id, attributes=site_to_attributes(site))

    async def update(
        self, client: NetlifyClient, resource_id: str, declared: Dict[str, Any]
    ) -> Optional[ResourceData]:
        setup = build_site_setup(SiteAttributes.from_dict(declared))
        logger.info(f"Updating site {resource_id}")
        await client.update_site(resource_id, setup)
        return await self.read(client, resource_id)

    async def delete(self, client: NetlifyClient, resource_id: str) -> None:
        logger.info(f"Deleting site {resource_id}")
        await client.delete_site(resource_id)

    def diff(
        self, declared: Dict[str, Any], tracked: ResourceData
    ) -> Dict[str, Any]:
        """
        Compare declared attributes against tracked state.

        name is server-computed when left empty, so it only counts as
        changed when declared. account_slug is only honoured at creation
        and installation_id is server-assigned; neither is compared.
        """
        attrs = SiteAttributes.from_dict(declared)
        current = tracked.attributes
        changes: Dict[str, Any] = {}

        if attrs.name and attrs.name != current.get("name"):
            changes["name"] = attrs.name
        if attrs.custom_domain != (current.get("custom_domain") or ""):
            changes["custom_domain"] = attrs.custom_domain

        declared_repo = attrs.repo.to_payload() if attrs.repo else None
        tracked_repo = current.get("repo")
        if tracked_repo:
            tracked_repo = SiteAttributes.from_dict(current).repo.to_payload()
        if declared_repo != tracked_repo:
            changes["repo"] = declared.get("repo")

        return changes
