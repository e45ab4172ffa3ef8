"""
Netlify API Models - Site request and response structures.

These dataclasses mirror the subset of the Netlify open-api definitions used
by the site reconciler: the ``siteSetup`` request body, the ``site`` response
and its ``build_settings`` (``repoInfo``) sub-object.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class RepoConfig:
    """Connected repository configuration for automated builds."""

    provider: str
    repo_path: str
    repo_branch: str
    command: str = ""
    deploy_key_id: str = ""
    dir: str = ""
    installation_id: int = 0  # server-assigned, never sent

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RepoConfig":
        """Build from a declared or tracked ``repo`` attribute map."""
        return cls(
            provider=data.get("provider") or "",
            repo_path=data.get("repo_path") or "",
            repo_branch=data.get("repo_branch") or "",
            command=data.get("command") or "",
            deploy_key_id=data.get("deploy_key_id") or "",
            dir=data.get("dir") or "",
            installation_id=int(data.get("installation_id") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "command": self.command,
            "deploy_key_id": self.deploy_key_id,
            "dir": self.dir,
            "provider": self.provider,
            "repo_path": self.repo_path,
            "repo_branch": self.repo_branch,
            "installation_id": self.installation_id,
        }

    def to_payload(self) -> Dict[str, Any]:
        """
        Encode as a ``repoInfo`` request object.

        Only the six writable fields are sent; installation_id is left to
        the server.
        """
        return {
            "cmd": self.command,
            "deploy_key_id": self.deploy_key_id,
            "dir": self.dir,
            "provider": self.provider,
            "repo_path": self.repo_path,
            "repo_branch": self.repo_branch,
        }


@dataclass
class SiteAttributes:
    """Declared attributes of a site resource."""

    name: str = ""
    custom_domain: str = ""
    account_slug: str = ""
    repo: Optional[RepoConfig] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SiteAttributes":
        repo = data.get("repo")
        return cls(
            name=data.get("name") or "",
            custom_domain=data.get("custom_domain") or "",
            account_slug=data.get("account_slug") or "",
            repo=RepoConfig.from_dict(repo) if repo else None,
        )


@dataclass
class SiteSetup:
    """Request body shared by site creation (both variants) and update."""

    name: str = ""
    custom_domain: str = ""
    repo: Optional[RepoConfig] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "custom_domain": self.custom_domain,
        }
        # An absent repo is omitted entirely, never sent as an empty object
        if self.repo is not None:
            payload["repo"] = self.repo.to_payload()
        return payload


@dataclass
class BuildSettings:
    """The ``build_settings`` object returned on a site."""

    cmd: str = ""
    deploy_key_id: str = ""
    dir: str = ""
    provider: str = ""
    repo_path: str = ""
    repo_branch: str = ""
    installation_id: int = 0

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "BuildSettings":
        return cls(
            cmd=data.get("cmd") or "",
            deploy_key_id=data.get("deploy_key_id") or "",
            dir=data.get("dir") or "",
            provider=data.get("provider") or "",
            repo_path=data.get("repo_path") or "",
            repo_branch=data.get("repo_branch") or "",
            installation_id=int(data.get("installation_id") or 0),
        )

    def to_repo_config(self) -> Optional[RepoConfig]:
        """Return the repo configuration, or None if no repo is connected."""
        if not self.repo_path:
            return None
        return RepoConfig(
            provider=self.provider,
            repo_path=self.repo_path,
            repo_branch=self.repo_branch,
            command=self.cmd,
            deploy_key_id=self.deploy_key_id,
            dir=self.dir,
            installation_id=self.installation_id,
        )


@dataclass
class Site:
    """A site as returned by the Netlify API."""

    id: str
    name: str = ""
    custom_domain: str = ""
    deploy_url: str = ""
    account_slug: str = ""
    account_name: str = ""
    build_settings: Optional[BuildSettings] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Site":
        build_settings = data.get("build_settings")
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            custom_domain=data.get("custom_domain") or "",
            deploy_url=data.get("deploy_url") or "",
            account_slug=data.get("account_slug") or "",
            account_name=data.get("account_name") or "",
            build_settings=(
                BuildSettings.from_payload(build_settings)
                if build_settings is not None
                else None
            ),
        )
