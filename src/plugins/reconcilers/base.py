"""
Reconciler Plugin Base - Abstract interface for resource reconcilers.

A reconciler owns the CRUD lifecycle of one or more resource types. The
controller invokes one lifecycle verb at a time with the API client passed
in explicitly, and persists the tracked state the verb returns.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ResourceData:
    """Tracked state of a single resource: its remote ID plus attributes."""

    id: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def exists(self) -> bool:
        return bool(self.id)


@dataclass
class ReconcileResult:
    """Result from a controller lifecycle operation."""

    success: bool = False
    message: str = ""
    action: str = "none"
    resource: Optional[ResourceData] = None


class IncompleteCreateError(Exception):
    """
    Raised when a remote object was created but could not be read back.

    ``resource`` carries the new object's ID so it can be tracked and
    refreshed later instead of being created a second time.
    """

    def __init__(self, resource: ResourceData, message: str):
        super().__init__(message)
        self.resource = resource


class ResourceReconciler(ABC):
    """
    Abstract base class for reconciler plugins.

    Reconcilers are discovered via Python entry points in the
    'siteop.reconcilers' group.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this reconciler."""
        pass

    @property
    @abstractmethod
    def resource_types(self) -> List[str]:
        """Resource type names this reconciler handles."""
        pass

    @property
    @abstractmethod
    def schema(self) -> Dict[str, Any]:
        """JSON Schema for the declared attributes of this resource type."""
        pass

    @property
    def writable_attributes(self) -> List[str]:
        """Declared attribute names compared when planning an update."""
        return list(self.schema.get("properties", {}).keys())

    @abstractmethod
    async def create(
        self, client: Any, declared: Dict[str, Any]
    ) -> ResourceData:
        """
        Create the remote object and return its refreshed tracked state.

        Args:
            client: The API client holding the authentication context.
            declared: Declared attribute map.

        Returns:
            The tracked state after a read.

        Raises:
            IncompleteCreateError: The object was created but the trailing
                read failed or found nothing.
        """
        pass

    @abstractmethod
    async def read(self, client: Any, resource_id: str) -> Optional[ResourceData]:
        """
        Fetch the remote object and map it to tracked state.

        Returns:
            The tracked state, or None if the remote object no longer exists.
        """
        pass

    @abstractmethod
    async def update(
        self, client: Any, resource_id: str, declared: Dict[str, Any]
    ) -> Optional[ResourceData]:
        """Push declared attributes to the remote object and refresh."""
        pass

    @abstractmethod
    async def delete(self, client: Any, resource_id: str) -> None:
        """Delete the remote object."""
        pass

    async def import_resource(
        self, client: Any, resource_id: str
    ) -> Optional[ResourceData]:
        """
        Import an existing remote object by ID.

        The default implementation is a plain read, which must populate the
        full tracked state from the ID alone.
        """
        return await self.read(client, resource_id)

    def diff(
        self, declared: Dict[str, Any], tracked: ResourceData
    ) -> Dict[str, Any]:
        """
        Return declared attributes whose value differs from tracked state.

        Attributes left unset in the declaration are not compared.
        """
        changes: Dict[str, Any] = {}
        for attr in self.writable_attributes:
            if attr not in declared:
                continue
            if declared[attr] != tracked.attributes.get(attr):
                changes[attr] = declared[attr]
        return changes
