"""
Controller - Drives reconciler lifecycle verbs for declared resources.

Plans each declared resource against its tracked state, dispatches exactly
one lifecycle verb to the reconciler that owns the resource type, and
persists the tracked state the verb returns.
"""

import logging
import time
from typing import Any, Dict, Optional

from plugins import get_registry
from plugins.reconcilers.base import (
    IncompleteCreateError,
    ReconcileResult,
    ResourceData,
    ResourceReconciler,
)
from plugins.registry import PluginRegistry
from state import StateStore
from validation import validate_attributes

logger = logging.getLogger(__name__)


class Controller:
    """
    Orchestrates lifecycle calls for declared resources.

    The API client is owned by the controller and handed to the reconciler
    on every call.
    """

    def __init__(
        self,
        client: Any,
        state: StateStore,
        registry: Optional[PluginRegistry] = None,
    ):
        self.client = client
        self.state = state
        self.registry = registry or get_registry()

    def _get_reconciler(self, resource_type: str) -> ResourceReconciler:
        reconciler = self.registry.get_reconciler_for_resource_type(resource_type)
        if reconciler is None:
            available = ", ".join(self.registry.list_resource_types()) or "none"
            raise ValueError(
                f"No reconciler for resource type: {resource_type}. "
                f"Available types: {available}"
            )
        return reconciler

    async def apply(
        self, name: str, resource_type: str, declared: Dict[str, Any]
    ) -> ReconcileResult:
        """
        Bring one declared resource in line with its remote object.

        Creates the resource when it is untracked or was removed remotely,
        updates it when declared attributes differ from tracked state, and
        otherwise leaves it untouched.
        """
        start_time = time.monotonic()

        try:
            reconciler = self._get_reconciler(resource_type)
        except ValueError as e:
            return ReconcileResult(success=False, message=str(e))

        is_valid, error = validate_attributes(declared, reconciler.schema)
        if not is_valid:
            logger.error(f"Invalid attributes for {name}: {error}")
            return ReconcileResult(
                success=False, message=f"Invalid attributes: {error}"
            )

        tracked = self.state.get(name)
        try:
            current: Optional[ResourceData] = None
            if tracked is not None:
                tracked_type, tracked_data = tracked
                if tracked_type != resource_type:
                    return ReconcileResult(
                        success=False,
                        message=(
                            f"{name} is tracked as {tracked_type}, "
                            f"not {resource_type}"
                        ),
                    )
                current = await reconciler.read(self.client, tracked_data.id)
                if current is None:
                    logger.warning(
                        f"{name} ({tracked_data.id}) no longer exists, recreating"
                    )
                    self.state.remove(name)

            if current is None:
                action = "create"
                data = await reconciler.create(self.client, declared)
            else:
                changes = reconciler.diff(declared, current)
                if not changes:
                    self.state.put(name, resource_type, current)
                    return ReconcileResult(
                        success=True,
                        message=f"{name} is up to date",
                        action="none",
                        resource=current,
                    )
                logger.info(f"{name} changed: {', '.join(sorted(changes))}")
                action = "update"
                data = await reconciler.update(self.client, current.id, declared)

        except IncompleteCreateError as e:
            # Track the new ID so the next apply refreshes it
            self.state.put(name, resource_type, e.resource)
            logger.error(f"Failed to apply {name}: {e}")
            return ReconcileResult(
                success=False, message=str(e), action="create", resource=e.resource
            )
        except Exception as e:
            logger.error(f"Failed to apply {name}: {e}")
            return ReconcileResult(success=False, message=str(e))

        duration = time.monotonic() - start_time
        if data is None:
            return ReconcileResult(
                success=False,
                message=f"{name} disappeared after {action}",
                action=action,
            )

        self.state.put(name, resource_type, data)
        logger.info(f"{action.capitalize()}d {name} ({data.id}) in {duration:.2f}s")
        return ReconcileResult(
            success=True,
            message=f"{action.capitalize()}d {name}",
            action=action,
            resource=data,
        )

    async def refresh(self, name: str) -> ReconcileResult:
        """Re-read a tracked resource and store the result."""
        tracked = self.state.get(name)
        if tracked is None:
            return ReconcileResult(success=False, message=f"{name} is not tracked")

        resource_type, tracked_data = tracked
        try:
            reconciler = self._get_reconciler(resource_type)
            data = await reconciler.read(self.client, tracked_data.id)
        except Exception as e:
            logger.error(f"Failed to refresh {name}: {e}")
            return ReconcileResult(success=False, message=str(e))

        if data is None:
            self.state.remove(name)
            return ReconcileResult(
                success=True,
                message=f"{name} no longer exists and was removed from state",
                action="remove",
            )

        self.state.put(name, resource_type, data)
        return ReconcileResult(
            success=True, message=f"Refreshed {name}", action="read", resource=data
        )

    async def import_resource(
        self, name: str, resource_type: str, resource_id: str
    ) -> ReconcileResult:
        """Start tracking an existing remote object by its ID."""
        if self.state.get(name) is not None:
            return ReconcileResult(
                success=False, message=f"{name} is already tracked"
            )

        try:
            reconciler = self._get_reconciler(resource_type)
            data = await reconciler.import_resource(self.client, resource_id)
        except Exception as e:
            logger.error(f"Failed to import {name}: {e}")
            return ReconcileResult(success=False, message=str(e))

        if data is None:
            return ReconcileResult(
                success=False,
                message=f"Cannot import non-existent remote object {resource_id}",
            )

        self.state.put(name, resource_type, data)
        return ReconcileResult(
            success=True,
            message=f"Imported {name} ({resource_id})",
            action="import",
            resource=data,
        )

    async def destroy(self, name: str) -> ReconcileResult:
        """Delete a tracked resource remotely and forget it."""
        tracked = self.state.get(name)
        if tracked is None:
            return ReconcileResult(success=False, message=f"{name} is not tracked")

        resource_type, tracked_data = tracked
        try:
            reconciler = self._get_reconciler(resource_type)
            await reconciler.delete(self.client, tracked_data.id)
        except Exception as e:
            logger.error(f"Failed to destroy {name}: {e}")
            return ReconcileResult(success=False, message=str(e))

        self.state.remove(name)
        return ReconcileResult(
            success=True, message=f"Destroyed {name}", action="delete"
        )
