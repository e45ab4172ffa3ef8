"""
State Store - Local persistence of tracked resource state.

Tracked state is kept in a single JSON document keyed by resource name:

    {"version": 1, "resources": {"<name>": {"type": ..., "id": ..., "attributes": {...}}}}
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from plugins.reconcilers.base import ResourceData

logger = logging.getLogger(__name__)

STATE_VERSION = 1


class StateError(Exception):
    """Raised when the state file cannot be read."""


class StateStore:
    """JSON file backed store of tracked resource state."""

    def __init__(self, path: str):
        self.path = Path(path)
        self._resources: Dict[str, Dict[str, Any]] = {}
        self.load()

    def load(self) -> None:
        """Load state from disk. A missing file is an empty state."""
        if not self.path.exists():
            self._resources = {}
            return

        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StateError(f"State file {self.path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise StateError(f"State file {self.path} must hold a JSON object")

        version = data.get("version")
        if version != STATE_VERSION:
            raise StateError(
                f"Unsupported state file version {version} in {self.path}"
            )
        self._resources = data.get("resources", {})
        logger.debug(f"Loaded {len(self._resources)} resources from {self.path}")

    def save(self) -> None:
        """Write state to disk atomically."""
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(
                {"version": STATE_VERSION, "resources": self._resources},
                f,
                indent=2,
                sort_keys=True,
            )
        os.replace(tmp_path, self.path)

    def get(self, name: str) -> Optional[Tuple[str, ResourceData]]:
        """
        Get tracked state for a resource.

        Returns:
            Tuple of (resource_type, ResourceData), or None if not tracked.
        """
        entry = self._resources.get(name)
        if entry is None:
            return None
        return entry["type"], ResourceData(
            id=entry["id"], attributes=dict(entry.get("attributes", {}))
        )

    def put(self, name: str, resource_type: str, data: ResourceData) -> None:
        """Record tracked state for a resource and save."""
        self._resources[name] = {
            "type": resource_type,
            "id": data.id,
            "attributes": data.attributes,
        }
        self.save()

    def remove(self, name: str) -> bool:
        """Forget a resource. Returns True if it was tracked."""
        if name not in self._resources:
            return False
        del self._resources[name]
        self.save()
        return True

    def list(self) -> List[str]:
        """List tracked resource names."""
        return sorted(self._resources.keys())
