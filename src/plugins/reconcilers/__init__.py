"""
Reconciler plugins package.

Reconciler plugins own the CRUD lifecycle for one or more resource types.
They are discovered via Python entry points (group: 'siteop.reconcilers').
"""

from plugins.reconcilers.base import (
    IncompleteCreateError,
    ResourceReconciler,
    ResourceData,
    ReconcileResult,
)

__all__ = [
    "IncompleteCreateError",
    "ResourceReconciler",
    "ResourceData",
    "ReconcileResult",
]
