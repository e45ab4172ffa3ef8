"""
Plugin system for siteop.

This package provides the reconciler plugin architecture and registry.
"""

from plugins.reconcilers.base import (
    IncompleteCreateError,
    ResourceReconciler,
    ResourceData,
    ReconcileResult,
)
from plugins.registry import PluginRegistry, get_registry

__all__ = [
    "IncompleteCreateError",
    "ResourceReconciler",
    "ResourceData",
    "ReconcileResult",
    "PluginRegistry",
    "get_registry",
]
