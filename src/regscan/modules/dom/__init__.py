"""Composed DOM snapshots."""

from .flattener import FLATTEN_SCRIPT, DOMFlattener, compose_tree
from .models import FALLBACK_NODE_ID, SHADOW_ROOT_TAG, FlattenConfig, Rect, VirtualNode

__all__ = [
    "FALLBACK_NODE_ID",
    "FLATTEN_SCRIPT",
    "SHADOW_ROOT_TAG",
    "DOMFlattener",
    "FlattenConfig",
    "Rect",
    "VirtualNode",
    "compose_tree",
]
