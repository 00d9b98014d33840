"""Lifecycle layer: pluggy-backed stage events and the extension registry.

INVARIANT: Attachment failures propagate; they are never downgraded to warnings.
"""

from siteext.lifecycle.bus import LifecycleBus
from siteext.lifecycle.registry import ExtensionRegistry

__all__ = ["ExtensionRegistry", "LifecycleBus"]
