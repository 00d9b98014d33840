"""Exception taxonomy for the customization layer.

- ConfigurationError: fatal at boot (bad binding table, unknown route name).
- AttachmentError: fatal while a lifecycle stage fires.
- ResolutionError: recoverable during a menu build; the item is dropped.
"""

from __future__ import annotations


class SiteExtError(Exception):
    """Base class for all siteext errors."""

    code = "SITEEXT_ERROR"


class ConfigurationError(SiteExtError):
    """The extension table or menu configuration is invalid."""

    code = "CONFIGURATION_ERROR"


class AttachmentError(SiteExtError):
    """Attaching a capability to a host target failed."""

    code = "ATTACHMENT_ERROR"

    def __init__(self, target: str, capability: str, reason: str) -> None:
        self.target = target
        self.capability = capability
        self.reason = reason
        super().__init__(f"Cannot attach {capability} to {target}: {reason}")


class ResolutionError(SiteExtError):
    """A symbolic route name could not be resolved to a path."""

    code = "RESOLUTION_ERROR"

    def __init__(self, destination: str, reason: str | None = None) -> None:
        self.destination = destination
        msg = f"Unknown route {destination!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
